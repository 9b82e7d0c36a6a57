"""
Text surface on a terminal or any writable stream.
"""

import logging
import sys
from typing import Optional, TextIO

from ..models import WidgetView
from .base import Surface

logger = logging.getLogger(__name__)


class ConsoleSurface(Surface):
    """
    Print the widget to a text stream.

    On a TTY the previous block is erased before the new one is printed so
    the widget stays in place; other streams receive each block in turn.
    """

    surface_type = "console"

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__()
        self.stream = stream if stream is not None else sys.stdout
        self._lines_on_screen = 0

    def encode(self, view: WidgetView) -> bytes:
        return (view.text + "\n").encode("utf-8")

    def write(self, data: bytes) -> None:
        text = data.decode("utf-8")
        if self._lines_on_screen and self._is_tty():
            # Cursor up to the start of the previous block, then clear to end of screen
            self.stream.write(f"\x1b[{self._lines_on_screen}F\x1b[J")
        self.stream.write(text)
        self.stream.flush()
        self._lines_on_screen = text.count("\n")

    def _is_tty(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())
