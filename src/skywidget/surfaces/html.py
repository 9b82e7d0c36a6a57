"""
HTML fragment surface for embedding the widget in a static site.
"""

import html
import logging
import os

from ..models import WidgetView
from .base import Surface, atomic_write

logger = logging.getLogger(__name__)


class HtmlSurface(Surface):
    """
    Write the widget as an HTML fragment file.

    Configuration:
        path: Output file (required)
        css_class: Class of the container element (default: "weather-widget")

    Example:
        surface:
          type: html
          path: ~/site/_includes/weather.html
    """

    surface_type = "html"

    def __init__(self, path: str, css_class: str = "weather-widget"):
        super().__init__()
        self.path = os.path.expanduser(path)
        self.css_class = css_class

    def encode(self, view: WidgetView) -> bytes:
        css_class = html.escape(self.css_class, quote=True)
        lines = "".join(
            f'  <span class="{css_class}__line">{html.escape(line)}</span>\n'
            for line in view.lines
        )
        fragment = (
            f'<div class="{css_class}" '
            f'data-state="{view.state}">\n{lines}</div>\n'
        )
        return fragment.encode("utf-8")

    def write(self, data: bytes) -> None:
        atomic_write(self.path, data)
