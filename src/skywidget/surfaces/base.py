"""
Base class for rendered surfaces.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Optional

from ..models import WidgetView
from ..utils.errors import SurfaceError

logger = logging.getLogger(__name__)


class Surface(ABC):
    """
    A single display target whose contents are fully replaced on each render.

    Class Attributes:
        surface_type: Identifier used in the ``surface.type`` config key
    """

    surface_type: str = None

    def __init__(self):
        self._content: Optional[bytes] = None

    @abstractmethod
    def encode(self, view: WidgetView) -> bytes:
        """
        Produce the complete surface contents for a view.

        Must be deterministic: equal views give equal bytes.
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Replace the visible contents with ``data``."""
        pass

    def show(self, view: WidgetView) -> None:
        """
        Replace the surface contents with a rendering of ``view``.

        Raises:
            SurfaceError: If the view cannot be encoded or the surface cannot be written
        """
        try:
            data = self.encode(view)
        except Exception as e:
            raise SurfaceError(f"Failed to encode {self.surface_type} surface: {e}") from e
        try:
            self.write(data)
        except OSError as e:
            raise SurfaceError(f"Failed to write {self.surface_type} surface: {e}") from e
        self._content = data
        logger.debug(f"{self.surface_type} surface now shows '{view.state}'")

    @property
    def content(self) -> Optional[bytes]:
        """Bytes most recently written, or None before the first render."""
        return self._content

    def close(self) -> None:
        """Release any resources held by the surface."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(type={self.surface_type})>"


def atomic_write(path: str, data: bytes) -> None:
    """Write ``data`` to ``path`` through a temp file in the same directory."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".skywidget-", dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
