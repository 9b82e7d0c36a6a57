"""
Rendered surfaces for the widget.

A surface is the single container whose contents the controller replaces
on every state change:
- console: a terminal or text stream
- html: an HTML fragment file for a static site
- image: a PNG image drawn with Pillow
"""

import logging
from typing import Any, Dict

from ..utils.errors import ConfigurationError
from .base import Surface
from .console import ConsoleSurface
from .html import HtmlSurface
from .image import ImageSurface

logger = logging.getLogger(__name__)

SURFACE_TYPES = {
    ConsoleSurface.surface_type: ConsoleSurface,
    HtmlSurface.surface_type: HtmlSurface,
    ImageSurface.surface_type: ImageSurface,
}


def build_surface(config: Dict[str, Any]) -> Surface:
    """
    Create the surface described by the ``surface`` config section.

    Raises:
        ConfigurationError: Unknown type or missing ``path``
    """
    surface_type = config.get("type", "console")

    if surface_type == "console":
        return ConsoleSurface()

    if surface_type not in SURFACE_TYPES:
        raise ConfigurationError(f"Unknown surface type: {surface_type}")

    path = config.get("path")
    if not path:
        raise ConfigurationError(f"Surface type '{surface_type}' requires 'path'")

    if surface_type == "html":
        return HtmlSurface(path, css_class=config.get("css_class", "weather-widget"))

    return ImageSurface(path, size=tuple(config.get("size", (240, 120))), style=config.get("style"))


__all__ = ["Surface", "ConsoleSurface", "HtmlSurface", "ImageSurface", "build_surface"]
