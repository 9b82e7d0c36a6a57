"""
PNG image surface rendered with Pillow
"""

import io
import logging
import os
from typing import Any, Dict, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..models import WidgetView
from .base import Surface, atomic_write

logger = logging.getLogger(__name__)

DEFAULT_STYLE = {
    "font": "DejaVu Sans",
    "font_size": 18,
    "text_color": "#FFFFFF",
    "background_color": "#000000",
    "text_align": "center",
    "text_offset": 0,
}


class ImageSurface(Surface):
    """
    Draw the widget lines onto a fixed-size image and save it as PNG.

    Suitable for status displays, e-paper panels or an <img> on a web page.

    Configuration:
        path: Output PNG file (required)
        size: [width, height] in pixels (default: [240, 120])
        style: font, font_size, text_color, background_color,
               text_align ("top", "center", "bottom"), text_offset

    Attributes:
        font_cache: Dictionary mapping font keys to loaded ImageFont objects
    """

    surface_type = "image"

    def __init__(
        self,
        path: str,
        size: Tuple[int, int] = (240, 120),
        style: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()
        self.path = os.path.expanduser(path)
        self.size = (int(size[0]), int(size[1]))
        self.style = dict(DEFAULT_STYLE)
        self.style.update(style or {})
        self.font_cache = {}

    def encode(self, view: WidgetView) -> bytes:
        image = self.render_image(view)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    def write(self, data: bytes) -> None:
        atomic_write(self.path, data)

    def render_image(self, view: WidgetView) -> Image.Image:
        """Render a view to an in-memory RGB image"""
        image = Image.new("RGB", self.size, self.style["background_color"])
        draw = ImageDraw.Draw(image)
        if view.lines:
            self._draw_text(draw, list(view.lines))
        return image

    def _draw_text(self, draw: ImageDraw.ImageDraw, lines: list) -> None:
        """
        Draw horizontally centred lines stacked as one block.

        Vertical position of the block follows style['text_align'], then
        style['text_offset'] shifts it by a fixed number of pixels.
        """
        font = self._load_font(self.style["font"], self.style["font_size"])
        text_align = self.style.get("text_align", "center")
        text_color = self.style.get("text_color", "#FFFFFF")
        text_offset = self.style.get("text_offset", 0)
        width, height = self.size

        lines = [self._drawable(line, font) for line in lines]
        line_bboxes = [draw.textbbox((0, 0), line, font=font) for line in lines]

        line_spacing = 4
        total_text_height = sum(bbox[3] - bbox[1] for bbox in line_bboxes)
        total_text_height += (len(lines) - 1) * line_spacing

        if text_align == "top":
            y_start = 8
        elif text_align == "bottom":
            y_start = height - total_text_height - 8
        else:
            y_start = (height - total_text_height) // 2

        y_offset = y_start + text_offset
        for line, bbox in zip(lines, line_bboxes):
            line_width = bbox[2] - bbox[0]
            text_x = (width - line_width) // 2
            # bbox[1] can be negative for tall ascenders
            draw.text((text_x, y_offset - bbox[1]), line, font=font, fill=text_color)
            y_offset += (bbox[3] - bbox[1]) + line_spacing

    def _drawable(self, line: str, font) -> str:
        # Bitmap fonts only cover latin-1
        if isinstance(font, ImageFont.FreeTypeFont):
            return line
        return line.encode("latin-1", errors="replace").decode("latin-1")

    def _load_font(self, font_name: str, font_size: int):
        """Load a font with caching"""
        cache_key = f"{font_name}_{font_size}"

        if cache_key in self.font_cache:
            return self.font_cache[cache_key]

        font = None

        if "/" in font_name or font_name.endswith((".ttf", ".otf")):
            font_path = os.path.expanduser(font_name)
            try:
                font = ImageFont.truetype(font_path, font_size)
            except OSError as e:
                logger.warning(f"Failed to load font from path '{font_path}': {e}")

        if not font:
            font = self._find_system_font(font_name, font_size)

        if not font:
            logger.warning(f"Failed to load font '{font_name}', using default")
            font = ImageFont.load_default(size=font_size)

        self.font_cache[cache_key] = font
        return font

    def _find_system_font(self, font_name: str, font_size: int):
        font_dirs = [
            "/usr/share/fonts",
            "/usr/local/share/fonts",
            os.path.expanduser("~/.fonts"),
            os.path.expanduser("~/.local/share/fonts"),
        ]
        wanted = font_name.lower().replace(" ", "")

        for font_dir in font_dirs:
            if not os.path.exists(font_dir):
                continue

            for root, _dirs, files in os.walk(font_dir):
                for file in sorted(files):
                    if not file.endswith((".ttf", ".otf")):
                        continue
                    if wanted not in file.lower().replace(" ", ""):
                        continue
                    font_path = os.path.join(root, file)
                    try:
                        font = ImageFont.truetype(font_path, font_size)
                        logger.debug(f"Loaded font: {font_path}")
                        return font
                    except OSError as e:
                        logger.debug(f"Cannot load font {font_path}: {e}")

        return None
