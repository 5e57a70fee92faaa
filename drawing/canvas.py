"""
Stroke canvas - freehand drawing onto a persistent raster.

The raster is the only record of what was drawn: strokes are committed as
pixels segment by segment and are not kept as separate objects.
"""
import logging
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from core.constants import BACKGROUND_RGBA, DEFAULT_COLOR, DEFAULT_LINE_WIDTH
from core.models import Point

logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, int]


def parse_color(color: str) -> RGBA:
    """
    Parse a CSS-style color string into an opaque-by-default RGBA tuple.

    Args:
        color: e.g. "rgb(255, 255, 255)", "#ee3333", "white"

    Returns:
        (r, g, b, a) tuple

    Raises:
        ValueError: If Pillow cannot interpret the color
    """
    rgb = ImageColor.getrgb(color)
    if len(rgb) == 3:
        return rgb + (255,)
    return rgb


class RasterSurface:
    """
    A width x height RGBA pixel buffer.

    Only stroke segments and clear() mutate it; everything else reads copies.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Raster size must be positive, got {width}x{height}")
        self._image = Image.new('RGBA', (width, height), BACKGROUND_RGBA)
        self._draw = ImageDraw.Draw(self._image)

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    def draw_segment(self, start: Point, end: Point, color: RGBA, width: int) -> None:
        """Draw a line segment with round caps."""
        if start != end:
            self._draw.line([start.as_tuple(), end.as_tuple()], fill=color, width=width)

        # Cap box spans exactly `width` pixels centered on the point
        radius = (width - 1) / 2
        for point in (start, end):
            self._draw.ellipse(
                [point.x - radius, point.y - radius, point.x + radius, point.y + radius],
                fill=color
            )

    def paste(self, image: Image.Image, origin: Tuple[int, int] = (0, 0)) -> None:
        """Composite an RGBA image onto the surface."""
        self._image.alpha_composite(image.convert('RGBA'), dest=origin)

    def clear(self) -> None:
        """Reset every pixel to the transparent background."""
        self._draw.rectangle([0, 0, self.width, self.height], fill=BACKGROUND_RGBA)

    def is_blank(self) -> bool:
        return not (self.to_array()[..., 3] > 0).any()

    def to_array(self) -> np.ndarray:
        """Copy of the pixels as a (height, width, 4) uint8 array."""
        return np.array(self._image)

    def snapshot(self) -> Image.Image:
        """Independent copy of the surface as it is right now."""
        return self._image.copy()


class StrokeCanvas:
    """Pointer-driven drawing state machine over a RasterSurface."""

    def __init__(
        self,
        width: int,
        height: int,
        color: str = DEFAULT_COLOR,
        line_width: int = DEFAULT_LINE_WIDTH
    ):
        """
        Initialize the canvas.

        Args:
            width: Viewport width in pixels (fixed for the session)
            height: Viewport height in pixels
            color: Initial pen color
            line_width: Pen width in pixels
        """
        if line_width <= 0:
            raise ValueError(f"Line width must be positive, got {line_width}")

        self.raster = RasterSurface(width, height)
        self.line_width = line_width
        self._color = color
        self._rgba = parse_color(color)
        self._last_point: Optional[Point] = None
        self._drawing = False

    @property
    def color(self) -> str:
        return self._color

    @property
    def is_drawing(self) -> bool:
        return self._drawing

    def start_stroke(self, point: Point) -> None:
        """Begin a new path at point."""
        self._last_point = point
        self._drawing = True

    def extend_stroke(self, point: Point) -> None:
        """Draw from the last point to point; ignored unless a stroke is active."""
        if not self._drawing:
            return

        self.raster.draw_segment(self._last_point, point, self._rgba, self.line_width)
        self._last_point = point

    def end_stroke(self) -> None:
        """Leave drawing state (pointer up or pointer left the canvas)."""
        self._drawing = False
        self._last_point = None

    def set_color(self, color: str) -> None:
        """
        Change the pen color for segments drawn from now on.

        Raises:
            ValueError: If the color string is not understood
        """
        self._rgba = parse_color(color)
        self._color = color
        logger.debug("Pen color set to %s", color)

    def load_image(self, image: Image.Image) -> None:
        """Paste an existing drawing at the top-left corner of the canvas."""
        if image.width > self.raster.width or image.height > self.raster.height:
            image = image.copy()
            image.thumbnail(self.raster.size, Image.Resampling.LANCZOS)
        self.raster.paste(image)
        logger.info("Loaded %dx%d drawing onto canvas", image.width, image.height)

    def clear(self) -> None:
        """Wipe the raster and stop any stroke in progress."""
        self.raster.clear()
        self.end_stroke()
