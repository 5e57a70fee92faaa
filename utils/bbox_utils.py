"""
Bounding box utilities for the drawing board.

Handles bounds extraction over raster pixels and debug visualization.
"""
import logging
from typing import Iterable, Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from core.constants import BACKGROUND_DISPLAY_COLOR
from core.exceptions import EmptyBoundsError
from core.models import BoundingBox, Point, ResultAnnotation

logger = logging.getLogger(__name__)


def _as_pixel_array(pixels) -> np.ndarray:
    """Accept a numpy array, a PIL image or a raster surface and return (H, W, C) pixels."""
    if hasattr(pixels, 'to_array'):
        pixels = pixels.to_array()
    elif isinstance(pixels, Image.Image):
        pixels = np.asarray(pixels.convert('RGBA'))
    else:
        pixels = np.asarray(pixels)

    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected RGBA pixels of shape (height, width, 4), got {pixels.shape}")

    return pixels


def compute_bounds(pixels) -> Optional[BoundingBox]:
    """
    Compute the tightest box around every pixel whose alpha is above zero.

    The whole surface is scanned once; this runs per submission, not per
    stroke segment.

    Args:
        pixels: RGBA numpy array (height, width, 4), PIL Image or raster surface

    Returns:
        BoundingBox with inclusive pixel indices, or None if nothing is marked
    """
    alpha = _as_pixel_array(pixels)[..., 3]
    marked = alpha > 0

    rows = np.flatnonzero(marked.any(axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(marked.any(axis=0))

    return BoundingBox(
        min_x=int(cols[0]),
        min_y=int(rows[0]),
        max_x=int(cols[-1]),
        max_y=int(rows[-1])
    )


def bounds_center(bounds_or_pixels) -> Point:
    """
    Center of the marked area, where result overlays are placed.

    Args:
        bounds_or_pixels: Result of compute_bounds (BoundingBox or None), or
            pixels to compute it from

    Returns:
        Point at ((min_x + max_x) / 2, (min_y + max_y) / 2)

    Raises:
        EmptyBoundsError: If no pixel is marked
    """
    if bounds_or_pixels is None or isinstance(bounds_or_pixels, BoundingBox):
        bounds = bounds_or_pixels
    else:
        bounds = compute_bounds(bounds_or_pixels)

    if bounds is None:
        raise EmptyBoundsError("Raster has no marked pixels")
    return bounds.center


def _load_font(size: int):
    """Load a TrueType font, falling back to Pillow's built-in one."""
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default()


def draw_bounds(
    image: Image.Image,
    bounds: Optional[BoundingBox],
    annotations: Iterable[ResultAnnotation] = (),
    outline=(34, 139, 230),
    text_color=(255, 255, 255)
) -> Image.Image:
    """
    Render a drawing with its bounds and result annotations on top.

    The drawing is composed over the board's black background; this is a
    debugging picture, not the math renderer.

    Args:
        image: RGBA drawing
        bounds: Box to outline (skipped when None)
        annotations: Results to write at their positions
        outline: Bounds rectangle color
        text_color: Annotation text color

    Returns:
        RGB image of the same size
    """
    canvas = Image.new('RGBA', image.size, BACKGROUND_DISPLAY_COLOR + (255,))
    canvas.alpha_composite(image.convert('RGBA'))
    canvas = canvas.convert('RGB')
    draw = ImageDraw.Draw(canvas)

    if bounds is not None:
        draw.rectangle(
            [bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y],
            outline=outline,
            width=1
        )

    font = _load_font(20)
    for annotation in annotations:
        x, y = annotation.position.as_tuple()
        draw.text((x, y), annotation.text, font=font, fill=text_color)
        logger.debug("Drew annotation %s at (%.1f, %.1f)", annotation.id, x, y)

    return canvas
