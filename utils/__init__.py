"""Utilities package - Helper functions for raster encoding and bounds."""

from .image_utils import (
    image_to_png_bytes,
    image_to_base64,
    image_to_data_url,
    decode_base64_image,
    knockout_background,
    load_drawing
)

from .bbox_utils import (
    compute_bounds,
    bounds_center,
    draw_bounds
)

__all__ = [
    # Image utils
    'image_to_png_bytes',
    'image_to_base64',
    'image_to_data_url',
    'decode_base64_image',
    'knockout_background',
    'load_drawing',

    # BBox utils
    'compute_bounds',
    'bounds_center',
    'draw_bounds'
]
