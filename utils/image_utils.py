"""
Image utilities for the drawing board.

Handles raster encoding for the solving service and image loading.
"""
import base64
from io import BytesIO
from typing import Tuple

import numpy as np
from PIL import Image, ImageOps

from core.constants import DATA_URL_PREFIX


def image_to_png_bytes(image: Image.Image) -> bytes:
    """
    Encode an image as lossless PNG bytes.

    Args:
        image: PIL Image to encode

    Returns:
        PNG file contents
    """
    buf = BytesIO()
    image.save(buf, format='PNG')
    return buf.getvalue()


def image_to_base64(image: Image.Image) -> str:
    """
    Encode an image as a base64 PNG string.

    Args:
        image: PIL Image to encode

    Returns:
        Base64-encoded PNG string
    """
    return base64.b64encode(image_to_png_bytes(image)).decode()


def image_to_data_url(image: Image.Image) -> str:
    """
    Encode an image as a PNG data URL, the form the solving service expects.

    Args:
        image: PIL Image to encode

    Returns:
        String like "data:image/png;base64,iVBORw0..."
    """
    return DATA_URL_PREFIX + image_to_base64(image)


def decode_base64_image(b64_string: str) -> Image.Image:
    """
    Decode base64 string (plain or data URL) to PIL Image.

    Args:
        b64_string: Base64-encoded image string

    Returns:
        PIL Image object
    """
    if b64_string.startswith('data:'):
        b64_string = b64_string.split(',', 1)[1]
    img_data = base64.b64decode(b64_string)
    return Image.open(BytesIO(img_data))


def knockout_background(image: Image.Image, tolerance: int = 24) -> Image.Image:
    """
    Make the background of an opaque drawing transparent.

    The background color is taken from the top-left pixel; every pixel whose
    channels are all within ``tolerance`` of it gets alpha 0. Images that
    already carry transparency are returned unchanged.

    Args:
        image: RGBA image
        tolerance: Maximum per-channel distance still counted as background

    Returns:
        RGBA image with a transparent background
    """
    pixels = np.array(image.convert('RGBA'))
    if (pixels[..., 3] < 255).any():
        return image

    background = pixels[0, 0, :3].astype(np.int16)
    distance = np.abs(pixels[..., :3].astype(np.int16) - background).max(axis=-1)
    pixels[distance <= tolerance, 3] = 0
    return Image.fromarray(pixels)


def load_drawing(image_path: str, size: Tuple[int, int], knockout: bool = True) -> Image.Image:
    """
    Load an image file as an RGBA drawing that fits the canvas.

    Args:
        image_path: Path to the image file
        size: Canvas (width, height)
        knockout: Turn an opaque background transparent so only ink is marked

    Returns:
        RGBA image no larger than the canvas
    """
    img = Image.open(image_path)

    # Fix EXIF orientation
    img = ImageOps.exif_transpose(img)

    if img.mode != 'RGBA':
        img = img.convert('RGBA')

    # Shrink if needed, keeping aspect ratio
    if img.width > size[0] or img.height > size[1]:
        img.thumbnail(size, Image.Resampling.LANCZOS)

    if knockout:
        img = knockout_background(img)

    return img
