"""
Pixel sampling for palette extraction.

Reduces an image to a bounded, strided set of RGB samples: the image is
box-downsized so neither edge exceeds `max_edge`, the alpha channel is
dropped, and the grid is walked row by row with a stride of
`max(1, min(w, h) // grid_divisor)` in both axes.
"""

import base64
import binascii
from io import BytesIO
from typing import Optional, Union

import cv2
import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from palette_atlas.config import config

ImageInput = Union[np.ndarray, Image.Image, None]

_EMPTY_SAMPLES = np.empty((0, 3), dtype=np.uint8)


def decode_image_bytes(data: bytes) -> Optional[np.ndarray]:
    """
    Decode encoded image bytes (PNG, JPEG, ...) into an RGBA uint8 array.

    Returns None when the bytes cannot be decoded; callers treat that as
    "no palette available".
    """
    if not data:
        return None
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            return np.asarray(image.convert("RGBA"), dtype=np.uint8)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.warning(f"Failed to decode image data: {e}")
        return None


def decode_base64_image(b64_data: str) -> Optional[np.ndarray]:
    """Decode base64 image data (optionally a data URL) to an RGBA array."""
    # Remove data URL prefix if present
    if ',' in b64_data:
        b64_data = b64_data.split(',', 1)[1]
    # MIME-style payloads wrap lines every 76 characters
    b64_data = "".join(b64_data.split())
    try:
        img_bytes = base64.b64decode(b64_data, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"Invalid base64 image data: {e}")
        return None
    return decode_image_bytes(img_bytes)


def _as_pixel_array(image: ImageInput) -> Optional[np.ndarray]:
    """Coerce supported inputs to an HxWx{3,4} uint8 array, or None."""
    if image is None:
        return None
    if isinstance(image, Image.Image):
        return np.asarray(image.convert("RGBA"), dtype=np.uint8)

    pixels = np.asarray(image)
    if pixels.dtype != np.uint8:
        pixels = np.clip(pixels, 0, 255).astype(np.uint8)

    if pixels.ndim == 2:
        return np.repeat(pixels[:, :, None], 3, axis=2)
    if pixels.ndim != 3:
        logger.warning(f"Unsupported pixel buffer shape {pixels.shape}")
        return None

    channels = pixels.shape[2]
    if channels in (1, 2):
        # gray or gray+alpha
        return np.repeat(pixels[:, :, :1], 3, axis=2)
    if channels in (3, 4):
        return pixels
    logger.warning(f"Unsupported channel count {channels}")
    return None


def sample_pixels(image: ImageInput,
                  max_edge: Optional[int] = None,
                  grid_divisor: Optional[int] = None) -> np.ndarray:
    """
    Sample RGB pixels from an image on a regular grid.

    Args:
        image: RGB/RGBA uint8 array (H, W, C), grayscale array, PIL image,
            or None for an undecodable source
        max_edge: Upper bound for each edge after downsizing
        grid_divisor: Stride is min(width, height) // grid_divisor, at least 1

    Returns:
        Samples as an (N, 3) uint8 array in row-major grid order. Empty when
        the image is missing or has no pixels.
    """
    max_edge = max_edge or config.SAMPLE_MAX_EDGE
    grid_divisor = grid_divisor or config.SAMPLE_GRID_DIVISOR

    pixels = _as_pixel_array(image)
    if pixels is None:
        return _EMPTY_SAMPLES.copy()

    height, width = pixels.shape[:2]
    if height == 0 or width == 0:
        logger.warning("Image has no pixels; nothing to sample")
        return _EMPTY_SAMPLES.copy()

    # Edges are capped independently; aspect ratio is not preserved
    target_w = min(max_edge, width)
    target_h = min(max_edge, height)
    if (target_w, target_h) != (width, height):
        pixels = cv2.resize(np.ascontiguousarray(pixels), (target_w, target_h),
                            interpolation=cv2.INTER_AREA)
        logger.debug(f"Downsized {width}x{height} -> {target_w}x{target_h}")

    rgb = pixels[:, :, :3]
    step = max(1, min(target_w, target_h) // grid_divisor)
    samples = rgb[0:target_h:step, 0:target_w:step].reshape(-1, 3)

    logger.debug(f"Sampled {len(samples)} pixels with step={step}")
    return np.ascontiguousarray(samples, dtype=np.uint8)
