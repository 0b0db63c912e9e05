"""
Image file input and output through Pillow.

Decoding, resizing and cropping happen on PIL images; the result is handed
to the core as an sRGB ImageBuffer. Mosaics come back as (H, W, 3) uint8
arrays and are written as WebP.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from chromasplit.config import Crop, Dimensions, Quality
from chromasplit.core.data_types import ColorSpace, ImageBuffer

logger = logging.getLogger(__name__)

# Failures that concern one file and should not stop a batch
LOAD_ERRORS = (OSError, Image.DecompressionBombError)
# The WebP encoder raises ValueError for images over 16383 px on a side
SAVE_ERRORS = (OSError, ValueError)


def open_rgb(path: str | Path) -> Image.Image:
    """
    Decode an image file into an 8-bit RGB PIL image.

    Raises:
        OSError: If the file cannot be read or decoded
    """
    with Image.open(path) as img:
        img.load()
        return img.convert("RGB")


def resize_image(img: Image.Image, size: Dimensions | None) -> Image.Image:
    """Resize to exact dimensions with a Lanczos filter."""
    if size is None or img.size == (size.width, size.height):
        return img
    return img.resize((size.width, size.height), Image.Resampling.LANCZOS)


def crop_image(img: Image.Image, crop: Crop | None) -> Image.Image:
    """Crop according to a Crop geometry; no-op when it covers the image."""
    if crop is None:
        return img
    box = crop.box(*img.size)
    if box == (0, 0, img.width, img.height):
        return img
    return img.crop(box)


def to_buffer(img: Image.Image) -> ImageBuffer:
    """Convert an RGB PIL image to an sRGB ImageBuffer."""
    return ImageBuffer.from_uint8(np.asarray(img.convert("RGB"), dtype=np.uint8), ColorSpace.RGB)


def load_image(
    path: str | Path,
    resize: Dimensions | None = None,
    crop: Crop | None = None,
) -> ImageBuffer:
    """
    Load a source image, resizing first and cropping second.

    Raises:
        OSError: If the file cannot be read or decoded
        PIL.Image.DecompressionBombError: If the image exceeds Pillow's
            pixel limit
    """
    img = crop_image(resize_image(open_rgb(path), resize), crop)
    buffer = to_buffer(img)
    buffer.metadata["path"] = str(path)
    logger.debug("loaded %s as %dx%d", path, buffer.width, buffer.height)
    return buffer


def save_webp(
    rgb: NDArray[np.uint8],
    path: str | Path,
    quality: Quality | None = None,
) -> None:
    """
    Encode an (H, W, 3) uint8 array as WebP.

    Args:
        rgb: Image data
        path: Destination file, overwritten if present
        quality: Encoder quality; lossless when its value is infinite

    Raises:
        OSError: If the file cannot be written
        ValueError: If the image is too large for WebP
    """
    quality = quality or Quality()
    img = Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8))
    if quality.lossless:
        img.save(path, format="WEBP", lossless=True)
    else:
        img.save(path, format="WEBP", quality=int(round(quality.value)))
