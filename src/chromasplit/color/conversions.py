"""
Conversion dispatch.

Routes sRGB pixel data through the registry to the requested model and
back. Accepts channel-first arrays or ImageBuffers.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray

from chromasplit.core.data_types import ColorSpace, ImageBuffer
from chromasplit.core.parallel import DEFAULT_BAND_ROWS, map_rows
from chromasplit.core.registry import get_space

logger = logging.getLogger(__name__)


def _pixels(data: ImageBuffer | ArrayLike, channels: int) -> NDArray[np.float64]:
    if isinstance(data, ImageBuffer):
        data = data.data
    pixels = np.asarray(data, dtype=np.float64)
    if pixels.ndim == 0 or pixels.shape[0] != channels:
        raise ValueError(
            f"Expected {channels} channels along axis 0, got shape {pixels.shape}"
        )
    return pixels


def _run(func, pixels: NDArray, workers: int | None, band_rows: int) -> NDArray[np.float64]:
    if pixels.ndim == 3:
        return map_rows(func, pixels, workers=workers, band_rows=band_rows)
    return func(pixels)


def convert(
    source_pixels: ImageBuffer | ArrayLike,
    model: ColorSpace | str,
    *,
    workers: int | None = None,
    band_rows: int = DEFAULT_BAND_ROWS,
) -> NDArray[np.float64]:
    """
    Convert gamma-encoded sRGB data into a colour model.

    Args:
        source_pixels: sRGB data in [0, 1], channel-first (3, ...) array or
            an ImageBuffer
        model: Target ColorSpace or its case-insensitive name
        workers: Threads used to map row bands of (3, H, W) data
        band_rows: Rows per band when running in parallel

    Returns:
        Float64 array with the model's channels along axis 0

    Raises:
        UnsupportedColorSpaceError: Before any pixel is touched, if the
            model is unknown
    """
    info = get_space(model)
    pixels = _pixels(source_pixels, 3)
    logger.debug("converting %s to %s", pixels.shape, info.name)
    return _run(info.from_rgb, pixels, workers, band_rows)


def convert_to_rgb(
    converted: ImageBuffer | ArrayLike,
    model: ColorSpace | str,
    *,
    workers: int | None = None,
    band_rows: int = DEFAULT_BAND_ROWS,
) -> NDArray[np.float64]:
    """Convert model data back to gamma-encoded sRGB."""
    info = get_space(model)
    pixels = _pixels(converted, info.channel_count)
    return _run(info.to_rgb, pixels, workers, band_rows)


def convert_colorspace(
    data: ImageBuffer | ArrayLike,
    from_space: ColorSpace | str,
    to_space: ColorSpace | str,
) -> NDArray[np.float64]:
    """
    Convert data between two colour models via sRGB.

    Args:
        data: Channel-first data in from_space
        from_space: Source colour model
        to_space: Target colour model

    Returns:
        Converted data
    """
    source = get_space(from_space)
    target = get_space(to_space)

    if source.tag == target.tag:
        return _pixels(data, source.channel_count).copy()

    return convert(convert_to_rgb(data, source.tag), target.tag)
