"""
Row-band scheduling for per-pixel maps.

Every converter is a pure function of each pixel, so an image can be cut
into horizontal bands that are mapped independently and concatenated
back in order. Bands run on a thread pool when more than one worker is
requested; numpy releases the GIL inside its kernels.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

DEFAULT_BAND_ROWS = 64


def default_workers() -> int:
    """One worker per logical CPU."""
    return os.cpu_count() or 1


def split_rows(pixels: NDArray, band_rows: int) -> list[NDArray]:
    """Split a channel-first array into views of at most band_rows rows."""
    if band_rows < 1:
        raise ValueError(f"band_rows must be positive, got {band_rows}")
    height = pixels.shape[1]
    return [pixels[:, start:start + band_rows] for start in range(0, height, band_rows)]


def map_rows(
    func: Callable[[NDArray], NDArray],
    pixels: NDArray,
    workers: int | None = None,
    band_rows: int = DEFAULT_BAND_ROWS,
) -> NDArray:
    """
    Apply a per-pixel function to a (C, H, W) array band by band.

    Args:
        func: Pure function mapping a (C, h, W) array to a (C', h, W) array
        pixels: Source data; never modified
        workers: Thread count; None, 0 or 1 runs sequentially
        band_rows: Rows per band

    Returns:
        The concatenated result, identical to func(pixels)
    """
    if pixels.ndim != 3:
        raise ValueError(f"Expected (C, H, W) data, got {pixels.ndim}D")

    if not workers or workers <= 1 or pixels.shape[1] <= band_rows:
        return func(pixels)

    bands = split_rows(pixels, band_rows)
    logger.debug("mapping %d bands on %d workers", len(bands), workers)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        # map() yields in submission order
        results = list(pool.map(func, bands))

    return np.concatenate(results, axis=1)
