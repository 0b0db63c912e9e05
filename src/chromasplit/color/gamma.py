"""
sRGB transfer function.

All functions operate component-wise on arrays of any shape and return
float64 arrays in [0, 1].
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

SRGB_THRESHOLD = 0.04045
LINEAR_THRESHOLD = 0.0031308
LINEAR_SCALE = 12.92
GAMMA_OFFSET = 0.055
GAMMA = 2.4
CORR_RATIO = 1.0 / GAMMA


def _clip(arr: NDArray) -> NDArray:
    """Clip array to [0, 1] range."""
    return np.clip(arr, 0.0, 1.0)


def as_float(values: ArrayLike) -> NDArray[np.float64]:
    """Return values as a float64 array without modifying the input."""
    return np.asarray(values, dtype=np.float64)


def to_linear(srgb: ArrayLike) -> NDArray[np.float64]:
    """Convert gamma-encoded sRGB to linear light."""
    c = _clip(as_float(srgb))
    return _clip(np.where(
        c > SRGB_THRESHOLD,
        np.power((c + GAMMA_OFFSET) / (1.0 + GAMMA_OFFSET), GAMMA),
        c / LINEAR_SCALE,
    ))


def to_srgb(linear: ArrayLike) -> NDArray[np.float64]:
    """Convert linear light to gamma-encoded sRGB."""
    c = _clip(as_float(linear))
    return _clip(np.where(
        c > LINEAR_THRESHOLD,
        (1.0 + GAMMA_OFFSET) * np.power(c, CORR_RATIO) - GAMMA_OFFSET,
        LINEAR_SCALE * c,
    ))
