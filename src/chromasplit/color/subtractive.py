"""
Subtractive models: CMY and CMYK.

Both are computed directly on gamma-encoded sRGB, so mid grey (0.5) has
K = 0.5 in CMYK.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from chromasplit.color.gamma import as_float
from chromasplit.color.hue import safe_divide


def rgb_to_cmy(rgb: ArrayLike) -> NDArray[np.float64]:
    """Convert sRGB to CMY."""
    return 1.0 - as_float(rgb)


def cmy_to_rgb(cmy: ArrayLike) -> NDArray[np.float64]:
    """Convert CMY to sRGB."""
    return 1.0 - as_float(cmy)


def rgb_to_cmyk(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert sRGB to CMYK.

    K is the distance of the brightest channel from white; C, M and Y are
    measured against what remains. Pure black (K = 1) has C = M = Y = 0.
    """
    cmy = rgb_to_cmy(rgb)
    k = np.minimum(np.minimum(cmy[0], cmy[1]), cmy[2])
    rest = 1.0 - k

    c = safe_divide(cmy[0] - k, rest)
    m = safe_divide(cmy[1] - k, rest)
    y = safe_divide(cmy[2] - k, rest)

    return np.stack([c, m, y, k], axis=0)


def cmyk_to_rgb(cmyk: ArrayLike) -> NDArray[np.float64]:
    """Convert CMYK to sRGB."""
    cmyk = as_float(cmyk)
    rest = 1.0 - cmyk[3]
    return np.stack([
        (1.0 - cmyk[0]) * rest,
        (1.0 - cmyk[1]) * rest,
        (1.0 - cmyk[2]) * rest,
    ], axis=0)
