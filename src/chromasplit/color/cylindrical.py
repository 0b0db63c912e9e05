"""
Cylindrical transforms of sRGB: HSL, HSV and HWB.

All functions operate on channel-first arrays of gamma-encoded sRGB in
[0, 1]. Hue is expressed in degrees in [0, 360); the remaining channels
are in [0, 1].
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from chromasplit.color.gamma import as_float
from chromasplit.color.hue import HUE_SECTOR, normalize_hue, resolve_hue, safe_divide


def _hue_and_extrema(rgb: NDArray) -> tuple[NDArray, NDArray, NDArray, NDArray]:
    """Return (hue, chroma, max, min) for an sRGB array."""
    r, g, b = rgb[0], rgb[1], rgb[2]

    max_val = np.maximum(np.maximum(r, g), b)
    min_val = np.minimum(np.minimum(r, g), b)
    chroma = max_val - min_val
    delta = np.where(chroma > 0, chroma, 1.0)

    # Sector keyed on the channel holding the maximum, red first
    hue = np.select(
        [r == max_val, g == max_val],
        [np.mod((g - b) / delta, 6.0), (b - r) / delta + 2.0],
        (r - g) / delta + 4.0,
    ) * HUE_SECTOR

    return resolve_hue(hue, chroma), chroma, max_val, min_val


def _rgb_from_hue(hue: NDArray, chroma: NDArray, offset: NDArray) -> NDArray[np.float64]:
    """Rebuild sRGB from hue, chroma and the value added to every channel."""
    h6 = normalize_hue(hue) / HUE_SECTOR
    x = chroma * (1.0 - np.abs(np.mod(h6, 2.0) - 1.0))
    sector = np.minimum(np.floor(h6), 5.0)

    conds = [sector == 0, sector == 1, sector == 2, sector == 3, sector == 4]
    r = np.select(conds, [chroma, x, 0.0, 0.0, x], chroma)
    g = np.select(conds, [x, chroma, chroma, x, 0.0], 0.0)
    b = np.select(conds, [0.0, 0.0, x, chroma, chroma], x)

    return np.stack([r + offset, g + offset, b + offset], axis=0)


# =============================================================================
# RGB <-> HSL
# =============================================================================

def rgb_to_hsl(rgb: ArrayLike) -> NDArray[np.float64]:
    """Convert sRGB to HSL (Hue, Saturation, Lightness)."""
    hue, chroma, max_val, min_val = _hue_and_extrema(as_float(rgb))

    lightness = (max_val + min_val) / 2.0
    saturation = safe_divide(chroma, 1.0 - np.abs(2.0 * lightness - 1.0))

    return np.stack([hue, saturation, lightness], axis=0)


def hsl_to_rgb(hsl: ArrayLike) -> NDArray[np.float64]:
    """Convert HSL to sRGB."""
    hsl = as_float(hsl)
    h, s, l = hsl[0], hsl[1], hsl[2]

    chroma = (1.0 - np.abs(2.0 * l - 1.0)) * s
    return _rgb_from_hue(h, chroma, l - chroma / 2.0)


# =============================================================================
# RGB <-> HSV
# =============================================================================

def rgb_to_hsv(rgb: ArrayLike) -> NDArray[np.float64]:
    """Convert sRGB to HSV (Hue, Saturation, Value)."""
    hue, chroma, max_val, _ = _hue_and_extrema(as_float(rgb))

    saturation = safe_divide(chroma, max_val)

    return np.stack([hue, saturation, max_val], axis=0)


def hsv_to_rgb(hsv: ArrayLike) -> NDArray[np.float64]:
    """Convert HSV to sRGB."""
    hsv = as_float(hsv)
    h, s, v = hsv[0], hsv[1], hsv[2]

    chroma = v * s
    return _rgb_from_hue(h, chroma, v - chroma)


# =============================================================================
# RGB <-> HWB (Hue, Whiteness, Blackness)
# =============================================================================

def rgb_to_hwb(rgb: ArrayLike) -> NDArray[np.float64]:
    """Convert sRGB to HWB."""
    hue, _, max_val, min_val = _hue_and_extrema(as_float(rgb))

    return np.stack([hue, min_val, 1.0 - max_val], axis=0)


def hwb_to_rgb(hwb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert HWB to sRGB.

    Whiteness and blackness summing past 1 are scaled down to a grey of
    W / (W + B).
    """
    hwb = as_float(hwb)
    h, w, b = hwb[0], hwb[1], hwb[2]

    total = w + b
    scale = np.where(total > 1.0, total, 1.0)
    w = w / scale
    b = b / scale

    chroma = np.maximum(1.0 - b - w, 0.0)
    return _rgb_from_hue(h, chroma, w)
