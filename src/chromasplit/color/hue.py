"""
Hue handling shared by every cylindrical and polar colour model.

When the quantity measuring how chromatic a pixel is (RGB chroma for
HSL/HSV/HWB, C* for the CIE LCh models) is zero, the hue angle is
undefined. Every converter resolves that case through ``resolve_hue`` so
the policy lives in one place: the hue becomes 0.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

HUE_MAX = 360.0
HUE_SECTOR = 60.0

# Chroma at or below this is treated as achromatic. Large enough to absorb
# matrix rounding on greys, far below anything visible.
ACHROMATIC_EPSILON = 1e-8


def normalize_hue(hue: NDArray) -> NDArray[np.float64]:
    """Wrap hue angles in degrees into [0, 360)."""
    hue = np.mod(hue, HUE_MAX)
    # np.mod can return exactly 360.0 for tiny negative inputs
    return np.where(hue >= HUE_MAX, 0.0, hue)


def resolve_hue(hue: NDArray, chroma: NDArray) -> NDArray[np.float64]:
    """Normalize hue and zero it wherever chroma is degenerate."""
    return np.where(chroma > ACHROMATIC_EPSILON, normalize_hue(hue), 0.0)


def safe_divide(num: NDArray, den: NDArray) -> NDArray[np.float64]:
    """Divide, yielding 0 wherever the denominator is 0."""
    zero = den == 0
    return np.where(zero, 0.0, num / np.where(zero, 1.0, den))


def to_polar(a: NDArray, b: NDArray) -> tuple[NDArray, NDArray]:
    """Convert a Cartesian chromatic pair to (chroma, hue in degrees)."""
    chroma = np.hypot(a, b)
    hue = np.degrees(np.arctan2(b, a))
    return chroma, resolve_hue(hue, chroma)


def from_polar(chroma: NDArray, hue: NDArray) -> tuple[NDArray, NDArray]:
    """Convert (chroma, hue in degrees) back to a Cartesian pair."""
    rad = np.radians(hue)
    return chroma * np.cos(rad), chroma * np.sin(rad)
