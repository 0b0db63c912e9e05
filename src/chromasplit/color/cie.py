"""
CIE colour models under the sRGB/D65 assumption.

XYZ is reached from linear RGB through the sRGB primary matrix; xyY,
L*a*b*, LCh(ab), L*u*v* and LCh(uv) are derived from XYZ. Functions take
channel-first arrays and never clamp: out-of-gamut values pass through
until they meet the sRGB transfer function on the way back.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from chromasplit.color.gamma import as_float, to_linear, to_srgb
from chromasplit.color.hue import from_polar, safe_divide, to_polar

# IEC 61966-2-1 sRGB primaries, D65
SRGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])
XYZ_TO_SRGB = np.array([
    [3.2404542, -1.5371385, -0.4985314],
    [-0.9692660, 1.8760108, 0.0415560],
    [0.0556434, -0.2040259, 1.0572252],
])

# XYZ of linear RGB (1, 1, 1); matches D65 (0.95047, 1.0, 1.08883) to 7 digits
D65_WHITE = SRGB_TO_XYZ.sum(axis=1)

CIE_EPSILON = 0.008856
CIE_KAPPA = 903.3
CIE_KAPPA_EPSILON = CIE_KAPPA * CIE_EPSILON
ONE_116 = 1.0 / 116.0


def _apply_matrix(matrix: NDArray, values: NDArray) -> NDArray[np.float64]:
    """Multiply every pixel vector along axis 0 by a 3x3 matrix."""
    return np.stack([
        row[0] * values[0] + row[1] * values[1] + row[2] * values[2]
        for row in matrix
    ], axis=0)


def _white(white: ArrayLike | None) -> NDArray[np.float64]:
    return D65_WHITE if white is None else as_float(white)


def _lab_f(t: NDArray) -> NDArray:
    """CIE companding function."""
    return np.where(t > CIE_EPSILON, np.cbrt(t), (CIE_KAPPA * t + 16.0) * ONE_116)


def _lab_f_inverse(f: NDArray) -> NDArray:
    f3 = f * f * f
    return np.where(f3 > CIE_EPSILON, f3, (116.0 * f - 16.0) / CIE_KAPPA)


def _lightness(y_ratio: NDArray) -> NDArray:
    return 116.0 * _lab_f(y_ratio) - 16.0


def _luminance_ratio(lightness: NDArray) -> NDArray:
    """Inverse of _lightness: Y / Yn from L*."""
    fy = (lightness + 16.0) * ONE_116
    return np.where(lightness > CIE_KAPPA_EPSILON, fy * fy * fy, lightness / CIE_KAPPA)


# =============================================================================
# Linear RGB <-> XYZ
# =============================================================================

def linear_to_xyz(linear: ArrayLike) -> NDArray[np.float64]:
    """Convert linear RGB to CIE XYZ (D65)."""
    return _apply_matrix(SRGB_TO_XYZ, as_float(linear))


def xyz_to_linear(xyz: ArrayLike) -> NDArray[np.float64]:
    """Convert CIE XYZ (D65) to linear RGB. Not clamped."""
    return _apply_matrix(XYZ_TO_SRGB, as_float(xyz))


def rgb_to_xyz(rgb: ArrayLike) -> NDArray[np.float64]:
    """Convert gamma-encoded sRGB to XYZ."""
    return linear_to_xyz(to_linear(rgb))


def xyz_to_rgb(xyz: ArrayLike) -> NDArray[np.float64]:
    """Convert XYZ to gamma-encoded sRGB."""
    return to_srgb(xyz_to_linear(xyz))


# =============================================================================
# XYZ <-> xyY
# =============================================================================

def xyz_to_xyy(xyz: ArrayLike) -> NDArray[np.float64]:
    """
    Convert XYZ to chromaticity coordinates plus luminance.

    Pure black (X + Y + Z = 0) has no chromaticity and maps to (0, 0, 0).
    """
    xyz = as_float(xyz)
    X, Y, Z = xyz[0], xyz[1], xyz[2]

    total = X + Y + Z
    x = safe_divide(X, total)
    y = safe_divide(Y, total)
    lum = np.where(total == 0, 0.0, Y)

    return np.stack([x, y, lum], axis=0)


def xyy_to_xyz(xyy: ArrayLike) -> NDArray[np.float64]:
    """Convert xyY to XYZ. A zero y chromaticity yields black."""
    xyy = as_float(xyy)
    x, y, Y = xyy[0], xyy[1], xyy[2]

    X = safe_divide(x * Y, y)
    Z = safe_divide((1.0 - x - y) * Y, y)
    Y = np.where(y == 0, 0.0, Y)

    return np.stack([X, Y, Z], axis=0)


def rgb_to_xyy(rgb: ArrayLike) -> NDArray[np.float64]:
    """Convert gamma-encoded sRGB to xyY."""
    return xyz_to_xyy(rgb_to_xyz(rgb))


def xyy_to_rgb(xyy: ArrayLike) -> NDArray[np.float64]:
    """Convert xyY to gamma-encoded sRGB."""
    return xyz_to_rgb(xyy_to_xyz(xyy))


# =============================================================================
# XYZ <-> L*a*b* <-> LCh(ab)
# =============================================================================

def xyz_to_lab(xyz: ArrayLike, white: ArrayLike | None = None) -> NDArray[np.float64]:
    """Convert XYZ to CIE L*a*b* relative to a reference white (D65)."""
    xyz = as_float(xyz)
    xn, yn, zn = _white(white)

    fx = _lab_f(xyz[0] / xn)
    fy = _lab_f(xyz[1] / yn)
    fz = _lab_f(xyz[2] / zn)

    L = 116.0 * fy - 16.0
    a = 500.0 * (fx - fy)
    b = 200.0 * (fy - fz)

    return np.stack([L, a, b], axis=0)


def lab_to_xyz(lab: ArrayLike, white: ArrayLike | None = None) -> NDArray[np.float64]:
    """Convert CIE L*a*b* to XYZ."""
    lab = as_float(lab)
    L, a, b = lab[0], lab[1], lab[2]
    xn, yn, zn = _white(white)

    fy = (L + 16.0) * ONE_116
    fx = fy + a / 500.0
    fz = fy - b / 200.0

    X = _lab_f_inverse(fx) * xn
    Y = _luminance_ratio(L) * yn
    Z = _lab_f_inverse(fz) * zn

    return np.stack([X, Y, Z], axis=0)


def lab_to_lchab(lab: ArrayLike) -> NDArray[np.float64]:
    """Convert L*a*b* to LCh(ab); hue is 0 for neutral colours."""
    lab = as_float(lab)
    chroma, hue = to_polar(lab[1], lab[2])
    return np.stack([lab[0], chroma, hue], axis=0)


def lchab_to_lab(lch: ArrayLike) -> NDArray[np.float64]:
    """Convert LCh(ab) to L*a*b*."""
    lch = as_float(lch)
    a, b = from_polar(lch[1], lch[2])
    return np.stack([lch[0], a, b], axis=0)


def rgb_to_lab(rgb: ArrayLike) -> NDArray[np.float64]:
    """Convert gamma-encoded sRGB to L*a*b*."""
    return xyz_to_lab(rgb_to_xyz(rgb))


def lab_to_rgb(lab: ArrayLike) -> NDArray[np.float64]:
    """Convert L*a*b* to gamma-encoded sRGB."""
    return xyz_to_rgb(lab_to_xyz(lab))


def rgb_to_lchab(rgb: ArrayLike) -> NDArray[np.float64]:
    """Convert gamma-encoded sRGB to LCh(ab)."""
    return lab_to_lchab(rgb_to_lab(rgb))


def lchab_to_rgb(lch: ArrayLike) -> NDArray[np.float64]:
    """Convert LCh(ab) to gamma-encoded sRGB."""
    return lab_to_rgb(lchab_to_lab(lch))


# =============================================================================
# XYZ <-> L*u*v* <-> LCh(uv)
# =============================================================================

def _uv_prime(X: NDArray, Y: NDArray, Z: NDArray) -> tuple[NDArray, NDArray]:
    """u'v' chromaticity; (0, 0) when the denominator vanishes."""
    den = X + 15.0 * Y + 3.0 * Z
    return safe_divide(4.0 * X, den), safe_divide(9.0 * Y, den)


def xyz_to_luv(xyz: ArrayLike, white: ArrayLike | None = None) -> NDArray[np.float64]:
    """Convert XYZ to CIE L*u*v* relative to a reference white (D65)."""
    xyz = as_float(xyz)
    xn, yn, zn = _white(white)
    X, Y, Z = xyz[0], xyz[1], xyz[2]

    up, vp = _uv_prime(X, Y, Z)
    upn, vpn = _uv_prime(xn, yn, zn)

    L = _lightness(Y / yn)
    L13 = 13.0 * L
    u = L13 * (up - upn)
    v = L13 * (vp - vpn)

    return np.stack([L, u, v], axis=0)


def luv_to_xyz(luv: ArrayLike, white: ArrayLike | None = None) -> NDArray[np.float64]:
    """Convert CIE L*u*v* to XYZ. L* = 0 yields black."""
    luv = as_float(luv)
    L, u, v = luv[0], luv[1], luv[2]
    xn, yn, zn = _white(white)

    upn, vpn = _uv_prime(xn, yn, zn)
    L13 = 13.0 * L
    up = safe_divide(u, L13) + upn
    vp = safe_divide(v, L13) + vpn

    Y = _luminance_ratio(L) * yn
    X = safe_divide(Y * 9.0 * up, 4.0 * vp)
    Z = safe_divide(Y * (12.0 - 3.0 * up - 20.0 * vp), 4.0 * vp)

    return np.stack([X, Y, Z], axis=0)


def luv_to_lchuv(luv: ArrayLike) -> NDArray[np.float64]:
    """Convert L*u*v* to LCh(uv); hue is 0 for neutral colours."""
    luv = as_float(luv)
    chroma, hue = to_polar(luv[1], luv[2])
    return np.stack([luv[0], chroma, hue], axis=0)


def lchuv_to_luv(lch: ArrayLike) -> NDArray[np.float64]:
    """Convert LCh(uv) to L*u*v*."""
    lch = as_float(lch)
    u, v = from_polar(lch[1], lch[2])
    return np.stack([lch[0], u, v], axis=0)


def rgb_to_luv(rgb: ArrayLike) -> NDArray[np.float64]:
    """Convert gamma-encoded sRGB to L*u*v*."""
    return xyz_to_luv(rgb_to_xyz(rgb))


def luv_to_rgb(luv: ArrayLike) -> NDArray[np.float64]:
    """Convert L*u*v* to gamma-encoded sRGB."""
    return xyz_to_rgb(luv_to_xyz(luv))


def rgb_to_lchuv(rgb: ArrayLike) -> NDArray[np.float64]:
    """Convert gamma-encoded sRGB to LCh(uv)."""
    return luv_to_lchuv(rgb_to_luv(rgb))


def lchuv_to_rgb(lch: ArrayLike) -> NDArray[np.float64]:
    """Convert LCh(uv) to gamma-encoded sRGB."""
    return luv_to_rgb(lchuv_to_luv(lch))
