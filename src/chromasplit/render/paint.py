"""
Colour rendering of channel tiles.

Tinted decompositions show some channels in a colour that says what they
measure instead of a flat tint. Hue tiles show the hue itself and are
black where the pixel has no hue. Opponent axes (a*, b*, u*, v*) show the
colour at that position on the axis, brighter further from neutral.
Chromaticity coordinates show the chromaticity they select at half
luminance.

Painters take the converted (C, H, W) data and return tiles keyed by
channel index. Channels a painter does not cover keep their plain tint.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from chromasplit.color import cie
from chromasplit.color.cylindrical import hsv_to_rgb
from chromasplit.color.hue import ACHROMATIC_EPSILON
from chromasplit.core.data_types import ColorSpace
from chromasplit.core.registry import LAB_CHROMA_MAX, LUV_CHROMA_MAX

Painter = Callable[[NDArray], dict[int, NDArray[np.uint8]]]

# Most negative and most positive axis values reached inside the sRGB gamut
LAB_A_EXTENT = (-86.18078, 98.23698)
LAB_B_EXTENT = (-107.858345, 94.48001)
LUV_U_EXTENT = (-83.07059, 175.01141)
LUV_V_EXTENT = (-134.10574, 107.40619)

AXIS_LIGHTNESS = 50.0
HUE_LIGHTNESS = 50.0
CHROMATICITY_LUMINANCE = 0.5

_WHITE_X, _WHITE_Y, _ = cie.xyz_to_xyy(cie.D65_WHITE)


def to_display(rgb: ArrayLike) -> NDArray[np.uint8]:
    """Quantize channel-first sRGB in [0, 1] to an (H, W, 3) tile."""
    rgb = np.nan_to_num(np.asarray(rgb, dtype=np.float64))
    levels = np.rint(np.moveaxis(rgb, 0, -1) * 255.0)
    return np.clip(levels, 0, 255).astype(np.uint8)


def _blank_achromatic(rgb: NDArray, chroma: NDArray) -> NDArray:
    return np.where(chroma > ACHROMATIC_EPSILON, rgb, 0.0)


def rgb_hue_tile(hue: NDArray, chroma: NDArray) -> NDArray[np.uint8]:
    """Fully saturated colour of an HSL/HSV/HWB hue; black where chroma is 0."""
    full = np.ones_like(hue)
    rgb = hsv_to_rgb(np.stack([hue, full, full], axis=0))
    return to_display(_blank_achromatic(rgb, chroma))


def cie_hue_tile(
    hue: NDArray,
    chroma: NDArray,
    lch_to_rgb: Callable[[NDArray], NDArray],
    chroma_max: float,
) -> NDArray[np.uint8]:
    """Colour of a CIE LCh hue at mid lightness and half the gamut's chroma."""
    lch = np.stack([
        np.full_like(hue, HUE_LIGHTNESS),
        np.full_like(hue, chroma_max / 2.0),
        hue,
    ], axis=0)
    return to_display(_blank_achromatic(lch_to_rgb(lch), chroma))


def axis_lightness(values: NDArray, extent: tuple[float, float]) -> NDArray:
    """L* for an opponent-axis tile: 0 at neutral, AXIS_LIGHTNESS at the extent."""
    low, high = extent
    ratio = np.where(values < 0.0, values / low, values / high)
    return AXIS_LIGHTNESS * np.clip(ratio, 0.0, 1.0)


def _opponent_tiles(
    pixels: NDArray,
    to_rgb: Callable[[NDArray], NDArray],
    first: tuple[float, float],
    second: tuple[float, float],
) -> dict[int, NDArray[np.uint8]]:
    zero = np.zeros_like(pixels[1])
    along_first = np.stack([axis_lightness(pixels[1], first), pixels[1], zero], axis=0)
    along_second = np.stack([axis_lightness(pixels[2], second), zero, pixels[2]], axis=0)
    return {1: to_display(to_rgb(along_first)), 2: to_display(to_rgb(along_second))}


def _paint_xyy(pixels: NDArray) -> dict[int, NDArray[np.uint8]]:
    x, y = pixels[0], pixels[1]
    lum = np.full_like(x, CHROMATICITY_LUMINANCE)
    # Black has no chromaticity; y is 0 only there
    has_colour = np.where(y > 0.0, 1.0, 0.0)

    along_x = cie.xyy_to_rgb(np.stack([x, np.full_like(x, _WHITE_Y), lum], axis=0))
    along_y = cie.xyy_to_rgb(np.stack([np.full_like(y, _WHITE_X), y, lum], axis=0))
    return {0: to_display(along_x * has_colour), 1: to_display(along_y * has_colour)}


def _paint_hsl(pixels: NDArray) -> dict[int, NDArray[np.uint8]]:
    chroma = (1.0 - np.abs(2.0 * pixels[2] - 1.0)) * pixels[1]
    return {0: rgb_hue_tile(pixels[0], chroma)}


def _paint_hsv(pixels: NDArray) -> dict[int, NDArray[np.uint8]]:
    return {0: rgb_hue_tile(pixels[0], pixels[2] * pixels[1])}


def _paint_hwb(pixels: NDArray) -> dict[int, NDArray[np.uint8]]:
    return {0: rgb_hue_tile(pixels[0], 1.0 - pixels[1] - pixels[2])}


def _paint_lab(pixels: NDArray) -> dict[int, NDArray[np.uint8]]:
    return _opponent_tiles(pixels, cie.lab_to_rgb, LAB_A_EXTENT, LAB_B_EXTENT)


def _paint_luv(pixels: NDArray) -> dict[int, NDArray[np.uint8]]:
    return _opponent_tiles(pixels, cie.luv_to_rgb, LUV_U_EXTENT, LUV_V_EXTENT)


def _paint_lchab(pixels: NDArray) -> dict[int, NDArray[np.uint8]]:
    return {2: cie_hue_tile(pixels[2], pixels[1], cie.lchab_to_rgb, LAB_CHROMA_MAX)}


def _paint_lchuv(pixels: NDArray) -> dict[int, NDArray[np.uint8]]:
    return {2: cie_hue_tile(pixels[2], pixels[1], cie.lchuv_to_rgb, LUV_CHROMA_MAX)}


PAINTERS: MappingProxyType[ColorSpace, Painter] = MappingProxyType({
    ColorSpace.XYY: _paint_xyy,
    ColorSpace.HSL: _paint_hsl,
    ColorSpace.HSV: _paint_hsv,
    ColorSpace.HWB: _paint_hwb,
    ColorSpace.LAB: _paint_lab,
    ColorSpace.LCHAB: _paint_lchab,
    ColorSpace.LUV: _paint_luv,
    ColorSpace.LCHUV: _paint_lchuv,
})


def paint_tiles(model: ColorSpace, pixels: NDArray) -> dict[int, NDArray[np.uint8]]:
    """Colour tiles for the channels of a model that have a painter."""
    painter = PAINTERS.get(model)
    if painter is None:
        return {}
    return painter(pixels)
