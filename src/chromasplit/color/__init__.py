"""Colour model converters."""

from chromasplit.color.gamma import to_linear, to_srgb
from chromasplit.color.cylindrical import (
    rgb_to_hsl, hsl_to_rgb,
    rgb_to_hsv, hsv_to_rgb,
    rgb_to_hwb, hwb_to_rgb,
)
from chromasplit.color.cie import (
    D65_WHITE,
    linear_to_xyz, xyz_to_linear,
    xyz_to_xyy, xyy_to_xyz,
    xyz_to_lab, lab_to_xyz,
    lab_to_lchab, lchab_to_lab,
    xyz_to_luv, luv_to_xyz,
    luv_to_lchuv, lchuv_to_luv,
)
from chromasplit.color.subtractive import rgb_to_cmy, cmy_to_rgb, rgb_to_cmyk, cmyk_to_rgb

__all__ = [
    "to_linear",
    "to_srgb",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_to_hwb",
    "hwb_to_rgb",
    "D65_WHITE",
    "linear_to_xyz",
    "xyz_to_linear",
    "xyz_to_xyy",
    "xyy_to_xyz",
    "xyz_to_lab",
    "lab_to_xyz",
    "lab_to_lchab",
    "lchab_to_lab",
    "xyz_to_luv",
    "luv_to_xyz",
    "luv_to_lchuv",
    "lchuv_to_luv",
    "rgb_to_cmy",
    "cmy_to_rgb",
    "rgb_to_cmyk",
    "cmyk_to_rgb",
]
