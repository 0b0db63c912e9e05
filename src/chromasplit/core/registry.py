"""
Colour-space registry.

Maps every ColorSpace tag to its converters and channel metadata. The
table is built once at import time and is read-only afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from chromasplit.color import cie, cylindrical, subtractive
from chromasplit.color.cie import D65_WHITE
from chromasplit.color.gamma import as_float, to_linear, to_srgb
from chromasplit.color.hue import HUE_MAX
from chromasplit.core.data_types import ChannelDescriptor, ColorSpace

Converter = Callable[[ArrayLike], NDArray[np.float64]]

RED = (1.0, 0.0, 0.0)
GREEN = (0.0, 1.0, 0.0)
BLUE = (0.0, 0.0, 1.0)
CYAN = (0.0, 1.0, 1.0)
MAGENTA = (1.0, 0.0, 1.0)
YELLOW = (1.0, 1.0, 0.0)

# Display ranges. Chroma maxima are the largest C* inside the sRGB gamut.
LAB_A_RANGE = (-128.0, 127.0)
LAB_B_RANGE = (-128.0, 127.0)
LAB_CHROMA_MAX = 133.81
LUV_U_RANGE = (-134.0, 220.0)
LUV_V_RANGE = (-140.0, 122.0)
LUV_CHROMA_MAX = 179.04


class UnsupportedColorSpaceError(ValueError):
    """Raised when a colour-space tag is not in the registry."""

    def __init__(self, tag: object) -> None:
        self.tag = tag
        super().__init__(
            f"Unknown colorspace: {tag!r} "
            f"(supported colour spaces: {', '.join(list_colorspaces())})"
        )


@dataclass(frozen=True)
class SpaceInfo:
    """
    Registry entry for one colour model.

    Attributes:
        tag: The ColorSpace this entry describes
        from_rgb: Converter from gamma-encoded sRGB
        to_rgb: Converter back to gamma-encoded sRGB
        channels: Channel descriptors in declaration order
    """

    tag: ColorSpace
    from_rgb: Converter
    to_rgb: Converter
    channels: tuple[ChannelDescriptor, ...]

    @property
    def name(self) -> str:
        return self.tag.value

    @property
    def channel_count(self) -> int:
        return len(self.channels)

    @property
    def channel_names(self) -> list[str]:
        return [ch.name for ch in self.channels]


def _identity(values: ArrayLike) -> NDArray[np.float64]:
    return as_float(values).copy()


def _unit(name: str, tint: tuple[float, float, float] = (1.0, 1.0, 1.0)) -> ChannelDescriptor:
    return ChannelDescriptor(name, 0.0, 1.0, tint=tint)


def _hue(name: str = "H") -> ChannelDescriptor:
    return ChannelDescriptor(name, 0.0, HUE_MAX, cyclic=True)


def _lightness() -> ChannelDescriptor:
    return ChannelDescriptor("L*", 0.0, 100.0)


_SPACES = (
    SpaceInfo(
        ColorSpace.RGB, _identity, _identity,
        (_unit("R", RED), _unit("G", GREEN), _unit("B", BLUE)),
    ),
    SpaceInfo(
        ColorSpace.LINEAR_RGB, to_linear, to_srgb,
        (_unit("R", RED), _unit("G", GREEN), _unit("B", BLUE)),
    ),
    SpaceInfo(
        ColorSpace.XYZ, cie.rgb_to_xyz, cie.xyz_to_rgb,
        (
            ChannelDescriptor("X", 0.0, float(D65_WHITE[0])),
            ChannelDescriptor("Y", 0.0, float(D65_WHITE[1])),
            ChannelDescriptor("Z", 0.0, float(D65_WHITE[2])),
        ),
    ),
    SpaceInfo(
        ColorSpace.XYY, cie.rgb_to_xyy, cie.xyy_to_rgb,
        (_unit("x"), _unit("y"), ChannelDescriptor("Y", 0.0, float(D65_WHITE[1]))),
    ),
    SpaceInfo(
        ColorSpace.HSL, cylindrical.rgb_to_hsl, cylindrical.hsl_to_rgb,
        (_hue(), _unit("S"), _unit("L")),
    ),
    SpaceInfo(
        ColorSpace.HSV, cylindrical.rgb_to_hsv, cylindrical.hsv_to_rgb,
        (_hue(), _unit("S"), _unit("V")),
    ),
    SpaceInfo(
        ColorSpace.HWB, cylindrical.rgb_to_hwb, cylindrical.hwb_to_rgb,
        (_hue(), _unit("W"), _unit("B")),
    ),
    SpaceInfo(
        ColorSpace.LAB, cie.rgb_to_lab, cie.lab_to_rgb,
        (
            _lightness(),
            ChannelDescriptor("a*", *LAB_A_RANGE),
            ChannelDescriptor("b*", *LAB_B_RANGE),
        ),
    ),
    SpaceInfo(
        ColorSpace.LCHAB, cie.rgb_to_lchab, cie.lchab_to_rgb,
        (_lightness(), ChannelDescriptor("C*", 0.0, LAB_CHROMA_MAX), _hue("h")),
    ),
    SpaceInfo(
        ColorSpace.LUV, cie.rgb_to_luv, cie.luv_to_rgb,
        (
            _lightness(),
            ChannelDescriptor("u*", *LUV_U_RANGE),
            ChannelDescriptor("v*", *LUV_V_RANGE),
        ),
    ),
    SpaceInfo(
        ColorSpace.LCHUV, cie.rgb_to_lchuv, cie.lchuv_to_rgb,
        (_lightness(), ChannelDescriptor("C*", 0.0, LUV_CHROMA_MAX), _hue("h")),
    ),
    SpaceInfo(
        ColorSpace.CMY, subtractive.rgb_to_cmy, subtractive.cmy_to_rgb,
        (_unit("C", CYAN), _unit("M", MAGENTA), _unit("Y", YELLOW)),
    ),
    SpaceInfo(
        ColorSpace.CMYK, subtractive.rgb_to_cmyk, subtractive.cmyk_to_rgb,
        (_unit("C", CYAN), _unit("M", MAGENTA), _unit("Y", YELLOW), _unit("K")),
    ),
)


class ColorSpaceRegistry:
    """
    Read-only lookup of supported colour models.

    Usage:
        info = ColorSpaceRegistry.get("lab")
        lab = info.from_rgb(rgb)

        # Unknown names raise UnsupportedColorSpaceError
        ColorSpaceRegistry.get("ycbcr")
    """

    _registry = MappingProxyType({info.tag: info for info in _SPACES})
    _by_name = MappingProxyType({info.tag.value.lower(): info.tag for info in _SPACES})

    @classmethod
    def resolve(cls, tag: ColorSpace | str) -> ColorSpace:
        """
        Resolve a tag or a case-insensitive name to a ColorSpace.

        Raises:
            UnsupportedColorSpaceError: If the tag is not registered
        """
        if isinstance(tag, ColorSpace):
            if tag in cls._registry:
                return tag
        elif isinstance(tag, str):
            found = cls._by_name.get(tag.strip().lower())
            if found is not None:
                return found
        raise UnsupportedColorSpaceError(tag)

    @classmethod
    def get(cls, tag: ColorSpace | str) -> SpaceInfo:
        """Get the registry entry for a tag or name."""
        return cls._registry[cls.resolve(tag)]

    @classmethod
    def list_all(cls) -> list[ColorSpace]:
        """List all tags in declaration order."""
        return list(cls._registry.keys())

    @classmethod
    def get_info(cls, tag: ColorSpace | str) -> dict:
        """Get displayable metadata about a colour model."""
        info = cls.get(tag)
        return {
            "name": info.name,
            "channels": [
                {
                    "name": ch.name,
                    "range": (ch.low, ch.high),
                    "cyclic": ch.cyclic,
                }
                for ch in info.channels
            ],
        }


def get_space(tag: ColorSpace | str) -> SpaceInfo:
    """Shortcut for ColorSpaceRegistry.get()."""
    return ColorSpaceRegistry.get(tag)


def list_colorspaces() -> list[str]:
    """Get the names of supported colour spaces in declaration order."""
    return [info.tag.value for info in _SPACES]
