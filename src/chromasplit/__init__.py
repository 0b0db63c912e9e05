"""
chromasplit - decompose images into the channels of common colour models.

Converts gamma-encoded sRGB pixels into linear RGB, HSL, HSV, HWB, XYZ,
xyY, L*a*b*, LCh(ab), L*u*v*, LCh(uv), CMY and CMYK, and renders each
model's channels side by side.
"""

__version__ = "0.1.0"

from chromasplit.core.data_types import ChannelDescriptor, ColorSpace, ImageBuffer
from chromasplit.core.registry import (
    ColorSpaceRegistry,
    UnsupportedColorSpaceError,
    list_colorspaces,
)
from chromasplit.color.conversions import convert, convert_colorspace, convert_to_rgb
from chromasplit.render.compositor import Decomposition, decompose, decompose_image

__all__ = [
    "__version__",
    "ChannelDescriptor",
    "ColorSpace",
    "ImageBuffer",
    "ColorSpaceRegistry",
    "UnsupportedColorSpaceError",
    "list_colorspaces",
    "convert",
    "convert_colorspace",
    "convert_to_rgb",
    "Decomposition",
    "decompose",
    "decompose_image",
]
