"""Core data types, registry and scheduling."""

from chromasplit.core.data_types import ChannelDescriptor, ColorSpace, ImageBuffer
from chromasplit.core.registry import (
    ColorSpaceRegistry,
    SpaceInfo,
    UnsupportedColorSpaceError,
    get_space,
    list_colorspaces,
)
from chromasplit.core.parallel import map_rows

__all__ = [
    "ChannelDescriptor",
    "ColorSpace",
    "ImageBuffer",
    "ColorSpaceRegistry",
    "SpaceInfo",
    "UnsupportedColorSpaceError",
    "get_space",
    "list_colorspaces",
    "map_rows",
]
