"""
Core data types for chromasplit.

Provides the ColorSpace tag, the ChannelDescriptor used for display
normalisation, and ImageBuffer (channel-first float arrays).
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray


class ColorSpace(str, Enum):
    """Supported colour models, in the order decompositions are generated."""

    RGB = "rgb"
    LINEAR_RGB = "lin-rgb"
    XYZ = "XYZ"
    XYY = "xyY"
    HSL = "hsl"
    HSV = "hsv"
    HWB = "hwb"
    LAB = "lab"
    LCHAB = "lchab"
    LUV = "luv"
    LCHUV = "lchuv"
    CMY = "cmy"
    CMYK = "cmyk"


@dataclass(frozen=True)
class ChannelDescriptor:
    """
    Display metadata for one channel of a colour model.

    Attributes:
        name: Short channel label (e.g. "L*", "h")
        low: Lower bound of the declared numeric range
        high: Upper bound of the declared numeric range
        cyclic: True for hue-like channels living on [low, high)
        tint: RGB multiplier applied when the channel is rendered in colour
    """

    name: str
    low: float
    high: float
    cyclic: bool = False
    tint: tuple[float, float, float] = (1.0, 1.0, 1.0)

    @property
    def span(self) -> float:
        """Width of the declared range."""
        return self.high - self.low


@dataclass
class ImageBuffer:
    """
    Pixel data in channel-first layout.

    Attributes:
        data: float32 array shaped (C, H, W); a 2D array is read as one channel
        colorspace: Colour model the data is expressed in
        metadata: Auxiliary info such as the source path

    sRGB buffers hold gamma-encoded values in [0, 1].
    """

    data: NDArray[np.float32]
    colorspace: ColorSpace = ColorSpace.RGB
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        data = np.asarray(self.data, dtype=np.float32)
        if data.ndim == 2:
            data = data[np.newaxis]
        if data.ndim != 3:
            raise ValueError(f"Expected (C, H, W) or (H, W) pixel data, got {data.ndim}D")
        self.data = data
        # Raises ValueError for names outside the enum
        self.colorspace = ColorSpace(self.colorspace)

    @property
    def channels(self) -> int:
        return self.data.shape[0]

    @property
    def height(self) -> int:
        return self.data.shape[1]

    @property
    def width(self) -> int:
        return self.data.shape[2]

    @property
    def shape(self) -> tuple[int, int, int]:
        return self.data.shape  # type: ignore

    @property
    def size(self) -> tuple[int, int]:
        """(width, height), the PIL ordering."""
        return (self.width, self.height)

    def copy(self) -> ImageBuffer:
        return ImageBuffer(self.data.copy(), self.colorspace, copy.deepcopy(self.metadata))

    def to_hwc(self) -> NDArray[np.float32]:
        """View the data as (H, W, C) for PIL."""
        return np.moveaxis(self.data, 0, -1)

    @classmethod
    def from_hwc(cls, data: NDArray, colorspace: ColorSpace | str = ColorSpace.RGB) -> ImageBuffer:
        """Build a buffer from (H, W, C) or (H, W) data."""
        data = np.asarray(data)
        if data.ndim == 3:
            data = np.moveaxis(data, -1, 0)
        return cls(data, ColorSpace(colorspace))

    def to_uint8(self) -> NDArray[np.uint8]:
        """Quantize [0, 1] data to 8 bits, rounding to nearest, as (H, W, C)."""
        levels = np.rint(self.to_hwc() * 255.0)
        return np.clip(levels, 0, 255).astype(np.uint8)

    @classmethod
    def from_uint8(cls, data: NDArray[np.uint8], colorspace: ColorSpace | str = ColorSpace.RGB) -> ImageBuffer:
        """Build a buffer from 8-bit (H, W, C) data scaled to [0, 1]."""
        return cls.from_hwc(np.asarray(data, dtype=np.float32) / 255.0, colorspace)

    def __repr__(self) -> str:
        return f"ImageBuffer({self.channels}x{self.height}x{self.width}, {self.colorspace.value})"
