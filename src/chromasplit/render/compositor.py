"""
Channel compositor.

Turns converted pixel data into one displayable 8-bit image per channel
and a side-by-side mosaic of them. Rendering is the only stage that
clamps: each channel is rescaled from its declared range to [0, 255]
and whatever falls outside is clipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from chromasplit.color.conversions import convert
from chromasplit.core.data_types import ChannelDescriptor, ColorSpace, ImageBuffer
from chromasplit.core.registry import get_space
from chromasplit.render.paint import paint_tiles

logger = logging.getLogger(__name__)

DISPLAY_MAX = 255.0


@dataclass
class Decomposition:
    """
    Result of decomposing one image in one colour model.

    Attributes:
        model: Colour model the channels belong to
        descriptors: Channel metadata in declaration order
        channels: One (H, W) uint8 image per channel, declaration order
        composite: (H, W * tiles, 3) uint8 RGB mosaic
    """

    model: ColorSpace
    descriptors: tuple[ChannelDescriptor, ...]
    channels: list[NDArray[np.uint8]]
    composite: NDArray[np.uint8]

    @property
    def height(self) -> int:
        return self.composite.shape[0]

    @property
    def width(self) -> int:
        return self.composite.shape[1]

    @property
    def tile_width(self) -> int:
        return self.channels[0].shape[1]

    @property
    def tile_count(self) -> int:
        return self.width // self.tile_width


def normalize_channel(values: ArrayLike, descriptor: ChannelDescriptor) -> NDArray[np.uint8]:
    """
    Rescale one channel from its declared range to [0, 255].

    Cyclic channels are mapped from [low, high) directly, without any
    wrap-around remapping, so a zeroed hue renders as 0.
    """
    values = np.asarray(values, dtype=np.float64)
    scaled = (values - descriptor.low) / descriptor.span * DISPLAY_MAX
    scaled = np.nan_to_num(scaled, nan=0.0, posinf=DISPLAY_MAX, neginf=0.0)
    return np.clip(np.rint(scaled), 0.0, DISPLAY_MAX).astype(np.uint8)


def channel_tile(
    channel: NDArray[np.uint8],
    descriptor: ChannelDescriptor,
    tinted: bool = False,
) -> NDArray[np.uint8]:
    """Expand a single-channel image to an opaque RGB tile."""
    grey = np.repeat(channel[:, :, np.newaxis], 3, axis=2)
    if not tinted:
        return grey
    tint = np.asarray(descriptor.tint, dtype=np.float64)
    return np.rint(grey * tint).astype(np.uint8)


def source_tile(source: ImageBuffer | ArrayLike) -> NDArray[np.uint8]:
    """Render (3, H, W) sRGB data as an RGB tile."""
    if isinstance(source, ImageBuffer):
        return source.to_uint8()
    data = np.asarray(source, dtype=np.float64)
    return ImageBuffer(data).to_uint8()


def build_mosaic(tiles: list[NDArray[np.uint8]]) -> NDArray[np.uint8]:
    """Place equally sized (H, W, 3) tiles side by side, left to right."""
    if not tiles:
        raise ValueError("No tiles to assemble")
    heights = {tile.shape[0] for tile in tiles}
    if len(heights) != 1:
        raise ValueError(f"Tile heights differ: {sorted(heights)}")
    return np.concatenate(tiles, axis=1)


def decompose(
    converted_pixels: ImageBuffer | ArrayLike,
    model: ColorSpace | str,
    *,
    tinted: bool = False,
    source: ImageBuffer | ArrayLike | None = None,
) -> Decomposition:
    """
    Build per-channel images and their mosaic.

    Args:
        converted_pixels: (C, H, W) data in the given model
        model: Colour model the data is expressed in
        tinted: Render tiles in colour (see render.paint) instead of grey
        source: Optional sRGB image prepended as the first tile

    Returns:
        Decomposition with channels in the model's declaration order

    Raises:
        UnsupportedColorSpaceError: If the model is unknown
        ValueError: If the data does not match the model's channel count
    """
    info = get_space(model)

    if isinstance(converted_pixels, ImageBuffer):
        converted_pixels = converted_pixels.data
    pixels = np.asarray(converted_pixels, dtype=np.float64)
    if pixels.ndim != 3 or pixels.shape[0] != info.channel_count:
        raise ValueError(
            f"{info.name} expects ({info.channel_count}, H, W) data, got {pixels.shape}"
        )

    channels = [
        normalize_channel(pixels[i], descriptor)
        for i, descriptor in enumerate(info.channels)
    ]
    painted = paint_tiles(info.tag, pixels) if tinted else {}
    tiles = [
        painted[i] if i in painted else channel_tile(channel, descriptor, tinted)
        for i, (channel, descriptor) in enumerate(zip(channels, info.channels))
    ]

    if source is not None:
        first = source_tile(source)
        if first.shape[:2] != pixels.shape[1:]:
            raise ValueError(
                f"Source size {first.shape[1]}x{first.shape[0]} does not match "
                f"{pixels.shape[2]}x{pixels.shape[1]}"
            )
        tiles.insert(0, first)

    logger.debug("composited %d tiles for %s", len(tiles), info.name)

    return Decomposition(
        model=info.tag,
        descriptors=info.channels,
        channels=channels,
        composite=build_mosaic(tiles),
    )


def decompose_image(
    image: ImageBuffer,
    model: ColorSpace | str,
    *,
    tinted: bool = False,
    include_source: bool = False,
    workers: int | None = None,
) -> Decomposition:
    """Convert an sRGB ImageBuffer and decompose it in one step."""
    converted = convert(image, model, workers=workers)
    return decompose(
        converted,
        model,
        tinted=tinted,
        source=image if include_source else None,
    )
