"""Channel compositing."""

from chromasplit.render.compositor import (
    Decomposition,
    build_mosaic,
    decompose,
    decompose_image,
    normalize_channel,
)
from chromasplit.render.paint import PAINTERS, paint_tiles

__all__ = [
    "Decomposition",
    "build_mosaic",
    "decompose",
    "decompose_image",
    "normalize_channel",
    "PAINTERS",
    "paint_tiles",
]
