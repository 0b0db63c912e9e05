"""
Run configuration.

Parsing and validation of the options a decomposition run takes: output
geometry, WebP quality, overwrite behaviour and the colour models to
generate.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable

from chromasplit.core.data_types import ColorSpace
from chromasplit.core.registry import ColorSpaceRegistry

DEFAULT_QUALITY = 90.0

# <digits><printable non-digit separator><digits><rest>
_NUMBER_PAIR = re.compile(r"([0-9]+)([\x21-\x2f\x3a-\x7e])([0-9]+)(.*)", re.DOTALL)


def _number_pair(arg: str) -> tuple[int, str, int, str] | None:
    match = _NUMBER_PAIR.fullmatch(arg)
    if match is None:
        return None
    a, sep, b, rest = match.groups()
    return int(a), sep, int(b), rest


@dataclass(frozen=True)
class Dimensions:
    """Target size for resizing, parsed from ``<width>x<height>``."""

    width: int
    height: int

    @classmethod
    def parse(cls, arg: str) -> Dimensions:
        pair = _number_pair(arg)
        if pair is not None:
            w, sep, h, rest = pair
            if w > 0 and sep == "x" and h > 0 and not rest:
                return cls(w, h)
        raise ValueError(f"expected '<width>x<height>', got {arg!r}")


@dataclass(frozen=True)
class Crop:
    """
    Crop geometry, parsed from ``<w>x<h>[+-]<x>[+-]<y>``.

    The offset is optional and defaults to ``+0+0``. A ``-`` offset counts
    from the right or bottom edge instead of the left or top.
    """

    width: int
    height: int
    x: int = 0
    y: int = 0
    from_left: bool = True
    from_top: bool = True

    @classmethod
    def parse(cls, arg: str) -> Crop:
        error = ValueError(f"expected '<w>x<h>+<x>+<y>', got {arg!r}")

        pair = _number_pair(arg)
        if pair is None:
            raise error
        width, sep, height, rest = pair
        if sep != "x" or width == 0 or height == 0:
            raise error

        if not rest:
            return cls(width, height)
        if rest[0] not in "+-":
            raise error

        offset = _number_pair(rest[1:])
        if offset is None:
            raise error
        x, y_sign, y, tail = offset
        if y_sign not in "+-" or tail:
            raise error

        return cls(width, height, x, y, from_left=rest[0] == "+", from_top=y_sign == "+")

    def box(self, image_width: int, image_height: int) -> tuple[int, int, int, int]:
        """
        Resolve the crop against an image size.

        The rectangle is shrunk to fit the image and the offset is limited
        so the rectangle stays inside it.

        Returns:
            (left, top, right, bottom) in pixels
        """
        width = min(self.width, image_width)
        height = min(self.height, image_height)

        x = min(self.x, image_width - width)
        y = min(self.y, image_height - height)
        if not self.from_left:
            x = image_width - width - x
        if not self.from_top:
            y = image_height - height - y

        return (x, y, x + width, y + height)

    def __str__(self) -> str:
        return (
            f"{self.width}x{self.height}"
            f"{'+' if self.from_left else '-'}{self.x}"
            f"{'+' if self.from_top else '-'}{self.y}"
        )


@dataclass(frozen=True)
class Quality:
    """WebP encoder quality: 0-100, or infinity for lossless."""

    value: float = DEFAULT_QUALITY

    @property
    def lossless(self) -> bool:
        return math.isinf(self.value)

    @classmethod
    def parse(cls, arg: str) -> Quality:
        if arg.strip().lower() == "lossless":
            return cls(math.inf)
        try:
            value = float(arg)
        except ValueError:
            raise ValueError(f"expected number or 'lossless': {arg!r}") from None
        if not 0.0 <= value <= 100.0:
            raise ValueError(f"expected number from 0 to 100; got {arg}")
        return cls(value)


class OverwritePolicy(str, Enum):
    """What to do when an output file already exists."""

    SKIP = "skip"
    OVERWRITE = "overwrite"
    INTERACTIVE = "interactive"


def resolve_spaces(names: Iterable[ColorSpace | str]) -> list[ColorSpace]:
    """
    Resolve requested model names.

    Duplicates are dropped and the result follows the registry's declaration
    order. An empty request selects every model.

    Raises:
        UnsupportedColorSpaceError: On the first unknown name
    """
    requested = {ColorSpaceRegistry.resolve(name) for name in names}
    if not requested:
        return ColorSpaceRegistry.list_all()
    return [tag for tag in ColorSpaceRegistry.list_all() if tag in requested]


@dataclass
class DecomposeOptions:
    """
    Everything a decomposition run needs.

    Attributes:
        files: Source images
        out_dir: Output directory; None writes next to each source
        spaces: Colour models to generate, declaration order
        quality: WebP quality
        resize: Optional size the source is resized to (before cropping)
        crop: Optional crop applied after resizing
        policy: Behaviour for existing output files
        jobs: Worker threads; None uses one per CPU
        tinted: Colour channel tiles by their tint
        include_source: Prepend the source image to each mosaic
    """

    files: list[Path] = field(default_factory=list)
    out_dir: Path | None = None
    spaces: list[ColorSpace] = field(default_factory=ColorSpaceRegistry.list_all)
    quality: Quality = field(default_factory=Quality)
    resize: Dimensions | None = None
    crop: Crop | None = None
    policy: OverwritePolicy = OverwritePolicy.SKIP
    jobs: int | None = None
    tinted: bool = True
    include_source: bool = True

    def output_dir_for(self, source: Path) -> Path:
        """Directory the outputs for a source file are written to."""
        if self.out_dir is not None:
            return self.out_dir
        return source.parent

    def output_path(self, source: Path, space: ColorSpace) -> Path:
        """``<stem>-<model>.webp`` in the output directory."""
        return self.output_dir_for(source) / f"{source.stem}-{space.value}.webp"
