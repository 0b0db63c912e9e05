"""
Tests for run configuration parsing.
"""

import math
from pathlib import Path

import pytest

from chromasplit.config import (
    Crop,
    DecomposeOptions,
    Dimensions,
    Quality,
    _number_pair,
    resolve_spaces,
)
from chromasplit.core.data_types import ColorSpace
from chromasplit.core.registry import UnsupportedColorSpaceError


class TestNumberPair:
    @pytest.mark.parametrize("arg, expected", [
        ("10x20", (10, "x", 20, "")),
        ("0x0", (0, "x", 0, "")),
        ("10*20", (10, "*", 20, "")),
        ("010x020", (10, "x", 20, "")),
        ("10x20+5", (10, "x", 20, "+5")),
    ])
    def test_valid(self, arg, expected):
        assert _number_pair(arg) == expected

    @pytest.mark.parametrize("arg", ["", "10", "10x", "x20", "10 20", "\u0661\u0660x\u0662\u0660"])
    def test_invalid(self, arg):
        assert _number_pair(arg) is None


class TestDimensions:
    def test_parse(self):
        assert Dimensions.parse("10x20") == Dimensions(10, 20)
        assert Dimensions.parse("010x020") == Dimensions(10, 20)

    @pytest.mark.parametrize("arg", ["", "0x0", "10X20", "10X20+0+0", "10x20+0+0", "\uff11x\uff12"])
    def test_rejected(self, arg):
        with pytest.raises(ValueError):
            Dimensions.parse(arg)


class TestCrop:
    @pytest.mark.parametrize("arg, expected", [
        ("10x20", "10x20+0+0"),
        ("10x20+0+0", "10x20+0+0"),
        ("10x20+30+40", "10x20+30+40"),
        ("10x20-30+40", "10x20-30+40"),
        ("10x20+30-40", "10x20+30-40"),
    ])
    def test_parse(self, arg, expected):
        assert str(Crop.parse(arg)) == expected

    @pytest.mark.parametrize("arg", [
        "", "10X20", "10x20+30*40", "10x20++30+40", "10x20+-30+40", "0x20", "10x20+30",
    ])
    def test_rejected(self, arg):
        with pytest.raises(ValueError):
            Crop.parse(arg)

    def test_box_from_top_left(self):
        assert Crop(30, 20, 10, 5).box(100, 80) == (10, 5, 40, 25)

    def test_box_from_bottom_right(self):
        """Negative offsets count from the right and bottom edges."""
        crop = Crop.parse("30x20-10-5")
        assert crop.box(100, 80) == (60, 55, 90, 75)

    def test_box_shrinks_to_image(self):
        assert Crop.parse("200x200+50+50").box(100, 80) == (0, 0, 100, 80)

    def test_box_limits_offset(self):
        """The rectangle is pushed back inside the image."""
        assert Crop(30, 20, 90, 70).box(100, 80) == (70, 60, 100, 80)


class TestQuality:
    def test_default(self):
        quality = Quality()
        assert quality.value == 90.0
        assert not quality.lossless

    @pytest.mark.parametrize("arg, value", [("0", 0.0), ("75.5", 75.5), ("100", 100.0)])
    def test_parse(self, arg, value):
        assert Quality.parse(arg).value == value

    @pytest.mark.parametrize("arg", ["lossless", "LOSSLESS"])
    def test_lossless(self, arg):
        quality = Quality.parse(arg)
        assert quality.lossless
        assert math.isinf(quality.value)

    @pytest.mark.parametrize("arg", ["-1", "100.1", "high", ""])
    def test_rejected(self, arg):
        with pytest.raises(ValueError):
            Quality.parse(arg)


class TestResolveSpaces:
    def test_declaration_order(self):
        """Requested order and duplicates do not matter."""
        assert resolve_spaces(["LAB", "hsl", "lab"]) == [ColorSpace.HSL, ColorSpace.LAB]

    def test_empty_selects_all(self):
        assert resolve_spaces([]) == list(ColorSpace)

    def test_unknown(self):
        with pytest.raises(UnsupportedColorSpaceError):
            resolve_spaces(["hsl", "ycbcr"])


class TestDecomposeOptions:
    def test_defaults(self):
        options = DecomposeOptions()
        assert options.spaces == list(ColorSpace)
        assert options.tinted
        assert options.include_source

    def test_output_next_to_source(self):
        options = DecomposeOptions()
        path = options.output_path(Path("photos/cat.jpg"), ColorSpace.LCHAB)
        assert path == Path("photos/cat-lchab.webp")

    def test_output_in_out_dir(self):
        options = DecomposeOptions(out_dir=Path("out"))
        path = options.output_path(Path("photos/cat.jpg"), ColorSpace.XYZ)
        assert path == Path("out/cat-XYZ.webp")
