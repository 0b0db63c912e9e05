"""
Tests for core data types and the colour-space registry.
"""

import numpy as np
import pytest

from chromasplit.core.data_types import ChannelDescriptor, ColorSpace, ImageBuffer
from chromasplit.core.registry import (
    ColorSpaceRegistry,
    UnsupportedColorSpaceError,
    get_space,
    list_colorspaces,
)


class TestImageBuffer:
    """Tests for ImageBuffer class."""

    def test_creation_from_array(self):
        """Test creating ImageBuffer from numpy array."""
        data = np.random.rand(3, 64, 48).astype(np.float32)
        buf = ImageBuffer(data, colorspace=ColorSpace.RGB)

        assert buf.shape == (3, 64, 48)
        assert buf.channels == 3
        assert buf.height == 64
        assert buf.width == 48
        assert buf.size == (48, 64)
        assert buf.colorspace == ColorSpace.RGB

    def test_creation_from_2d_array(self):
        """Test creating ImageBuffer from 2D (grayscale) array."""
        buf = ImageBuffer(np.random.rand(64, 64))

        assert buf.shape == (1, 64, 64)
        assert buf.channels == 1

    def test_dtype_conversion(self):
        """Test automatic conversion to float32."""
        buf = ImageBuffer(np.random.rand(3, 8, 8).astype(np.float64))

        assert buf.data.dtype == np.float32

    def test_rejects_1d(self):
        with pytest.raises(ValueError):
            ImageBuffer(np.zeros(3))

    def test_colorspace_from_string(self):
        """Known names become ColorSpace members."""
        buf = ImageBuffer(np.zeros((3, 2, 2)), colorspace="lab")
        assert buf.colorspace is ColorSpace.LAB

    def test_unknown_colorspace(self):
        with pytest.raises(ValueError):
            ImageBuffer(np.zeros((3, 2, 2)), colorspace="ycbcr")

    def test_repr(self):
        assert repr(ImageBuffer(np.zeros((4, 2, 3)), "cmyk")) == "ImageBuffer(4x2x3, cmyk)"

    def test_copy(self):
        """Test deep copy."""
        original = ImageBuffer(np.ones((3, 10, 10), dtype=np.float32), metadata={"path": "a"})
        copy = original.copy()

        copy.data[0, 0, 0] = 999.0
        copy.metadata["path"] = "b"

        assert original.data[0, 0, 0] == 1.0
        assert original.metadata["path"] == "a"

    def test_hwc_conversion_roundtrip(self):
        """Test HWC format conversion round-trip."""
        hwc_data = np.random.rand(16, 24, 3).astype(np.float32)
        buf = ImageBuffer.from_hwc(hwc_data)

        assert buf.shape == (3, 16, 24)
        np.testing.assert_array_almost_equal(hwc_data, buf.to_hwc())

    def test_uint8_conversion(self):
        """Values are rounded to the nearest 8-bit level."""
        hwc_data = np.array([[[0.0, 0.5, 1.0]]], dtype=np.float32)
        uint8 = ImageBuffer.from_hwc(hwc_data).to_uint8()

        assert uint8.dtype == np.uint8
        assert uint8[0, 0, 0] == 0
        assert uint8[0, 0, 1] == 128
        assert uint8[0, 0, 2] == 255

    def test_uint8_roundtrip(self):
        """Every 8-bit level survives from_uint8 then to_uint8."""
        levels = np.arange(256, dtype=np.uint8).reshape(16, 16, 1).repeat(3, axis=2)
        buf = ImageBuffer.from_uint8(levels)

        np.testing.assert_array_equal(buf.to_uint8(), levels)


class TestChannelDescriptor:
    def test_span(self):
        assert ChannelDescriptor("a*", -128.0, 127.0).span == 255.0

    def test_defaults(self):
        desc = ChannelDescriptor("S", 0.0, 1.0)
        assert not desc.cyclic
        assert desc.tint == (1.0, 1.0, 1.0)


class TestRegistry:
    """Tests for ColorSpaceRegistry."""

    def test_declaration_order(self):
        """Models are listed in a fixed order."""
        assert list_colorspaces() == [
            "rgb", "lin-rgb", "XYZ", "xyY", "hsl", "hsv", "hwb",
            "lab", "lchab", "luv", "lchuv", "cmy", "cmyk",
        ]
        assert ColorSpaceRegistry.list_all() == list(ColorSpace)

    @pytest.mark.parametrize("name", ["lab", "LAB", "Lab", " lab "])
    def test_case_insensitive_lookup(self, name):
        assert ColorSpaceRegistry.resolve(name) is ColorSpace.LAB

    def test_lookup_by_member(self):
        assert get_space(ColorSpace.XYY).tag is ColorSpace.XYY

    @pytest.mark.parametrize("tag", ["ycbcr", "", "hsb", 3, None])
    def test_unknown(self, tag):
        """Anything outside the table is rejected."""
        with pytest.raises(UnsupportedColorSpaceError) as excinfo:
            ColorSpaceRegistry.get(tag)
        assert "supported colour spaces" in str(excinfo.value)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            get_space("nope")

    def test_channel_counts(self):
        for tag in ColorSpaceRegistry.list_all():
            expected = 4 if tag is ColorSpace.CMYK else 3
            assert get_space(tag).channel_count == expected

    @pytest.mark.parametrize("tag, names", [
        ("hsl", ["H", "S", "L"]),
        ("lab", ["L*", "a*", "b*"]),
        ("lchuv", ["L*", "C*", "h"]),
        ("cmyk", ["C", "M", "Y", "K"]),
    ])
    def test_channel_names(self, tag, names):
        assert get_space(tag).channel_names == names

    def test_cyclic_channels(self):
        """Only hue channels are cyclic, and they span [0, 360)."""
        for tag in ColorSpaceRegistry.list_all():
            for ch in get_space(tag).channels:
                if ch.cyclic:
                    assert ch.name in ("H", "h")
                    assert (ch.low, ch.high) == (0.0, 360.0)

    def test_get_info(self):
        info = ColorSpaceRegistry.get_info("lchab")
        assert info["name"] == "lchab"
        assert info["channels"][2] == {"name": "h", "range": (0.0, 360.0), "cyclic": True}

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            ColorSpaceRegistry._registry[ColorSpace.RGB] = None
