"""
Tests the ImageBuffer class
"""

import numpy as np
import pytest

from color2gray import ImageBuffer, PixelFormat


def test_buffer_basics(rgb_buffer):
    """
    Tests the buffer's basic properties
    """
    assert rgb_buffer.width == 20
    assert rgb_buffer.height == 10
    assert rgb_buffer.size == (20, 10)
    assert rgb_buffer.channels == 3
    assert rgb_buffer.pixel_format == PixelFormat.RGB
    assert rgb_buffer.band_names == ["R", "G", "B"]
    assert rgb_buffer.colorspace == "sRGB"
    assert rgb_buffer.is_rgb
    assert not rgb_buffer.has_alpha
    assert rgb_buffer.alpha() is None
    assert rgb_buffer.alpha_mean() == 1.0
    assert rgb_buffer.pixels.dtype == np.float32
    assert str(rgb_buffer) == "ImageBuffer(20x10, RGB, sRGB)"


def test_gray_buffer():
    """
    A 2D array becomes a single channel gray buffer
    """
    buffer = ImageBuffer(np.zeros((5, 7), dtype=np.float64))
    assert buffer.pixels.shape == (5, 7, 1)
    assert buffer.pixels.dtype == np.float32
    assert buffer.pixel_format == PixelFormat.GRAY
    assert buffer.colorspace == "Gray"
    assert not buffer.is_rgb
    with pytest.raises(ValueError):
        buffer.rgb()


def test_alpha(rgba_partial):
    assert rgba_partial.has_alpha
    assert rgba_partial.rgb().shape == (8, 16, 3)
    assert rgba_partial.alpha().shape == (8, 16)
    assert 0.0 < rgba_partial.alpha_mean() < 1.0
    assert len(rgba_partial.split()) == 4


def test_invalid_shapes():
    with pytest.raises(ValueError):
        ImageBuffer(np.zeros((4, 4, 5), dtype=np.float32))
    with pytest.raises(ValueError):
        ImageBuffer(np.zeros(4, dtype=np.float32))
    with pytest.raises(ValueError):
        ImageBuffer(np.zeros((4, 4, 3), dtype=np.float32), pixel_format=PixelFormat.RGBA)


def test_uint8_conversion():
    """
    8-bit data is normalized and restored without loss
    """
    data = np.arange(256, dtype=np.uint8).reshape(16, 16)
    buffer = ImageBuffer.from_uint8(data)
    assert buffer.pixels.max() == pytest.approx(1.0)
    assert np.array_equal(buffer.to_uint8()[:, :, 0], data)
    with pytest.raises(ValueError):
        ImageBuffer.from_uint8(data.astype(np.float32))


def test_from_array_clips():
    buffer = ImageBuffer.from_array(np.array([[-0.5, 0.5, 1.5]]))
    assert buffer.pixels[0, :, 0].tolist() == [0.0, 0.5, 1.0]


def test_copy_and_equality(rgb_buffer):
    copy = rgb_buffer.copy()
    assert copy == rgb_buffer
    assert copy.pixels is not rgb_buffer.pixels
    copy.pixels[0, 0, 0] = 0.75
    assert copy != rgb_buffer


def test_pixel_format():
    assert PixelFormat.from_channels(2) == PixelFormat.GRAYA
    assert PixelFormat.from_pil("LA") == PixelFormat.GRAYA
    assert PixelFormat.RGBA.to_pil() == "RGBA"
    assert PixelFormat("RGB").channels == 3
    with pytest.raises(ValueError):
        PixelFormat.from_channels(5)
    with pytest.raises(ValueError):
        PixelFormat.from_pil("CMYK")
