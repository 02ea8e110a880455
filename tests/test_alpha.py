"""
Test transparency detection and alpha recombination.
"""

import numpy as np
import pytest

from color2gray import ImageBuffer, PixelFormat
from color2gray.filters.alpha import extract_alpha, recombine, to_gray_alpha


class TestExtractAlpha:
    """Test partial transparency detection."""

    def test_no_alpha_band(self, rgb_buffer):
        """RGB buffers are opaque."""
        result = extract_alpha(rgb_buffer)
        assert not result.has_partial_alpha
        assert result.alpha is None

    def test_fully_opaque_alpha(self):
        """An alpha band whose mean is fully opaque is dropped."""
        data = np.full((4, 4, 4), 255, dtype=np.uint8)
        image = ImageBuffer.from_uint8(data)

        result = extract_alpha(image)

        assert not result.has_partial_alpha
        assert result.alpha is None

    def test_partial_alpha(self, rgba_partial):
        """Partially transparent buffers carry their alpha plane forward."""
        result = extract_alpha(rgba_partial)

        assert result.has_partial_alpha
        assert result.alpha.shape == (rgba_partial.height, rgba_partial.width)
        assert np.array_equal(result.alpha, rgba_partial.pixels[:, :, 3])

    def test_single_transparent_pixel(self):
        """One transparent pixel is enough to keep the alpha plane."""
        data = np.full((4, 4, 4), 255, dtype=np.uint8)
        data[2, 2, 3] = 0

        result = extract_alpha(ImageBuffer.from_uint8(data))

        assert result.has_partial_alpha

    def test_alpha_is_copied(self, rgba_partial):
        """The extracted plane does not alias the source buffer."""
        result = extract_alpha(rgba_partial)
        rgba_partial.pixels[:, :, 3] = 0.25

        assert not np.all(result.alpha == 0.25)


class TestRecombine:
    """Test merging gray values and alpha."""

    def test_without_alpha(self):
        """Without alpha the gray buffer is returned as is."""
        gray = ImageBuffer(np.full((3, 5), 0.4, dtype=np.float32))
        assert recombine(gray, None) is gray

    def test_with_alpha(self, rgba_partial):
        """Output pixels are (gray, gray, gray, alpha)."""
        alpha = extract_alpha(rgba_partial).alpha
        values = np.linspace(0.0, 1.0, 16, dtype=np.float32).reshape(1, 16)
        gray = ImageBuffer(np.repeat(values, 8, axis=0))

        result = recombine(gray, alpha)

        assert result.pixel_format == PixelFormat.RGBA
        for channel in range(3):
            assert np.array_equal(result.pixels[:, :, channel], gray.pixels[:, :, 0])
        assert np.array_equal(result.pixels[:, :, 3], alpha)

    def test_size_mismatch(self, rgba_partial):
        alpha = extract_alpha(rgba_partial).alpha
        gray = ImageBuffer(np.zeros((3, 3), dtype=np.float32))
        with pytest.raises(ValueError):
            recombine(gray, alpha)

    def test_requires_single_channel(self, rgb_buffer, rgba_partial):
        with pytest.raises(ValueError):
            recombine(rgb_buffer, extract_alpha(rgba_partial).alpha)


class TestGrayAlpha:
    """Test packing into gray + alpha."""

    def test_pack(self, rgba_partial):
        alpha = extract_alpha(rgba_partial).alpha
        gray = ImageBuffer(np.full((8, 16), 0.3, dtype=np.float32))

        packed = to_gray_alpha(recombine(gray, alpha))

        assert packed.pixel_format == PixelFormat.GRAYA
        assert np.array_equal(packed.pixels[:, :, 1], alpha)
        assert np.allclose(packed.pixels[:, :, 0], 0.3)

    def test_rejects_rgb(self, rgb_buffer):
        with pytest.raises(ValueError):
            to_gray_alpha(rgb_buffer)
