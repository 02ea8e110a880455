"""
Test the brightness / contrast adjustment.
"""

import math

import numpy as np
import pytest

from color2gray import ImageBuffer
from color2gray.filters.tone import adjust, brightness_contrast, slope_intercept


@pytest.fixture
def gray_ramp() -> ImageBuffer:
    """A single channel ramp from black to white."""
    values = np.linspace(0.0, 1.0, 101, dtype=np.float32).reshape(1, 101)
    return ImageBuffer(values)


class TestNoOp:
    """Brightness 0 and contrast 0 must not touch the data."""

    def test_same_buffer_returned(self, gray_ramp):
        result = adjust(gray_ramp, 0, 0)
        assert result is gray_ramp

    def test_bit_identical(self, gray_ramp):
        before = gray_ramp.pixels.copy()

        result = brightness_contrast(gray_ramp.pixels, 0.0, 0.0)

        assert np.array_equal(result, before)
        assert result.tobytes() == before.tobytes()

    def test_identity_transform(self):
        """The transform of 0 / 0 is slope 1, intercept 0."""
        assert slope_intercept(0, 0) == pytest.approx((1.0, 0.0))


class TestBrightness:
    """Test the brightness parameter."""

    def test_full_brightness_is_white(self, gray_ramp):
        result = adjust(gray_ramp, brightness=100)
        assert np.all(result.pixels == 1.0)

    def test_no_brightness_is_black(self, gray_ramp):
        result = adjust(gray_ramp, brightness=-100)
        assert np.all(result.pixels == 0.0)

    def test_shift(self, gray_ramp):
        """Brightness 20 adds 0.2 and clamps at white."""
        result = adjust(gray_ramp, brightness=20)
        expected = np.clip(gray_ramp.pixels + 0.2, 0.0, 1.0)
        assert np.allclose(result.pixels, expected, atol=1e-6)

    def test_darken(self, gray_ramp):
        result = adjust(gray_ramp, brightness=-30)
        expected = np.clip(gray_ramp.pixels - 0.3, 0.0, 1.0)
        assert np.allclose(result.pixels, expected, atol=1e-6)


class TestContrast:
    """Test the contrast parameter."""

    def test_minimum_contrast_is_flat(self, gray_ramp):
        """Contrast -100 collapses everything to the midpoint."""
        result = adjust(gray_ramp, contrast=-100)
        assert np.allclose(result.pixels, 0.5)

    def test_maximum_contrast_thresholds(self, gray_ramp):
        """Contrast 100 turns the ramp into black and white."""
        result = adjust(gray_ramp, contrast=100)
        values = result.pixels[0, :, 0]
        assert np.all(values[:50] == 0.0)
        assert np.all(values[51:] == 1.0)

    def test_midpoint_is_fixed(self):
        """Contrast scales the deviation from 0.5."""
        data = np.array([[0.5, 0.6, 0.4]], dtype=np.float32)
        slope = math.tan(math.pi * 1.5 / 4.0)

        result = brightness_contrast(data, contrast=50)

        assert result[0, 0] == pytest.approx(0.5, abs=1e-6)
        assert result[0, 1] == pytest.approx(0.5 + 0.1 * slope, abs=1e-6)
        assert result[0, 2] == pytest.approx(0.5 - 0.1 * slope, abs=1e-6)

    def test_lower_contrast_reduces_range(self, gray_ramp):
        result = adjust(gray_ramp, contrast=-50)
        assert result.pixels.min() > 0.0
        assert result.pixels.max() < 1.0

    def test_combined_stays_in_range(self, gray_ramp):
        result = adjust(gray_ramp, brightness=40, contrast=70)
        assert result.pixels.min() >= 0.0
        assert result.pixels.max() <= 1.0
        assert result.pixels.dtype == np.float32


class TestValidation:
    """Test parameter and buffer validation."""

    @pytest.mark.parametrize("brightness, contrast", [(101, 0), (0, -100.5), (-200, 300)])
    def test_out_of_range(self, gray_ramp, brightness, contrast):
        with pytest.raises(ValueError):
            adjust(gray_ramp, brightness, contrast)

    def test_multi_channel_rejected(self, rgb_buffer):
        with pytest.raises(ValueError):
            adjust(rgb_buffer, 10, 10)
