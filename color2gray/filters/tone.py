# color2gray Filters - Tone Adjustment
"""Brightness / contrast adjustment of gray buffers.

Both parameters are percentages between -100 and 100. The adjustment is a
single linear transform::

    slope = tan(pi * (contrast / 100 + 1) / 4)        (at least 0)
    intercept = brightness / 100 + (100 - brightness) / 200 * (1 - slope)
    out = clamp(slope * x + intercept)

Contrast 0 keeps the slope at 1, -100 flattens everything to the midpoint
and +100 turns the image into a hard threshold at the midpoint. Brightness
shifts the result up or down.

Brightness and contrast of 0 is a strict no-op, the input is returned as is.
"""
from __future__ import annotations

import math

import numpy as np

from color2gray.buffer import ImageBuffer

TONE_RANGE = (-100.0, 100.0)
"Valid range of brightness and contrast"


def _check_range(name: str, value: float) -> None:
    low, high = TONE_RANGE
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low:g} and {high:g}, got {value:g}")


def slope_intercept(brightness: float, contrast: float) -> tuple[float, float]:
    """Compute the linear transform for given brightness and contrast.

    Args:
        brightness: -100 (darker) to 100 (brighter)
        contrast: -100 (flat) to 100 (threshold)

    Returns:
        Tuple of slope and intercept
    """
    _check_range("brightness", brightness)
    _check_range("contrast", contrast)
    if contrast == 0:
        # tan(pi / 4) is not exactly 1 in floating point
        slope = 1.0
    else:
        slope = max(math.tan(math.pi * (contrast / 100.0 + 1.0) / 4.0), 0.0)
    intercept = brightness / 100.0 + ((100.0 - brightness) / 200.0) * (1.0 - slope)
    return slope, intercept


def brightness_contrast(data: np.ndarray, brightness: float = 0.0,
                        contrast: float = 0.0) -> np.ndarray:
    """Apply brightness and contrast to a float array.

    Args:
        data: float32 array with values 0.0-1.0, any shape
        brightness: -100 to 100, 0 = no change
        contrast: -100 to 100, 0 = no change

    Returns:
        Adjusted float32 array, the input itself if both parameters are 0
    """
    if brightness == 0 and contrast == 0:
        return data

    slope, intercept = slope_intercept(brightness, contrast)
    result = data.astype(np.float64) * slope + intercept
    return np.clip(result, 0.0, 1.0).astype(np.float32)


def adjust(image: ImageBuffer, brightness: float = 0.0, contrast: float = 0.0) -> ImageBuffer:
    """Adjust brightness and contrast of a single channel buffer.

    Returns the very same buffer if both parameters are 0.
    """
    if image.channels != 1:
        raise ValueError(f"Expected single channel buffer, got {image.channels} channels")
    if brightness == 0 and contrast == 0:
        return image
    adjusted = brightness_contrast(image.pixels, brightness, contrast)
    return ImageBuffer(adjusted, source_format=image.source_format)


__all__ = ['TONE_RANGE', 'slope_intercept', 'brightness_contrast', 'adjust']
