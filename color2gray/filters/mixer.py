# color2gray Filters - Channel Mixer
"""Channel mixing forms that reduce RGB to a single gray channel.

## Forms

- **add**: ``clamp(wR*R + wG*G + wB*B)``. Same as applying a 3x3 color
  matrix whose rows all equal (wR, wG, wB), so the result is achromatic.
- **rms**: ``clamp(sqrt(R*R*wR + G*G*wG + B*B*wB))``. Note that this is a
  weighted sum of squares under a single square root, there is no division
  by the channel count. With weights summing to 100% white stays white.
- **desat**: the achromatic component of HSL, HSB or HCL, see
  :mod:`color2gray.filters.colorspace`. Weights are ignored.

Weights are fractions (percent / 100). Negative weights and sums other than
1.0 are allowed; results are clamped to 0.0-1.0, never rejected.

Usage:
    from color2gray.filters.mixer import mix

    gray = mix(buffer, MixingForm.ADD, ChannelWeights())
"""
from __future__ import annotations

import numpy as np

from color2gray.buffer import ImageBuffer
from color2gray.definitions import DesaturationColorspace, MixingForm
from color2gray.options import ChannelWeights
from .colorspace import to_achromatic


def color_matrix(weights: ChannelWeights) -> np.ndarray:
    """Return the 3x3 color matrix equivalent to the add form.

    Args:
        weights: The channel weights in percent

    Returns:
        float64 array (3, 3), every row holding the weight fractions
    """
    return np.tile(np.asarray(weights.fractions(), dtype=np.float64), (3, 1))


def mix_add(rgb: np.ndarray, weights: ChannelWeights) -> np.ndarray:
    """Weighted linear addition.

    Args:
        rgb: float32 array (H, W, 3) with values 0.0-1.0
        weights: The channel weights in percent

    Returns:
        float32 array (H, W) with values 0.0-1.0
    """
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected RGB image (H, W, 3), got shape {rgb.shape}")

    # every output row is identical, the first one is sufficient
    row = color_matrix(weights)[0]
    gray = rgb.astype(np.float64) @ row
    return np.clip(gray, 0.0, 1.0).astype(np.float32)


def mix_rms(rgb: np.ndarray, weights: ChannelWeights) -> np.ndarray:
    """Square root of the weighted sum of squared channels.

    Args:
        rgb: float32 array (H, W, 3) with values 0.0-1.0
        weights: The channel weights in percent

    Returns:
        float32 array (H, W) with values 0.0-1.0
    """
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected RGB image (H, W, 3), got shape {rgb.shape}")

    wr, wg, wb = weights.fractions()
    data = rgb.astype(np.float64)
    r, g, b = data[:, :, 0], data[:, :, 1], data[:, :, 2]
    squares = r * r * wr + g * g * wg + b * b * wb
    # negative weights can push the sum below zero
    gray = np.sqrt(np.maximum(squares, 0.0))
    return np.clip(gray, 0.0, 1.0).astype(np.float32)


def mix(
    image: ImageBuffer,
    form: MixingForm,
    weights: ChannelWeights | None = None,
    colorspace: DesaturationColorspace = DesaturationColorspace.HSL,
) -> ImageBuffer:
    """Reduce an RGB(A) buffer to a single gray channel.

    Any alpha band is discarded; extract it beforehand if it is needed.

    Args:
        image: RGB or RGBA buffer
        form: The mixing form
        weights: Channel weights for add and rms, defaults to Rec.601
        colorspace: Colorspace used by the desat form

    Returns:
        Single channel buffer with the same width and height
    """
    form = MixingForm(form)
    if form == MixingForm.DESAT:
        return to_achromatic(image, colorspace)

    if weights is None:
        weights = ChannelWeights()
    rgb = image.rgb()
    if form == MixingForm.ADD:
        gray = mix_add(rgb, weights)
    else:
        gray = mix_rms(rgb, weights)
    return ImageBuffer(gray, source_format=image.source_format)


__all__ = ['color_matrix', 'mix_add', 'mix_rms', 'mix']
