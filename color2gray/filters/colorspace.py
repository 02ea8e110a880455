# color2gray Filters - Colorspace Conversion
"""Cylindrical colorspace conversions used for desaturation.

This module converts RGB to HSL, HSB (HSV) and HCL and back, and extracts
the achromatic component of each space:

| Space | Achromatic component |
|-------|----------------------|
| HSL | lightness = (max(R,G,B) + min(R,G,B)) / 2 |
| HSB | brightness = max(R,G,B) |
| HCL | luma = 0.298839*R + 0.586811*G + 0.114350*B |

Desaturating means setting saturation (or chroma) to zero and converting
back to RGB, which yields R = G = B = the achromatic component. The HCL
luma uses Rec.601 style weights as found in the HCL model of common image
toolkits.

## Input Format

All functions operate on float32 arrays of shape (H, W, 3) with values
0.0-1.0. Hue is returned in the range 0.0-1.0 (one full turn).

Usage:
    from color2gray.filters.colorspace import to_achromatic

    gray = to_achromatic(buffer, DesaturationColorspace.HSL)
"""
from __future__ import annotations

import numpy as np

from color2gray.buffer import ImageBuffer
from color2gray.definitions import DesaturationColorspace

HCL_LUMA_WEIGHTS = (0.298839, 0.586811, 0.114350)
"Red, green and blue weights of the HCL luma"


def _check_rgb(rgb: np.ndarray) -> None:
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected RGB image (H, W, 3), got shape {rgb.shape}")


def _hue(rgb: np.ndarray, max_c: np.ndarray, delta: np.ndarray) -> np.ndarray:
    """Hexagonal hue (0-1) shared by all three spaces."""
    r, g, b = rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]
    chromatic = delta > 0.0
    safe_delta = np.where(chromatic, delta, 1.0)

    hue = np.where(
        max_c == r,
        np.mod((g - b) / safe_delta, 6.0),
        np.where(max_c == g, (b - r) / safe_delta + 2.0, (r - g) / safe_delta + 4.0),
    )
    return np.where(chromatic, hue / 6.0, 0.0).astype(np.float32)


def _from_hue_chroma(hue: np.ndarray, chroma: np.ndarray) -> np.ndarray:
    """Builds the zero-offset RGB triple for given hue (0-1) and chroma."""
    h = np.mod(hue, 1.0) * 6.0
    x = chroma * (1.0 - np.abs(np.mod(h, 2.0) - 1.0))
    zero = np.zeros_like(chroma)
    sextant = np.floor(h).astype(np.int32) % 6

    r = np.choose(sextant, [chroma, x, zero, zero, x, chroma])
    g = np.choose(sextant, [x, chroma, chroma, x, zero, zero])
    b = np.choose(sextant, [zero, zero, x, chroma, chroma, x])
    return np.stack([r, g, b], axis=2)


# ============================================================================
# Achromatic Components
# ============================================================================

def lightness(rgb: np.ndarray) -> np.ndarray:
    """HSL lightness, (max + min) / 2, as (H, W) array."""
    _check_rgb(rgb)
    return ((rgb.max(axis=2) + rgb.min(axis=2)) / 2.0).astype(np.float32)


def brightness(rgb: np.ndarray) -> np.ndarray:
    """HSB brightness, max(R, G, B), as (H, W) array."""
    _check_rgb(rgb)
    return rgb.max(axis=2).astype(np.float32)


def luma(rgb: np.ndarray) -> np.ndarray:
    """HCL luma as (H, W) array."""
    _check_rgb(rgb)
    wr, wg, wb = HCL_LUMA_WEIGHTS
    return (wr * rgb[:, :, 0] + wg * rgb[:, :, 1] + wb * rgb[:, :, 2]).astype(np.float32)


_ACHROMATIC = {
    DesaturationColorspace.HSL: lightness,
    DesaturationColorspace.HSB: brightness,
    DesaturationColorspace.HCL: luma,
}


# ============================================================================
# Full Conversions
# ============================================================================

def rgb_to_hsl(rgb: np.ndarray) -> np.ndarray:
    """Convert RGB to HSL.

    Args:
        rgb: float32 array (H, W, 3) with values 0.0-1.0

    Returns:
        float32 array (H, W, 3) holding hue, saturation, lightness
    """
    _check_rgb(rgb)
    max_c = rgb.max(axis=2)
    min_c = rgb.min(axis=2)
    delta = max_c - min_c
    light = (max_c + min_c) / 2.0
    denominator = 1.0 - np.abs(2.0 * light - 1.0)
    sat = np.where(denominator > 0.0, delta / np.where(denominator > 0.0, denominator, 1.0), 0.0)
    return np.stack([_hue(rgb, max_c, delta), np.clip(sat, 0.0, 1.0), light], axis=2).astype(np.float32)


def hsl_to_rgb(hsl: np.ndarray) -> np.ndarray:
    """Convert HSL (H, W, 3) back to RGB."""
    _check_rgb(hsl)
    hue, sat, light = hsl[:, :, 0], hsl[:, :, 1], hsl[:, :, 2]
    chroma = (1.0 - np.abs(2.0 * light - 1.0)) * sat
    offset = light - chroma / 2.0
    rgb = _from_hue_chroma(hue, chroma) + offset[:, :, np.newaxis]
    return np.clip(rgb, 0.0, 1.0).astype(np.float32)


def rgb_to_hsb(rgb: np.ndarray) -> np.ndarray:
    """Convert RGB to HSB (hue, saturation, brightness)."""
    _check_rgb(rgb)
    max_c = rgb.max(axis=2)
    delta = max_c - rgb.min(axis=2)
    sat = np.where(max_c > 0.0, delta / np.where(max_c > 0.0, max_c, 1.0), 0.0)
    return np.stack([_hue(rgb, max_c, delta), sat, max_c], axis=2).astype(np.float32)


def hsb_to_rgb(hsb: np.ndarray) -> np.ndarray:
    """Convert HSB (H, W, 3) back to RGB."""
    _check_rgb(hsb)
    hue, sat, value = hsb[:, :, 0], hsb[:, :, 1], hsb[:, :, 2]
    chroma = value * sat
    rgb = _from_hue_chroma(hue, chroma) + (value - chroma)[:, :, np.newaxis]
    return np.clip(rgb, 0.0, 1.0).astype(np.float32)


def rgb_to_hcl(rgb: np.ndarray) -> np.ndarray:
    """Convert RGB to HCL (hue, chroma, luma)."""
    _check_rgb(rgb)
    max_c = rgb.max(axis=2)
    delta = max_c - rgb.min(axis=2)
    return np.stack([_hue(rgb, max_c, delta), delta, luma(rgb)], axis=2).astype(np.float32)


def hcl_to_rgb(hcl: np.ndarray) -> np.ndarray:
    """Convert HCL (H, W, 3) back to RGB.

    The hue/chroma triple is shifted so that its luma matches the requested
    luma.
    """
    _check_rgb(hcl)
    hue, chroma, target = hcl[:, :, 0], hcl[:, :, 1], hcl[:, :, 2]
    rgb = _from_hue_chroma(hue, chroma)
    offset = target - luma(rgb)
    return np.clip(rgb + offset[:, :, np.newaxis], 0.0, 1.0).astype(np.float32)


_CONVERSIONS = {
    DesaturationColorspace.HSL: (rgb_to_hsl, hsl_to_rgb),
    DesaturationColorspace.HSB: (rgb_to_hsb, hsb_to_rgb),
    DesaturationColorspace.HCL: (rgb_to_hcl, hcl_to_rgb),
}


def desaturate(rgb: np.ndarray, colorspace: DesaturationColorspace) -> np.ndarray:
    """Remove all saturation (or chroma) in the given colorspace.

    Args:
        rgb: float32 array (H, W, 3) with values 0.0-1.0
        colorspace: The cylindrical colorspace to desaturate in

    Returns:
        float32 array (H, W, 3) with R = G = B
    """
    forward, backward = _CONVERSIONS[DesaturationColorspace(colorspace)]
    converted = forward(rgb)
    converted[:, :, 1] = 0.0
    return backward(converted)


def to_achromatic(image: ImageBuffer, colorspace: DesaturationColorspace) -> ImageBuffer:
    """Extract the achromatic component of the chosen colorspace.

    Equivalent to channel 0 of :func:`desaturate`, computed directly. An
    alpha band of the input is ignored.

    Args:
        image: RGB or RGBA buffer
        colorspace: HSL, HSB or HCL

    Returns:
        Single channel buffer with the same width and height
    """
    extract = _ACHROMATIC[DesaturationColorspace(colorspace)]
    gray = np.clip(extract(image.rgb()), 0.0, 1.0)
    return ImageBuffer(gray, source_format=image.source_format)


__all__ = [
    'HCL_LUMA_WEIGHTS',
    'lightness', 'brightness', 'luma',
    'rgb_to_hsl', 'hsl_to_rgb',
    'rgb_to_hsb', 'hsb_to_rgb',
    'rgb_to_hcl', 'hcl_to_rgb',
    'desaturate', 'to_achromatic',
]
