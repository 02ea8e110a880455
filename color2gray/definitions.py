"""
Enumerations shared between the conversion stages.
"""

from __future__ import annotations

from enum import Enum


class MixingForm(str, Enum):
    """
    Defines how the red, green and blue samples are combined into one channel
    """

    ADD = "add"
    "Weighted linear addition"
    RMS = "rms"
    "Square root of the weighted sum of squares"
    DESAT = "desat"
    "Desaturation in a cylindrical colorspace, weights are ignored"


class DesaturationColorspace(str, Enum):
    """
    The colorspace whose achromatic component is kept for
    :attr:`MixingForm.DESAT`
    """

    HSL = "hsl"
    "Hue, saturation, lightness"
    HSB = "hsb"
    "Hue, saturation, brightness (also known as HSV)"
    HCL = "hcl"
    "Hue, chroma, luma"


__all__ = ["MixingForm", "DesaturationColorspace"]
