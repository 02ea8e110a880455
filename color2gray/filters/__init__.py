# color2gray Filters
"""
Pixel level conversion stages.

- :mod:`.mixer`: add / rms / desat channel mixing
- :mod:`.colorspace`: HSL, HSB and HCL conversions
- :mod:`.tone`: brightness / contrast adjustment
- :mod:`.alpha`: transparency detection and recombination
"""

from .alpha import AlphaExtraction, extract_alpha, recombine, to_gray_alpha
from .colorspace import desaturate, to_achromatic
from .mixer import color_matrix, mix, mix_add, mix_rms
from .tone import adjust, brightness_contrast

__all__ = [
    'AlphaExtraction',
    'extract_alpha',
    'recombine',
    'to_gray_alpha',
    'desaturate',
    'to_achromatic',
    'color_matrix',
    'mix',
    'mix_add',
    'mix_rms',
    'adjust',
    'brightness_contrast',
]
