# color2gray Filters - Alpha Compositing
"""
Detects partial transparency and re-attaches the alpha band after mixing.

Mixing discards every source band, alpha included, so the alpha plane is
extracted up front and merged back after the tone adjustment. Alpha values
are copied verbatim and never touched by brightness or contrast.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from color2gray.buffer import ImageBuffer
from color2gray.pixel_format import PixelFormat

logger = logging.getLogger(__name__)

FULLY_OPAQUE = 1.0
"Alpha value of a fully opaque pixel"


@dataclass
class AlphaExtraction:
    """Result of :func:`extract_alpha`."""

    has_partial_alpha: bool
    alpha: np.ndarray | None = None  # (H, W) float32, only if partial


def extract_alpha(image: ImageBuffer) -> AlphaExtraction:
    """
    Checks the buffer for partial transparency.

    Buffers without alpha band or with an alpha mean of fully opaque are
    treated as opaque and no plane is carried forward.

    :param image: The source buffer
    :return: The detection result, holding a copy of the alpha plane if the
        image is partially transparent
    """
    if not image.has_alpha:
        return AlphaExtraction(False)
    mean = image.alpha_mean()
    if mean >= FULLY_OPAQUE:
        logger.debug("Alpha band is fully opaque, dropping it")
        return AlphaExtraction(False)
    logger.debug("Partial transparency detected, alpha mean %.4f", mean)
    return AlphaExtraction(True, image.alpha().copy())


def recombine(gray: ImageBuffer, alpha: np.ndarray | None) -> ImageBuffer:
    """
    Merges a gray buffer with a previously extracted alpha plane.

    :param gray: Single channel buffer
    :param alpha: The alpha plane or None
    :return: The gray buffer itself if there is no alpha, otherwise an RGBA
        buffer holding (gray, gray, gray, alpha) per pixel
    """
    if gray.channels != 1:
        raise ValueError(f"Expected single channel buffer, got {gray.channels} channels")
    if alpha is None:
        return gray
    if alpha.shape != (gray.height, gray.width):
        raise ValueError(
            f"Alpha plane shape {alpha.shape} does not match "
            f"image size {gray.width}x{gray.height}"
        )
    value = gray.pixels[:, :, 0]
    pixels = np.stack([value, value, value, alpha.astype(np.float32)], axis=2)
    return ImageBuffer(pixels, pixel_format=PixelFormat.RGBA, source_format=gray.source_format)


def to_gray_alpha(image: ImageBuffer) -> ImageBuffer:
    """
    Packs an achromatic RGBA buffer into a two channel gray + alpha buffer.

    :param image: RGBA buffer with R = G = B
    :return: GRAYA buffer
    """
    if image.pixel_format != PixelFormat.RGBA:
        raise ValueError(f"Expected RGBA buffer, got {image.pixel_format.value}")
    pixels = image.pixels[:, :, [0, 3]]
    return ImageBuffer(pixels, pixel_format=PixelFormat.GRAYA, source_format=image.source_format)


__all__ = ['FULLY_OPAQUE', 'AlphaExtraction', 'extract_alpha', 'recombine', 'to_gray_alpha']
