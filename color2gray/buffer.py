"""
Implements the class :class:`.ImageBuffer` which keeps an image's pixel data
in memory while it passes through the conversion stages.

Samples are always stored as ``float32`` values between 0.0 and 1.0 in an
array of shape (height, width, channels).
"""

from __future__ import annotations

import numpy as np

from .pixel_format import PixelFormat, PixelFormatTypes

COLORSPACE_SRGB = "sRGB"
"Tag of gamma encoded RGB data"

COLORSPACE_RGB = "RGB"
"Tag of RGB data"

COLORSPACE_GRAY = "Gray"
"Tag of single channel luminosity data"

RGB_COLORSPACES = {COLORSPACE_RGB, COLORSPACE_SRGB}
"Colorspace tags accepted as conversion input"


class ImageBuffer:
    """
    A width x height grid of normalized float samples with an optional alpha
    band.

    The buffer is exclusively owned by the stage currently transforming it.
    Stages either return a new buffer or mutate one they created themselves.
    """

    def __init__(
        self,
        pixels: np.ndarray,
        pixel_format: PixelFormatTypes | None = None,
        colorspace: str | None = None,
        source_format: str | None = None,
    ):
        """
        :param pixels: Float array of shape (H, W, C) or (H, W) with values
            between 0.0 and 1.0. A 2D array is treated as a single channel.
        :param pixel_format: The channel layout. Detected from the channel
            count by default.
        :param colorspace: The colorspace tag, e.g. "sRGB". Derived from the
            pixel format by default.
        :param source_format: The container format the data was decoded from,
            e.g. "PNG"

        Raises a ValueError if the array has an unsupported shape.
        """
        if pixels.ndim == 2:
            pixels = pixels[:, :, np.newaxis]
        if pixels.ndim != 3 or pixels.shape[2] not in (1, 2, 3, 4):
            raise ValueError(
                f"Expected image (H, W, 1|2|3|4), got shape {pixels.shape}"
            )
        if pixels.dtype != np.float32:
            pixels = pixels.astype(np.float32)
        if pixel_format is None:
            pixel_format = PixelFormat.from_channels(pixels.shape[2])
        pixel_format = PixelFormat(pixel_format)
        if pixel_format.channels != pixels.shape[2]:
            raise ValueError(
                f"Pixel format {pixel_format.value} does not match "
                f"{pixels.shape[2]} channels"
            )
        if colorspace is None:
            colorspace = (
                COLORSPACE_SRGB
                if pixel_format in (PixelFormat.RGB, PixelFormat.RGBA)
                else COLORSPACE_GRAY
            )
        self.pixels = pixels
        "The sample data, float32 (H, W, C)"
        self.pixel_format = pixel_format
        "The channel layout"
        self.colorspace = colorspace
        "The colorspace tag"
        self.source_format = source_format
        "The container format of the decoded source, if any"
        self.metadata: dict = {}
        "Arbitrary metadata attached to this buffer."

    @classmethod
    def from_array(cls, pixels: np.ndarray, **params) -> ImageBuffer:
        """
        Creates a buffer from an arbitrary float array, clipping the values to
        the valid range.

        :param pixels: The pixel data
        :param params: See :meth:`__init__`
        :return: The new buffer
        """
        data = np.clip(np.asarray(pixels, dtype=np.float32), 0.0, 1.0)
        return cls(data, **params)

    @classmethod
    def from_uint8(cls, pixels: np.ndarray, **params) -> ImageBuffer:
        """
        Creates a buffer from 8-bit data (0-255).

        :param pixels: uint8 array
        :param params: See :meth:`__init__`
        :return: The new buffer
        """
        if pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 dtype, got {pixels.dtype}")
        return cls(pixels.astype(np.float32) / 255.0, **params)

    def to_uint8(self) -> np.ndarray:
        """
        Returns the samples quantized to 8 bit, rounding to the nearest level.

        :return: uint8 array of shape (H, W, C)
        """
        return np.rint(np.clip(self.pixels, 0.0, 1.0) * 255.0).astype(np.uint8)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def channels(self) -> int:
        return self.pixels.shape[2]

    @property
    def size(self) -> tuple[int, int]:
        """
        The image's size in pixels as (width, height)
        """
        return self.width, self.height

    @property
    def band_names(self) -> list[str]:
        return self.pixel_format.band_names

    @property
    def has_alpha(self) -> bool:
        return self.pixel_format.has_alpha

    @property
    def is_rgb(self) -> bool:
        """True if the buffer holds RGB data tagged as RGB or sRGB"""
        return (
            self.pixel_format in (PixelFormat.RGB, PixelFormat.RGBA)
            and self.colorspace in RGB_COLORSPACES
        )

    def split(self) -> list[np.ndarray]:
        """
        Returns the single bands as (H, W) arrays.

        :return: One array per channel
        """
        return [self.pixels[:, :, index] for index in range(self.channels)]

    def rgb(self) -> np.ndarray:
        """
        Returns the color bands without alpha.

        :return: float32 array (H, W, 3)
        """
        if self.pixel_format not in (PixelFormat.RGB, PixelFormat.RGBA):
            raise ValueError(f"No RGB bands in {self.pixel_format.value} buffer")
        return self.pixels[:, :, 0:3]

    def alpha(self) -> np.ndarray | None:
        """
        Returns the alpha band or None if the buffer has none.

        :return: float32 array (H, W)
        """
        if not self.has_alpha:
            return None
        return self.pixels[:, :, -1]

    def alpha_mean(self) -> float:
        """
        Returns the mean of the alpha band, 1.0 for buffers without alpha.
        """
        alpha = self.alpha()
        if alpha is None or alpha.size == 0:
            return 1.0
        return float(np.mean(alpha, dtype=np.float64))

    def copy(self) -> ImageBuffer:
        """
        Returns a deep copy of the buffer.
        """
        result = ImageBuffer(
            self.pixels.copy(),
            pixel_format=self.pixel_format,
            colorspace=self.colorspace,
            source_format=self.source_format,
        )
        result.metadata = dict(self.metadata)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageBuffer):
            return NotImplemented
        return (
            self.pixel_format == other.pixel_format
            and self.pixels.shape == other.pixels.shape
            and np.array_equal(self.pixels, other.pixels)
        )

    __hash__ = None

    def __str__(self):
        return (
            f"ImageBuffer({self.width}x{self.height}, "
            f"{self.pixel_format.value}, {self.colorspace})"
        )

    __repr__ = __str__


__all__ = [
    "ImageBuffer",
    "COLORSPACE_SRGB",
    "COLORSPACE_RGB",
    "COLORSPACE_GRAY",
    "RGB_COLORSPACES",
]
