"""
Defines :class:`PixelFormat`, the channel layouts an
:class:`~color2gray.buffer.ImageBuffer` can hold.
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class PixelFormat(Enum):
    """
    Enumeration of the supported channel layouts
    """

    GRAY = "GRAY"
    "Single channel, luminosity only"
    GRAYA = "GRAYA"
    "Luminosity plus alpha"
    RGB = "RGB"
    "Red, green, blue"
    RGBA = "RGBA"
    "Red, green, blue, alpha"

    @property
    def band_names(self) -> list[str]:
        """
        Returns the names of the single bands

        :return: The list of band names
        """
        return _BAND_NAMES[self]

    @property
    def channels(self) -> int:
        """Number of channels"""
        return len(_BAND_NAMES[self])

    @property
    def has_alpha(self) -> bool:
        """True if the last band is an alpha band"""
        return self in (PixelFormat.GRAYA, PixelFormat.RGBA)

    @classmethod
    def from_channels(cls, channels: int) -> PixelFormat:
        """
        Returns the pixel format for given channel count

        :param channels: The number of channels (1-4)
        :return: The pixel format
        """
        for pixel_format, names in _BAND_NAMES.items():
            if len(names) == channels:
                return pixel_format
        raise ValueError(f"Unsupported channel count: {channels}")

    def to_pil(self) -> str:
        """
        Returns the corresponding PIL mode

        :return: The PIL mode name
        """
        return _PIL_MODES[self]

    @classmethod
    def from_pil(cls, mode: str) -> PixelFormat:
        """
        Returns the pixel format for an already normalized PIL mode

        :param mode: The PIL mode, e.g. "RGBA" or "L"
        :return: The pixel format
        """
        for pixel_format, pil_mode in _PIL_MODES.items():
            if pil_mode == mode:
                return pixel_format
        raise ValueError(f"Unsupported PIL mode: {mode}")


_BAND_NAMES = {
    PixelFormat.GRAY: ["L"],
    PixelFormat.GRAYA: ["L", "A"],
    PixelFormat.RGB: ["R", "G", "B"],
    PixelFormat.RGBA: ["R", "G", "B", "A"],
}

_PIL_MODES = {
    PixelFormat.GRAY: "L",
    PixelFormat.GRAYA: "LA",
    PixelFormat.RGB: "RGB",
    PixelFormat.RGBA: "RGBA",
}

PixelFormatTypes = Union[PixelFormat, str]
"Pixel format or its string representation"

__all__ = ["PixelFormat", "PixelFormatTypes"]
