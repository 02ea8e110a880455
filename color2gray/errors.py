"""
Error kinds raised by color2gray.

Every error is fatal for a single conversion run. The command line interface
maps all of them to exit status 1 and prints a one-line diagnostic.
"""

from __future__ import annotations


class Color2GrayError(Exception):
    """Base class of all color2gray errors."""


class ArgumentCountError(Color2GrayError):
    """Too many or too few positional command line arguments."""


class ParameterTypeError(Color2GrayError, TypeError):
    """A numeric parameter received a non-numeric value."""


class ParameterRangeError(Color2GrayError, ValueError):
    """A numeric parameter is outside of its valid range."""


class EnumError(Color2GrayError, ValueError):
    """An invalid mixing form or colorspace token."""


class InputFileError(Color2GrayError):
    """The input file is missing, unreadable, empty or not an image."""


class ColorspaceError(Color2GrayError):
    """The input image is neither RGB nor sRGB."""


class OutputError(Color2GrayError):
    """The output image could not be encoded or written."""


__all__ = [
    "Color2GrayError",
    "ArgumentCountError",
    "ParameterTypeError",
    "ParameterRangeError",
    "EnumError",
    "InputFileError",
    "ColorspaceError",
    "OutputError",
]
