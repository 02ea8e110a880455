"""
color2gray - Converts color images to grayscale with selectable channel mixing
"""

from .buffer import ImageBuffer
from .pixel_format import PixelFormat, PixelFormatTypes
from .definitions import MixingForm, DesaturationColorspace
from .options import ChannelWeights, ConversionOptions
from .errors import (
    Color2GrayError,
    ArgumentCountError,
    ParameterTypeError,
    ParameterRangeError,
    EnumError,
    InputFileError,
    ColorspaceError,
    OutputError,
)
from .image_io import load_image, save_image
from .pipeline import ConversionPipeline, Stage, convert

__all__ = [
    # Buffers
    "ImageBuffer",
    "PixelFormat",
    "PixelFormatTypes",
    # Parameters
    "MixingForm",
    "DesaturationColorspace",
    "ChannelWeights",
    "ConversionOptions",
    # Errors
    "Color2GrayError",
    "ArgumentCountError",
    "ParameterTypeError",
    "ParameterRangeError",
    "EnumError",
    "InputFileError",
    "ColorspaceError",
    "OutputError",
    # I/O and pipeline
    "load_image",
    "save_image",
    "ConversionPipeline",
    "Stage",
    "convert",
]

__version__ = "0.1.0"
