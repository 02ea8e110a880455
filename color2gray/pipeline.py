"""
The conversion pipeline.

A run passes through a fixed sequence of stages::

    LOAD -> VALIDATE -> DETECT_ALPHA -> MIX -> TONE_ADJUST -> RECOMBINE_ALPHA -> ENCODE

Every stage takes a buffer and hands a new (or exclusively owned) buffer to
the next one. Any failure aborts the whole run before the output is written.
"""

from __future__ import annotations

import logging
import os
from enum import Enum

from .buffer import ImageBuffer
from .definitions import MixingForm
from .errors import ColorspaceError
from .filters.alpha import extract_alpha, recombine
from .filters.mixer import mix
from .filters.tone import adjust
from .image_io import load_image, save_image
from .options import ConversionOptions

logger = logging.getLogger(__name__)


class Stage(Enum):
    """The stages of a conversion run, in execution order"""

    LOAD = "load"
    VALIDATE = "validate"
    DETECT_ALPHA = "detect_alpha"
    MIX = "mix"
    TONE_ADJUST = "tone_adjust"
    RECOMBINE_ALPHA = "recombine_alpha"
    ENCODE = "encode"


class ConversionPipeline:
    """
    Converts color images to grayscale using a fixed set of options.

    Usage::

        pipeline = ConversionPipeline(ConversionOptions.create(form="rms"))
        pipeline.run("photo.png", "photo_gray.png")
    """

    def __init__(self, options: ConversionOptions | None = None, **params):
        """
        :param options: Validated options. If omitted they are created from
            ``params`` which may hold raw values such as strings.
        :param params: See :class:`~color2gray.options.ConversionOptions`

        Parameters are validated here, before any image is decoded.
        """
        if options is None:
            options = ConversionOptions.create(**params)
        elif params:
            raise ValueError("Pass either options or single parameters, not both")
        self.options = options
        self.stages: list[Stage] = []
        "The stages passed by the last run"

    def _enter(self, stage: Stage) -> None:
        self.stages.append(stage)
        logger.debug("Stage %s", stage.name)

    @staticmethod
    def validate(image: ImageBuffer) -> None:
        """
        Ensures the buffer holds RGB or sRGB data.

        :param image: The decoded buffer
        :raises ColorspaceError: For any other colorspace
        """
        if not image.is_rgb:
            raise ColorspaceError(
                f"input colorspace is {image.colorspace}, expected RGB or sRGB"
            )

    def process(self, image: ImageBuffer) -> ImageBuffer:
        """
        Converts a decoded buffer in memory.

        :param image: RGB or RGBA buffer tagged as RGB or sRGB
        :return: A single channel buffer or, for partially transparent input,
            an RGBA buffer holding (gray, gray, gray, alpha)
        """
        options = self.options
        self._enter(Stage.VALIDATE)
        self.validate(image)

        self._enter(Stage.DETECT_ALPHA)
        extraction = extract_alpha(image)

        self._enter(Stage.MIX)
        if options.form == MixingForm.DESAT:
            logger.debug("Desaturating in %s", options.colorspace.value.upper())
        else:
            logger.debug(
                "Mixing %s with weights %.4g/%.4g/%.4g",
                options.form.value, options.red, options.green, options.blue,
            )
        gray = mix(image, options.form, options.weights, options.colorspace)

        self._enter(Stage.TONE_ADJUST)
        gray = adjust(gray, options.brightness, options.contrast)

        self._enter(Stage.RECOMBINE_ALPHA)
        return recombine(gray, extraction.alpha)

    def run(self, infile: str | os.PathLike, outfile: str | os.PathLike) -> ImageBuffer:
        """
        Converts an image file and writes the result.

        The output is only created if every stage succeeded.

        :param infile: The source image
        :param outfile: The target image, its extension selects the format
        :return: The written buffer
        """
        self.stages = []
        self._enter(Stage.LOAD)
        image = load_image(infile)
        result = self.process(image)
        self._enter(Stage.ENCODE)
        save_image(result, outfile, source_format=image.source_format)
        logger.info("Converted %s to %s", os.fspath(infile), os.fspath(outfile))
        return result


def convert(infile: str | os.PathLike, outfile: str | os.PathLike, **params) -> ImageBuffer:
    """
    Converts a single image file to grayscale.

    :param infile: The source image
    :param outfile: The target image
    :param params: See :class:`~color2gray.options.ConversionOptions`
    :return: The written buffer
    """
    return ConversionPipeline(**params).run(infile, outfile)


__all__ = ["Stage", "ConversionPipeline", "convert"]
