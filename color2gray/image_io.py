"""
Reading and writing image files.

Decoding and encoding is delegated to Pillow. Loaded images are normalized
to an :class:`~color2gray.buffer.ImageBuffer` with float samples, written
images are quantized to 8 bit again. Files are written to a temporary file
next to the target first and moved into place once encoding succeeded, so a
failed run never leaves a partial output behind.
"""

from __future__ import annotations

import io
import logging
import os
import stat
import tempfile

import filetype
import numpy as np
import PIL.Image

from .buffer import COLORSPACE_GRAY, COLORSPACE_SRGB, ImageBuffer
from .config import settings
from .errors import InputFileError, OutputError
from .filters.alpha import to_gray_alpha
from .pixel_format import PixelFormat

logger = logging.getLogger(__name__)

PIL_COLORSPACES = {
    "RGB": COLORSPACE_SRGB,
    "RGBA": COLORSPACE_SRGB,
    "RGBX": COLORSPACE_SRGB,
    "RGBa": COLORSPACE_SRGB,
    "P": COLORSPACE_SRGB,
    "PA": COLORSPACE_SRGB,
    "1": COLORSPACE_GRAY,
    "L": COLORSPACE_GRAY,
    "LA": COLORSPACE_GRAY,
    "La": COLORSPACE_GRAY,
    "I": COLORSPACE_GRAY,
    "I;16": COLORSPACE_GRAY,
    "I;16B": COLORSPACE_GRAY,
    "I;16L": COLORSPACE_GRAY,
    "F": COLORSPACE_GRAY,
    "CMYK": "CMYK",
    "YCbCr": "YCbCr",
    "LAB": "Lab",
    "HSV": "HSV",
}
"Colorspace tag per PIL mode"

ALPHA_FORMATS = {"PNG", "TIFF"}
"Formats written as gray + alpha"

RGBA_ONLY_FORMATS = {"WEBP"}
"Formats which support alpha only together with RGB"


def _read_bytes(path: str) -> bytes:
    if not os.path.exists(path):
        raise InputFileError(f"input file '{path}' does not exist")
    if not os.path.isfile(path):
        raise InputFileError(f"input file '{path}' is not a regular file")
    try:
        with open(path, "rb") as input_file:
            data = input_file.read()
    except OSError as error:
        raise InputFileError(f"input file '{path}' is not readable: {error.strerror}")
    if len(data) == 0:
        raise InputFileError(f"input file '{path}' has zero size")
    return data


def _normalize_mode(handle: PIL.Image.Image) -> PIL.Image.Image:
    """Converts a PIL image into one of the modes of :class:`PixelFormat`."""
    mode = handle.mode
    if mode == "P":
        if "transparency" in handle.info:
            return handle.convert("RGBA")
        return handle.convert("RGB")
    if mode in ("PA", "RGBa"):
        return handle.convert("RGBA")
    if mode == "La":
        return handle.convert("LA")
    if mode == "1":
        return handle.convert("L")
    if mode in ("RGB", "RGBA", "L", "LA"):
        return handle
    if mode.startswith("I") or mode == "F":
        return handle
    # CMYK, YCbCr, LAB, HSV: keep pixel access possible, the colorspace tag
    # still reports the original space
    return handle.convert("RGB")


def _to_float(handle: PIL.Image.Image) -> np.ndarray:
    """Returns the samples of a normalized PIL image scaled to 0.0-1.0."""
    data = np.array(handle)
    if handle.mode.startswith("I"):
        return np.clip(data.astype(np.float32) / 65535.0, 0.0, 1.0)
    if handle.mode == "F":
        return np.clip(data.astype(np.float32), 0.0, 1.0)
    return data.astype(np.float32) / 255.0


def _pixel_format(handle: PIL.Image.Image) -> PixelFormat:
    if handle.mode.startswith("I") or handle.mode == "F":
        return PixelFormat.GRAY
    return PixelFormat.from_pil(handle.mode)


def decode(data: bytes, name: str = "<bytes>") -> ImageBuffer:
    """
    Decodes an image file's content.

    Only the first frame of multi-frame images is used.

    :param data: The file content
    :param name: Name used in error messages
    :return: The decoded buffer
    :raises InputFileError: If the data is not a decodable image
    """
    kind = filetype.guess(data)
    if kind is not None and not kind.mime.startswith("image/"):
        raise InputFileError(f"input file '{name}' is not an image ({kind.mime})")
    try:
        handle = PIL.Image.open(io.BytesIO(data))
        handle.load()
    except (
        PIL.UnidentifiedImageError,
        PIL.Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as error:
        raise InputFileError(f"input file '{name}' could not be decoded: {error}")
    if handle.width == 0 or handle.height == 0:
        raise InputFileError(f"input file '{name}' has no pixels")

    colorspace = PIL_COLORSPACES.get(handle.mode, handle.mode)
    source_format = handle.format
    frames = getattr(handle, "n_frames", 1)
    if frames > 1:
        logger.warning("'%s' has %d frames, only the first one is converted", name, frames)
    normalized = _normalize_mode(handle)
    pixels = _to_float(normalized)
    buffer = ImageBuffer(
        pixels,
        pixel_format=_pixel_format(normalized),
        colorspace=colorspace,
        source_format=source_format,
    )
    buffer.metadata["pil_mode"] = handle.mode
    buffer.metadata["frames"] = frames
    return buffer


def load_image(path: str | os.PathLike) -> ImageBuffer:
    """
    Loads an image file.

    :param path: The file path
    :return: The decoded buffer, tagged with colorspace and source format
    :raises InputFileError: If the file is missing, unreadable, empty or
        not an image
    """
    path = os.fspath(path)
    buffer = decode(_read_bytes(path), name=path)
    logger.debug(
        "Loaded %s: %dx%d %s, colorspace %s, format %s",
        path, buffer.width, buffer.height, buffer.pixel_format.value,
        buffer.colorspace, buffer.source_format,
    )
    return buffer


def output_format(path: str, fallback: str | None = None) -> str:
    """
    Determines the PIL format name for an output path.

    :param path: The target path, its extension selects the format
    :param fallback: Format used if the extension is unknown, usually the
        format of the input file
    :return: The PIL format name, e.g. "PNG"
    :raises OutputError: If no format can be determined
    """
    extension = os.path.splitext(path)[1].lower()
    registered = PIL.Image.registered_extensions()
    if extension in registered:
        return registered[extension]
    if fallback:
        return fallback
    raise OutputError(f"cannot determine an image format for '{path}'")


def _drop_alpha(image: ImageBuffer) -> ImageBuffer:
    """Keeps the gray band of an achromatic RGBA or GRAYA buffer."""
    return ImageBuffer(image.pixels[:, :, 0], source_format=image.source_format)


def to_pil(image: ImageBuffer, format: str) -> PIL.Image.Image:
    """
    Converts a buffer to a PIL image suitable for the given format.

    Achromatic RGBA buffers are stored as gray + alpha where the format
    supports it. Otherwise the alpha band is dropped and the gray values
    are stored as they are.

    :param image: The buffer
    :param format: The PIL format name
    :return: The PIL image
    """
    if image.pixel_format == PixelFormat.RGBA:
        if format in ALPHA_FORMATS:
            image = to_gray_alpha(image)
        elif format not in RGBA_ONLY_FORMATS:
            image = _drop_alpha(image)
    elif image.pixel_format == PixelFormat.GRAYA and format not in ALPHA_FORMATS:
        image = _drop_alpha(image)
    data = image.to_uint8()
    if data.shape[2] == 1:
        data = data[:, :, 0]
    handle = PIL.Image.fromarray(data)
    mode = image.pixel_format.to_pil()
    if handle.mode != mode:
        handle = handle.convert(mode)
    return handle


def _target_mode(path: str) -> int:
    """
    Permission bits for the output file: those of the file being replaced,
    otherwise the default for new files under the current umask.
    """
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save_image(
    image: ImageBuffer,
    path: str | os.PathLike,
    source_format: str | None = None,
    quality: int | None = None,
) -> str:
    """
    Encodes and writes an image atomically.

    :param image: The buffer to store
    :param path: The target path
    :param source_format: Format used if the extension of ``path`` is unknown
    :param quality: JPEG/WebP quality, see :class:`~color2gray.config.Settings`
    :return: The PIL format name used
    :raises OutputError: If encoding or writing failed
    """
    path = os.fspath(path)
    fmt = output_format(path, source_format or image.source_format)
    directory = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(directory):
        raise OutputError(f"output directory '{directory}' does not exist")
    parameters = {}
    if fmt in ("JPEG", "WEBP"):
        parameters["quality"] = settings.JPEG_QUALITY if quality is None else quality

    handle = to_pil(image, fmt)
    try:
        descriptor, temp_path = tempfile.mkstemp(
            prefix=".color2gray-", suffix=os.path.splitext(path)[1], dir=directory
        )
    except OSError as error:
        raise OutputError(f"cannot write to '{directory}': {error.strerror}")
    try:
        with os.fdopen(descriptor, "wb") as output_file:
            handle.save(output_file, format=fmt, **parameters)
        os.chmod(temp_path, _target_mode(path))
        os.replace(temp_path, path)
    except (OSError, ValueError, KeyError) as error:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise OutputError(f"could not write '{path}': {error}")
    logger.debug("Wrote %s as %s %s", path, fmt, handle.mode)
    return fmt


__all__ = [
    "PIL_COLORSPACES",
    "decode",
    "load_image",
    "output_format",
    "to_pil",
    "save_image",
]
