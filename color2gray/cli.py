"""
Command line interface.

Usage::

    color2gray [-r red] [-g green] [-b blue] [-f form] [-c colorspace]
               [-B bright] [-C contrast] infile outfile
    color2gray -h|-help
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import settings
from .errors import ArgumentCountError, Color2GrayError
from .pipeline import ConversionPipeline

logger = logging.getLogger(__name__)

PROG = "color2gray"

USAGE = """\
%(prog)s [-r red] [-g green] [-b blue] [-f form] [-c colorspace]
                  [-B bright] [-C contrast] infile outfile
       %(prog)s -h|-help"""

DESCRIPTION = """\
Converts a color image into grayscale using one of three mixing forms:

  add    weighted sum of red, green and blue
  rms    square root of the weighted sum of squared red, green and blue
         (no division by the channel count)
  desat  achromatic component of the HSL, HSB or HCL colorspace,
         the channel weights are ignored

Weights are percentages and do not need to sum up to 100; results are
clamped to the valid range. Partial transparency of the input is preserved.
"""

EPILOG = """\
Examples:
  %(prog)s photo.png photo_gray.png
  %(prog)s -r 50 -g 30 -b 20 photo.jpg photo_gray.jpg
  %(prog)s -f rms photo.png photo_gray.png
  %(prog)s -f desat -c hsb -B 10 -C 20 photo.png photo_gray.png
"""


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser which reports errors as exceptions instead of exiting."""

    def error(self, message):
        raise ArgumentCountError(message)


def build_parser() -> ArgumentParser:
    """
    Creates the argument parser. Defaults are taken from
    :data:`~color2gray.config.settings`.
    """
    parser = ArgumentParser(
        prog=PROG,
        usage=USAGE,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument(
        '-h', '-help', '--help',
        action='help',
        help='Show this help message and exit'
    )
    # numeric values are kept as strings, ConversionOptions validates them
    parser.add_argument(
        '-r', dest='red', metavar='red', default=str(settings.RED),
        help=f'Red weight in percent (default: {settings.RED:g})'
    )
    parser.add_argument(
        '-g', dest='green', metavar='green', default=str(settings.GREEN),
        help=f'Green weight in percent (default: {settings.GREEN:g})'
    )
    parser.add_argument(
        '-b', dest='blue', metavar='blue', default=str(settings.BLUE),
        help=f'Blue weight in percent (default: {settings.BLUE:g})'
    )
    parser.add_argument(
        '-f', dest='form', metavar='form', default=settings.FORM,
        help=f'Mixing form: add, rms or desat (default: {settings.FORM})'
    )
    parser.add_argument(
        '-c', dest='colorspace', metavar='colorspace', default=settings.COLORSPACE,
        help=f'Desaturation colorspace: hsl, hsb or hcl (default: {settings.COLORSPACE})'
    )
    parser.add_argument(
        '-B', dest='brightness', metavar='bright', default='0',
        help='Brightness change, -100 to 100 (default: 0)'
    )
    parser.add_argument(
        '-C', dest='contrast', metavar='contrast', default='0',
        help='Contrast change, -100 to 100 (default: 0)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log every processing stage'
    )
    parser.add_argument('files', nargs='*', help=argparse.SUPPRESS)
    return parser


NUMERIC_OPTIONS = ("-r", "-g", "-b", "-B", "-C")
"Options taking a number, possibly negative"


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def attach_numeric_values(argv: list[str]) -> list[str]:
    """
    Attaches negative numbers to their option, e.g. ``-B -1e1`` becomes
    ``-B-1e1``.

    argparse only recognizes plain negative numbers such as ``-10`` as
    values and would treat ``-1e1`` as an unknown option.
    """
    result = []
    index = 0
    while index < len(argv):
        token = argv[index]
        if token == "--":
            result.extend(argv[index:])
            break
        following = argv[index + 1] if index + 1 < len(argv) else None
        if (
            token in NUMERIC_OPTIONS
            and following is not None
            and following.startswith("-")
            and _is_number(following)
        ):
            result.append(token + following)
            index += 2
            continue
        result.append(token)
        index += 1
    return result


def setup_logging(verbose: bool = False) -> None:
    """Configures logging on stderr."""
    level = logging.DEBUG if verbose else settings.LOG_LEVEL.upper()
    logging.basicConfig(
        level=level,
        format='%(name)s: %(levelname)s: %(message)s',
        stream=sys.stderr,
    )


def run(argv: list[str] | None = None) -> None:
    """
    Parses the arguments and converts the image.

    :param argv: The arguments without program name, sys.argv[1:] by default
    :raises Color2GrayError: On any validation or processing error
    """
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(attach_numeric_values(list(argv)))
    setup_logging(args.verbose)
    if len(args.files) != 2:
        raise ArgumentCountError(
            f"expected infile and outfile, got {len(args.files)} file argument(s)"
        )
    # options are validated before the input is touched
    pipeline = ConversionPipeline(
        red=args.red,
        green=args.green,
        blue=args.blue,
        form=args.form,
        colorspace=args.colorspace,
        brightness=args.brightness,
        contrast=args.contrast,
    )
    infile, outfile = args.files
    pipeline.run(infile, outfile)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point, returns the process exit status."""
    try:
        run(argv)
    except SystemExit as exit_request:
        # -h/-help
        return exit_request.code or 0
    except Color2GrayError as error:
        logger.debug("Conversion failed", exc_info=True)
        print(f"{PROG}: error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
