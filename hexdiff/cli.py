# ruff: noqa: T201
import argparse
import logging
import os
import re
import sys

from hexdiff.errors import HexdiffError, UsageError
from hexdiff.hexdiff import compare_files
from hexdiff.highlight import AnsiStyle, HighlightRenderer, PlainStyle, Style
from hexdiff.interrupt import InterruptFlag, sigint_handler


logger = logging.getLogger(__name__)

EX_SUCCESS = 0
EX_FAILURE = 1

PROG = "hexdiff"
USAGE = "%(prog)s [-ah] [-n len] file1 file2 [skip1 [skip2]]"
EXTENDED_HELP = """\
 -a      print all lines
 -h      show help
 -n len  maximum number of bytes to compare
 skip1   starting offset for file1
 skip2   starting offset for file2
"""


# Same forms strtoull(..., 0) accepts: 0x hex, 0-prefixed octal, decimal, optional '+'.
NUMBER_RE = re.compile(r"\+?(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")


def parse_number(value: str | None, name: str = "value") -> int:
    """
    Parses an unsigned decimal, 0x-prefixed hex or 0-prefixed octal number.
    None or an empty string means 0.
    """
    if value is None or not value.strip():
        return 0
    text = value.strip()
    if text.startswith('-'):
        raise UsageError(f"{name} must not be negative: '{value}'")
    match = NUMBER_RE.fullmatch(text)
    if not match:
        raise UsageError(f"invalid {name} '{value}'")
    digits = match.group(1)
    if digits[:2] in ('0x', '0X'):
        return int(digits[2:], 16)
    if digits.startswith('0'):
        return int(digits, 8)
    return int(digits)


class HelpAction(argparse.Action):
    """Prints usage and the extended help to stderr, then exits successfully."""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_usage(sys.stderr)
        sys.stderr.write(EXTENDED_HELP)
        parser.exit(EX_SUCCESS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=USAGE,
        description="Side-by-side hexadecimal comparison of two files.",
        add_help=False,
    )
    parser.add_argument("-a", dest="show_all", action="store_true", help="print all lines")
    parser.add_argument("-h", action=HelpAction, help="show help")
    parser.add_argument("-n", dest="length", metavar="len", help="maximum number of bytes to compare")
    parser.add_argument("file1", help="first file")
    parser.add_argument("file2", help="second file")
    parser.add_argument("skip1", nargs='?', default=None, help="starting offset for file1")
    parser.add_argument("skip2", nargs='?', default=None, help="starting offset for file2")
    return parser


def configure_logging() -> None:
    """Sets up stderr logging from HEXDIFF_LOG_LEVEL unless the application already did."""
    if logging.root.handlers:
        return
    level_name = os.environ.get("HEXDIFF_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s', stream=sys.stderr)


def select_style() -> Style:
    """PlainStyle when NO_COLOR is set to a non-empty value, AnsiStyle otherwise."""
    if os.environ.get("NO_COLOR"):
        return PlainStyle()
    return AnsiStyle()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging()

    try:
        skip1 = parse_number(args.skip1, "skip1")
        skip2 = parse_number(args.skip2, "skip2")
        max_len = parse_number(args.length, "length")
    except UsageError as e:
        parser.error(str(e))

    renderer = HighlightRenderer(style=select_style())

    try:
        with sigint_handler(InterruptFlag()) as flag:
            result = compare_files(args.file1, args.file2, skip1, skip2,
                                   max_len=max_len, show_all=args.show_all,
                                   renderer=renderer, interrupt=flag)
        sys.stdout.flush()
    except HexdiffError as e:
        print(f"{parser.prog}: {e}", file=sys.stderr)
        return EX_FAILURE
    except BrokenPipeError:
        # Reader went away (e.g. `| head`); silence the flush at interpreter exit.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return EX_SUCCESS

    logger.debug(f"Compared {result.bytes_compared} bytes in {result.chunks} chunk(s), "
                 f"{result.differing_chunks} differing")
    return EX_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
