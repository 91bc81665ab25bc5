import sys
from collections.abc import Sequence
from enum import Enum
from typing import TextIO

from hexdiff.byte_window import CHUNK_SIZE


class Color(Enum):
    """Abstract highlight colors. Concrete styling is resolved by a style object at output time."""
    RESET = "reset"
    MATCH = "match"
    DIFFERENCE = "difference"


Marker = Color | None


class Style:
    """Resolves abstract colors to the text written before a byte."""

    codes: dict[Color, str] = {color: "" for color in Color}

    def resolve(self, marker: Marker) -> str:
        if marker is None:
            return ""
        return self.codes[marker]


class AnsiStyle(Style):
    """ANSI terminal escape sequences."""

    codes = {
        Color.RESET: "\x1b[0m",
        Color.MATCH: "\x1b[32m",
        Color.DIFFERENCE: "\x1b[31m",
    }


class PlainStyle(Style):
    """Same layout as AnsiStyle, without any styling text."""


HEADER_SIDE = "   offset      " + " ".join(str(i) for i in range(CHUNK_SIZE)) + " " + \
              "".join(str(i) for i in range(CHUNK_SIZE))
SIDE_SEPARATOR = "    "
ELLIPSIS = "..."


def compute_markers(classification: Sequence[bool]) -> list[Marker]:
    """
    Computes the marker to emit before each byte of a diff-mode line.

    Each position gets Color.MATCH if its bytes are equal, Color.DIFFERENCE otherwise,
    and the marker is dropped (None) when it repeats the color already in effect after
    the previous position. The first marker is also dropped when both the first and the
    last positions are differences: the first byte of each column is preceded either by
    the offset (always printed as a difference) or by the last byte of the hex column,
    so the difference color is already in effect there.
    """
    colors = [Color.MATCH if eq else Color.DIFFERENCE for eq in classification]
    if not colors:
        return []

    markers: list[Marker] = list(colors)
    if colors[0] is Color.DIFFERENCE and colors[-1] is Color.DIFFERENCE:
        markers[0] = None

    last = colors[0]
    for i in range(1, len(colors)):
        if colors[i] is last:
            markers[i] = None
        else:
            last = colors[i]
    return markers


def printable(chunk: bytes) -> bytes:
    """Copy of `chunk` with every byte outside 0x20..0x7e replaced by '.'."""
    return bytes(b if 0x20 <= b <= 0x7E else 0x2E for b in chunk)


def hex_column(chunk: bytes) -> str:
    return chunk.hex()


def ascii_column(chunk: bytes) -> str:
    return printable(chunk).decode("ascii")


class HighlightRenderer:
    """
    Writes the side-by-side hex/ASCII view to a text stream.

    Args:
        out: Destination stream. Defaults to sys.stdout, looked up at write time.
        style: Style resolving markers to text. Defaults to AnsiStyle.
    """

    def __init__(self, out: TextIO | None = None, style: Style | None = None) -> None:
        self.out = out
        self.style = style or AnsiStyle()

    @property
    def stream(self) -> TextIO:
        return self.out if self.out is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.stream.write(text)

    def format_header(self) -> str:
        reset = self.style.resolve(Color.RESET)
        return f"{reset}{HEADER_SIDE}{SIDE_SEPARATOR}{HEADER_SIDE}\n"

    def format_same(self, chunk1: bytes, chunk2: bytes, offset1: int, offset2: int) -> str:
        reset = self.style.resolve(Color.RESET)
        left = f"0x{offset1:010x}  {hex_column(chunk1)} {ascii_column(chunk1)}"
        right = f"0x{offset2:010x}  {hex_column(chunk2)} {ascii_column(chunk2)}"
        return f"{reset}{left}{SIDE_SEPARATOR}{right}\n"

    def _format_diff_side(self, chunk: bytes, markers: Sequence[Marker], offset: int) -> str:
        styled = [self.style.resolve(m) for m in markers]
        hex_part = "".join(f"{s}{b:02x}" for s, b in zip(styled, chunk))
        ascii_part = "".join(f"{s}{c}" for s, c in zip(styled, ascii_column(chunk)))
        return f"{self.style.resolve(Color.DIFFERENCE)}0x{offset:010x}  {hex_part} {ascii_part}"

    def format_diff(self, chunk1: bytes, chunk2: bytes, classification: Sequence[bool],
                    offset1: int, offset2: int) -> str:
        # One marker list serves both sides and both columns; both share the classification.
        markers = compute_markers(classification)
        left = self._format_diff_side(chunk1, markers, offset1)
        right = self._format_diff_side(chunk2, markers, offset2)
        return f"{left}{SIDE_SEPARATOR}{right}\n{self.style.resolve(Color.RESET)}"

    def write_header(self) -> None:
        self._write(self.format_header())

    def render_same(self, chunk1: bytes, chunk2: bytes, offset1: int, offset2: int) -> None:
        self._write(self.format_same(chunk1, chunk2, offset1, offset2))

    def render_diff(self, chunk1: bytes, chunk2: bytes, classification: Sequence[bool],
                    offset1: int, offset2: int) -> None:
        self._write(self.format_diff(chunk1, chunk2, classification, offset1, offset2))

    def render_ellipsis(self) -> None:
        self._write(f"{ELLIPSIS}\n")
