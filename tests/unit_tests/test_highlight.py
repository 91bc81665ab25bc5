import io

import pytest

from hexdiff.classify import classify
from hexdiff.highlight import (
    AnsiStyle,
    Color,
    HighlightRenderer,
    PlainStyle,
    compute_markers,
    printable,
)


RED = "\x1b[31m"
GREEN = "\x1b[32m"
RESET = "\x1b[0m"

M = Color.MATCH
D = Color.DIFFERENCE


@pytest.fixture
def out():
    return io.StringIO()

@pytest.fixture
def plain(out):
    return HighlightRenderer(out=out, style=PlainStyle())

@pytest.fixture
def ansi(out):
    return HighlightRenderer(out=out, style=AnsiStyle())

# --- Marker minimization ---

def test_markers_single_difference_in_middle():
    classification = [True, True, True, False, True, True, True, True]
    assert compute_markers(classification) == [M, None, None, D, M, None, None, None]

def test_markers_difference_at_first_position():
    # Last position matches, so the leading marker must stay.
    classification = [False] + [True] * 7
    assert compute_markers(classification) == [D, M, None, None, None, None, None, None]

def test_markers_difference_at_last_position():
    classification = [True] * 7 + [False]
    assert compute_markers(classification) == [M, None, None, None, None, None, None, D]

def test_markers_first_elided_when_both_ends_differ():
    classification = [False, True, True, True, True, True, True, False]
    assert compute_markers(classification) == [None, M, None, None, None, None, None, D]

def test_markers_all_different():
    assert compute_markers([False] * 8) == [None] * 8

def test_markers_alternating():
    classification = [True, False] * 4
    assert compute_markers(classification) == [M, D, M, D, M, D, M, D]

def test_markers_no_redundant_repeats():
    classification = [True, False, False, True, True, False, False, True]
    markers = compute_markers(classification)
    emitted = [m for m in markers if m is not None]
    assert all(a != b for a, b in zip(emitted, emitted[1:]))

# --- Printable filtering ---

def test_printable_range():
    data = bytes([0x00, 0x1F, 0x20, 0x41, 0x7E, 0x7F, 0x80, 0xFF])
    assert printable(data) == b".. A~..."

def test_printable_idempotent():
    data = bytes(range(256))
    once = printable(data)
    assert printable(once) == once

def test_printable_does_not_touch_input():
    data = bytearray(b"\x00\x01AB")
    printable(bytes(data))
    assert data == bytearray(b"\x00\x01AB")

# --- Line rendering ---

def test_header(plain, out):
    plain.write_header()
    side = "   offset      0 1 2 3 4 5 6 7 01234567"
    assert out.getvalue() == f"{side}    {side}\n"

def test_header_ansi_starts_with_reset(ansi, out):
    ansi.write_header()
    assert out.getvalue().startswith(RESET + "   offset")

def test_same_mode_plain(plain, out):
    chunk = b"Hi\x00\x01abc\xff"
    plain.render_same(chunk, chunk, 0x10, 0x210)
    assert out.getvalue() == (
        "0x0000000010  48690001616263ff Hi..abc.    "
        "0x0000000210  48690001616263ff Hi..abc.\n"
    )

def test_same_mode_ansi_has_only_leading_reset(ansi, out):
    chunk = b"ABCDEFGH"
    ansi.render_same(chunk, chunk, 0, 0)
    line = out.getvalue()
    assert line.startswith(RESET)
    assert line.count("\x1b[") == 1
    assert RED not in line and GREEN not in line

def test_diff_mode_ansi_exact(ansi, out):
    a = b"ABCDEFGH"
    b = b"ABCxEFGH"
    ansi.render_diff(a, b, classify(a, b), 8, 8)

    left = f"{RED}0x0000000008  {GREEN}414243{RED}44{GREEN}45464748 {GREEN}ABC{RED}D{GREEN}EFGH"
    right = f"{RED}0x0000000008  {GREEN}414243{RED}78{GREEN}45464748 {GREEN}ABC{RED}x{GREEN}EFGH"
    assert out.getvalue() == f"{left}    {right}\n{RESET}"

def test_diff_mode_relies_on_offset_color(ansi, out):
    a = b"\x00BCDEFG\x00"
    b = b"\x01BCDEFG\x01"
    ansi.render_diff(a, b, classify(a, b), 0, 0)

    line = out.getvalue()
    # First byte follows the red offset directly, with no marker of its own.
    assert line.startswith(f"{RED}0x0000000000  00{GREEN}42")
    assert f"{RED}00 .{GREEN}BCDEFG{RED}.    " in line

def test_diff_mode_plain_layout_matches_same_mode(plain, out):
    a = b"ABCDEFGH"
    b = b"ABCxEFGH"
    plain.render_diff(a, b, classify(a, b), 0, 0)
    assert out.getvalue() == (
        "0x0000000000  4142434445464748 ABCDEFGH    "
        "0x0000000000  4142437845464748 ABCxEFGH\n"
    )

def test_ellipsis(ansi, out):
    ansi.render_ellipsis()
    assert out.getvalue() == "...\n"

def test_default_stream_is_stdout(capsys):
    HighlightRenderer(style=PlainStyle()).render_ellipsis()
    assert capsys.readouterr().out == "...\n"
