import logging
from contextlib import ExitStack
from dataclasses import dataclass
from typing import BinaryIO

from hexdiff.byte_window import CHUNK_SIZE, StreamState, open_at, read_window
from hexdiff.classify import classify, differing_positions
from hexdiff.highlight import HighlightRenderer
from hexdiff.interrupt import InterruptFlag
from hexdiff.run_collapse import Action, RunCollapser


logger = logging.getLogger(__name__)


@dataclass
class ComparisonResult:
    """Summary of one comparison run."""
    bytes_compared: int = 0
    chunks: int = 0
    differing_chunks: int = 0
    interrupted: bool = False
    reached_end: bool = False


def compare_streams(stream1: BinaryIO, stream2: BinaryIO, skip1: int = 0, skip2: int = 0, *,
                    max_len: int = 0, show_all: bool = False,
                    renderer: HighlightRenderer | None = None,
                    interrupt: InterruptFlag | None = None) -> ComparisonResult:
    """
    Compares two positioned byte streams chunk by chunk and renders the result.

    Args:
        stream1, stream2: Binary streams, already positioned at their starting offsets.
        skip1, skip2: Starting offsets, used only for the displayed offset columns.
        max_len: Stop once this many bytes have been consumed per stream. 0 means unlimited.
        show_all: Print every equal chunk instead of collapsing runs into an ellipsis.
        renderer: Output renderer. Defaults to an ANSI-colored renderer on stdout.
        interrupt: Polled once per iteration; when requested the loop stops cleanly.

    The loop ends after the iteration in which either stream comes up short. That
    last chunk pair is still rendered, with its missing tail zero-filled, unless
    neither stream produced a single byte for it. Every iteration counts a full
    chunk width towards max_len and the offsets, whether or not the streams had
    that many bytes left.
    """
    if renderer is None:
        renderer = HighlightRenderer()

    state1 = StreamState(skip=skip1)
    state2 = StreamState(skip=skip2)
    collapser = RunCollapser(renderer, show_all=show_all)
    result = ComparisonResult()

    renderer.write_header()

    while True:
        if state1.at_end or state2.at_end:
            logger.debug(f"End of input after {result.chunks} chunk(s)")
            result.reached_end = True
            break
        if max_len and state1.count >= max_len:
            logger.debug(f"Length limit of {max_len} bytes reached")
            break
        if interrupt is not None and interrupt.is_requested():
            logger.info(f"Interrupted after {result.chunks} chunk(s)")
            result.interrupted = True
            break

        chunk1, got1 = read_window(stream1, state1)
        chunk2, got2 = read_window(stream2, state2)
        if not got1 and not got2:
            # Both streams were exhausted at a chunk boundary: nothing left to show.
            logger.debug(f"End of input after {result.chunks} chunk(s)")
            result.reached_end = True
            break

        classification = classify(chunk1, chunk2)
        action = collapser.feed(chunk1, chunk2, classification, state1.offset, state2.offset)
        if action is Action.DIFF:
            result.differing_chunks += 1
            logger.debug(f"Chunk at 0x{state1.offset:x}/0x{state2.offset:x} differs at "
                         f"{differing_positions(classification)}")

        state1.count += CHUNK_SIZE
        state2.count += CHUNK_SIZE
        result.chunks += 1
        result.bytes_compared = state1.count

    return result


def compare_files(path1: str, path2: str, skip1: int = 0, skip2: int = 0, **kwargs) -> ComparisonResult:
    """
    Opens both files, seeks each to its starting offset and compares them.

    Keyword arguments are passed to compare_streams. Raises OpenError or SeekError
    before any output is written; both files are closed on every exit path.
    """
    with ExitStack() as stack:
        stream1 = stack.enter_context(open_at(path1, skip1))
        stream2 = stack.enter_context(open_at(path2, skip2))
        return compare_streams(stream1, stream2, skip1, skip2, **kwargs)
