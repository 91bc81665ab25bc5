import logging
from dataclasses import dataclass
from typing import BinaryIO

from hexdiff.errors import OpenError, SeekError


logger = logging.getLogger(__name__)

# Width of one comparison window. The two-column hex+ASCII layout is built around it.
CHUNK_SIZE = 8


@dataclass
class StreamState:
    """
    Per-stream bookkeeping owned by the comparison driver.

    `skip` is the starting offset the stream was positioned at, `count` the number of
    bytes consumed so far (always a multiple of the chunk width, short reads included),
    and `at_end` becomes True once a read came back short.
    """
    skip: int = 0
    count: int = 0
    at_end: bool = False

    @property
    def offset(self) -> int:
        """Offset of the next chunk, relative to the start of the file."""
        return self.skip + self.count


def read_chunk(stream: BinaryIO, size: int = CHUNK_SIZE) -> tuple[bytes, int]:
    """
    Reads one fixed-size window from `stream`.

    Returns (chunk, got). The chunk always has exactly `size` bytes: when the
    stream ends before the window is filled, only the first `got` bytes are data
    and the rest is zero-filled. Streams that return partial reads (pipes, raw
    files) are read again until the window is full or a read returns nothing.
    """
    buf = bytearray()
    while len(buf) < size:
        data = stream.read(size - len(buf))
        if not data:
            break
        buf.extend(data)

    got = len(buf)
    if got < size:
        logger.debug(f"Short read: got {got} of {size} bytes, zero-filling")
        buf.extend(b"\0" * (size - got))
    return bytes(buf), got


def read_window(stream: BinaryIO, state: StreamState, size: int = CHUNK_SIZE) -> tuple[bytes, int]:
    """Reads the next chunk for `state`, latching its end-of-stream flag on a short read."""
    chunk, got = read_chunk(stream, size)
    if got < size:
        state.at_end = True
    return chunk, got


def open_at(path: str, skip: int = 0) -> BinaryIO:
    """
    Opens `path` for binary reading and positions it at `skip`. A zero skip does
    not seek, so pipes and FIFOs can be compared from their current position.

    Raises OpenError or SeekError; the handle is closed before a SeekError propagates.
    """
    try:
        stream = open(path, "rb")
    except OSError as e:
        raise OpenError(path, e) from e

    if not skip:
        return stream

    logger.debug(f"Opened '{path}', seeking to 0x{skip:x}")
    try:
        stream.seek(skip)
    except (OSError, OverflowError) as e:
        stream.close()
        raise SeekError(path, skip, e) from e
    return stream
