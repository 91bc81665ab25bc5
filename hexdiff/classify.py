from collections.abc import Sequence


def classify(chunk1: bytes, chunk2: bytes) -> tuple[bool, ...]:
    """
    Per-position equality of two same-size chunks.

    Position i is True iff chunk1[i] == chunk2[i].
    """
    if len(chunk1) != len(chunk2):
        raise ValueError(f"Chunk size mismatch: {len(chunk1)} != {len(chunk2)}")
    return tuple(a == b for a, b in zip(chunk1, chunk2))


def all_equal(classification: Sequence[bool]) -> bool:
    return all(classification)


def differing_positions(classification: Sequence[bool]) -> list[int]:
    return [i for i, eq in enumerate(classification) if not eq]
