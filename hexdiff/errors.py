class HexdiffError(Exception):
    """Base class for fatal hexdiff conditions."""


class UsageError(HexdiffError):
    """Malformed command-line value (offset, length)."""


def _describe(error: Exception) -> str:
    return getattr(error, "strerror", None) or str(error)


class OpenError(HexdiffError):
    """An input file could not be opened."""

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"open: {path}: {_describe(error)}")


class SeekError(HexdiffError):
    """The starting offset of an input file could not be honored."""

    def __init__(self, path: str, offset: int, error: Exception) -> None:
        self.path = path
        self.offset = offset
        self.error = error
        super().__init__(f"seek to 0x{offset:x} in {path}: {_describe(error)}")
