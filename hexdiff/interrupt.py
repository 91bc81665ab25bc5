import logging
import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager


logger = logging.getLogger(__name__)


class InterruptFlag:
    """Process-wide cancellation request, polled by the comparison loop."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def request(self) -> None:
        self._event.set()

    def is_requested(self) -> bool:
        return self._event.is_set()

    def clear(self) -> None:
        self._event.clear()


@contextmanager
def sigint_handler(flag: InterruptFlag) -> Iterator[InterruptFlag]:
    """
    Routes SIGINT to `flag` for the duration of the block.

    The handler only sets the flag. The previous handler is restored on exit.
    Outside the main thread signal handlers cannot be installed, so the flag is
    yielded without one.
    """
    if threading.current_thread() is not threading.main_thread():
        logger.debug("Not in main thread, SIGINT handler not installed")
        yield flag
        return

    def _handler(signum, frame):
        flag.request()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield flag
    finally:
        # None means the previous handler was not installed from Python.
        signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)
