"""Cooperative cancellation for a contest run."""

import threading
from typing import Callable, Optional


class QuitController:
    """
    Shared quit flag checked by every component at its suspension points.

    The flag is only cleared by ``reset`` at the start of a run.  Delays go
    through ``sleep`` so a quit request wakes a pending delay, and tests can
    pass a fake ``delay`` instead of waiting on the wall clock.
    """

    def __init__(self, delay: Optional[Callable[[float], None]] = None):
        self._event = threading.Event()
        self._delay = delay

    def request_quit(self) -> None:
        self._event.set()

    def should_quit(self) -> bool:
        return self._event.is_set()

    def reset(self) -> None:
        self._event.clear()

    def sleep(self, seconds: float) -> bool:
        """Wait for ``seconds`` and return whether a quit was requested."""
        if seconds > 0 and not self.should_quit():
            if self._delay is not None:
                self._delay(seconds)
            else:
                self._event.wait(seconds)
        return self.should_quit()
