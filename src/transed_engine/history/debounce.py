"""Quiescence timer that coalesces bursts of edits into one capture."""

from __future__ import annotations

import time
from typing import Callable, Optional

Clock = Callable[[], float]


class DebounceTimer:
    """Single pending deadline, restarted by every ``arm`` call.

    The timer never fires on its own; the host polls it from its event loop.
    ``generation`` counts how many times the timer has been armed.
    """

    def __init__(self, interval_ms: int = 500, *, clock: Optional[Clock] = None) -> None:
        if interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")
        self.interval_ms = interval_ms
        self._clock: Clock = clock or time.monotonic
        self._deadline: Optional[float] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def generation(self) -> int:
        return self._generation

    def arm(self) -> None:
        self._generation += 1
        self._deadline = self._clock() + self.interval_ms / 1000.0

    def cancel(self) -> None:
        self._deadline = None

    def remaining(self, now: Optional[float] = None) -> Optional[float]:
        if self._deadline is None:
            return None
        current = self._clock() if now is None else now
        return max(0.0, self._deadline - current)

    def poll(self, now: Optional[float] = None) -> bool:
        """Return True once if the pending deadline has passed."""

        if self._deadline is None:
            return False
        current = self._clock() if now is None else now
        if current < self._deadline:
            return False
        self._deadline = None
        return True


__all__ = ["Clock", "DebounceTimer"]
