from __future__ import annotations

import os

# Keep test output readable; telemetry is configured at import time.
os.environ.setdefault("TRANSED_DISABLE_CONSOLE", "1")

import pytest  # noqa: E402


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
