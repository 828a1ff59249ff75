import pytest

from transed_engine.history import DebounceTimer


def test_poll_fires_once_after_interval(clock) -> None:
    timer = DebounceTimer(500, clock=clock)
    timer.arm()

    clock.advance(0.499)
    assert timer.poll() is False
    assert timer.pending is True

    clock.advance(0.002)
    assert timer.poll() is True
    assert timer.poll() is False
    assert timer.pending is False


def test_rearm_restarts_interval(clock) -> None:
    timer = DebounceTimer(500, clock=clock)
    timer.arm()
    clock.advance(0.4)
    timer.arm()

    clock.advance(0.4)
    assert timer.poll() is False
    assert timer.remaining() == pytest.approx(0.1)

    clock.advance(0.1)
    assert timer.poll() is True


def test_each_arm_bumps_generation(clock) -> None:
    timer = DebounceTimer(500, clock=clock)

    timer.arm()
    timer.arm()

    assert timer.generation == 2
    assert timer.deadline == pytest.approx(0.5)


def test_cancel_drops_pending_deadline(clock) -> None:
    timer = DebounceTimer(500, clock=clock)
    timer.arm()

    timer.cancel()
    clock.advance(1.0)

    assert timer.poll() is False
    assert timer.remaining() is None


def test_poll_accepts_explicit_time(clock) -> None:
    timer = DebounceTimer(200, clock=clock)
    timer.arm()

    assert timer.poll(now=0.1) is False
    assert timer.poll(now=0.2) is True


def test_negative_interval_rejected() -> None:
    with pytest.raises(ValueError):
        DebounceTimer(-1)
