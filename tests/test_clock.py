import pytest

from unitime import ClockUnavailableError, InvalidInputError, ManualClock, SystemClock
from unitime.core import clock as clock_module


def test_system_clock_reads_time_ns(monkeypatch):
    monkeypatch.setattr(clock_module.time, "time_ns", lambda: 42)
    assert SystemClock().now_ns() == 42


def test_system_clock_failure_is_chained(monkeypatch):
    def broken():
        raise OSError("clock_gettime failed")

    monkeypatch.setattr(clock_module.time, "time_ns", broken)

    with pytest.raises(ClockUnavailableError) as excinfo:
        SystemClock().now_ns()
    assert isinstance(excinfo.value.__cause__, OSError)


def test_manual_clock_advance_and_set():
    clock = ManualClock(now_ns=1_000)
    clock.advance(milliseconds=2)
    assert clock.now_ns() == 2_001_000

    clock.advance(seconds=1)
    assert clock.now_ns() == 1_002_001_000

    clock.set(5)
    assert clock.now_ns() == 5


def test_manual_clock_rejects_negative_readings():
    with pytest.raises(InvalidInputError):
        ManualClock(now_ns=-1)

    clock = ManualClock(now_ns=0)
    with pytest.raises(InvalidInputError):
        clock.advance(seconds=-1)
