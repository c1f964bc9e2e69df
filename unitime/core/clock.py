"""
Clock Sources for Unitime

A clock only has to answer one question: how many nanoseconds have passed
since the Unix epoch right now. SystemClock reads the wall clock,
ManualClock is set by hand and is what the tests drive.

Python 3.9+ compatible.
"""

import logging
import time

from .errors import ClockUnavailableError, InvalidInputError


class SystemClock:
    """Wall-clock source backed by time.time_ns()."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def now_ns(self) -> int:
        """
        Read the current wall-clock time.

        Returns:
            Nanoseconds since the Unix epoch

        Raises:
            ClockUnavailableError: If the operating system refuses the read
        """
        try:
            reading = time.time_ns()
        except OSError as e:
            raise ClockUnavailableError(f"System clock could not be read: {e}") from e

        self.logger.debug(f"System clock reading: {reading}ns")
        return reading

    def __repr__(self) -> str:
        return "SystemClock()"


class ManualClock:
    """
    Clock whose reading only changes when told to.

    Useful for deterministic elapsed-time checks:

        clock = ManualClock(now_ns=10_000_000_000)
        ts = Timestamp(clock=clock)
        clock.advance(seconds=3725)
        ts.elapsed_string()  # "01:02:05"
    """

    def __init__(self, now_ns: int = 0):
        if now_ns < 0:
            raise InvalidInputError(f"Clock reading cannot be negative: {now_ns}")
        self._now_ns = int(now_ns)

    def now_ns(self) -> int:
        return self._now_ns

    def set(self, now_ns: int) -> None:
        """Jump the clock to an absolute reading in nanoseconds."""
        if now_ns < 0:
            raise InvalidInputError(f"Clock reading cannot be negative: {now_ns}")
        self._now_ns = int(now_ns)

    def advance(self, seconds: float = 0, milliseconds: float = 0) -> None:
        """Move the clock by the given amount. Negative amounts move it backwards."""
        delta = int(seconds * 1_000_000_000) + int(milliseconds * 1_000_000)
        self.set(self._now_ns + delta)

    def __repr__(self) -> str:
        return f"ManualClock(now_ns={self._now_ns})"


# Shared default, stateless apart from its logger
SYSTEM_CLOCK = SystemClock()
