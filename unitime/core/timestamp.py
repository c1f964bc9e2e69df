"""
Timestamp Value for Unitime

A Timestamp holds one absolute instant and answers elapsed-time questions
relative to the clock reading taken when each question is asked.

Python 3.9+ compatible.
"""

import functools
import logging
import math
import numbers
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from .clock import SYSTEM_CLOCK
from .config_manager import ConfigManager, default_config_manager
from .errors import ClockSkewError, InvalidInputError
from ..utils.helpers import format_elapsed, format_timestamp, to_single_precision
from ..utils.time_parser import EPOCH, TimeParser


NS_PER_MS = 1_000_000
NS_PER_SECOND = 1_000_000_000

SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


@dataclass(frozen=True)
class ElapsedTime:
    """
    Elapsed time split into whole hours, minutes and seconds.

    All three fields come from a single clock reading, so they always agree
    with each other and with the totals derived from them.
    """

    hours: int
    minutes: int
    seconds: int
    separator: str = ":"

    @classmethod
    def from_seconds(cls, total_seconds: int, separator: str = ":") -> "ElapsedTime":
        """
        Decompose a whole number of seconds.

        Args:
            total_seconds: Non-negative elapsed seconds
            separator: Field separator used by to_string()

        Returns:
            ElapsedTime breakdown
        """
        hours = total_seconds // SECONDS_PER_HOUR
        remainder = total_seconds - hours * SECONDS_PER_HOUR
        minutes = remainder // SECONDS_PER_MINUTE
        seconds = remainder - minutes * SECONDS_PER_MINUTE
        return cls(hours=hours, minutes=minutes, seconds=seconds, separator=separator)

    @property
    def total_seconds(self) -> float:
        return float(self.hours * SECONDS_PER_HOUR + self.minutes * SECONDS_PER_MINUTE + self.seconds)

    @property
    def total_minutes(self) -> float:
        return float(self.hours * 60 + self.minutes)

    def to_string(self) -> str:
        """Format as HH:MM:SS, or MM:SS when under an hour."""
        return format_elapsed(self.hours, self.minutes, self.seconds, self.separator)

    def to_dict(self) -> Dict[str, Any]:
        """Convert breakdown to dictionary format."""
        return {
            "hours": self.hours,
            "minutes": self.minutes,
            "seconds": self.seconds,
            "total_seconds": self.total_seconds,
            "total_minutes": self.total_minutes,
            "formatted": self.to_string()
        }

    def __str__(self) -> str:
        return self.to_string()


@functools.total_ordering
class Timestamp:
    """
    One absolute point in time, stored as nanoseconds since the Unix epoch.

    Instances are immutable. Timestamp() captures the current clock reading;
    from_epoch_millis() and with_epoch_millis() build new instances for an
    explicit instant.

    Elapsed-time queries read the clock once per call. When the stored
    instant lies ahead of the clock, the configured skew policy decides
    the outcome: "raise" raises ClockSkewError, "clamp" reports zero.
    """

    __slots__ = ("_instant_ns", "_clock", "_settings", "logger")

    def __init__(self, clock=None, config_manager: Optional[ConfigManager] = None):
        """
        Capture the current clock reading.

        Args:
            clock: Clock source (defaults to the system wall clock)
            config_manager: Configuration source for skew policy and precision

        Raises:
            ClockUnavailableError: If the clock cannot be read
            InvalidInputError: If the configuration holds unsupported values
        """
        clock = clock or SYSTEM_CLOCK
        settings = (config_manager or default_config_manager()).get_timestamp_config()
        self._init(clock.now_ns(), clock, settings)

    def _init(self, instant_ns: int, clock, settings: Dict[str, Any]) -> None:
        object.__setattr__(self, "_instant_ns", instant_ns)
        object.__setattr__(self, "_clock", clock)
        object.__setattr__(self, "_settings", settings)
        object.__setattr__(self, "logger", logging.getLogger(__name__))

    @classmethod
    def _build(cls, instant_ns: int, clock, settings: Dict[str, Any]) -> "Timestamp":
        instance = cls.__new__(cls)
        instance._init(instant_ns, clock, settings)
        return instance

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        # copy and pickle rebuild through _build, since __setattr__ always raises
        return (type(self)._build, (self._instant_ns, self._clock, self._settings))

    # ------------------------------------------------------------------
    # Construction from explicit values
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_epoch_millis(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidInputError(f"Epoch milliseconds must be a number, got {type(value).__name__}")
        if not math.isfinite(value):
            raise InvalidInputError(f"Epoch milliseconds must be finite, got {value}")
        if value < 0:
            raise InvalidInputError(f"Epoch milliseconds cannot be negative, got {value}")
        # Fractional milliseconds are dropped
        return int(value)

    @classmethod
    def from_epoch_millis(cls, value: float, clock=None,
                          config_manager: Optional[ConfigManager] = None) -> "Timestamp":
        """
        Create a Timestamp at epoch + value milliseconds.

        Args:
            value: Non-negative, finite millisecond count; fractions are truncated
            clock: Clock source for elapsed-time queries
            config_manager: Configuration source

        Returns:
            New Timestamp

        Raises:
            InvalidInputError: If value is negative, non-finite or not a number
        """
        millis = cls._validate_epoch_millis(value)
        settings = (config_manager or default_config_manager()).get_timestamp_config()
        return cls._build(millis * NS_PER_MS, clock or SYSTEM_CLOCK, settings)

    def with_epoch_millis(self, value: float) -> "Timestamp":
        """
        Return a copy of this Timestamp moved to epoch + value milliseconds.

        The clock and settings carry over; this instance is left untouched.

        Raises:
            InvalidInputError: If value is negative, non-finite or not a number
        """
        millis = self._validate_epoch_millis(value)
        return self._build(millis * NS_PER_MS, self._clock, self._settings)

    @classmethod
    def parse(cls, text: str, clock=None,
              config_manager: Optional[ConfigManager] = None) -> "Timestamp":
        """
        Create a Timestamp from an ISO-8601, relative ("5 minutes ago") or
        epoch-millisecond string.

        Raises:
            InvalidInputError: If the text cannot be parsed
        """
        clock = clock or SYSTEM_CLOCK
        millis = TimeParser(clock=clock).parse(text)
        return cls.from_epoch_millis(millis, clock=clock, config_manager=config_manager)

    # ------------------------------------------------------------------
    # Epoch accessors
    # ------------------------------------------------------------------

    @property
    def epoch_millis(self) -> float:
        """Stored instant as whole milliseconds since the epoch."""
        return float(self._instant_ns // NS_PER_MS)

    @property
    def epoch_seconds(self) -> float:
        """Stored instant as seconds since the epoch."""
        seconds = self._instant_ns / NS_PER_SECOND
        if self._settings["epoch_seconds_precision"] == "single":
            return to_single_precision(seconds)
        return seconds

    @property
    def clock(self):
        return self._clock

    @property
    def skew_policy(self) -> str:
        return self._settings["skew_policy"]

    def to_datetime(self) -> datetime:
        """Stored instant as an aware UTC datetime (microsecond resolution)."""
        return EPOCH + timedelta(microseconds=self._instant_ns // 1000)

    def isoformat(self) -> str:
        return self.to_datetime().isoformat()

    def format(self, format_str: Optional[str] = None) -> str:
        return format_timestamp(self.to_datetime(), format_str)

    # ------------------------------------------------------------------
    # Elapsed-time queries
    # ------------------------------------------------------------------

    def elapsed(self) -> ElapsedTime:
        """
        Break down the time between the stored instant and now.

        Returns:
            ElapsedTime taken from a single clock reading

        Raises:
            ClockSkewError: If the stored instant is ahead of now and the
                skew policy is "raise"
            ClockUnavailableError: If the clock cannot be read
        """
        delta_ns = self._clock.now_ns() - self._instant_ns

        if delta_ns < 0:
            if self._settings["skew_policy"] == "raise":
                raise ClockSkewError(-delta_ns)
            self.logger.warning(
                f"Stored instant is {-delta_ns / NS_PER_SECOND:.3f}s ahead of the clock; clamping elapsed time to zero"
            )
            delta_ns = 0

        return ElapsedTime.from_seconds(delta_ns // NS_PER_SECOND, self._settings["string_separator"])

    def elapsed_hours(self) -> int:
        return self.elapsed().hours

    def elapsed_minutes(self) -> int:
        """Minutes elapsed after removing whole hours, in [0, 59]."""
        return self.elapsed().minutes

    def elapsed_seconds(self) -> int:
        """Seconds elapsed after removing whole hours and minutes, in [0, 59]."""
        return self.elapsed().seconds

    def total_elapsed_seconds(self) -> float:
        return self.elapsed().total_seconds

    def total_elapsed_minutes(self) -> float:
        return self.elapsed().total_minutes

    def elapsed_string(self) -> str:
        """Elapsed time as HH:MM:SS, or MM:SS when under an hour."""
        return self.elapsed().to_string()

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "epoch_millis": self.epoch_millis,
            "epoch_seconds": self.epoch_seconds,
            "iso": self.isoformat()
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._instant_ns == other._instant_ns

    def __lt__(self, other: "Timestamp") -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._instant_ns < other._instant_ns

    def __hash__(self) -> int:
        return hash(self._instant_ns)

    def __repr__(self) -> str:
        return f"Timestamp(epoch_millis={int(self.epoch_millis)})"
