"""
Error Types for Unitime

Every failure raised by the package derives from UnitimeError so callers
can catch the whole family in one place.

Python 3.9+ compatible.
"""

from typing import Optional


class UnitimeError(Exception):
    """Base class for all unitime errors."""


class ClockSkewError(UnitimeError):
    """
    Raised when the stored instant lies after the current clock reading.

    Attributes:
        skew_ns: How far ahead of now the stored instant is, in nanoseconds
    """

    def __init__(self, skew_ns: int, message: Optional[str] = None):
        self.skew_ns = skew_ns
        if message is None:
            message = f"Stored instant is {skew_ns / 1_000_000_000:.3f}s ahead of the current clock"
        super().__init__(message)


class InvalidInputError(UnitimeError, ValueError):
    """Raised for negative, non-finite or unparseable time input."""


class ClockUnavailableError(UnitimeError):
    """Raised when the system clock cannot be read."""
