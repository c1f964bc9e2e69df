"""
Time Parser for Unitime

Turns human-entered time strings into epoch milliseconds.
Supports formats like "20 minutes ago", "3h ago", "now",
"2023-08-31T08:32:48Z" and plain epoch-millisecond numbers.

Python 3.9+ compatible.
"""

import re
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from dateutil import parser as dateutil_parser

from ..core.clock import SYSTEM_CLOCK
from ..core.errors import InvalidInputError


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_SECOND_MS = 1000
_MINUTE_MS = 60 * _SECOND_MS
_HOUR_MS = 60 * _MINUTE_MS
_DAY_MS = 24 * _HOUR_MS
_WEEK_MS = 7 * _DAY_MS


class TimeParser:
    """
    Time string parsing for unitime.

    Relative expressions are resolved against a reference instant, which
    defaults to the current system clock reading.
    """

    def __init__(self, clock=None):
        self.logger = logging.getLogger(__name__)
        self.clock = clock or SYSTEM_CLOCK

        self._relative_patterns: List[Tuple[str, Callable[[re.Match, int], int]]] = [
            (r'^(\d+)\s*seconds?\s+ago$', self._ago(_SECOND_MS)),
            (r'^(\d+)\s*minutes?\s+ago$', self._ago(_MINUTE_MS)),
            (r'^(\d+)\s*hours?\s+ago$', self._ago(_HOUR_MS)),
            (r'^(\d+)\s*days?\s+ago$', self._ago(_DAY_MS)),
            (r'^(\d+)\s*weeks?\s+ago$', self._ago(_WEEK_MS)),

            # Shorthand patterns
            (r'^(\d+)s\s*ago$', self._ago(_SECOND_MS)),
            (r'^(\d+)m\s*ago$', self._ago(_MINUTE_MS)),
            (r'^(\d+)h\s*ago$', self._ago(_HOUR_MS)),
            (r'^(\d+)d\s*ago$', self._ago(_DAY_MS)),

            (r'^now$', lambda match, reference_ms: reference_ms),
        ]

    @staticmethod
    def _ago(unit_ms: int) -> Callable[[re.Match, int], int]:
        def resolve(match: re.Match, reference_ms: int) -> int:
            return reference_ms - int(match.group(1)) * unit_ms
        return resolve

    def parse(self, time_input: str, reference_ms: Optional[int] = None) -> int:
        """
        Parse time input into epoch milliseconds.

        Args:
            time_input: Relative expression, absolute timestamp or epoch milliseconds
            reference_ms: Reference instant for relative parsing (defaults to now)

        Returns:
            Whole milliseconds since the Unix epoch

        Raises:
            InvalidInputError: If the input cannot be parsed or lies before the epoch
        """
        if not isinstance(time_input, str):
            raise InvalidInputError(f"Time input must be a string, got {type(time_input).__name__}")

        stripped = time_input.strip()
        time_str = stripped.lower()
        if not time_str:
            raise InvalidInputError("Empty time input")

        if reference_ms is None:
            reference_ms = self.clock.now_ns() // 1_000_000

        result = self._try_relative_parsing(time_str, reference_ms)
        if result is None:
            result = self._try_numeric_parsing(time_str)
        if result is None:
            result = self._parse_absolute(stripped)

        if result < 0:
            raise InvalidInputError(f"Time '{time_input}' lies before the Unix epoch")

        return result

    def _try_relative_parsing(self, time_str: str, reference_ms: int) -> Optional[int]:
        """Try to parse relative time expressions."""
        for pattern, resolve in self._relative_patterns:
            match = re.match(pattern, time_str)
            if match:
                return resolve(match, reference_ms)
        return None

    def _try_numeric_parsing(self, time_str: str) -> Optional[int]:
        """Treat a bare number as epoch milliseconds."""
        if not re.fullmatch(r'\d+(\.\d+)?', time_str):
            return None
        return int(float(time_str))

    def _parse_absolute(self, time_str: str) -> int:
        """Parse an absolute timestamp with dateutil. Naive values are taken as UTC."""
        try:
            parsed = dateutil_parser.parse(time_str)
        except (ValueError, OverflowError) as e:
            self.logger.debug(f"dateutil parsing failed for '{time_str}': {e}")
            raise InvalidInputError(f"Could not parse time '{time_str}': {e}") from e

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)

        delta = parsed - EPOCH
        return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def parse_time(time_input: str) -> int:
    """
    Convenience function to parse time input.

    Args:
        time_input: Time string

    Returns:
        Epoch milliseconds
    """
    parser = TimeParser()
    return parser.parse(time_input)
