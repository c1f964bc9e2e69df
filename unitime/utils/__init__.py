"""
Utility Functions and Helpers

This package contains time parsing, formatting and logging helpers.
"""

from .time_parser import TimeParser, parse_time
from .helpers import format_elapsed, format_timestamp, pad_two_digits, setup_logging

__all__ = [
    "TimeParser",
    "parse_time",
    "format_elapsed",
    "format_timestamp",
    "pad_two_digits",
    "setup_logging"
]
