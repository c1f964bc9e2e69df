"""
Utility Helper Functions for Unitime

Formatting and logging helpers shared by the core modules.
Python 3.9+ compatible.
"""

import logging
import struct
from datetime import datetime
from typing import Optional


def pad_two_digits(value: int) -> str:
    """
    Render a clock component with at least two digits.

    Args:
        value: Hours, minutes or seconds

    Returns:
        "07" for 7, "42" for 42, "123" for 123
    """
    if 0 <= value <= 9:
        return f"0{value}"
    return str(value)


def format_elapsed(hours: int, minutes: int, seconds: int, separator: str = ":") -> str:
    """
    Format an elapsed-time breakdown as [HH:]MM:SS.

    The hour field is only shown when at least one whole hour has passed.

    Args:
        hours: Whole hours
        minutes: Minutes after the whole hours
        seconds: Seconds after the whole minutes
        separator: Text placed between fields

    Returns:
        Formatted elapsed-time string
    """
    fields = [pad_two_digits(minutes), pad_two_digits(seconds)]
    if hours > 0:
        fields.insert(0, pad_two_digits(hours))

    return separator.join(fields)


def format_timestamp(dt: datetime, format_str: Optional[str] = None) -> str:
    """
    Format datetime as string using specified format.

    Args:
        dt: Datetime to format
        format_str: Format string (defaults to "%Y-%m-%d %H:%M:%S")

    Returns:
        Formatted timestamp string
    """
    if format_str is None:
        format_str = "%Y-%m-%d %H:%M:%S"

    return dt.strftime(format_str)


def to_single_precision(value: float) -> float:
    """Round a float through IEEE-754 binary32 and back."""
    return struct.unpack('<f', struct.pack('<f', value))[0]


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Setup logging configuration for unitime.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path

    Returns:
        Configured logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger
