"""
Core unitime components.

This package contains the Timestamp value, clock sources, configuration
management and the error taxonomy.
"""

from .errors import UnitimeError, ClockSkewError, InvalidInputError, ClockUnavailableError
from .clock import SystemClock, ManualClock
from .config_manager import ConfigManager
from .timestamp import Timestamp, ElapsedTime

__all__ = [
    "UnitimeError",
    "ClockSkewError",
    "InvalidInputError",
    "ClockUnavailableError",
    "SystemClock",
    "ManualClock",
    "ConfigManager",
    "Timestamp",
    "ElapsedTime"
]
