"""
Unitime - Elapsed-Time Breakdowns Against the Wall Clock

Holds an absolute instant and reports how long ago it was, as hours,
minutes and seconds, as totals, or as an [HH:]MM:SS string.

Version: 1.0.0
Python: 3.9+ compatibility
"""

__version__ = "1.0.0"
__python_requires__ = ">=3.9"

# Core imports for package users
from .core.timestamp import Timestamp, ElapsedTime
from .core.clock import SystemClock, ManualClock
from .core.config_manager import ConfigManager
from .core.errors import UnitimeError, ClockSkewError, InvalidInputError, ClockUnavailableError
from .utils.time_parser import TimeParser

__all__ = [
    "Timestamp",
    "ElapsedTime",
    "SystemClock",
    "ManualClock",
    "ConfigManager",
    "TimeParser",
    "UnitimeError",
    "ClockSkewError",
    "InvalidInputError",
    "ClockUnavailableError"
]
