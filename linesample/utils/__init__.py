"""
Utilities package for linesample.

Exports shared helpers for logging, profiling, and other cross-cutting concerns.
Keep this package lightweight and free of sampling logic.
"""

from linesample.utils.logging import configure_logging, get_logger
from linesample.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
