"""
Exception hierarchy for linesample.

Configuration problems are detected before any record is processed and carry a
message suitable for showing to the user as-is. I/O errors are never wrapped;
they propagate from the stream collaborators unchanged.
"""

from __future__ import annotations


class SamplingError(Exception):
    """Base class for all linesample errors."""


class ConfigurationError(SamplingError, ValueError):
    """Invalid sampling configuration (mode, seed, key column)."""


class ColumnNotFoundError(ConfigurationError):
    """The requested key column is not present in the header row."""

    def __init__(self, column: str, header_fields: list[str] | None = None) -> None:
        self.column = column
        self.header_fields = header_fields or []
        message = f"Column '{column}' not found in header"
        if self.header_fields:
            message += f" (available: {', '.join(self.header_fields)})"
        super().__init__(message)


__all__ = ["SamplingError", "ConfigurationError", "ColumnNotFoundError"]
