"""
Domain package for linesample.

Exports the sampling mode types and the error hierarchy. Keep this package
focused on data definitions and validation concerns.
"""

from linesample.domain.errors import ColumnNotFoundError, ConfigurationError, SamplingError
from linesample.domain.models import (
    FixedCount,
    HashPercentage,
    Percentage,
    SampleMode,
    build_mode,
    describe_mode,
    parse_mode,
)

__all__ = [
    "FixedCount",
    "Percentage",
    "HashPercentage",
    "SampleMode",
    "build_mode",
    "describe_mode",
    "parse_mode",
    "SamplingError",
    "ConfigurationError",
    "ColumnNotFoundError",
]
