"""
linesample - random sampling of lines from a text stream.

Three selection policies are provided:

- Exact-count reservoir sampling (Algorithm R)
- Independent percentage-based (Bernoulli) sampling
- Consistent hash-based group sampling keyed on a delimited column

Every run draws from one explicitly seeded random source, so a run is fully
reproducible from its seed.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from linesample.config import Settings, get_settings
from linesample.domain import (
    ColumnNotFoundError,
    ConfigurationError,
    FixedCount,
    HashPercentage,
    Percentage,
    SampleMode,
    SamplingError,
    build_mode,
)
from linesample.infrastructure.random_source import RandomSource
from linesample.orchestrator import build_sampler, run_sampling
from linesample.samplers import (
    AbstractSampler,
    BernoulliSampler,
    HashGroupSampler,
    HeaderPolicy,
    ReservoirSampler,
    SampleResult,
    Sampler,
)
from linesample.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Modes and errors
    "FixedCount",
    "Percentage",
    "HashPercentage",
    "SampleMode",
    "build_mode",
    "SamplingError",
    "ConfigurationError",
    "ColumnNotFoundError",
    # Engine
    "RandomSource",
    "build_sampler",
    "run_sampling",
    # Samplers
    "Sampler",
    "AbstractSampler",
    "SampleResult",
    "ReservoirSampler",
    "BernoulliSampler",
    "HashGroupSampler",
    "HeaderPolicy",
    # Logging
    "configure_logging",
    "get_logger",
]
