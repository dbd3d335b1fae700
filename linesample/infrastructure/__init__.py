"""
Infrastructure package for linesample.

Centralizes the run's random source and the stream collaborators (record
source, record sink). Keep this layer focused on I/O and resource management,
decoupled from sampler/orchestrator logic.
"""

from linesample.infrastructure.random_source import RandomSource
from linesample.infrastructure.streams import LineSink, iter_records, open_input, open_output

__all__ = [
    "RandomSource",
    "LineSink",
    "iter_records",
    "open_input",
    "open_output",
]
