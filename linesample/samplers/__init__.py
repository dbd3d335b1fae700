"""
Samplers package for linesample.

Re-exports the abstract interfaces, the three concrete samplers and the header
policy so downstream code can import from `linesample.samplers` directly.
"""

from linesample.samplers.abstract import AbstractSampler, SampleResult, Sampler
from linesample.samplers.bernoulli import BernoulliSampler
from linesample.samplers.hash_group import HashGroupSampler, hash_unit, resolve_key_index
from linesample.samplers.header import HeaderPolicy
from linesample.samplers.reservoir import ReservoirSampler

__all__ = [
    # Abstracts
    "AbstractSampler",
    "Sampler",
    "SampleResult",
    # Concrete samplers
    "BernoulliSampler",
    "HashGroupSampler",
    "ReservoirSampler",
    # Header handling and hashing helpers
    "HeaderPolicy",
    "hash_unit",
    "resolve_key_index",
]
