"""
Bernoulli sampler: independent per-record inclusion at a fixed probability.
"""

from __future__ import annotations

from typing import Tuple

from linesample.infrastructure.random_source import RandomSource
from linesample.samplers.abstract import AbstractSampler


class BernoulliSampler(AbstractSampler):
    """
    Include each record iff next_unit() < p/100.

    Exactly one draw is made per record, at p = 0 and p = 100 as well, so the
    random source advances the same way whatever the percentage.
    """

    name: str = "percentage"
    description: str = "Independent percentage-based sampling."

    def __init__(self, percentage: float, source: RandomSource) -> None:
        super().__init__()
        if not 0.0 <= percentage <= 100.0:
            raise ValueError(f"percentage must be between 0 and 100, got {percentage}")
        self.probability = percentage / 100.0
        self._source = source
        self.emitted = 0

    def offer(self, record: str) -> Tuple[str, ...]:
        self.seen += 1
        if self._source.next_unit() < self.probability:
            self.emitted += 1
            return (record,)
        return ()


__all__ = ["BernoulliSampler"]
