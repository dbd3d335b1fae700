"""
Reservoir sampler: Algorithm R over a stream of unknown length.

Holds at most k records, each tagged with its arrival index so the final
sample is emitted in stream order rather than slot order.
"""

from __future__ import annotations

from typing import List, Tuple

from linesample.infrastructure.random_source import RandomSource
from linesample.samplers.abstract import AbstractSampler


class ReservoirSampler(AbstractSampler):
    """
    Keep a uniform random k-subset of everything offered.

    The first k records fill the reservoir without any draw. The record at
    0-based index i >= k draws j = next_uint(i + 1) and replaces slot j when
    j < k, so every record ends up kept with probability k/n.
    """

    name: str = "fixed_count"
    description: str = "Exact-count reservoir sampling (Algorithm R)."

    def __init__(self, k: int, source: RandomSource) -> None:
        super().__init__()
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")
        self.k = k
        self._source = source
        self._slots: List[Tuple[int, str]] = []

    @property
    def reservoir(self) -> List[str]:
        """Current reservoir contents in slot order."""
        return [record for _, record in self._slots]

    def offer(self, record: str) -> Tuple[str, ...]:
        index = self.seen
        self.seen += 1
        if index < self.k:
            self._slots.append((index, record))
        elif self.k:
            j = self._source.next_uint(index + 1)
            if j < self.k:
                self._slots[j] = (index, record)
        return ()

    def drain(self) -> Tuple[str, ...]:
        ordered = sorted(self._slots, key=lambda slot: slot[0])
        return tuple(record for _, record in ordered)


__all__ = ["ReservoirSampler"]
