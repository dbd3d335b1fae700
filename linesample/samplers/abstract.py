"""
Abstract sampler interfaces and result contracts for linesample.

Concrete samplers (reservoir, Bernoulli, hash-group) implement the
AbstractSampler ABC. They are push-based and independent of any stream I/O:
each record is offered once, in stream order, and the sampler answers with the
records that are ready to be written. Whatever is still buffered at stream end
is released by `drain()`.
"""

from __future__ import annotations

import abc
from typing import Iterable, Iterator, Optional, Protocol, Tuple, TypedDict, runtime_checkable


class SampleResult(TypedDict, total=False):
    """
    Run statistics returned by the orchestrator.

    Fields are optional so reporters tolerate partial results.
    """

    mode: str
    seed: int
    seed_explicit: bool
    header: bool
    records_read: int
    records_emitted: int
    records_skipped: int
    distinct_keys: Optional[int]
    duration_seconds: Optional[float]
    peak_rss_bytes: Optional[int]


@runtime_checkable
class Sampler(Protocol):
    """
    Common interface all samplers implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the selection policy.
    seen : int
        Number of records offered so far.
    """

    name: str
    description: str
    seen: int

    def offer(self, record: str) -> Tuple[str, ...]:
        """
        Process one record and return the records that can be emitted now.
        """
        ...

    def drain(self) -> Tuple[str, ...]:
        """
        Release any records still buffered once the stream is exhausted.
        """
        ...

    def sample(self, records: Iterable[str]) -> Iterator[str]:
        ...


class AbstractSampler(abc.ABC):
    """
    ABC helper for class-based samplers.

    Subclasses set `name` and `description` and implement `offer`; buffering
    samplers also override `drain`.
    """

    name: str
    description: str

    def __init__(self) -> None:
        self.seen = 0

    @abc.abstractmethod
    def offer(self, record: str) -> Tuple[str, ...]:  # pragma: no cover - interface only
        """Process one record."""
        raise NotImplementedError

    def drain(self) -> Tuple[str, ...]:
        return ()

    def sample(self, records: Iterable[str]) -> Iterator[str]:
        """
        Feed `records` one at a time and yield the selected ones.

        Draws for a record are made before the next record is read; output from
        streaming samplers is yielded as soon as it is decided.
        """
        for record in records:
            yield from self.offer(record)
        yield from self.drain()


__all__ = [
    "SampleResult",
    "Sampler",
    "AbstractSampler",
]
