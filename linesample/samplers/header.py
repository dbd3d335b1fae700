"""
Header policy: set the first record aside and write it before any sample.
"""

from __future__ import annotations

from typing import Iterator, Optional

from linesample.samplers.abstract import Sampler


class HeaderPolicy:
    """
    Wraps any sampler. When enabled, the first raw record is taken off the
    stream before the sampler sees it, so it never counts toward k, n or key
    decisions, and is emitted first unconditionally.
    """

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled
        self.consumed = False
        self.header: Optional[str] = None

    def take(self, records: Iterator[str]) -> Optional[str]:
        """
        Pull the header off `records` (an iterator, advanced in place).

        Returns None when disabled or when the stream is empty.
        """
        if not self.enabled:
            return None
        if self.consumed:
            raise RuntimeError("header already consumed for this run")
        self.consumed = True
        self.header = next(records, None)
        return self.header

    def emit(self, sampler: Sampler, records: Iterator[str]) -> Iterator[str]:
        """Yield the header (if any) followed by the sampler's output."""
        if self.enabled and not self.consumed:
            self.take(records)
        if self.header is not None:
            yield self.header
        yield from sampler.sample(records)


__all__ = ["HeaderPolicy"]
