"""
Seeded random source for linesample.

The generator is MT19937 as exposed by `random.Random`, seeded with
`random.Random(seed)`. Only `Random.random()` is ever called: it is the one
output Python guarantees to reproduce across versions for the same seed, so
every draw below is derived from it.

- `next_unit()` is `Random.random()`, a 53-bit float in [0, 1).
- `next_uint(bound)` turns the same float back into its exact 53-bit integer
  word and maps it onto [0, bound) with Lemire's multiply-shift, rejecting the
  few words that would bias the result.

Usage:
    from linesample.infrastructure.random_source import RandomSource

    source = RandomSource(seed=42)
    source.next_uint(10)   # -> int in [0, 10)
    source.next_unit()     # -> float in [0, 1)
"""

from __future__ import annotations

import random
import secrets
from typing import Optional

from linesample.domain.errors import ConfigurationError

WORD_BITS = 53
_WORD_SPAN = 1 << WORD_BITS
_WORD_MASK = _WORD_SPAN - 1


class RandomSource:
    """
    Explicitly owned pseudo-random source, created once per run.

    Parameters
    ----------
    seed : int | None
        Non-negative seed. When None, a 64-bit seed is drawn from system entropy;
        it is still exposed as `seed` so the run can be replayed.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = secrets.randbits(64)
            self.explicit = False
        else:
            if isinstance(seed, bool) or not isinstance(seed, int):
                raise ConfigurationError(f"Seed must be an integer, got {seed!r}")
            if seed < 0:
                raise ConfigurationError(f"Seed must be non-negative, got {seed}")
            self.explicit = True
        self.seed: int = seed
        self.draws: int = 0
        self._rng = random.Random(seed)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed}, explicit={self.explicit}, draws={self.draws})"

    def next_unit(self) -> float:
        """Uniform float in [0, 1)."""
        self.draws += 1
        return self._rng.random()

    def _next_word(self) -> int:
        # random() is k / 2**53 for an integer k, so this product is exact.
        return int(self.next_unit() * _WORD_SPAN)

    def next_uint(self, bound: int) -> int:
        """
        Uniform integer in [0, bound).

        Raises
        ------
        ValueError
            If `bound` is not in [1, 2**53].
        """
        if bound <= 0 or bound > _WORD_SPAN:
            raise ValueError(f"bound must be in [1, 2**{WORD_BITS}], got {bound}")
        product = self._next_word() * bound
        low = product & _WORD_MASK
        if low < bound:
            threshold = (_WORD_SPAN - bound) % bound
            while low < threshold:
                product = self._next_word() * bound
                low = product & _WORD_MASK
        return product >> WORD_BITS


__all__ = ["RandomSource", "WORD_BITS"]
