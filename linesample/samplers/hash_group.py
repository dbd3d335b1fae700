"""
Hash-group sampler: consistent inclusion of every record sharing a key.

The key is one field of a delimited record. Its decision is computed once,
from a SHA-256 digest of ``f"{seed}:{key}"`` mapped onto [0, 1), and cached for
the rest of the run, so either all records with that key are emitted or none
are. The kept fraction is p% of distinct keys, not of records.

Records too short to contain the key column are skipped with a warning and
never reach the decision cache.
"""

from __future__ import annotations

import csv
import hashlib
from typing import Dict, List, Optional, Tuple

from linesample.domain.errors import ColumnNotFoundError, ConfigurationError
from linesample.samplers.abstract import AbstractSampler
from linesample.utils.logging import get_logger

log = get_logger(__name__)

_HASH_SPAN = float(1 << 64)


def split_fields(record: str, delimiter: str = ",") -> List[str]:
    """Split one record with CSV quoting rules and trim each field."""
    row = next(csv.reader([record], delimiter=delimiter), [])
    return [field.strip() for field in row]


def hash_unit(seed: int, key: str) -> float:
    """
    Map (seed, key) onto [0, 1).

    The first 8 bytes of SHA-256(f"{seed}:{key}") are read as a big-endian
    unsigned integer and divided by 2**64.
    """
    digest = hashlib.sha256(f"{seed}:{key}".encode("utf-8", "surrogateescape")).digest()
    return int.from_bytes(digest[:8], "big") / _HASH_SPAN


def resolve_key_index(key_column: str, header: Optional[str], delimiter: str = ",") -> int:
    """
    Resolve `key_column` to a 0-based field index.

    With a header row, header names win; a positive integer that matches no
    name is a 1-based position. Without a header only positions are accepted.

    Raises
    ------
    ColumnNotFoundError
        The header has no such column and `key_column` is not a position.
    ConfigurationError
        No header was given and `key_column` is not a positive integer.
    """
    column = key_column.strip()
    header_fields: List[str] = []
    if header is not None:
        header_fields = split_fields(header, delimiter)
        if column in header_fields:
            return header_fields.index(column)

    if column.isdecimal() and int(column) > 0:
        return int(column) - 1

    if header is not None:
        raise ColumnNotFoundError(column, header_fields)
    raise ConfigurationError(
        f"Column '{column}' must be a 1-based position when there is no header row"
    )


class HashGroupSampler(AbstractSampler):
    """
    Keep all or none of the records sharing each key value.

    Parameters
    ----------
    percentage : float
        Percentage of distinct keys to keep, in [0, 100].
    key_index : int
        0-based index of the key field.
    seed : int
        Seed mixed into every key hash.
    delimiter : str
        Single-character field delimiter.
    line_offset : int
        Number of raw lines consumed before the first offered record (1 when a
        header was taken), used only for diagnostics.
    """

    name: str = "hash_percentage"
    description: str = "Consistent hash-based group sampling on a key column."

    def __init__(
        self,
        percentage: float,
        key_index: int,
        seed: int,
        delimiter: str = ",",
        line_offset: int = 0,
    ) -> None:
        super().__init__()
        if not 0.0 <= percentage <= 100.0:
            raise ValueError(f"percentage must be between 0 and 100, got {percentage}")
        if key_index < 0:
            raise ValueError(f"key_index must be non-negative, got {key_index}")
        if len(delimiter) != 1:
            raise ConfigurationError(f"Delimiter must be a single character, got {delimiter!r}")
        self.probability = percentage / 100.0
        self.key_index = key_index
        self.seed = seed
        self.delimiter = delimiter
        self.line_offset = line_offset
        self.decisions: Dict[str, bool] = {}
        self.skipped = 0
        self.emitted = 0

    def key_for(self, record: str) -> Optional[str]:
        try:
            fields = split_fields(record, self.delimiter)
        except csv.Error:
            return None
        if self.key_index >= len(fields):
            return None
        return fields[self.key_index]

    def decide(self, key: str) -> bool:
        """Return the cached decision for `key`, computing it on first sight."""
        included = self.decisions.get(key)
        if included is None:
            included = hash_unit(self.seed, key) < self.probability
            self.decisions[key] = included
        return included

    def offer(self, record: str) -> Tuple[str, ...]:
        self.seen += 1
        key = self.key_for(record)
        if key is None:
            self.skipped += 1
            log.warning(
                f"Skipping line {self.seen + self.line_offset}: no field {self.key_index + 1}",
                extra={"line": self.seen + self.line_offset, "column": self.key_index + 1},
            )
            return ()
        if self.decide(key):
            self.emitted += 1
            return (record,)
        return ()


__all__ = ["HashGroupSampler", "hash_unit", "resolve_key_index", "split_fields"]
