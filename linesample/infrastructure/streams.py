"""
Record source and sink helpers.

Records are lines without their trailing "\\n". A "\\r" before it is kept as
part of the record, so CRLF input is written back unchanged. Undecodable bytes
survive the round trip through the `surrogateescape` error handler.
"""

from __future__ import annotations

import contextlib
import io
import sys
from pathlib import Path
from typing import IO, Iterable, Iterator, Optional

ERRORS = "surrogateescape"


def iter_records(stream: Iterable[str]) -> Iterator[str]:
    """Yield records from a text stream opened with ``newline=""``."""
    for line in stream:
        if line.endswith("\n"):
            line = line[:-1]
        yield line


class LineSink:
    """
    Writes each record followed by "\\n".
    """

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def write(self, record: str) -> None:
        self._stream.write(record)
        self._stream.write("\n")


def _wrap_std(buffer: IO[bytes], encoding: str) -> io.TextIOWrapper:
    return io.TextIOWrapper(buffer, encoding=encoding, errors=ERRORS, newline="")


@contextlib.contextmanager
def open_input(path: Optional[Path], encoding: str = "utf-8") -> Iterator[IO[str]]:
    """Open `path` (or standard input when None) for record reading."""
    if path is None:
        stream = _wrap_std(sys.stdin.buffer, encoding)
        try:
            yield stream
        finally:
            stream.detach()
        return
    with open(path, "r", encoding=encoding, errors=ERRORS, newline="") as stream:
        yield stream


@contextlib.contextmanager
def open_output(path: Optional[Path], encoding: str = "utf-8") -> Iterator[IO[str]]:
    """Open `path` (or standard output when None) for record writing."""
    if path is None:
        stream = _wrap_std(sys.stdout.buffer, encoding)
        try:
            yield stream
            stream.flush()
        finally:
            stream.detach()
        return
    with open(path, "w", encoding=encoding, errors=ERRORS, newline="") as stream:
        yield stream


__all__ = ["iter_records", "LineSink", "open_input", "open_output"]
