"""
Pytest configuration for linesample.

Provides fixtures for:
- Settings isolation (env overrides, cache reset)
- In-memory record sinks
- Canned inputs (numbered lines, a CSV with a user_id column)
"""

from __future__ import annotations

import logging
from typing import Generator, List

import pytest

from linesample.config import Settings, get_settings

USER_IDS = ["u001", "u002", "u003", "u004", "u005"]
CSV_HEADER = "id,user_id,amount"


class ListSink:
    """Record sink that keeps everything in memory."""

    def __init__(self) -> None:
        self.records: List[str] = []

    def write(self, record: str) -> None:
        self.records.append(record)


@pytest.fixture(autouse=True)
def _reset_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Keep each test independent of the developer's environment and `.env`.
    """
    for name in ("LINESAMPLE_LOG_LEVEL", "LINESAMPLE_JSON_LOGS", "LINESAMPLE_DELIMITER", "LINESAMPLE_ENCODING"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None, None, None]:
    """
    Drop handlers installed by `configure_logging` (CLI runs included) after each test.
    """
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler and handler not in before:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture()
def sink() -> ListSink:
    return ListSink()


@pytest.fixture()
def numbered_lines() -> List[str]:
    """Lines "1".."10"."""
    return [str(n) for n in range(1, 11)]


@pytest.fixture()
def user_rows() -> List[str]:
    """
    200 CSV data rows, 40 for each of five user_id values, interleaved.
    """
    return [
        f"{i},{USER_IDS[i % len(USER_IDS)]},{(i * 37) % 1000}.00"
        for i in range(1, 201)
    ]


@pytest.fixture()
def user_csv(user_rows: List[str]) -> List[str]:
    """`user_rows` preceded by the header line."""
    return [CSV_HEADER, *user_rows]


@pytest.fixture()
def sink_factory() -> type[ListSink]:
    """The sink class itself, for tests that need more than one run."""
    return ListSink
