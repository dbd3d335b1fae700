from __future__ import annotations

from typing import List

import pytest

from linesample import orchestrator
from linesample.domain.errors import ColumnNotFoundError, ConfigurationError
from linesample.domain.models import FixedCount, HashPercentage, Percentage
from linesample.infrastructure.random_source import RandomSource
from linesample.orchestrator import build_sampler, run_sampling
from linesample.samplers import BernoulliSampler, HashGroupSampler, ReservoirSampler

CSV_HEADER = "id,user_id,amount"


def test_build_sampler_dispatches_on_mode_type() -> None:
    source = RandomSource(seed=1)
    assert isinstance(build_sampler(FixedCount(k=3), source), ReservoirSampler)
    assert isinstance(build_sampler(Percentage(p=3), source), BernoulliSampler)
    hashed = build_sampler(HashPercentage(p=3, key_column="user_id"), source, header=CSV_HEADER)
    assert isinstance(hashed, HashGroupSampler)
    assert hashed.key_index == 1
    assert hashed.seed == 1


def test_build_sampler_rejects_unknown_modes() -> None:
    with pytest.raises(TypeError, match="Unsupported sampling mode"):
        build_sampler(object(), RandomSource(seed=1))  # type: ignore[arg-type]


def test_run_sampling_scenario_a(numbered_lines: List[str], sink) -> None:
    result = run_sampling(FixedCount(k=3), numbered_lines, sink, source=RandomSource(seed=42))

    assert sink.records == ["4", "5", "7"]
    assert result["records_read"] == 10
    assert result["records_emitted"] == 3
    assert result["records_skipped"] == 0
    assert result["seed"] == 42
    assert result["seed_explicit"] is True
    assert result["mode"] == "fixed_count(k=3)"
    assert result["distinct_keys"] is None
    assert "duration_seconds" not in result


def test_run_sampling_scenario_c(user_csv: List[str], sink) -> None:
    result = run_sampling(
        HashPercentage(p=40, key_column="user_id"),
        user_csv,
        sink,
        header=True,
        source=RandomSource(seed=7),
    )

    assert sink.records[0] == CSV_HEADER
    kept_users = {row.split(",")[1] for row in sink.records[1:]}
    assert kept_users == {"u002", "u003"}
    assert len(sink.records) == 1 + 80
    assert result["records_read"] == 201
    assert result["distinct_keys"] == 5
    assert result["header"] is True


def test_run_sampling_is_idempotent_under_a_seed(user_csv: List[str], sink_factory) -> None:
    modes = [FixedCount(k=17), Percentage(p=33), HashPercentage(p=60, key_column="2")]
    for mode in modes:
        first, second = sink_factory(), sink_factory()
        run_sampling(mode, user_csv, first, header=True, source=RandomSource(seed=5))
        run_sampling(mode, iter(user_csv), second, header=True, source=RandomSource(seed=5))
        assert first.records == second.records


def test_header_first_in_every_mode(user_csv: List[str], sink_factory) -> None:
    modes = [FixedCount(k=0), Percentage(p=0), HashPercentage(p=0, key_column="user_id")]
    for mode in modes:
        sink = sink_factory()
        result = run_sampling(mode, user_csv, sink, header=True, source=RandomSource(seed=3))
        assert sink.records == [CSV_HEADER]
        assert result["records_emitted"] == 1


def test_unknown_column_fails_before_any_output(user_csv: List[str], sink) -> None:
    with pytest.raises(ColumnNotFoundError):
        run_sampling(
            HashPercentage(p=50, key_column="account"),
            user_csv,
            sink,
            header=True,
            source=RandomSource(seed=1),
        )
    assert sink.records == []


def test_hash_without_header_needs_position(user_csv: List[str], sink) -> None:
    with pytest.raises(ConfigurationError, match="1-based position"):
        run_sampling(HashPercentage(p=50, key_column="user_id"), user_csv[1:], sink, source=RandomSource(seed=1))
    assert sink.records == []

    result = run_sampling(HashPercentage(p=100, key_column="2"), user_csv[1:], sink, source=RandomSource(seed=1))
    assert result["records_emitted"] == 200


def test_empty_input_with_header(sink) -> None:
    result = run_sampling(HashPercentage(p=50, key_column="user_id"), [], sink, header=True, source=RandomSource(seed=1))
    assert sink.records == []
    assert result["records_read"] == 0
    assert result["header"] is False


def test_skipped_rows_are_reported(sink) -> None:
    records = [CSV_HEADER, "1,u001,1.00", "broken", "2,u001,2.00"]
    result = run_sampling(
        HashPercentage(p=100, key_column="user_id"), records, sink, header=True, source=RandomSource(seed=1)
    )
    assert sink.records == [CSV_HEADER, "1,u001,1.00", "2,u001,2.00"]
    assert result["records_skipped"] == 1
    assert result["records_read"] == 4


def test_unseeded_run_reports_generated_seed(numbered_lines: List[str], sink_factory) -> None:
    first = sink_factory()
    result = run_sampling(FixedCount(k=4), numbered_lines, first)
    assert result["seed_explicit"] is False

    replay = sink_factory()
    run_sampling(FixedCount(k=4), numbered_lines, replay, source=RandomSource(seed=result["seed"]))
    assert replay.records == first.records


def test_profiled_run_includes_measurements(numbered_lines: List[str], sink) -> None:
    result = run_sampling(Percentage(p=50), numbered_lines, sink, source=RandomSource(seed=42), profile=True)
    assert sink.records == ["2", "3", "4", "8", "9", "10"]
    assert result["duration_seconds"] >= 0.0
    assert result["peak_rss_bytes"] > 0


def test_sampler_registry_can_be_replaced(monkeypatch: pytest.MonkeyPatch, numbered_lines: List[str], sink) -> None:
    built: list = []

    def fake_factories():
        def make(mode, source, header, delimiter):
            sampler = BernoulliSampler(100, source)
            built.append(sampler)
            return sampler

        return {FixedCount: make}

    monkeypatch.setattr(orchestrator, "_sampler_factories", fake_factories)
    run_sampling(FixedCount(k=1), numbered_lines, sink, source=RandomSource(seed=1))

    assert len(built) == 1
    assert sink.records == numbered_lines


def test_io_errors_propagate(numbered_lines: List[str]) -> None:
    class FailingSink:
        def write(self, record: str) -> None:
            raise OSError("disk full")

    with pytest.raises(OSError, match="disk full"):
        run_sampling(Percentage(p=100), numbered_lines, FailingSink(), source=RandomSource(seed=1))
