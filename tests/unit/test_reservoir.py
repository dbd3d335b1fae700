from __future__ import annotations

from collections import Counter
from typing import List

import pytest

from linesample.infrastructure.random_source import RandomSource
from linesample.samplers.reservoir import ReservoirSampler

SCENARIO_A_OUTPUT = ["4", "5", "7"]
SCENARIO_A_SLOTS = ["5", "7", "4"]
SEED_TRIALS = 2000
INCLUSION_TOLERANCE = 0.05


def test_fixed_count_seed_42_pins_output(numbered_lines: List[str]) -> None:
    sampler = ReservoirSampler(3, RandomSource(seed=42))
    assert list(sampler.sample(numbered_lines)) == SCENARIO_A_OUTPUT
    # Slots are overwritten in place; emission is re-ordered by arrival
    assert sampler.reservoir == SCENARIO_A_SLOTS
    assert sampler.seen == len(numbered_lines)


def test_same_seed_is_deterministic(numbered_lines: List[str]) -> None:
    runs = [list(ReservoirSampler(4, RandomSource(seed=77)).sample(numbered_lines)) for _ in range(3)]
    assert runs[0] == runs[1] == runs[2]


def test_fewer_records_than_k_returns_all_in_order() -> None:
    source = RandomSource(seed=1)
    sampler = ReservoirSampler(5, source)
    assert list(sampler.sample(["a", "b", "c"])) == ["a", "b", "c"]
    assert source.draws == 0


def test_exactly_k_records_returns_all() -> None:
    sampler = ReservoirSampler(5, RandomSource(seed=1))
    assert list(sampler.sample(["1", "2", "3", "4", "5"])) == ["1", "2", "3", "4", "5"]


def test_k_zero_is_empty_and_draws_nothing(numbered_lines: List[str]) -> None:
    source = RandomSource(seed=3)
    sampler = ReservoirSampler(0, source)
    assert list(sampler.sample(numbered_lines)) == []
    assert source.draws == 0
    assert sampler.seen == len(numbered_lines)


def test_empty_input() -> None:
    assert list(ReservoirSampler(3, RandomSource(seed=3)).sample([])) == []


def test_negative_k_rejected() -> None:
    with pytest.raises(ValueError):
        ReservoirSampler(-1, RandomSource(seed=3))


@pytest.mark.parametrize("k", [0, 1, 3, 10, 25])
@pytest.mark.parametrize("n", [0, 1, 9, 10, 40])
def test_reservoir_size_invariant(k: int, n: int) -> None:
    records = [f"r{i}" for i in range(n)]
    sampler = ReservoirSampler(k, RandomSource(seed=k * 100 + n))
    for count, record in enumerate(records, start=1):
        assert sampler.offer(record) == ()
        assert len(sampler.reservoir) == min(count, k)

    output = list(sampler.drain())
    assert len(output) == min(n, k)
    assert set(output) <= set(records)
    assert len(set(output)) == len(output)
    # arrival order among survivors
    assert output == sorted(output, key=records.index)


def test_duplicates_never_exceed_input_multiplicity() -> None:
    records = ["x", "x", "y", "z", "z", "z", "w"]
    for seed in range(50):
        output = Counter(ReservoirSampler(4, RandomSource(seed=seed)).sample(records))
        for value, count in output.items():
            assert count <= records.count(value)


@pytest.mark.slow
def test_inclusion_frequency_converges_to_k_over_n(numbered_lines: List[str]) -> None:
    k = 3
    counts: Counter[str] = Counter()
    for seed in range(SEED_TRIALS):
        counts.update(ReservoirSampler(k, RandomSource(seed=seed)).sample(numbered_lines))

    expected = k / len(numbered_lines)
    for line in numbered_lines:
        assert abs(counts[line] / SEED_TRIALS - expected) < INCLUSION_TOLERANCE
