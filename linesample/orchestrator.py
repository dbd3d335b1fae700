"""
Orchestrator for a single sampling run.

Resolves the sampling mode to exactly one sampler, threads the run's random
source through it, applies the header policy and writes the selected records
to the sink.

Usage:
    from linesample.domain import FixedCount
    from linesample.infrastructure.random_source import RandomSource
    from linesample.orchestrator import run_sampling

    result = run_sampling(FixedCount(k=10), lines, sink, header=True, source=RandomSource(42))
    print(result["records_emitted"])
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Protocol, Type

from linesample.domain.models import FixedCount, HashPercentage, Percentage, SampleMode, describe_mode
from linesample.infrastructure.random_source import RandomSource
from linesample.samplers.abstract import SampleResult, Sampler
from linesample.samplers.bernoulli import BernoulliSampler
from linesample.samplers.hash_group import HashGroupSampler, resolve_key_index
from linesample.samplers.header import HeaderPolicy
from linesample.samplers.reservoir import ReservoirSampler
from linesample.utils.logging import get_logger
from linesample.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)


class RecordSink(Protocol):
    def write(self, record: str) -> None:
        ...


SamplerFactory = Callable[[SampleMode, RandomSource, Optional[str], str], Sampler]


def _hash_sampler(
    mode: HashPercentage, source: RandomSource, header: Optional[str], delimiter: str
) -> HashGroupSampler:
    key_index = resolve_key_index(mode.key_column, header, delimiter)
    return HashGroupSampler(
        mode.p,
        key_index,
        seed=source.seed,
        delimiter=delimiter,
        line_offset=0 if header is None else 1,
    )


def _sampler_factories() -> Dict[Type[SampleMode], SamplerFactory]:
    """Registry of samplers keyed by mode type."""
    return {
        FixedCount: lambda mode, source, header, delimiter: ReservoirSampler(mode.k, source),
        Percentage: lambda mode, source, header, delimiter: BernoulliSampler(mode.p, source),
        HashPercentage: _hash_sampler,
    }


def build_sampler(
    mode: SampleMode,
    source: RandomSource,
    *,
    header: Optional[str] = None,
    delimiter: str = ",",
) -> Sampler:
    """
    Build the one sampler for `mode`.

    Parameters
    ----------
    mode : SampleMode
        Validated sampling mode.
    source : RandomSource
        The run's random source.
    header : str | None
        Header row, used by hash mode to resolve a column name.
    delimiter : str
        Field delimiter for hash mode.

    Raises
    ------
    ConfigurationError
        When hash mode cannot resolve its key column.
    """
    factories = _sampler_factories()
    factory = factories.get(type(mode))
    if factory is None:
        raise TypeError(f"Unsupported sampling mode: {mode!r}")
    return factory(mode, source, header, delimiter)


def _merge_result(result: SampleResult, stats: ProfileStats) -> SampleResult:
    merged = SampleResult(**result)
    merged["duration_seconds"] = round(stats.duration_seconds, 4)
    merged["peak_rss_bytes"] = stats.peak_rss_bytes
    return merged


def _drive(
    mode: SampleMode,
    records: Iterable[str],
    sink: RecordSink,
    header: bool,
    source: RandomSource,
    delimiter: str,
) -> SampleResult:
    stream = iter(records)
    policy = HeaderPolicy(enabled=header)
    header_row = policy.take(stream)
    result = SampleResult(
        mode=describe_mode(mode),
        seed=source.seed,
        seed_explicit=source.explicit,
        header=header_row is not None,
        records_read=0,
        records_emitted=0,
        records_skipped=0,
        distinct_keys=None,
    )
    if policy.enabled and header_row is None:
        log.info("Input is empty; nothing to sample")
        return result

    # Resolve everything before the first write so configuration errors leave no output.
    sampler = build_sampler(mode, source, header=header_row, delimiter=delimiter)

    emitted = 0
    for record in policy.emit(sampler, stream):
        sink.write(record)
        emitted += 1

    result["records_read"] = sampler.seen + (1 if header_row is not None else 0)
    result["records_emitted"] = emitted
    if isinstance(sampler, HashGroupSampler):
        result["records_skipped"] = sampler.skipped
        result["distinct_keys"] = len(sampler.decisions)
    return result


def run_sampling(
    mode: SampleMode,
    records: Iterable[str],
    sink: RecordSink,
    *,
    header: bool = False,
    source: Optional[RandomSource] = None,
    delimiter: str = ",",
    profile: bool = False,
) -> SampleResult:
    """
    Sample `records` under `mode` and write the selection to `sink`.

    Parameters
    ----------
    mode : SampleMode
        FixedCount, Percentage or HashPercentage.
    records : iterable[str]
        One-pass record source, lines without their trailing newline.
    sink : RecordSink
        Anything with `write(record)`.
    header : bool
        Keep the first record as a header, outside of sampling.
    source : RandomSource | None
        The run's random source; an entropy-seeded one is created when None.
    delimiter : str
        Field delimiter for hash mode.
    profile : bool
        Measure duration and peak RSS and include them in the result.

    Returns
    -------
    SampleResult
        Counts for the run plus the effective seed.
    """
    source = source if source is not None else RandomSource()
    label = describe_mode(mode)
    log.info(
        f"[RUN START] {label}",
        extra={"mode": label, "seed": source.seed, "seed_explicit": source.explicit, "header": header},
    )

    if profile:
        with profile_block(label) as stats:
            result = _drive(mode, records, sink, header, source, delimiter)
        result = _merge_result(result, stats)
    else:
        result = _drive(mode, records, sink, header, source, delimiter)

    log.info(
        f"[RUN COMPLETE] {label}",
        extra={
            "records_read": result["records_read"],
            "records_emitted": result["records_emitted"],
            "records_skipped": result["records_skipped"],
        },
    )
    return result


__all__ = [
    "build_sampler",
    "run_sampling",
]
