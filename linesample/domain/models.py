"""
Domain models for linesample.

`SampleMode` is a closed union of three frozen pydantic models. Exactly one
mode is active per run; the orchestrator dispatches on the concrete type once,
so mutual exclusivity is a property of the type rather than of scattered flags.
"""
from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from linesample.domain.errors import ConfigurationError


class FixedCount(BaseModel):
    """
    Exact-count reservoir sampling: keep a uniform random k-subset.
    """

    kind: Literal["fixed_count"] = "fixed_count"
    k: int = Field(..., ge=0, description="Number of records to keep.")

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }


class Percentage(BaseModel):
    """
    Independent per-record inclusion with probability p/100.
    """

    kind: Literal["percentage"] = "percentage"
    p: float = Field(..., ge=0.0, le=100.0, allow_inf_nan=False, description="Percentage in [0, 100].")

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }


class HashPercentage(BaseModel):
    """
    Consistent group sampling: keep ~p% of the distinct values of `key_column`.
    """

    kind: Literal["hash_percentage"] = "hash_percentage"
    p: float = Field(..., ge=0.0, le=100.0, allow_inf_nan=False, description="Percentage in [0, 100].")
    key_column: str = Field(..., description="Header name or 1-based column position.")

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @field_validator("key_column")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("key column must not be empty")
        return value.strip()


SampleMode = Annotated[
    Union[FixedCount, Percentage, HashPercentage],
    Field(discriminator="kind"),
]

_MODE_ADAPTER: TypeAdapter[SampleMode] = TypeAdapter(SampleMode)


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()) if part)
    return f"{location}: {error['msg']}" if location else error["msg"]


def parse_mode(data: dict) -> SampleMode:
    """
    Validate a mode from a plain mapping such as `{"kind": "percentage", "p": 5}`.

    Raises
    ------
    ConfigurationError
        If the mapping does not describe a valid mode.
    """
    try:
        return _MODE_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid sampling mode: {_first_error(exc)}") from exc


def build_mode(
    sample_size: Optional[int] = None,
    percentage: Optional[float] = None,
    hash_column: Optional[str] = None,
) -> SampleMode:
    """
    Resolve command-line style inputs into exactly one `SampleMode`.

    Parameters
    ----------
    sample_size : int | None
        Reservoir size. Mutually exclusive with `percentage`.
    percentage : float | None
        Inclusion percentage in [0, 100].
    hash_column : str | None
        Key column for hash-group sampling; requires `percentage`.
    """
    if sample_size is not None and percentage is not None:
        raise ConfigurationError("Sample size and --percentage cannot be used together")
    if sample_size is None and percentage is None:
        raise ConfigurationError("Either a sample size or --percentage must be specified")
    if hash_column is not None and percentage is None:
        raise ConfigurationError("--hash requires --percentage")

    if sample_size is not None:
        return parse_mode({"kind": "fixed_count", "k": sample_size})
    if hash_column is not None:
        return parse_mode({"kind": "hash_percentage", "p": percentage, "key_column": hash_column})
    return parse_mode({"kind": "percentage", "p": percentage})


def describe_mode(mode: SampleMode) -> str:
    """Short human-readable label, e.g. ``fixed_count(k=10)``."""
    if isinstance(mode, FixedCount):
        return f"fixed_count(k={mode.k})"
    if isinstance(mode, HashPercentage):
        return f"hash_percentage(p={mode.p:g}, key={mode.key_column})"
    return f"percentage(p={mode.p:g})"


__all__ = [
    "FixedCount",
    "Percentage",
    "HashPercentage",
    "SampleMode",
    "parse_mode",
    "build_mode",
    "describe_mode",
]
