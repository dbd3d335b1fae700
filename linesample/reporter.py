from __future__ import annotations

from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.table import Table

from linesample.samplers.abstract import SampleResult


def format_bytes(num_bytes: Optional[int]) -> str:
    """Render a byte count as a short human-readable string."""
    if num_bytes is None:
        return "-"
    size = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def _summary_rows(result: SampleResult) -> List[Tuple[str, str]]:
    seed = result.get("seed")
    seed_label = "-" if seed is None else str(seed)
    if seed is not None and not result.get("seed_explicit", True):
        seed_label += " (generated)"

    rows = [
        ("Mode", str(result.get("mode", "-"))),
        ("Seed", seed_label),
        ("Header", "yes" if result.get("header") else "no"),
        ("Records read", f"{result.get('records_read', 0):,}"),
        ("Records emitted", f"{result.get('records_emitted', 0):,}"),
    ]
    if result.get("records_skipped"):
        rows.append(("Records skipped", f"{result['records_skipped']:,}"))
    if result.get("distinct_keys") is not None:
        rows.append(("Distinct keys", f"{result['distinct_keys']:,}"))
    if result.get("duration_seconds") is not None:
        rows.append(("Duration", f"{result['duration_seconds']:.3f} s"))
    if result.get("peak_rss_bytes") is not None:
        rows.append(("Peak RSS", format_bytes(result["peak_rss_bytes"])))
    return rows


def render_summary(result: SampleResult, console: Optional[Console] = None) -> None:
    """
    Print a run summary table. Defaults to standard error so it never mixes
    with sampled output.
    """
    console = console or Console(stderr=True)
    table = Table(title="linesample run", box=box.SIMPLE_HEAVY, show_header=False)
    table.add_column("metric", style="bold cyan")
    table.add_column("value", justify="right")
    for label, value in _summary_rows(result):
        table.add_row(label, value)
    console.print(table)


__all__ = ["format_bytes", "render_summary"]
