"""
Synthetic data generator for linesample.

Writes a deterministic CSV of events (`id,user_id,event,amount`) with a fixed
number of distinct users, handy for trying out fixed-count, percentage and
hash-group sampling.
"""

from __future__ import annotations

import csv
import random
import sys
from pathlib import Path

import typer

app = typer.Typer(help="Generate a synthetic CSV for linesample experiments.")

HEADER = ["id", "user_id", "event", "amount"]
EVENTS = ["view", "click", "purchase", "impression"]


def _generate_rows_csv(
    csv_path: Path, rows: int, batch_size: int, seed: int, users: int = 100
) -> None:
    rng = random.Random(seed)
    user_ids = [f"u{n:0{max(3, len(str(users)))}d}" for n in range(1, users + 1)]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(HEADER)

        buffer: list[list[str]] = []
        for i in range(rows):
            buffer.append(
                [
                    str(i + 1),
                    rng.choice(user_ids),
                    rng.choice(EVENTS),
                    f"{rng.uniform(1, 10_000):.2f}",
                ]
            )
            if len(buffer) >= batch_size:
                writer.writerows(buffer)
                buffer.clear()

        if buffer:
            writer.writerows(buffer)


@app.command()
def main(
    output: Path = typer.Option(Path("data/events.csv"), "--output", "-o", help="CSV path to write."),
    rows: int = typer.Option(10_000, "--rows", "-r", min=0, help="Number of data rows."),
    users: int = typer.Option(100, "--users", "-u", min=1, help="Number of distinct user_id values."),
    batch_size: int = typer.Option(1_000, "--batch-size", min=1, help="Rows buffered per write."),
    seed: int = typer.Option(123, "--seed", "-s", min=0, help="Seed for the generator."),
) -> None:
    """
    Generate the CSV and report where it was written.
    """
    output.parent.mkdir(parents=True, exist_ok=True)
    _generate_rows_csv(output, rows=rows, batch_size=batch_size, seed=seed, users=users)
    typer.echo(f"Wrote {rows} rows ({users} users) to {output}", err=True)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
