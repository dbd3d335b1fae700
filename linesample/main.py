from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import typer

from linesample import __version__
from linesample.config import get_settings
from linesample.domain.errors import ConfigurationError, SamplingError
from linesample.domain.models import build_mode
from linesample.infrastructure.random_source import RandomSource
from linesample.infrastructure.streams import LineSink, iter_records, open_input, open_output
from linesample.orchestrator import run_sampling
from linesample.reporter import render_summary
from linesample.utils.logging import configure_logging, get_logger

log = get_logger(__name__)

EXAMPLES = """Examples:

  cat data.txt | linesample 10              # 10 lines, reservoir sampling

  cat data.txt | linesample -p 5            # roughly 5% of lines

  cat data.csv | linesample 10 --csv        # keep the header line

  cat data.txt | linesample 10 -s 42        # reproducible output

  cat data.csv | linesample -p 20 --csv --hash user_id   # all rows of ~20% of users
"""

app = typer.Typer(
    help="Random sampling of lines from standard input.",
    add_completion=False,
)

_DELIMITER_ALIASES = {"\\t": "\t", "tab": "\t"}


def _resolve_delimiter(value: str) -> str:
    delimiter = _DELIMITER_ALIASES.get(value, value)
    if len(delimiter) != 1:
        raise ConfigurationError(f"Delimiter must be a single character, got {value!r}")
    return delimiter


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"linesample {__version__}")
        raise typer.Exit()


def _silence_stdout() -> None:
    # Further writes (including the interpreter's final flush) go to /dev/null.
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        log.debug("Could not redirect stdout after broken pipe")


@app.command(epilog=EXAMPLES)
def sample(
    sample_size: Optional[int] = typer.Argument(
        None,
        metavar="SAMPLE_SIZE",
        help="Number of lines to sample using reservoir sampling. Cannot be used with --percentage.",
    ),
    percentage: Optional[float] = typer.Option(
        None,
        "--percentage",
        "-p",
        metavar="VALUE",
        help="Percentage of lines to sample (0-100). Each line has this chance of being included.",
    ),
    header: bool = typer.Option(
        False,
        "--csv",
        "--header",
        "-C",
        help="Preserve the first line as header (not counted in sampling).",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        "-s",
        metavar="NUMBER",
        help="Fixed random seed; the same seed gives the same sample for identical input.",
    ),
    hash_column: Optional[str] = typer.Option(
        None,
        "--hash",
        metavar="COLUMN",
        help="Column (header name or 1-based position) for hash-based group sampling. Requires --percentage.",
    ),
    delimiter: Optional[str] = typer.Option(
        None,
        "--delimiter",
        "-d",
        help="Field delimiter used by --hash (default from settings, ',').",
    ),
    input_path: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Read lines from this file instead of standard input.",
    ),
    output_path: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        dir_okay=False,
        help="Write the sample to this file instead of standard output.",
    ),
    stats: bool = typer.Option(
        False,
        "--stats",
        help="Print a run summary to standard error.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override the log level (e.g., DEBUG, INFO, WARNING).",
    ),
    json_logs: Optional[bool] = typer.Option(
        None,
        "--json-logs/--no-json-logs",
        help="Emit logs as JSON lines on standard error.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """
    Read lines and write a random sample of them.
    """
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_logs=settings.json_logs if json_logs is None else json_logs,
    )

    try:
        mode = build_mode(sample_size, percentage, hash_column)
        source = RandomSource(seed)
        field_delimiter = _resolve_delimiter(delimiter or settings.delimiter)
        with open_input(input_path, settings.encoding) as in_stream:
            with open_output(output_path, settings.encoding) as out_stream:
                result = run_sampling(
                    mode,
                    iter_records(in_stream),
                    LineSink(out_stream),
                    header=header,
                    source=source,
                    delimiter=field_delimiter,
                    profile=stats,
                )
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)
    except SamplingError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    except BrokenPipeError:
        log.debug("Output closed early; stopping")
        if output_path is None:
            _silence_stdout()
        raise typer.Exit(code=1)

    if stats:
        render_summary(result)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
