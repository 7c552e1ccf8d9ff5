"""
Utility functions for the faster CLI.

Provides console output helpers, logging setup, the per-input driver loop
and the optional progress display.
"""

import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from faster.sources import SourceError

# Shared console instances
console = Console()
err_console = Console(stderr=True)

# Positional input files shared by every command. Existence is checked when
# each file is opened so one bad path does not stop the others.
InputFiles = Annotated[
    list[Path],
    typer.Argument(
        help="FASTQ (optionally gzipped) or BAM files.",
        dir_okay=False,
        show_default=False,
    ),
]


# =============================================================================
# Console Output Helpers
# =============================================================================


def error(message: str, exit_code: int = 1) -> None:
    """Print an error message and optionally exit."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)
    if exit_code:
        sys.exit(exit_code)


def write_line(text: str) -> None:
    """Write one plain line of results to stdout."""
    sys.stdout.write(f"{text}\n")


# =============================================================================
# Logging
# =============================================================================


def configure_logging(verbosity: int, *, color: bool = True) -> None:
    """Configure loguru logging based on verbosity level."""
    logger.remove()

    level = {
        0: "WARNING",
        1: "INFO",
        2: "DEBUG",
    }.get(min(verbosity, 2), "WARNING")

    logger.add(
        sys.stderr,
        colorize=color,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
    )


# =============================================================================
# Input Processing
# =============================================================================


def process_inputs(paths: list[Path], handler: Callable[[Path], None]) -> None:
    """
    Run `handler` on each input in order.

    A failing input is reported and skipped; the remaining inputs are still
    processed.

    Raises:
        typer.Exit: With code 1 if any input failed.
    """
    failed = 0
    for path in paths:
        try:
            handler(path)
        except SourceError as exc:
            logger.debug(f"Failed on {path}: {exc!r}")
            error(str(exc), exit_code=0)
            failed += 1

    if failed:
        logger.warning(f"{failed} of {len(paths)} input(s) failed")
        raise typer.Exit(code=1)


@contextmanager
def read_progress(*, enabled: bool) -> Iterator[Callable[[Path], Callable[[int], None]] | None]:
    """
    Transient progress display on stderr.

    Yields a factory that, given the input being read, returns a callback
    taking the number of reads processed so far. Yields None when disabled.
    """
    if not enabled:
        yield None
        return

    with Progress(
        SpinnerColumn(),
        TextColumn("[cyan]{task.description}"),
        TextColumn("{task.completed:,} reads"),
        TimeElapsedColumn(),
        console=err_console,
        transient=True,
    ) as progress:

        def track(path: Path) -> Callable[[int], None]:
            task = progress.add_task(path.name, total=None)
            return lambda reads: progress.update(task, completed=reads)

        yield track
