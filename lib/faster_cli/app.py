"""
Typer application instance for the faster CLI.

This module defines the main Typer app and the global options shared by all
commands. Commands are registered via the commands subpackage.

Note: `from __future__ import annotations` is not used here because Typer
introspects the annotations at runtime.
"""

from dataclasses import dataclass
from typing import Annotated

import typer

from faster import __version__
from faster_cli.utils import configure_logging, console

# The main Typer application instance
app = typer.Typer(
    name="faster",
    help="Fast statistics for FASTQ and BAM reads.",
    rich_markup_mode="rich",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@dataclass(frozen=True, slots=True)
class CliSettings:
    """Global options handed to every command through the Typer context."""

    color: bool = True
    verbosity: int = 0


def _print_version(value: bool) -> None:  # noqa: FBT001
    if value:
        console.print(f"faster {__version__}")
        raise typer.Exit


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase log verbosity (-v for INFO, -vv for DEBUG).",
        ),
    ] = 0,
    no_color: Annotated[
        bool,
        typer.Option(
            "--no-color",
            help="Disable coloured output (NO_COLOR is also honoured).",
        ),
    ] = False,
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option(
            "--version",
            callback=_print_version,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """
    Fast statistics for FASTQ and BAM reads.

    Inputs ending in [bold].bam[/bold] are read as BAM, inputs ending in
    [bold].gz[/bold] as gzipped FASTQ, everything else as plain FASTQ.
    """
    configure_logging(verbose, color=not no_color)
    ctx.obj = CliSettings(color=not no_color, verbosity=verbose)
