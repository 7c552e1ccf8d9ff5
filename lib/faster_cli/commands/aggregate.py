"""
The 'nx' and 'qyield' commands for the faster CLI.

Both aggregate each input in a single pass and write one line per input.
With more than one input each line is prefixed by the file name and a tab.
"""

import math
from pathlib import Path
from typing import Annotated

import typer

from faster.aggregate import aggregate_path
from faster.metrics import MAX_PHRED, MIN_PHRED
from faster.nx import inverted_fraction
from faster_cli.app import app
from faster_cli.utils import InputFiles, process_inputs, write_line


def _prefixed(path: Path, text: str, *, many: bool) -> str:
    return f"{path}\t{text}" if many else text


def _finite_fraction(value: float) -> float:
    # NaN slips through the min/max range check
    if math.isnan(value):
        msg = "Fraction must be a number between 0 and 1"
        raise typer.BadParameter(msg)
    return value


@app.command("nx")
def nx_value(
    fraction: Annotated[
        float,
        typer.Argument(
            min=0.0,
            max=1.0,
            callback=_finite_fraction,
            help="Fraction of bases, e.g. 0.5 for N50 or 0.9 for N90.",
            show_default=False,
        ),
    ],
    files: InputFiles,
) -> None:
    """
    Write the [bold]Nx[/bold] read length of each input.

    Nx is the length L such that reads of length L or longer hold the
    fraction x of all bases.
    """
    many = len(files) > 1
    # the solver walks lengths in ascending order, hence 1 - x
    solver_fraction = inverted_fraction(fraction)

    def handle(path: Path) -> None:
        stats = aggregate_path(path)
        write_line(_prefixed(path, str(stats.nx(solver_fraction)), many=many))

    process_inputs(files, handle)


@app.command("qyield")
def quality_yield(
    qvalue: Annotated[
        int,
        typer.Argument(
            min=MIN_PHRED,
            max=MAX_PHRED,
            help=f"Phred score threshold ({MIN_PHRED}-{MAX_PHRED}).",
            show_default=False,
        ),
    ],
    files: InputFiles,
) -> None:
    """
    Write the [bold]percentage of bases[/bold] at or above a quality score.

    Output is `Q<qvalue><TAB><percent>` with two decimals.
    """
    many = len(files) > 1

    def handle(path: Path) -> None:
        stats = aggregate_path(path, quality_cutoff=qvalue)
        write_line(_prefixed(path, f"Q{qvalue}\t{stats.quality_percent:.2f}", many=many))

    process_inputs(files, handle)
