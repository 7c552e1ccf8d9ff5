"""
Per-read commands for the faster CLI: 'len', 'qual' and 'gc'.

Each writes one line per read, in input order. Several inputs may be given;
their reads are written one file after the other. Empty reads are written
as zero rather than failing.
"""

from collections.abc import Callable
from pathlib import Path

from faster.metrics import gc_fraction, mean_quality_phred
from faster.records import Record
from faster.sources import open_source
from faster_cli.app import app
from faster_cli.utils import InputFiles, process_inputs, write_line


def _write_per_read(paths: list[Path], render: Callable[[Record], str]) -> None:
    def handle(path: Path) -> None:
        with open_source(path) as source:
            for record in source:
                write_line(render(record))

    process_inputs(paths, handle)


def _render_length(record: Record) -> str:
    return str(len(record))


def _render_quality(record: Record) -> str:
    qual = record.quality
    if not qual:
        return "0.0000"
    return f"{mean_quality_phred(qual):.4f}"


def _render_gc(record: Record) -> str:
    seq = record.sequence
    if not seq:
        return "0.0000"
    return f"{gc_fraction(seq):.4f}"


@app.command("len")
def read_lengths(files: InputFiles) -> None:
    """
    Write the [bold]length[/bold] of every read, one per line.
    """
    _write_per_read(files, _render_length)


@app.command("qual")
def read_qualities(files: InputFiles) -> None:
    """
    Write the mean [bold]Phred quality[/bold] of every read, one per line.

    The mean is taken over per-base error probabilities and converted back
    to the Phred scale.
    """
    _write_per_read(files, _render_quality)


@app.command("gc")
def read_gc(files: InputFiles) -> None:
    """
    Write the [bold]GC fraction[/bold] of every read, one per line.
    """
    _write_per_read(files, _render_gc)
