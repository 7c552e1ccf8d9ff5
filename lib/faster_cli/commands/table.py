"""
The 'table' command for the faster CLI.

Summarizes each input (reads, bases, N bases, length range, N50, GC and Q20
percentages) as TSV, a pretty table or JSON.
"""

from pathlib import Path
from typing import Annotated

import typer

from faster.aggregate import aggregate_path
from faster.report import OutputStyle, ReportConfig, Reporter
from faster.schema import TABLE_QUALITY_CUTOFF, FileSummary
from faster_cli.app import CliSettings, app
from faster_cli.utils import InputFiles, process_inputs, read_progress


@app.command("table")
def summary_table(
    ctx: typer.Context,
    files: InputFiles,
    pretty: Annotated[
        bool,
        typer.Option("--pretty", "-p", help="Render an aligned table."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Render a JSON array, one object per file."),
    ] = False,
    skip_header: Annotated[
        bool,
        typer.Option("--skip-header", "-s", help="Do not print the header row."),
    ] = False,
    progress: Annotated[
        bool,
        typer.Option("--progress", help="Show a progress spinner on stderr."),
    ] = False,
) -> None:
    """
    Write a [bold]summary table[/bold] with one row per input.

    Columns: file, reads, bases, n_bases, min_len, max_len, N50,
    GC_percent, Q20_percent. TSV rows are written as soon as each file is
    done; pretty and JSON output appear after the last file.
    """
    if pretty and json_output:
        msg = "--pretty and --json are mutually exclusive"
        raise typer.BadParameter(msg)

    if pretty:
        style = OutputStyle.PRETTY
    elif json_output:
        style = OutputStyle.JSON
    else:
        style = OutputStyle.TSV

    settings = ctx.obj if isinstance(ctx.obj, CliSettings) else CliSettings()
    reporter = Reporter(
        ReportConfig(style=style, header=not skip_header, color=settings.color),
    )

    with read_progress(enabled=progress) as track:

        def handle(path: Path) -> None:
            on_progress = track(path) if track is not None else None
            stats = aggregate_path(
                path,
                quality_cutoff=TABLE_QUALITY_CUTOFF,
                on_progress=on_progress,
            )
            reporter.emit(FileSummary.from_stats(str(path), stats))

        try:
            process_inputs(files, handle)
        except typer.Exit:
            # failed inputs were already reported; still render the rest
            reporter.finish()
            raise
    reporter.finish()
