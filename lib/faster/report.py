"""
Rendering of per-file summaries.

Three output styles are supported, exactly one per run:
    tsv     tab-separated rows, written as each file finishes (polars)
    pretty  aligned table rendered after the last file (rich)
    json    array of objects rendered after the last file (pydantic)

Rendering options arrive in an explicit `ReportConfig`; there is no global
output state.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

import polars as pl
from pydantic import TypeAdapter
from rich.console import Console
from rich.table import Table

from faster.schema import TABLE_COLUMNS, FileSummary

_SUMMARY_LIST = TypeAdapter(list[FileSummary])

# Columns rendered with two decimals
_PERCENT_FIELDS = {"gc_percent", "q20"}


class OutputStyle(str, Enum):
    """Output styles for the table command."""

    TSV = "tsv"
    PRETTY = "pretty"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """How summaries are rendered."""

    style: OutputStyle = OutputStyle.TSV
    header: bool = True
    color: bool = True


class Reporter:
    """
    Collects per-file summaries and writes them out.

    TSV and JSON go to a plain text stream so tabs survive untouched; the
    pretty table goes through a rich console.

    Args:
        config: Rendering options
        stream: Text stream for TSV and JSON; defaults to stdout at write time
        console: Console for the pretty table; defaults to stdout honouring
            `config.color`
    """

    def __init__(
        self,
        config: ReportConfig,
        stream: TextIO | None = None,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.stream = stream
        self.console = console or Console(no_color=not config.color, highlight=False)
        self.summaries: list[FileSummary] = []
        self._header_written = False

    def emit(self, summary: FileSummary) -> None:
        """Record one file's summary, writing it straight away for TSV."""
        self.summaries.append(summary)
        if self.config.style is OutputStyle.TSV:
            self._write_tsv([summary])

    def finish(self) -> None:
        """Render anything held back until all inputs are done."""
        if self.config.style is OutputStyle.PRETTY:
            self.console.print(self._pretty_table())
        elif self.config.style is OutputStyle.JSON:
            payload = _SUMMARY_LIST.dump_json(self.summaries, indent=2)
            self._write(payload.decode() + "\n")
        elif not self.summaries:
            self._write_tsv([])

    def _write_tsv(self, summaries: list[FileSummary]) -> None:
        include_header = self.config.header and not self._header_written
        if not summaries and not include_header:
            return
        frame = summaries_to_frame(summaries)
        text = frame.write_csv(
            separator="\t",
            include_header=include_header,
            float_precision=2,
        )
        self._header_written = self._header_written or include_header
        self._write(text)

    def _write(self, text: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(text)
        stream.flush()

    def _pretty_table(self) -> Table:
        table = Table(show_header=self.config.header, header_style="bold cyan")
        for field, title in TABLE_COLUMNS.items():
            table.add_column(title, justify="left" if field == "file" else "right")
        for summary in self.summaries:
            row = summary.model_dump()
            table.add_row(
                *(
                    f"{row[field]:.2f}" if field in _PERCENT_FIELDS else str(row[field])
                    for field in TABLE_COLUMNS
                ),
            )
        return table


def summaries_to_frame(summaries: list[FileSummary]) -> pl.DataFrame:
    """Convert summaries to a DataFrame with table headers as column names."""
    schema = {
        "file": pl.String,
        "reads": pl.Int64,
        "bases": pl.Int64,
        "num_n": pl.Int64,
        "min_len": pl.Int64,
        "max_len": pl.Int64,
        "n50": pl.Int64,
        "gc_percent": pl.Float64,
        "q20": pl.Float64,
    }
    rows = [summary.model_dump() for summary in summaries]
    renames = {field: title for field, title in TABLE_COLUMNS.items() if field != title}
    return pl.DataFrame(rows, schema=schema).rename(renames)
