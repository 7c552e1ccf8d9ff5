"""
Pydantic model for the per-file summary emitted by `faster table`.

Field names are the JSON keys; `TABLE_COLUMNS` maps them to the TSV and
pretty-table headers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from faster.aggregate import AggregateStats

TABLE_QUALITY_CUTOFF = 20

# JSON field -> table header
TABLE_COLUMNS = {
    "file": "file",
    "reads": "reads",
    "bases": "bases",
    "num_n": "n_bases",
    "min_len": "min_len",
    "max_len": "max_len",
    "n50": "N50",
    "gc_percent": "GC_percent",
    "q20": "Q20_percent",
}


class FileSummary(BaseModel):
    """Aggregate statistics for one input file."""

    file: str
    reads: int = Field(ge=0, description="Number of reads")
    bases: int = Field(ge=0, description="Total bases")
    num_n: int = Field(ge=0, description="Number of N bases")
    min_len: int = Field(ge=0, description="Shortest read length")
    max_len: int = Field(ge=0, description="Longest read length")
    n50: int = Field(ge=0, description="N50 read length")
    gc_percent: float = Field(ge=0, le=100, description="Percentage of G/C bases")
    q20: float = Field(ge=0, le=100, description="Percentage of bases with Q >= 20")

    @classmethod
    def from_stats(cls, file: str, stats: AggregateStats) -> FileSummary:
        """Build a summary from finalized stats, rounding percentages."""
        assert stats.quality_cutoff == TABLE_QUALITY_CUTOFF, (
            f"Summary expects Q{TABLE_QUALITY_CUTOFF} stats, got Q{stats.quality_cutoff}"
        )
        return cls(
            file=file,
            reads=stats.reads,
            bases=stats.bases,
            num_n=stats.n_bases,
            min_len=stats.min_len,
            max_len=stats.max_len,
            n50=stats.n50,
            gc_percent=round(stats.gc_percent, 2),
            q20=round(stats.quality_percent, 2),
        )
