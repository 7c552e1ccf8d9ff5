"""
Single-pass aggregation of read records into per-file totals.

The aggregator keeps exact integer counters plus the list of read lengths
(needed afterwards for Nx). Ratios are only computed from the final totals.

Lifecycle:
    ACCUMULATING --(end of input / finalize())--> FINALIZED

Once finalized the stats are frozen; further `add()` calls raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

from faster.metrics import (
    MAX_PHRED,
    MIN_PHRED,
    count_gc_bases,
    count_n_bases,
    count_quality_at_or_above,
    phred_to_raw,
)
from faster.nx import nx_length
from faster.sources import open_source

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from fractions import Fraction
    from pathlib import Path

    from faster.records import Record

DEFAULT_QUALITY_CUTOFF = 20
DEFAULT_PROGRESS_INTERVAL = 10_000


class AggregatorState(str, Enum):
    """States of a StreamAggregator."""

    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


class AggregatorFinalizedError(RuntimeError):
    """Raised when records are added after the stream was finalized."""


@dataclass(slots=True)
class AggregateStats:
    """Running totals for one input."""

    quality_cutoff: int = DEFAULT_QUALITY_CUTOFF
    reads: int = 0
    bases: int = 0
    n_bases: int = 0
    gc_bases: int = 0
    quality_pass_bases: int = 0
    lengths: list[int] = field(default_factory=list)

    @property
    def min_len(self) -> int:
        return min(self.lengths, default=0)

    @property
    def max_len(self) -> int:
        return max(self.lengths, default=0)

    @property
    def gc_percent(self) -> float:
        """Percentage of G/C bases, 0.0 when there are no bases."""
        if self.bases == 0:
            return 0.0
        return self.gc_bases / self.bases * 100

    @property
    def quality_percent(self) -> float:
        """Percentage of bases at or above the quality cutoff."""
        if self.bases == 0:
            return 0.0
        return self.quality_pass_bases / self.bases * 100

    def nx(self, fraction: float | Fraction) -> int:
        return nx_length(self.lengths, fraction)

    @property
    def n50(self) -> int:
        return self.nx(0.5)


class StreamAggregator:
    """
    Folds records into an `AggregateStats`.

    Args:
        quality_cutoff: Phred score counted towards `quality_pass_bases`
        on_progress: Optional callback receiving the read count every
            `progress_interval` records
        progress_interval: Records between progress callbacks
    """

    def __init__(
        self,
        quality_cutoff: int = DEFAULT_QUALITY_CUTOFF,
        on_progress: Callable[[int], None] | None = None,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    ) -> None:
        if not MIN_PHRED <= quality_cutoff <= MAX_PHRED:
            msg = (
                f"Quality cutoff must be between {MIN_PHRED} and {MAX_PHRED}, "
                f"got {quality_cutoff}"
            )
            raise ValueError(msg)
        if progress_interval < 1:
            msg = f"Progress interval must be positive, got {progress_interval}"
            raise ValueError(msg)

        self.stats = AggregateStats(quality_cutoff=quality_cutoff)
        self.state = AggregatorState.ACCUMULATING
        self._threshold = phred_to_raw(quality_cutoff)
        self._on_progress = on_progress
        self._progress_interval = progress_interval

    def add(self, record: Record) -> None:
        """Fold one record into the running totals."""
        if self.state is AggregatorState.FINALIZED:
            msg = "Cannot add records to a finalized aggregator"
            raise AggregatorFinalizedError(msg)

        seq = record.sequence
        length = len(seq)
        stats = self.stats
        stats.reads += 1
        stats.bases += length
        stats.n_bases += count_n_bases(seq)
        stats.gc_bases += count_gc_bases(seq)
        stats.quality_pass_bases += count_quality_at_or_above(
            record.quality,
            self._threshold,
        )
        stats.lengths.append(length)

        if self._on_progress is not None and stats.reads % self._progress_interval == 0:
            self._on_progress(stats.reads)

    def finalize(self) -> AggregateStats:
        """Close the aggregation and return the final stats."""
        if self.state is AggregatorState.ACCUMULATING:
            self.state = AggregatorState.FINALIZED
            if self._on_progress is not None:
                self._on_progress(self.stats.reads)
        return self.stats

    def consume(self, records: Iterable[Record]) -> AggregateStats:
        """Drain `records` and finalize."""
        for record in records:
            self.add(record)
        return self.finalize()


def aggregate_path(
    path: Path,
    quality_cutoff: int = DEFAULT_QUALITY_CUTOFF,
    on_progress: Callable[[int], None] | None = None,
) -> AggregateStats:
    """
    Aggregate every record of one input file.

    Args:
        path: FASTQ, gzipped FASTQ or BAM file
        quality_cutoff: Phred score for the quality-yield counter
        on_progress: Optional progress callback (see StreamAggregator)

    Returns:
        Finalized AggregateStats

    Raises:
        OpenError: If the file cannot be opened
        ReadError: If the file fails part way through; partial totals are
            discarded
    """
    aggregator = StreamAggregator(quality_cutoff, on_progress=on_progress)
    with open_source(path) as source:
        stats = aggregator.consume(source)
    logger.info(f"{path}: {stats.reads} reads, {stats.bases} bases")
    return stats
