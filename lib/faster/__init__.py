"""
faster: streaming QC statistics for FASTQ and BAM reads.

Modules:
    records: Source-agnostic Record contract (FASTQ and BAM variants)
    sources: Single-pass record sources with suffix-based format detection
    metrics: Per-read byte metrics (N count, GC, quality yield, mean quality)
    aggregate: Streaming per-file aggregation
    nx: Nx/N50 solver
    schema: Pydantic per-file summary model
    report: TSV, pretty-table and JSON rendering
"""

from .aggregate import (
    AggregateStats,
    AggregatorFinalizedError,
    AggregatorState,
    StreamAggregator,
    aggregate_path,
)
from .metrics import (
    count_gc_bases,
    count_n_bases,
    count_quality_at_or_above,
    gc_fraction,
    mean_quality_phred,
)
from .nx import inverted_fraction, n50, nx_length
from .records import BamRecord, FastqRecord, Record
from .schema import FileSummary
from .sources import OpenError, ReadError, SourceError, open_source

__version__ = "0.1.0"

__all__ = [
    "AggregateStats",
    "AggregatorFinalizedError",
    "AggregatorState",
    "BamRecord",
    "FastqRecord",
    "FileSummary",
    "OpenError",
    "ReadError",
    "Record",
    "SourceError",
    "StreamAggregator",
    "__version__",
    "aggregate_path",
    "count_gc_bases",
    "count_n_bases",
    "count_quality_at_or_above",
    "gc_fraction",
    "inverted_fraction",
    "mean_quality_phred",
    "n50",
    "nx_length",
    "open_source",
]
