"""Tests for the streaming aggregator."""

from pathlib import Path

import pytest
from conftest import reads_of_lengths
from faster.aggregate import (
    AggregateStats,
    AggregatorFinalizedError,
    AggregatorState,
    StreamAggregator,
    aggregate_path,
)
from faster.records import FastqRecord
from faster.sources import OpenError

# 165 + 8 * 2085 + 2086 = 18931 bases over 10 reads
REFERENCE_LENGTHS = [165] + [2085] * 8 + [2086]


@pytest.fixture
def reference_fastq(make_fastq) -> Path:
    """Ten N-free Q40 reads totalling 18931 bases, shortest 165."""
    return make_fastq("test.fastq", reads_of_lengths(REFERENCE_LENGTHS))


class TestStreamAggregator:
    """Test the aggregator state machine and counters."""

    def test_counts(self) -> None:
        aggregator = StreamAggregator(quality_cutoff=20)
        aggregator.add(FastqRecord("r1", "ACGTN", "II!!I"))
        aggregator.add(FastqRecord("r2", "GGnn", "5555"))
        stats = aggregator.finalize()

        assert stats.reads == 2
        assert stats.bases == 9
        assert stats.n_bases == 3
        assert stats.gc_bases == 4
        assert stats.quality_pass_bases == 7
        assert stats.lengths == [5, 4]

    def test_invariants_hold(self, reference_fastq: Path) -> None:
        stats = aggregate_path(reference_fastq)
        assert stats.bases == sum(stats.lengths)
        assert len(stats.lengths) == stats.reads

    def test_state_transition(self) -> None:
        aggregator = StreamAggregator()
        assert aggregator.state is AggregatorState.ACCUMULATING
        aggregator.consume([FastqRecord("r", "ACGT", "IIII")])
        assert aggregator.state is AggregatorState.FINALIZED

    def test_add_after_finalize_raises(self) -> None:
        aggregator = StreamAggregator()
        aggregator.finalize()
        with pytest.raises(AggregatorFinalizedError):
            aggregator.add(FastqRecord("r", "ACGT", "IIII"))

    @pytest.mark.parametrize("cutoff", [0, 94])
    def test_cutoff_out_of_range(self, cutoff: int) -> None:
        with pytest.raises(ValueError, match="Quality cutoff"):
            StreamAggregator(quality_cutoff=cutoff)

    def test_progress_callback(self) -> None:
        seen: list[int] = []
        aggregator = StreamAggregator(on_progress=seen.append, progress_interval=2)
        aggregator.consume(FastqRecord(f"r{i}", "A", "I") for i in range(5))
        assert seen == [2, 4, 5]


class TestAggregateStats:
    """Test derived values and their zero guards."""

    def test_empty_stats(self) -> None:
        stats = AggregateStats()
        assert stats.min_len == 0
        assert stats.max_len == 0
        assert stats.n50 == 0
        assert stats.gc_percent == 0.0
        assert stats.quality_percent == 0.0

    def test_percentages(self) -> None:
        stats = AggregateStats(bases=200, gc_bases=50, quality_pass_bases=150, reads=2)
        stats.lengths.extend([100, 100])
        assert stats.gc_percent == 25.0
        assert stats.quality_percent == 75.0


class TestAggregatePath:
    """Test aggregation straight from files."""

    def test_reference_file(self, reference_fastq: Path) -> None:
        stats = aggregate_path(reference_fastq)
        assert stats.reads == 10
        assert stats.bases == 18931
        assert stats.n_bases == 0
        assert stats.min_len == 165
        assert stats.max_len == 2086
        assert stats.n50 == 2085
        assert stats.quality_percent == 100.0

    def test_idempotent(self, reference_fastq: Path) -> None:
        assert aggregate_path(reference_fastq) == aggregate_path(reference_fastq)

    def test_fastq_and_bam_agree(self, make_fastq, make_bam) -> None:
        reads = [("ACGTNNGGCC", "IIII!!5555"), ("ATAT", "++++")]
        from_fastq = aggregate_path(make_fastq("reads.fastq", reads))
        from_bam = aggregate_path(make_bam("reads.bam", reads))
        assert from_fastq == from_bam

    def test_empty_file(self, make_fastq) -> None:
        stats = aggregate_path(make_fastq("empty.fastq", []))
        assert stats.reads == 0
        assert stats.n50 == 0
        assert stats.gc_percent == 0.0

    def test_quality_yield_beyond_max_observed(self, reference_fastq: Path) -> None:
        stats = aggregate_path(reference_fastq, quality_cutoff=41)
        assert stats.quality_percent == 0.0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OpenError):
            aggregate_path(tmp_path / "nope.fastq")
