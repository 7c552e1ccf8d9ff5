"""Shared fixtures for building FASTQ and BAM inputs on the fly."""

import gzip
from collections.abc import Callable, Sequence
from pathlib import Path

import pysam
import pytest

Read = tuple[str, str]
# BAM reads may omit the sequence or the qualities
BamRead = tuple[str | None, str | None]


def fastq_text(reads: Sequence[Read]) -> str:
    """Render (sequence, quality) pairs as FASTQ text."""
    return "".join(
        f"@read_{i}\n{seq}\n+\n{qual}\n" for i, (seq, qual) in enumerate(reads)
    )


def reads_of_lengths(lengths: Sequence[int], qual_char: str = "I") -> list[Read]:
    """Build N-free reads of the given lengths with a constant quality."""
    return [(("ACGT" * (length // 4 + 1))[:length], qual_char * length) for length in lengths]


@pytest.fixture
def make_fastq(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory writing a FASTQ file into tmp_path.

    Files whose name ends in `.gz` are gzip-compressed.
    """

    def _make(name: str, reads: Sequence[Read]) -> Path:
        path = tmp_path / name
        text = fastq_text(reads)
        if name.endswith(".gz"):
            with gzip.open(path, "wt") as handle:
                handle.write(text)
        else:
            path.write_text(text)
        return path

    return _make


@pytest.fixture
def make_bam(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory writing an unaligned BAM file into tmp_path.

    Each read is a (sequence, quality) pair, either of which may be None
    to leave it unset; `flags` optionally gives the SAM flag of every read
    (default: unmapped).
    """
    header = pysam.AlignmentHeader.from_dict(
        {
            "HD": {"VN": "1.6", "SO": "unsorted"},
            "SQ": [{"SN": "chr1", "LN": 10000}],
        },
    )

    def _make(
        name: str,
        reads: Sequence[BamRead],
        flags: Sequence[int] | None = None,
    ) -> Path:
        path = tmp_path / name
        with pysam.AlignmentFile(str(path), "wb", header=header) as outf:
            for i, (seq, qual) in enumerate(reads):
                flag = flags[i] if flags is not None else 4
                read = pysam.AlignedSegment()
                read.query_name = f"read_{i}"
                if seq is not None:
                    read.query_sequence = seq
                read.flag = flag
                if flag & 4:
                    read.reference_id = -1
                    read.reference_start = -1
                    read.mapping_quality = 0
                else:
                    read.reference_id = 0
                    read.reference_start = i * 10
                    read.mapping_quality = 60
                    read.cigartuples = [(0, len(seq or ""))]
                if qual is not None:
                    read.query_qualities = pysam.qualitystring_to_array(qual)
                outf.write(read)
        return path

    return _make
