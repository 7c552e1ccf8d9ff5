"""
Source-agnostic read records.

Every input format yields objects implementing the same `Record` contract:
`sequence` and `quality` as ASCII byte strings, the quality encoded as
Phred+33. Each variant materializes its own bytes, so the metrics and the
aggregator never need to know where a read came from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pysam

PHRED_OFFSET = 33

# Shifts zero-based quality scores into the printable Phred+33 range.
_PHRED33_TABLE = bytes((value + PHRED_OFFSET) % 256 for value in range(256))


class Record(ABC):
    """One sequencing read."""

    __slots__ = ()

    @property
    @abstractmethod
    def sequence(self) -> bytes:
        """Nucleotide codes as ASCII bytes."""

    @property
    @abstractmethod
    def quality(self) -> bytes:
        """Phred+33 quality bytes, one per base."""

    def __len__(self) -> int:
        return len(self.sequence)


@dataclass(frozen=True, slots=True)
class FastqRecord(Record):
    """A read parsed from the four lines of a FASTQ entry."""

    name: str
    seq: str
    qual: str

    @property
    def sequence(self) -> bytes:
        return self.seq.encode("ascii")

    @property
    def quality(self) -> bytes:
        return self.qual.encode("ascii")

    def __len__(self) -> int:
        return len(self.seq)


@dataclass(frozen=True, slots=True)
class BamRecord(Record):
    """A read backed by a pysam alignment segment."""

    segment: pysam.AlignedSegment

    @property
    def sequence(self) -> bytes:
        seq = self.segment.query_sequence
        if seq is None:
            return b""
        return seq.encode("ascii")

    @property
    def quality(self) -> bytes:
        quals = self.segment.query_qualities
        if quals is None:
            # BAM stores 0xFF when qualities are absent
            return b"!" * len(self)
        return bytes(quals).translate(_PHRED33_TABLE)

    def __len__(self) -> int:
        seq = self.segment.query_sequence
        return 0 if seq is None else len(seq)
