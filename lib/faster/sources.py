"""
Record sources for FASTQ and BAM inputs.

A source wraps one open file and hands out `Record` objects in file order.
Sources are context managers and single-use iterators: once exhausted (or on
any error) the underlying handle is closed and iterating again yields
nothing.

Format selection is by filename suffix:
    *.bam           -> BamSource (pysam)
    *.gz            -> FastqSource over a gzip stream
    anything else   -> FastqSource over plain text

Usage:
    with open_source(Path("reads.fastq.gz")) as source:
        for record in source:
            ...
"""

from __future__ import annotations

import gzip
from abc import ABC, abstractmethod
from enum import Enum
from itertools import chain
from pathlib import Path
from typing import IO, TYPE_CHECKING

import pysam
from Bio.SeqIO.QualityIO import FastqGeneralIterator
from loguru import logger

from faster.records import BamRecord, FastqRecord, Record

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

# Errors the parsers and decompressors raise for unreadable or malformed input
_PARSE_ERRORS = (ValueError, OSError, EOFError)


class SourceError(Exception):
    """Base class for input failures."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class OpenError(SourceError):
    """The input could not be opened or its framing is malformed."""


class ReadError(SourceError):
    """The input failed part way through."""


class SourceKind(str, Enum):
    """Container formats understood by `open_source`."""

    FASTQ = "fastq"
    FASTQ_GZ = "fastq.gz"
    BAM = "bam"


def detect_kind(path: Path) -> SourceKind:
    """Pick the container format from the filename suffix."""
    suffix = path.suffix.lower()
    if suffix == ".bam":
        return SourceKind.BAM
    if suffix == ".gz":
        return SourceKind.FASTQ_GZ
    return SourceKind.FASTQ


class RecordSource(ABC):
    """Single-pass iterator over the records of one input file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.closed = False
        self._records: Iterator[Record] = iter(())

    @abstractmethod
    def _open_handle(self) -> None:
        """Open the underlying file handle."""

    @abstractmethod
    def _close_handle(self) -> None:
        """Release the underlying file handle."""

    @abstractmethod
    def _parse(self) -> Iterator[Record]:
        """Yield records from the open handle."""

    def open(self) -> RecordSource:
        """
        Open the input and validate its framing.

        The first record is read eagerly so that a file that is not in the
        expected format fails here with `OpenError` rather than mid-stream.

        Raises:
            OpenError: If the file is unreadable or malformed.
        """
        try:
            self._open_handle()
            records = self._parse()
            first = next(records, None)
        except _PARSE_ERRORS as exc:
            self.close()
            raise OpenError(self.path, str(exc)) from exc

        if first is not None:
            self._records = chain((first,), records)
        logger.debug(f"Opened {self.path}")
        return self

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._records = iter(())
        self._close_handle()
        logger.debug(f"Closed {self.path}")

    def __iter__(self) -> RecordSource:
        return self

    def __next__(self) -> Record:
        try:
            return next(self._records)
        except StopIteration:
            self.close()
            raise
        except _PARSE_ERRORS as exc:
            self.close()
            raise ReadError(self.path, str(exc)) from exc

    def __enter__(self) -> RecordSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class FastqSource(RecordSource):
    """FASTQ text, optionally gzip-compressed."""

    def __init__(self, path: Path, *, compressed: bool = False) -> None:
        super().__init__(path)
        self.compressed = compressed
        self._handle: IO[str] | None = None

    def _open_handle(self) -> None:
        if self.compressed:
            self._handle = gzip.open(self.path, "rt", encoding="ascii")
        else:
            self._handle = self.path.open(encoding="ascii")

    def _close_handle(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def _parse(self) -> Iterator[Record]:
        assert self._handle is not None, "FASTQ handle is not open"
        for title, seq, qual in FastqGeneralIterator(self._handle):
            yield FastqRecord(title, seq, qual)


class BamSource(RecordSource):
    """
    Reads from a BAM file, aligned or not.

    Secondary and supplementary alignments are skipped so each read is
    counted once.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self._handle: pysam.AlignmentFile | None = None

    def _open_handle(self) -> None:
        self._handle = pysam.AlignmentFile(str(self.path), "rb", check_sq=False)

    def _close_handle(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def _parse(self) -> Iterator[Record]:
        assert self._handle is not None, "BAM handle is not open"
        for segment in self._handle.fetch(until_eof=True):
            if segment.is_secondary or segment.is_supplementary:
                continue
            yield BamRecord(segment)


def open_source(path: Path) -> RecordSource:
    """
    Open a record source for `path`, choosing the reader by suffix.

    Args:
        path: FASTQ, gzipped FASTQ or BAM file

    Returns:
        An open RecordSource, ready to iterate

    Raises:
        OpenError: If the file is missing, unreadable or malformed
    """
    kind = detect_kind(path)
    source: RecordSource
    if kind is SourceKind.BAM:
        source = BamSource(path)
    else:
        source = FastqSource(path, compressed=kind is SourceKind.FASTQ_GZ)
    return source.open()
