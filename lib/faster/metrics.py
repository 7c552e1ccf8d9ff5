"""
Per-read metrics over raw sequence and quality bytes.

All functions are pure and work on the ASCII bytes exposed by `Record`.
Counting uses `bytes.count`/`bytes.translate` so the work happens in C,
which matters when a run covers billions of bases.

Quality averaging is done in error-probability space:

    p = 10 ** (-phred / 10)
    mean_phred = -10 * log10(sum(p) / n)

The arithmetic mean of Phred scores is not used because Phred is a log
transform of the error probability.
"""

import math
from functools import lru_cache

from faster.records import PHRED_OFFSET

MIN_PHRED = 1
MAX_PHRED = 93

# Error probability for every possible raw quality byte
_ERROR_PROBABILITY = tuple(10.0 ** (-(raw - PHRED_OFFSET) / 10.0) for raw in range(256))


def phred_to_raw(score: int) -> int:
    """Convert a Phred score to its Phred+33 byte value."""
    return score + PHRED_OFFSET


def count_n_bases(seq: bytes) -> int:
    """Count `N`/`n` bases."""
    return seq.count(b"N") + seq.count(b"n")


def count_gc_bases(seq: bytes) -> int:
    """Count `G`/`g`/`C`/`c` bases."""
    return seq.count(b"G") + seq.count(b"g") + seq.count(b"C") + seq.count(b"c")


def gc_fraction(seq: bytes) -> float:
    """
    Fraction of bases that are G or C.

    Raises:
        ValueError: If the sequence is empty.
    """
    if not seq:
        msg = "GC fraction is undefined for an empty sequence"
        raise ValueError(msg)
    return count_gc_bases(seq) / len(seq)


@lru_cache(maxsize=None)
def _below_threshold(threshold: int) -> bytes:
    return bytes(range(min(threshold, 256)))


def count_quality_at_or_above(qual: bytes, threshold: int) -> int:
    """
    Count quality bytes >= `threshold`.

    Args:
        qual: Phred+33 quality bytes
        threshold: Raw byte threshold, i.e. the Phred score plus 33

    Returns:
        Number of bases passing the threshold
    """
    if threshold <= 0:
        return len(qual)
    return len(qual.translate(None, _below_threshold(threshold)))


def error_probability_sum(qual: bytes) -> float:
    """Sum of the per-base error probabilities encoded in `qual`."""
    return math.fsum(map(_ERROR_PROBABILITY.__getitem__, qual))


def mean_quality_phred(qual: bytes) -> float:
    """
    Mean quality of a read on the Phred scale.

    Raises:
        ValueError: If the quality string is empty.
    """
    if not qual:
        msg = "Mean quality is undefined for an empty quality string"
        raise ValueError(msg)
    mean_probability = error_probability_sum(qual) / len(qual)
    # adding 0.0 turns -0.0 into 0.0 for all-Q0 reads
    return -10.0 * math.log10(mean_probability) + 0.0
