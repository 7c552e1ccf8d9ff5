"""
Length-weighted percentile (Nx) of a set of read lengths.

`nx_length` works on lengths sorted ascending and returns the length at
which the running total first exceeds `fraction * total`. For the usual
N(x*100) definition (half the bases in reads at least this long for N50)
callers pass `1 - x`, computed exactly (see `inverted_fraction`); N50 is
symmetric so `n50` passes 0.5 directly.
"""

from __future__ import annotations

from fractions import Fraction
from itertools import accumulate
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def nx_length(lengths: Iterable[int], fraction: float | Fraction) -> int:
    """
    Return the first sorted length whose cumulative sum exceeds the target.

    The comparison is strict: when `fraction * total` lands exactly on a
    cumulative boundary, the next length is returned.

    Args:
        lengths: Read lengths in any order (not modified)
        fraction: Fraction of total bases, in [0, 1]. A `Fraction` keeps the
            target exact on whole-number cumulative boundaries

    Returns:
        The Nx length. 0 for no reads. The largest length when no
        cumulative sum exceeds the target (fraction == 1.0).

    Raises:
        ValueError: If fraction is outside [0, 1].
    """
    if not 0.0 <= fraction <= 1.0:
        msg = f"Nx fraction must be between 0 and 1, got {fraction}"
        raise ValueError(msg)

    ordered = sorted(lengths)
    if not ordered:
        return 0

    target = fraction * sum(ordered)
    for length, cumulative in zip(ordered, accumulate(ordered), strict=True):
        if cumulative > target:
            return length
    return ordered[-1]


def n50(lengths: Iterable[int]) -> int:
    """N50 of `lengths`."""
    return nx_length(lengths, 0.5)


def inverted_fraction(fraction: float) -> Fraction:
    """
    Return `1 - fraction` exactly, for turning N(x*100) into a solver fraction.

    The float is read back from its shortest decimal form, so 0.9 becomes
    exactly 1/10 rather than 0.09999999999999998.
    """
    return 1 - Fraction(str(fraction))
