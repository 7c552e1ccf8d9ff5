"""Tests for the per-read metrics."""

import math
import random

import pytest
from faster.metrics import (
    count_gc_bases,
    count_n_bases,
    count_quality_at_or_above,
    error_probability_sum,
    gc_fraction,
    mean_quality_phred,
    phred_to_raw,
)


class TestCountNBases:
    """Test N base counting."""

    def test_upper_and_lower_case(self) -> None:
        assert count_n_bases(b"ACNGTnnN") == 4

    def test_no_n(self) -> None:
        assert count_n_bases(b"ACGTACGT") == 0

    def test_empty(self) -> None:
        assert count_n_bases(b"") == 0

    @pytest.mark.parametrize("seq", [b"NNNN", b"ACGTN", b"nAnCnG", b"RYKMSWN"])
    def test_n_plus_non_n_is_length(self, seq: bytes) -> None:
        """N bases and everything else add up to the read length."""
        non_n = sum(1 for base in seq if base not in b"Nn")
        assert count_n_bases(seq) + non_n == len(seq)


class TestGcContent:
    """Test GC counting and fractions."""

    def test_count_gc_mixed_case(self) -> None:
        assert count_gc_bases(b"GgCcATat") == 4

    def test_fraction_half(self) -> None:
        assert gc_fraction(b"ACGT") == 0.5

    def test_fraction_all_gc(self) -> None:
        assert gc_fraction(b"GGCC") == 1.0

    def test_fraction_no_gc(self) -> None:
        assert gc_fraction(b"ATATNN") == 0.0

    def test_fraction_empty_raises(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            gc_fraction(b"")

    def test_fraction_in_unit_interval(self) -> None:
        rng = random.Random(7)
        for _ in range(50):
            seq = bytes(rng.choice(b"ACGTNacgtn") for _ in range(rng.randint(1, 200)))
            assert 0.0 <= gc_fraction(seq) <= 1.0


class TestQualityCounts:
    """Test counting bases at or above a quality threshold."""

    def test_phred_to_raw(self) -> None:
        assert phred_to_raw(20) == ord("5")
        assert phred_to_raw(0) == ord("!")

    def test_threshold_is_inclusive(self) -> None:
        # '5' is Q20, '4' is Q19
        assert count_quality_at_or_above(b"4455", phred_to_raw(20)) == 2

    def test_all_pass(self) -> None:
        assert count_quality_at_or_above(b"IIII", phred_to_raw(20)) == 4

    def test_threshold_above_max_observed(self) -> None:
        assert count_quality_at_or_above(b"IIII", phred_to_raw(41)) == 0

    def test_empty(self) -> None:
        assert count_quality_at_or_above(b"", phred_to_raw(20)) == 0


class TestMeanQuality:
    """Test probability-space quality averaging."""

    def test_constant_quality(self) -> None:
        assert mean_quality_phred(b"IIII") == pytest.approx(40.0)

    def test_q0_read_is_zero(self) -> None:
        result = mean_quality_phred(b"!!!!")
        assert result == 0.0
        assert math.copysign(1.0, result) == 1.0

    def test_average_in_probability_space(self) -> None:
        """Q10 and Q30 average to ~Q13, not the Phred mean of 20."""
        expected = -10 * math.log10((0.1 + 0.001) / 2)
        assert mean_quality_phred(b"+?") == pytest.approx(expected)
        assert mean_quality_phred(b"+?") < 20

    def test_error_probability_sum(self) -> None:
        # Q10 -> 0.1, Q20 -> 0.01
        assert error_probability_sum(b"+5") == pytest.approx(0.11)

    def test_invariant_under_reordering(self) -> None:
        qual = b"!+5?IIII#&"
        rng = random.Random(3)
        shuffled = bytearray(qual)
        for _ in range(10):
            rng.shuffle(shuffled)
            assert mean_quality_phred(bytes(shuffled)) == mean_quality_phred(qual)

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            mean_quality_phred(b"")
