"""Tests for :mod:`randbits.tests.statistical` and its counting helpers."""

from __future__ import annotations

import pytest

from randbits.constants import RUN_LENGTH_LOWER_BOUNDS, RUN_LENGTH_UPPER_BOUNDS
from randbits.errors import InvalidConfigurationError
from randbits.generator import RandomBits
from randbits.tests import LongestRunTest, MonobitTest, PokerTest, RunLengthTest
from randbits.tests.utils import (
    count_ones,
    longest_run,
    poker_histogram,
    poker_statistic,
    run_length_histogram,
)

# Runs of ones: 1, 2, 7, 2, then an unterminated run of 3.
TRAILING_RUN_BITS = [1, 0, 1, 1, 0, 1, 1, 1, 1, 1, 1, 1, 0, 0, 1, 1, 0, 1, 1, 1]


@pytest.fixture(scope="module")
def reference_bits() -> RandomBits:
    return RandomBits.new()


def test_count_ones_sums_block_population() -> None:
    assert count_ones((0xFFFFFFFF, 1, 0)) == 33
    assert count_ones(()) == 0


def test_monobit_bounds_are_inclusive() -> None:
    balanced = RandomBits.from_bits([1, 0] * 10_000)
    at_lower = RandomBits.from_bits([1] * 9654 + [0] * 10_346)
    below_lower = RandomBits.from_bits([1] * 9653 + [0] * 10_347)

    assert MonobitTest().run(balanced).passed
    assert MonobitTest().run(at_lower).passed
    result = MonobitTest().run(below_lower)
    assert not result.passed
    assert result.statistic == 9653


def test_monobit_on_reference_sequence(reference_bits: RandomBits) -> None:
    result = MonobitTest().run(reference_bits)

    assert result.passed
    assert 9654 <= result.statistic <= 10_346
    assert reference_bits.mono_bit_test() is True


def test_longest_run_folds_both_polarities() -> None:
    assert longest_run([1, 1, 0, 0, 0, 1]) == 3
    assert longest_run([0, 1, 1, 1, 1]) == 4
    assert longest_run([0, 0, 0, 0, 0]) == 5
    assert longest_run([]) == 0
    assert longest_run(TRAILING_RUN_BITS) == 7


def test_longest_run_limit_is_inclusive() -> None:
    at_limit = RandomBits.from_bits([1] * 36 + [0] * 4)
    over_limit = RandomBits.from_bits([0] * 3 + [1] * 37)

    assert LongestRunTest().run(at_limit).passed
    result = LongestRunTest().run(over_limit)
    assert not result.passed
    assert result.statistic == 37


def test_poker_histogram_reads_nibbles_msb_first() -> None:
    bits = [0, 0, 0, 0, 1, 1, 1, 1, 1, 0, 1, 0, 1, 0, 1, 0, 0, 0, 0, 1]

    counts = poker_histogram(bits)

    assert len(counts) == 16
    assert counts[0] == 1
    assert counts[15] == 1
    assert counts[10] == 2
    assert counts[1] == 1
    assert sum(counts) == 5


def test_poker_statistic_matches_hand_computation() -> None:
    # (16 / 4) * (1 + 1 + 4) - 4
    assert poker_statistic([1] + [0] * 9 + [2] + [0] * 4 + [1], 4) == pytest.approx(20.0)
    # (16 / 5000) * (8 * 312**2 + 8 * 313**2) - 5000
    near_uniform = [312] * 8 + [313] * 8
    assert poker_statistic(near_uniform, 5000) == pytest.approx(0.0128, abs=1e-9)


def test_poker_rejects_too_uniform_and_too_skewed_sequences() -> None:
    # Every nibble reads 0b1010.
    skewed = RandomBits.from_bits([1, 0] * 10_000)
    result = PokerTest().run(skewed)

    assert not result.passed
    assert result.statistic == pytest.approx(75_000.0)
    assert result.observed[10] == 5000


def test_poker_requires_bit_count_divisible_by_block_size() -> None:
    bits = RandomBits.from_bits([1, 0, 1])

    assert not PokerTest().is_applicable(bits)
    with pytest.raises(InvalidConfigurationError):
        PokerTest().run(bits)
    with pytest.raises(InvalidConfigurationError):
        bits.pokker_test()


def test_poker_on_reference_sequence(reference_bits: RandomBits) -> None:
    result = PokerTest().run(reference_bits)

    assert result.passed
    assert sum(result.observed) == 5000
    assert 1.03 <= result.statistic <= 57.4


def test_run_length_histogram_ignores_trailing_run() -> None:
    assert run_length_histogram(TRAILING_RUN_BITS) == [1, 2, 0, 0, 0, 1]
    assert run_length_histogram(TRAILING_RUN_BITS + [0]) == [1, 2, 1, 0, 0, 1]


def test_run_length_histogram_caps_long_runs_in_last_bucket() -> None:
    assert run_length_histogram([1] * 5 + [0]) == [0, 0, 0, 0, 1, 0]
    assert run_length_histogram([1] * 6 + [0]) == [0, 0, 0, 0, 0, 1]
    assert run_length_histogram([1] * 40 + [0, 0, 1, 0]) == [1, 0, 0, 0, 0, 1]


def test_run_length_test_reports_synthetic_counts() -> None:
    result = RunLengthTest().run(RandomBits.from_bits(TRAILING_RUN_BITS))

    assert result.observed == (1, 2, 0, 0, 0, 1)
    assert not result.passed
    assert "Bucket 1" in result.details


def test_run_length_on_reference_sequence(reference_bits: RandomBits) -> None:
    result = RunLengthTest().run(reference_bits)

    assert result.passed
    for count, lower, upper in zip(
        result.observed, RUN_LENGTH_LOWER_BOUNDS, RUN_LENGTH_UPPER_BOUNDS
    ):
        assert lower <= count <= upper
