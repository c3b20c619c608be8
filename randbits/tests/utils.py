"""Counting helpers shared by the statistical tests.

The helpers take plain iterables so that synthetic sequences can be checked
without going through :class:`randbits.generator.RandomBits`.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from ..constants import POKER_BLOCK_SIZE, RUN_LENGTH_BUCKETS


def count_ones(blocks: Sequence[int]) -> int:
    """Return the population count of 32-bit ``blocks``."""

    packed = np.asarray(blocks, dtype="<u4").view(np.uint8)
    return int(np.unpackbits(packed).sum())


def longest_run(bits: Iterable[bool]) -> int:
    """Return the longest run of identical bits.

    One and zero runs are counted separately; a bit of one polarity closes the
    other polarity's run and folds it into the maximum.
    """

    ones = 0
    zeros = 0
    longest = 0
    for bit in bits:
        if bit:
            ones += 1
            longest = max(longest, zeros)
            zeros = 0
        else:
            zeros += 1
            longest = max(longest, ones)
            ones = 0
    return max(longest, ones, zeros)


def poker_histogram(bits: Iterable[bool], block_size: int = POKER_BLOCK_SIZE) -> List[int]:
    """Tally non-overlapping ``block_size``-bit values, most significant bit first."""

    counts = [0] * (1 << block_size)
    value = 0
    length = 0
    for bit in bits:
        value = (value << 1) | int(bool(bit))
        length += 1
        if length == block_size:
            counts[value] += 1
            value = 0
            length = 0
    return counts


def poker_statistic(
    counts: Sequence[int], block_count: int, block_size: int = POKER_BLOCK_SIZE
) -> float:
    """Return ``(2**m / k) * sum(n_i ** 2) - k`` for histogram ``counts``."""

    observed = np.asarray(counts, dtype=np.int64)
    squares = int(observed.dot(observed))
    return (1 << block_size) / block_count * squares - block_count


def run_length_histogram(
    bits: Iterable[bool], bucket_count: int = RUN_LENGTH_BUCKETS
) -> List[int]:
    """Count runs of ones closed by a zero; lengths past the last bucket are capped.

    Index ``0`` holds runs of length one. A run still open when the sequence
    ends is not counted.
    """

    counts = [0] * bucket_count
    run = 0
    for bit in bits:
        if bit:
            run += 1
        elif run:
            counts[min(run, bucket_count) - 1] += 1
            run = 0
    return counts


__all__ = [
    "count_ones",
    "longest_run",
    "poker_histogram",
    "poker_statistic",
    "run_length_histogram",
]
