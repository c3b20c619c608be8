"""Fixed parameters of the bit generator and the FIPS 140-2 test battery.

The values below are compile-time configuration: changing any of them changes
the generated sequence or the acceptance envelopes, so none of them are
exposed through the INI configuration file.
"""

from __future__ import annotations

from typing import Tuple

BIT_COUNT: int = 20_000
"""Number of bits produced by :meth:`randbits.generator.RandomBits.new`."""

BLOCK_BITS: int = 32
BLOCK_COUNT: int = BIT_COUNT // BLOCK_BITS
BYTES_PER_BLOCK: int = BLOCK_BITS // 8
BLOCK_MASK: int = (1 << BLOCK_BITS) - 1

INITIAL_SEED: int = 871246
LCG_MULTIPLIER: int = 134775813
LCG_INCREMENT: int = 1
STATE_MASK: int = (1 << 32) - 1
"""Mask applied after every update, i.e. the ``2**32`` modulus."""

MONOBIT_LOWER_BOUND: int = 9654
MONOBIT_UPPER_BOUND: int = 10346

MAX_RUN_LENGTH: int = 36

POKER_BLOCK_SIZE: int = 4
POKER_LOWER_BOUND: float = 1.03
POKER_UPPER_BOUND: float = 57.4

RUN_LENGTH_BUCKETS: int = 6
RUN_LENGTH_LOWER_BOUNDS: Tuple[int, ...] = (2267, 1079, 502, 223, 90, 90)
RUN_LENGTH_UPPER_BOUNDS: Tuple[int, ...] = (2733, 1421, 748, 402, 223, 223)

DEFAULT_TEST_ORDER: Tuple[str, ...] = ("monobit", "longest_run", "poker", "run_length")
"""Registry names of the battery, in the order they are reported."""
