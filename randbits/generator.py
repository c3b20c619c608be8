"""Deterministic linear-congruential bit generator.

:class:`RandomBits` holds the generated sequence packed into 32-bit blocks.
Bit ``i`` lives in block ``i // 32`` at position ``i % 32`` (least significant
bit first); every statistical test in :mod:`randbits.tests` relies on that
addressing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

import numpy as np

from .constants import (
    BIT_COUNT,
    BLOCK_BITS,
    BLOCK_COUNT,
    BLOCK_MASK,
    BYTES_PER_BLOCK,
    INITIAL_SEED,
    LCG_INCREMENT,
    LCG_MULTIPLIER,
    STATE_MASK,
)
from .errors import BitIndexError
from .tests.statistical import LongestRunTest, MonobitTest, PokerTest, RunLengthTest


def next_random_block(state: int) -> Tuple[int, int]:
    """Advance the LCG four times and return ``(block, new_state)``.

    Each step keeps the upper half of the 32-bit state and folds its high
    byte into its low byte; the four resulting bytes are packed most
    significant byte first.
    """

    block = 0
    for _ in range(BYTES_PER_BLOCK):
        state = (LCG_MULTIPLIER * state + LCG_INCREMENT) & STATE_MASK
        upper = state >> 16
        block = ((block << 8) | ((upper >> 8) ^ (upper & 0xFF))) & BLOCK_MASK
    return block, state


@dataclass(frozen=True)
class RandomBits:
    """Immutable bit sequence packed into 32-bit blocks."""

    blocks: Tuple[int, ...]
    bit_count: int = BIT_COUNT

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))
        for block in self.blocks:
            if not 0 <= block <= BLOCK_MASK:
                raise ValueError(f"Block value {block} is not a 32-bit unsigned integer.")
        capacity = len(self.blocks) * BLOCK_BITS
        if self.bit_count < 0 or self.bit_count > capacity:
            raise ValueError(
                f"bit_count {self.bit_count} does not fit in {len(self.blocks)} blocks."
            )

    @classmethod
    def new(cls) -> "RandomBits":
        """Generate the reference sequence from the fixed seed."""

        state = INITIAL_SEED
        blocks: List[int] = []
        for _ in range(BLOCK_COUNT):
            block, state = next_random_block(state)
            blocks.append(block)
        return cls(blocks=tuple(blocks), bit_count=BIT_COUNT)

    @classmethod
    def from_bits(cls, bits: Iterable[int]) -> "RandomBits":
        """Pack an arbitrary bit iterable using the generator's addressing."""

        blocks: List[int] = []
        count = 0
        for bit in bits:
            offset = count % BLOCK_BITS
            if offset == 0:
                blocks.append(0)
            if bit:
                blocks[-1] |= 1 << offset
            count += 1
        return cls(blocks=tuple(blocks), bit_count=count)

    def __len__(self) -> int:
        return self.bit_count

    def get_bit(self, idx: int) -> bool:
        if not 0 <= idx < self.bit_count:
            raise BitIndexError(
                f"Bit index {idx} out of range for a sequence of {self.bit_count} bits."
            )
        return ((self.blocks[idx // BLOCK_BITS] >> (idx % BLOCK_BITS)) & 1) == 1

    def iter_bits(self) -> Iterator[bool]:
        """Yield every bit in index order."""

        remaining = self.bit_count
        for block in self.blocks:
            for offset in range(min(BLOCK_BITS, remaining)):
                yield ((block >> offset) & 1) == 1
            remaining -= BLOCK_BITS
            if remaining <= 0:
                break

    def to_array(self) -> np.ndarray:
        """Return the bits as a ``uint8`` NumPy array in index order."""

        packed = np.asarray(self.blocks, dtype="<u4").view(np.uint8)
        return np.unpackbits(packed, bitorder="little")[: self.bit_count]

    # ------------------------------------------------------------------
    # Battery entry points
    # ------------------------------------------------------------------
    def mono_bit_test(self) -> bool:
        return MonobitTest().run(self).passed

    def max_sequence_len_test(self) -> bool:
        return LongestRunTest().run(self).passed

    def pokker_test(self) -> bool:
        """Run the poker test; raises if the bit count is not a multiple of 4."""

        return PokerTest().run(self).passed

    def sequence_len_test(self) -> bool:
        return RunLengthTest().run(self).passed


def new() -> RandomBits:
    """Module level alias for :meth:`RandomBits.new`."""

    return RandomBits.new()


__all__ = ["RandomBits", "new", "next_random_block"]
