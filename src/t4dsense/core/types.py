"""
Core data types shared by selectors, encoders and decoders.

A bit set is an immutable set of active positions in ``[0, size)``; order is
immaterial. Bit votes map bit positions to non-negative weights, usually the
aggregated predictions of a downstream model.
"""

from collections.abc import Mapping

# Active positions within an encoder's bit space
BitSet = frozenset[int]

# Bit index -> non-negative vote weight. Decoders never mutate it.
BitVotes = Mapping[int, float]

EMPTY_BITS: BitSet = frozenset()
