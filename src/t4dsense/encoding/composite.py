"""
Encoder combinators.

ConcatEncoder lays several encoders' bit spaces end to end and encodes a
tuple element-wise; SplatEncoder applies one encoder to every element of a
collection and unions the results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from t4dsense.core.topology import Topology, combined_dimensions
from t4dsense.core.types import EMPTY_BITS, BitSet, BitVotes
from t4dsense.core.validation import ValidationError, validate_list
from t4dsense.encoding.base import Encoder
from t4dsense.encoding.decode import DecodeCandidate
from t4dsense.encoding.utils import align_indices, split_votes

logger = logging.getLogger(__name__)


class ConcatEncoder(Encoder):
    """
    Encodes a tuple with one encoder per element in a combined bit space.

    Component i's bits are shifted by the total width of components
    0..i-1. Decoding splits the votes at the same boundaries and returns
    one ranked list per component.

    Example:
        enc = ConcatEncoder([LinearEncoder(50, 5, 0, 1), CategoryEncoder(30, "abc")])
        enc.encode((0.5, "b"))   # linear bits in [0, 50), category bits in [50, 80)
    """

    def __init__(self, encoders: Sequence[Encoder]):
        self.encoders: tuple[Encoder, ...] = tuple(validate_list(encoders, "encoders", min_length=1))
        self.widths = [e.size for e in self.encoders]
        self._topology = combined_dimensions(e.topology for e in self.encoders)
        self.supports_decode = any(e.supports_decode for e in self.encoders)
        logger.debug(f"Created {self!r}")

    @property
    def topology(self) -> Topology:
        return self._topology

    def encode(self, value: Sequence[Any] | None) -> BitSet:
        if value is None:
            return EMPTY_BITS
        if len(value) != len(self.encoders):
            raise ValidationError(
                "value",
                f"Expected {len(self.encoders)} elements, got {len(value)}",
                value,
            )
        parts = align_indices(self.widths, (e.encode(v) for e, v in zip(self.encoders, value)))
        return frozenset().union(*parts)

    def decode(self, bit_votes: BitVotes, n: int | None = None) -> list[list[DecodeCandidate]]:
        results = []
        for encoder, votes in zip(self.encoders, split_votes(self.widths, bit_votes)):
            if encoder.supports_decode:
                results.append(encoder.decode(votes, n))
            else:
                logger.debug(f"Skipping decode for {encoder!r}")
                results.append([])
        return results

    def __repr__(self) -> str:
        return f"ConcatEncoder({list(self.encoders)!r})"


class SplatEncoder(Encoder):
    """
    Encodes an unordered collection as the union of its elements' bits.

    Multiplicity and order are lost: [a, a, b] and [b, a] encode the same.
    Decoding delegates to the wrapped encoder.
    """

    def __init__(self, encoder: Encoder):
        self.encoder = encoder
        self.supports_decode = encoder.supports_decode
        logger.debug(f"Created {self!r}")

    @property
    def topology(self) -> Topology:
        return self.encoder.topology

    def encode(self, value: Iterable[Any] | None) -> BitSet:
        if value is None:
            return EMPTY_BITS
        return frozenset().union(*(self.encoder.encode(v) for v in value if v is not None))

    def decode(self, bit_votes: BitVotes, n: int | None = None) -> list[DecodeCandidate]:
        return self.encoder.decode(bit_votes, n)

    def __repr__(self) -> str:
        return f"SplatEncoder({self.encoder!r})"


def ensplat(encoder: Encoder) -> SplatEncoder:
    """Wrap an encoder so it accepts a collection of values."""
    return SplatEncoder(encoder)
