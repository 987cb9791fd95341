"""
Scalar and categorical encoders.

- LinearEncoder: a contiguous window of active bits slides across the bit
  space as a number moves through its range, so nearby numbers overlap.
- CategoryEncoder: each known category owns a disjoint block of bits.
- NoEncoder: the input already is a bit set.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import Any

from t4dsense.core.config import get_settings
from t4dsense.core.topology import Topology
from t4dsense.core.types import EMPTY_BITS, BitSet, BitVotes
from t4dsense.core.validation import (
    ValidationError,
    validate_active_bits,
    validate_bounds,
    validate_list,
    validate_number,
    validate_positive_int,
)
from t4dsense.encoding.base import Encoder
from t4dsense.encoding.decode import (
    DecodeCandidate,
    decode_by_brute_force,
    default_n,
    score_candidate,
    total_votes,
)

logger = logging.getLogger(__name__)


class LinearEncoder(Encoder):
    """
    Encodes a number in [lower, upper] as a sliding window of active bits.

    The window start is ``floor(z * (size - n_active))`` with
    ``z = (x - lower) / (upper - lower)``; values outside the range clamp
    to the nearest end. Larger inputs never move the window backwards.

    Example:
        enc = LinearEncoder(100, n_active=10, lower=0, upper=10)
        enc.encode(0)    # {0..9}
        enc.encode(10)   # {90..99}
        enc.encode(-5)   # same as encode(0)
    """

    def __init__(
        self,
        dimensions: int | Sequence[int],
        n_active: int,
        lower: float,
        upper: float,
        decode_samples: int | None = None,
    ):
        self._topology = Topology(dimensions)
        self.n_active = validate_active_bits(n_active, self._topology.size)
        self.lower, self.upper = validate_bounds(lower, upper)

        settings = get_settings()
        if decode_samples is None:
            decode_samples = settings.linear_decode_samples
        self.decode_samples = validate_positive_int(decode_samples, "decode_samples")
        self._unit_step_band = (
            settings.linear_unit_step_min_span,
            settings.linear_unit_step_max_span,
        )
        logger.debug(f"Created {self!r}")

    @property
    def topology(self) -> Topology:
        return self._topology

    def window_start(self, x: float) -> int:
        """First active bit for a (clamped) value."""
        x = min(max(x, self.lower), self.upper)
        z = (x - self.lower) / (self.upper - self.lower)
        return int(math.floor(z * (self.size - self.n_active)))

    def encode(self, value: Any) -> BitSet:
        if value is None:
            return EMPTY_BITS
        x = validate_number(value, "value")
        if math.isnan(x):
            return EMPTY_BITS
        start = self.window_start(x)
        return frozenset(range(start, start + self.n_active))

    def sample_values(self) -> list[float]:
        """
        Decode candidate grid over the range.

        Step is 1 when the span falls inside the unit-step band, otherwise
        span / decode_samples. The upper bound is always included.
        """
        span = self.upper - self.lower
        lo_span, hi_span = self._unit_step_band
        step = 1.0 if lo_span < span < hi_span else span / self.decode_samples
        n_steps = math.ceil(span / step - 1e-9)
        return [self.lower + i * step for i in range(n_steps)] + [self.upper]

    def decode(self, bit_votes: BitVotes, n: int | None = None) -> list[DecodeCandidate]:
        return decode_by_brute_force(self.encode, self.sample_values(), bit_votes, default_n(n))

    def __repr__(self) -> str:
        return (
            f"LinearEncoder(dimensions={self._topology.dimensions}, n_active={self.n_active}, "
            f"lower={self.lower}, upper={self.upper})"
        )


class CategoryEncoder(Encoder):
    """
    Encodes one of a fixed list of categories as a disjoint block of bits.

    Each category gets ``size // len(values)`` bits, laid out in the order
    the categories were given. Unknown values encode to the empty set.
    """

    def __init__(self, dimensions: int | Sequence[int], values: Iterable[Any]):
        self._topology = Topology(dimensions)
        self.values = tuple(validate_list(list(values), "values", min_length=1))

        self._index: dict[Any, int] = {}
        for i, value in enumerate(self.values):
            if value in self._index:
                raise ValidationError("values", f"Duplicate category: {value!r}", value)
            self._index[value] = i

        self.n_active = self._topology.size // len(self.values)
        if self.n_active < 1:
            raise ValidationError(
                "values",
                f"{len(self.values)} categories do not fit in {self._topology.size} bits",
            )
        logger.debug(f"Created {self!r}")

    @property
    def topology(self) -> Topology:
        return self._topology

    def encode(self, value: Any) -> BitSet:
        if value is None:
            return EMPTY_BITS
        try:
            idx = self._index.get(value)
        except TypeError:
            # Unhashable values cannot be categories
            return EMPTY_BITS
        if idx is None:
            return EMPTY_BITS
        start = idx * self.n_active
        return frozenset(range(start, start + self.n_active))

    def decode(self, bit_votes: BitVotes, n: int | None = None) -> list[DecodeCandidate]:
        return decode_by_brute_force(self.encode, self.values, bit_votes, default_n(n))

    def __repr__(self) -> str:
        return f"CategoryEncoder(dimensions={self._topology.dimensions}, values={list(self.values)!r})"


class NoEncoder(Encoder):
    """
    Pass-through encoder for inputs that already are bit sets.

    Decoding is the identity as well: the single decoded value is the set
    of voted bit indices, so callers treat bit indices as the values
    themselves.
    """

    def __init__(self, dimensions: int | Sequence[int]):
        self._topology = Topology(dimensions)
        logger.debug(f"Created {self!r}")

    @property
    def topology(self) -> Topology:
        return self._topology

    def encode(self, value: Iterable[int] | None) -> BitSet:
        if value is None:
            return EMPTY_BITS
        bits = frozenset(int(b) for b in value)
        out_of_range = [b for b in bits if not 0 <= b < self.size]
        if out_of_range:
            raise ValidationError(
                "value",
                f"Bits outside [0, {self.size}): {sorted(out_of_range)[:10]}",
                out_of_range,
            )
        return bits

    def decode(self, bit_votes: BitVotes, n: int | None = None) -> list[DecodeCandidate]:
        total = total_votes(bit_votes)
        if total <= 0 or n == 0:
            return []
        voted = frozenset(bit_votes)
        return [score_candidate(voted, voted, bit_votes, total)]

    def __repr__(self) -> str:
        return f"NoEncoder(dimensions={self._topology.dimensions})"
