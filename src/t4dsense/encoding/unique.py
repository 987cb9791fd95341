"""
Unique encoder: an unrelated random bit set per distinct value.

Each value seeds a random stream from its stable hash; positions are drawn
uniformly over the bit space with some oversampling to absorb collisions,
duplicates are discarded and the first ``n_active`` survivors are kept.
When too many draws collide the set comes out shorter than ``n_active``.

The encoder memoises every value it has seen. The cache only grows, and
once a value is cached its bit set never changes for the life of the
instance. Concurrent first encounters of the same value converge on the
one bit set that reaches the cache first.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Hashable, Mapping, Sequence
from typing import Any

from t4dsense.core.config import get_settings
from t4dsense.core.rng import make_random, random_ints, stable_hash
from t4dsense.core.topology import Topology
from t4dsense.core.types import EMPTY_BITS, BitSet, BitVotes
from t4dsense.core.validation import ValidationError, validate_active_bits
from t4dsense.encoding.base import Encoder
from t4dsense.encoding.decode import DecodeCandidate, decode_by_brute_force, default_n

logger = logging.getLogger(__name__)


def cache_key(value: Any) -> Hashable:
    """
    Hashable stand-in for a value.

    Lists become tuples and sets become frozensets, recursively, so a
    coordinate read as a list shares its bits with the same tuple.
    Mappings become frozensets of (key, value) pairs.

    Raises:
        TypeError: If the value still is not hashable
    """
    if isinstance(value, (list, tuple)):
        return tuple(cache_key(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(cache_key(v) for v in value)
    if isinstance(value, Mapping):
        return frozenset((cache_key(k), cache_key(v)) for k, v in value.items())
    hash(value)
    return value


class UniqueEncoder(Encoder):
    """
    Random, memoised bit sets for arbitrary hashable values.

    Decoding only considers values this instance has already encoded.
    Lists, sets and mappings are keyed by their hashable equivalents (see
    ``cache_key``), so ``known_values`` reports tuples for list inputs.
    Values that stay unhashable encode to the empty set.

    Example:
        enc = UniqueEncoder(2048, n_active=20)
        bits = enc.encode("alice")
        assert enc.encode("alice") == bits
    """

    def __init__(
        self,
        dimensions: int | Sequence[int],
        n_active: int,
        oversample: float | None = None,
    ):
        self._topology = Topology(dimensions)
        self.n_active = validate_active_bits(n_active, self._topology.size)

        oversample = get_settings().unique_oversample if oversample is None else oversample
        if oversample < 1.0:
            raise ValidationError("oversample", f"Must be >= 1.0, got {oversample}", oversample)
        self.n_draws = math.ceil(self.n_active * oversample)

        self._cache: dict[Hashable, BitSet] = {}
        self._lock = threading.Lock()
        logger.debug(f"Created {self!r}")

    @property
    def topology(self) -> Topology:
        return self._topology

    def generate(self, value: Hashable) -> BitSet:
        """Uncached bit set for a value (pure, seeded by the value's hash)."""
        stream = make_random(stable_hash(value))
        draws = random_ints(stream, self.size, self.n_draws)
        distinct = list(dict.fromkeys(draws))
        return frozenset(distinct[: self.n_active])

    def encode(self, value: Any) -> BitSet:
        if value is None:
            return EMPTY_BITS
        try:
            value = cache_key(value)
        except TypeError:
            logger.debug(f"Unhashable value of type {type(value).__name__}; encoding as empty")
            return EMPTY_BITS

        cached = self._cache.get(value)
        if cached is not None:
            return cached

        # Generate outside the lock so different values never wait on each other
        bits = self.generate(value)
        with self._lock:
            winner = self._cache.setdefault(value, bits)
            cache_size = len(self._cache)

        if winner is bits:
            logger.debug(f"Unique cache grew to {cache_size} values")
        else:
            logger.debug(f"Lost insert race for {value!r}; using cached bits")
        return winner

    @property
    def known_values(self) -> list[Hashable]:
        """Snapshot of every value encoded so far, in first-seen order."""
        with self._lock:
            return list(self._cache)

    def __len__(self) -> int:
        return len(self._cache)

    def decode(self, bit_votes: BitVotes, n: int | None = None) -> list[DecodeCandidate]:
        return decode_by_brute_force(self.encode, self.known_values, bit_votes, default_n(n))

    def __repr__(self) -> str:
        return f"UniqueEncoder(dimensions={self._topology.dimensions}, n_active={self.n_active})"
