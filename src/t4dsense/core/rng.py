"""
Seeded randomness and stable hashing.

Every reproducible per-value draw in the encoders goes through these helpers:
a value is hashed to a seed with a digest that does not depend on
PYTHONHASHSEED, and the seed drives a numpy PCG64 generator. Identical seeds
always give identical sequences, so encodings survive process restarts.
"""

import hashlib
from typing import Any

import numpy as np


def canonical_text(value: Any) -> str:
    """
    Text form of a value used for hashing.

    Tuples and lists share one form so that a coordinate hashes the same
    whichever sequence type carries it; sets are sorted by their members'
    canonical text.
    """
    if isinstance(value, (tuple, list)):
        return "[" + ", ".join(canonical_text(v) for v in value) + "]"
    if isinstance(value, (set, frozenset)):
        return "#{" + ", ".join(sorted(canonical_text(v) for v in value)) + "}"
    return repr(value)


def stable_hash(value: Any) -> int:
    """Deterministic 64-bit hash of a value's canonical text."""
    digest = hashlib.sha256(canonical_text(value).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


def make_random(seed: int) -> np.random.Generator:
    """Reproducible random stream for a seed."""
    return np.random.Generator(np.random.PCG64(np.random.SeedSequence(seed)))


def split(stream: np.random.Generator) -> tuple[np.random.Generator, np.random.Generator]:
    """Two statistically independent child streams of one parent."""
    a, b = stream.spawn(2)
    return a, b


def random_int(stream: np.random.Generator, bound: int) -> int:
    """Uniform integer in [0, bound)."""
    return int(stream.integers(bound))


def random_double(stream: np.random.Generator) -> float:
    """Uniform float in [0, 1)."""
    return float(stream.random())


def random_ints(stream: np.random.Generator, bound: int, count: int) -> list[int]:
    """``count`` uniform integers in [0, bound)."""
    return [int(i) for i in stream.integers(bound, size=count)]
