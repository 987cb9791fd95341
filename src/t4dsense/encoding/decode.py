"""
Brute-force decoding.

There is no closed-form inverse from bit votes back to values, so finite
domain encoders search a candidate list: every candidate is encoded and
scored by how well its bits agree with the votes.

Scores per candidate with bit set X, votes V and total vote weight T:
- bit_coverage:  |X & keys(V)| / max(1, |X|)
- bit_precision: |X & keys(V)| / max(1, |keys(V)|)
- votes_frac:    sum(V[X & keys(V)]) / max(1, T)
- votes_per_bit: sum(V[X & keys(V)]) / max(1, |X|)

Candidates are ranked by (votes_frac, bit_coverage, bit_precision),
descending. Candidates with no votes are dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass
from typing import Any

from t4dsense.core.config import get_settings
from t4dsense.core.types import BitSet, BitVotes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodeCandidate:
    """A candidate value with its agreement statistics."""

    value: Any
    votes_frac: float
    bit_coverage: float
    bit_precision: float
    votes_per_bit: float

    @property
    def rank_key(self) -> tuple[float, float, float]:
        return (self.votes_frac, self.bit_coverage, self.bit_precision)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def total_votes(bit_votes: BitVotes) -> float:
    return float(sum(bit_votes.values()))


def score_candidate(
    value: Any,
    bits: BitSet,
    bit_votes: BitVotes,
    total: float | None = None,
) -> DecodeCandidate:
    """
    Score one candidate's bit set against bit votes.

    Args:
        value: Candidate value the bits encode
        bits: Encoded bit set of the candidate
        bit_votes: Vote weight per bit index
        total: Precomputed total vote weight (computed if None)

    Returns:
        DecodeCandidate with all four statistics
    """
    if total is None:
        total = total_votes(bit_votes)

    hits = [b for b in bits if b in bit_votes]
    votes = float(sum(bit_votes[b] for b in hits))
    n_bits = max(1, len(bits))

    return DecodeCandidate(
        value=value,
        votes_frac=votes / max(1.0, total),
        bit_coverage=len(hits) / n_bits,
        bit_precision=len(hits) / max(1, len(bit_votes)),
        votes_per_bit=votes / n_bits,
    )


def decode_by_brute_force(
    encode: Callable[[Any], BitSet],
    candidates: Iterable[Any],
    bit_votes: BitVotes,
    n: int | None = None,
) -> list[DecodeCandidate]:
    """
    Rank candidate values by agreement with bit votes.

    Args:
        encode: Encoding function for the candidate domain
        candidates: Finite list of values to try
        bit_votes: Vote weight per bit index (not mutated)
        n: Maximum number of results (all if None)

    Returns:
        Candidates ranked best first; empty when total votes are zero
    """
    total = total_votes(bit_votes)
    if total <= 0:
        return []

    scored = []
    for value in candidates:
        candidate = score_candidate(value, encode(value), bit_votes, total)
        if candidate.votes_frac > 0:
            scored.append(candidate)

    # Stable sort keeps candidate order for exact ties
    scored.sort(key=lambda c: c.rank_key, reverse=True)
    logger.debug(f"Brute-force decode kept {len(scored)} candidates (total votes {total:.3f})")

    return scored if n is None else scored[:n]


def default_n(n: int | None) -> int:
    """Configured result limit when the caller gives none."""
    return get_settings().decode_default_n if n is None else n
