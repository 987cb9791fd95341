"""
Unit tests for brute-force decoding.
"""

import pytest

from t4dsense.encoding.composite import ConcatEncoder, ensplat
from t4dsense.encoding.decode import (
    DecodeCandidate,
    decode_by_brute_force,
    default_n,
    score_candidate,
)
from t4dsense.encoding.scalar import CategoryEncoder, LinearEncoder, NoEncoder
from t4dsense.encoding.spatial import Linear2DEncoder
from t4dsense.encoding.unique import UniqueEncoder

# Toy domain: 5 -> {3, 4}, 9 -> {7}, 1 -> {0}
TOY_BITS = {5: frozenset({3, 4}), 9: frozenset({7}), 1: frozenset({0})}


def toy_encode(value):
    return TOY_BITS.get(value, frozenset())


class TestScoreCandidate:
    """Tests for the four agreement statistics."""

    def test_statistics(self):
        votes = {3: 5.0, 4: 5.0, 7: 1.0}
        c = score_candidate(5, frozenset({3, 4, 10}), votes)
        assert c.value == 5
        assert c.bit_coverage == pytest.approx(2 / 3)
        assert c.bit_precision == pytest.approx(2 / 3)
        assert c.votes_frac == pytest.approx(10 / 11)
        assert c.votes_per_bit == pytest.approx(10 / 3)

    def test_small_totals_use_floor_of_one(self):
        """Denominators are floored at 1."""
        c = score_candidate("x", frozenset({0}), {0: 0.25})
        assert c.votes_frac == pytest.approx(0.25)
        assert c.votes_per_bit == pytest.approx(0.25)

    def test_empty_bits(self):
        c = score_candidate("x", frozenset(), {0: 1.0})
        assert c.votes_frac == 0.0
        assert c.bit_coverage == 0.0

    def test_to_dict(self):
        c = DecodeCandidate(value=1, votes_frac=0.5, bit_coverage=1.0, bit_precision=0.25, votes_per_bit=2.0)
        assert c.to_dict() == {
            "value": 1,
            "votes_frac": 0.5,
            "bit_coverage": 1.0,
            "bit_precision": 0.25,
            "votes_per_bit": 2.0,
        }


class TestDecodeByBruteForce:
    """Tests for ranking candidates against bit votes."""

    def test_ranks_by_votes(self):
        """{3:5, 4:5, 7:1} ranks 5 above 9."""
        results = decode_by_brute_force(toy_encode, [9, 5, 1], {3: 5, 4: 5, 7: 1}, n=5)
        assert [r.value for r in results] == [5, 9]

    def test_drops_zero_vote_candidates(self):
        results = decode_by_brute_force(toy_encode, [1, 5], {3: 1.0}, n=5)
        assert [r.value for r in results] == [5]

    def test_coverage_breaks_votes_tie(self):
        """Equal votes_frac falls back to bit coverage."""
        encode = {"tight": frozenset({1}), "loose": frozenset({1, 50, 51})}.get
        results = decode_by_brute_force(encode, ["loose", "tight"], {1: 1.0}, n=2)
        assert [r.value for r in results] == ["tight", "loose"]

    def test_precision_breaks_coverage_tie(self):
        """Equal votes_frac and coverage fall back to bit precision."""
        encode = {"one": frozenset({1}), "two": frozenset({1, 2})}.get
        votes = {1: 1.0, 2: 0.0, 9: 0.0}
        results = decode_by_brute_force(encode, ["one", "two"], votes, n=2)
        assert [r.value for r in results] == ["two", "one"]

    def test_limit(self):
        results = decode_by_brute_force(toy_encode, [1, 5, 9], {0: 1, 3: 1, 7: 1}, n=2)
        assert len(results) == 2

    def test_no_limit(self):
        results = decode_by_brute_force(toy_encode, [1, 5, 9], {0: 1, 3: 1, 7: 1})
        assert len(results) == 3

    def test_zero_total(self):
        assert decode_by_brute_force(toy_encode, [1, 5, 9], {3: 0.0}, n=5) == []

    def test_empty_candidates(self):
        assert decode_by_brute_force(toy_encode, [], {3: 1.0}, n=5) == []

    def test_votes_not_mutated(self):
        votes = {3: 5, 4: 5, 7: 1}
        decode_by_brute_force(toy_encode, [5, 9], votes, n=5)
        assert votes == {3: 5, 4: 5, 7: 1}

    def test_default_n(self):
        assert default_n(None) == 5
        assert default_n(2) == 2

    def test_default_n_from_env(self, monkeypatch):
        from t4dsense.core.config import reset_settings

        monkeypatch.setenv("T4DSENSE_DECODE_DEFAULT_N", "12")
        reset_settings()
        assert default_n(None) == 12


class TestEmptyVotesEverywhere:
    """Every decodable encoder returns [] for empty votes."""

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: LinearEncoder(100, 10, 0, 10),
            lambda: CategoryEncoder(40, ["a", "b"]),
            lambda: NoEncoder(32),
            lambda: UniqueEncoder(256, 8),
            lambda: Linear2DEncoder((8, 8), 4, 1.0, 1.0),
            lambda: ensplat(CategoryEncoder(40, ["a", "b"])),
        ],
        ids=["linear", "category", "noop", "unique", "linear2d", "splat"],
    )
    def test_empty_votes(self, factory):
        encoder = factory()
        if isinstance(encoder, UniqueEncoder):
            encoder.encode("seen")
        assert encoder.decode({}, n=5) == []

    def test_concat_empty_votes(self):
        enc = ConcatEncoder([LinearEncoder(20, 2, 0, 1), CategoryEncoder(20, ["a"])])
        assert enc.decode({}, n=5) == [[], []]
