"""
Unit tests for UniqueEncoder.
"""

import threading

import numpy as np
import pytest

from t4dsense.core.validation import ValidationError
from t4dsense.encoding.unique import UniqueEncoder
from t4dsense.encoding.utils import overlap_matrix


class TestUniqueEncoder:
    """Tests for memoised random bit sets."""

    @pytest.fixture
    def encoder(self):
        return UniqueEncoder(2048, n_active=20)

    def test_initialization(self, encoder):
        """Oversampling defaults to 25% extra draws."""
        assert encoder.size == 2048
        assert encoder.n_active == 20
        assert encoder.n_draws == 25
        assert len(encoder) == 0

    def test_encode_size(self, encoder):
        """Sparse space yields the full active count."""
        bits = encoder.encode("alice")
        assert len(bits) == 20
        assert all(0 <= b < 2048 for b in bits)

    def test_stable_on_one_instance(self, encoder):
        """Same value encoded 1000 times gives identical bits."""
        first = encoder.encode("alice")
        for _ in range(1000):
            assert encoder.encode("alice") == first
        assert len(encoder) == 1

    def test_reproducible_across_instances(self):
        """Seeding from the value's stable hash survives new instances."""
        a = UniqueEncoder(2048, n_active=20)
        b = UniqueEncoder(2048, n_active=20)
        assert a.encode(("x", 1)) == b.encode(("x", 1))

    def test_distinct_values_rarely_overlap(self, encoder):
        """1000 distinct values overlap far below full overlap."""
        sets = [encoder.encode(f"value-{i}") for i in range(1000)]
        counts = overlap_matrix(sets, encoder.size)
        off_diagonal = counts[~np.eye(len(sets), dtype=bool)]
        # Expected overlap of two random 20-of-2048 sets is ~0.2 bits
        assert off_diagonal.max() < 10
        assert off_diagonal.mean() < 1.0

    def test_none_is_empty(self, encoder):
        assert encoder.encode(None) == frozenset()
        assert len(encoder) == 0

    def test_collisions_shorten_output(self):
        """A tiny space cannot supply n_active unique draws every time."""
        enc = UniqueEncoder(8, n_active=8)
        lengths = {len(enc.encode(i)) for i in range(50)}
        assert max(lengths) <= 8
        assert min(lengths) < 8

    def test_known_values_in_first_seen_order(self, encoder):
        for v in ["b", "a", "c", "a"]:
            encoder.encode(v)
        assert encoder.known_values == ["b", "a", "c"]

    def test_list_matches_tuple(self, encoder):
        """A list value shares its bits with the equal tuple."""
        assert encoder.encode([1, 2]) == encoder.encode((1, 2))
        assert len(encoder) == 1
        assert encoder.known_values == [(1, 2)]

    def test_nested_unhashables(self, encoder):
        """Nested lists, sets and mappings are normalised recursively."""
        bits = encoder.encode({"tags": [{"a", "b"}, [3]]})
        assert len(bits) == 20
        assert encoder.encode({"tags": [{"b", "a"}, (3,)]}) == bits

    def test_unhashable_is_empty(self, encoder):
        """Values that stay unhashable encode to nothing."""
        assert encoder.encode([bytearray(b"x")]) == frozenset()
        assert len(encoder) == 0

    def test_decode_list_value(self, encoder, votes_for):
        bits = encoder.encode([4, 5])
        encoder.encode([6, 7])
        assert encoder.decode(votes_for(bits), n=1)[0].value == (4, 5)

    def test_oversample_below_one(self):
        with pytest.raises(ValidationError):
            UniqueEncoder(100, n_active=10, oversample=0.5)

    def test_active_exceeds_size(self):
        with pytest.raises(ValidationError):
            UniqueEncoder(10, n_active=20)


class TestUniqueConcurrency:
    """Concurrent first encounters converge on one bit set."""

    def test_racing_first_encounters(self):
        """Threads racing on a new value all see the same object."""
        enc = UniqueEncoder(4096, n_active=40)
        barrier = threading.Barrier(16)
        results = []
        errors = []

        def worker():
            try:
                barrier.wait()
                results.append(enc.encode("contested"))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 16
        assert all(r is results[0] for r in results)
        assert len(enc) == 1

    def test_many_values_many_threads(self):
        """Parallel encoding of distinct values loses nothing."""
        enc = UniqueEncoder(2048, n_active=20)

        def worker(offset):
            for i in range(100):
                enc.encode((offset, i))

        threads = [threading.Thread(target=worker, args=(k,)) for k in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(enc) == 800
        fresh = UniqueEncoder(2048, n_active=20)
        assert enc.encode((3, 42)) == fresh.encode((3, 42))


class TestUniqueDecode:
    """Decode searches only values already seen."""

    def test_decode_known_value(self, votes_for):
        enc = UniqueEncoder(2048, n_active=20)
        for name in ["cat", "dog", "emu"]:
            enc.encode(name)
        results = enc.decode(votes_for(enc.encode("dog")), n=3)
        assert results[0].value == "dog"
        assert results[0].votes_frac == pytest.approx(1.0)

    def test_decode_unknown_domain(self, votes_for):
        """Votes from an unseen value's bits match nothing known."""
        enc = UniqueEncoder(2048, n_active=20)
        probe = UniqueEncoder(2048, n_active=20)
        results = enc.decode(votes_for(probe.encode("never-seen")), n=3)
        assert results == []
        assert len(enc) == 0

    def test_decode_empty_votes(self):
        enc = UniqueEncoder(2048, n_active=20)
        enc.encode("cat")
        assert enc.decode({}, n=3) == []
