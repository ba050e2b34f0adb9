"""Tests for Shamir secret sharing."""

from itertools import combinations

import pytest
from polyshare.errors import (
    DuplicateIndex, InsufficientShares, InvalidFieldOperation, InvalidSecret,
    InvalidShareValue, InvalidThreshold,
)
from polyshare.gf61 import GF61, M61
from polyshare.modring import BN3072, ModularRing
from polyshare.shamir import (
    Scheme, combine, consistency_check, reconstruct_at, split,
)
from polyshare.share import Share


class TestRoundTrip:
    """Secret sharing and reconstruction."""

    def test_basic_3_of_5(self, group, rng):
        secret = group.random(rng)
        shares = split(secret, 3, 5, rng)
        assert len(shares) == 5
        # Any 3 shares reconstruct
        assert combine(shares[:3]) == secret
        assert combine(shares[1:4]) == secret
        assert combine(shares[2:]) == secret

    def test_scenario_42(self, group, rng):
        secret = group.from_int(42)
        shares = split(secret, 3, 5, rng)
        assert [s.index for s in shares] == [1, 2, 3, 4, 5]
        by_index = {s.index: s for s in shares}
        assert combine([by_index[2], by_index[4], by_index[5]]) == secret

    def test_below_threshold_not_detected(self, rng):
        """Two of a 3-of-5 split combine without error, to some other value."""
        secret = GF61(42)
        shares = split(secret, 3, 5, rng)
        result = combine([shares[0], shares[2]])
        assert result.is_valid()
        assert result != secret

    def test_k_equals_1(self, group, rng):
        """k=1: constant polynomial, every share = secret."""
        secret = group.random(rng)
        shares = split(secret, 1, 5, rng)
        for _, y in shares:
            assert y == secret
        assert combine([shares[3]]) == secret

    def test_k_equals_n(self, group, rng):
        """k=n: need all shares."""
        secret = group.random(rng)
        shares = split(secret, 7, 7, rng)
        assert combine(shares) == secret

    def test_various_thresholds(self, rng):
        for k, n in [(2, 3), (3, 5), (7, 10), (14, 20), (10, 10)]:
            secret = GF61.random(rng)
            shares = split(secret, k, n, rng)
            # Exactly k shares suffice
            assert combine(shares[:k]) == secret
            assert combine(shares[-k:]) == secret

    def test_every_subset_agrees(self, rng):
        """All k-subsets and all larger subsets give the same secret."""
        secret = GF61.random(rng)
        shares = split(secret, 3, 6, rng)
        for size in range(3, 7):
            for subset in combinations(shares, size):
                assert combine(list(subset)) == secret

    def test_order_independent(self, rng):
        secret = GF61.random(rng)
        shares = split(secret, 4, 6, rng)
        picked = [shares[5], shares[0], shares[3], shares[2]]
        assert combine(picked) == secret
        assert combine(list(reversed(picked))) == secret

    def test_zero_secret(self, rng):
        shares = split(GF61(0), 3, 5, rng)
        assert combine(shares[:3]) == GF61(0)

    def test_max_secret(self, rng):
        shares = split(GF61(M61 - 1), 3, 5, rng)
        assert combine(shares[:3]) == GF61(M61 - 1)

    def test_single_share_returns_value(self, group, rng):
        value = group.random(rng)
        assert combine([Share(9, value)]) == value

    def test_reconstruct_at_nonzero(self, rng):
        """Reconstruct at arbitrary point, not just 0."""
        secret = GF61.random(rng)
        shares = split(secret, 5, 10, rng)
        # The polynomial evaluated at x=8 should equal the share at x=8
        assert reconstruct_at(shares[:5], 8) == shares[7].value
        assert reconstruct_at(shares[:5], 3) == shares[2].value
        assert reconstruct_at(shares[:5], 0) == secret

    def test_known_line(self):
        # f(x) = 4x - 1 through (1, 3) and (2, 7)
        shares = [Share(1, GF61(3)), Share(2, GF61(7))]
        assert reconstruct_at(shares, 3) == GF61(11)
        assert combine(shares) == GF61(M61 - 1)


class TestSecrecy:
    """k-1 shares reveal no information about the secret."""

    def test_k_minus_1_shares_fit_any_secret(self, rng):
        """With k-1 shares, every candidate secret is equally consistent."""
        k = 5
        shares = split(GF61(42), k, 10, rng)
        subset = shares[:k - 1]

        # The k-1 shares plus (0, candidate) define a unique degree-(k-1)
        # polynomial through all of them, for every candidate.
        for candidate in range(20):
            points = subset + [Share(100, GF61(candidate))]
            assert reconstruct_at(points, 100) == GF61(candidate)
            for share in subset:
                assert reconstruct_at(points, share.index) == share.value


class TestCorruptionDetection:
    """Consistency check finds tampered shares."""

    def test_no_corruption(self, rng):
        shares = split(GF61.random(rng), 5, 10, rng)
        assert consistency_check(shares, 4) == []

    def test_single_corruption(self, rng):
        shares = split(GF61.random(rng), 5, 10, rng)
        x, y = shares[3]
        shares[3] = Share(x, y + GF61(1))
        assert 3 in consistency_check(shares, 4)

    def test_multiple_corruptions(self, rng):
        shares = split(GF61.random(rng), 3, 10, rng)
        for idx in [1, 5]:
            x, y = shares[idx]
            shares[idx] = Share(x, y + GF61(7))
        corrupt = consistency_check(shares, 2)
        assert 1 in corrupt
        assert 5 in corrupt

    def test_minimal_redundancy(self, rng):
        """With exactly k+1 shares and degree k-1, can detect 1 corruption."""
        shares = split(GF61.random(rng), 3, 4, rng)
        x, y = shares[0]
        shares[0] = Share(x, y + GF61(1))
        assert 0 in consistency_check(shares, 2)

    def test_no_redundancy_returns_empty(self, rng):
        """With exactly degree+1 shares, can't detect corruption."""
        shares = split(GF61.random(rng), 3, 3, rng)
        assert consistency_check(shares, 2) == []

    def test_works_over_bn3072(self, rng):
        shares = split(BN3072.random(rng), 2, 4, rng)
        x, y = shares[2]
        shares[2] = Share(x, y + BN3072(1))
        assert 2 in consistency_check(shares, 1)


class TestScheme:
    """Threshold configuration object."""

    def test_round_trip(self, group, rng):
        scheme = Scheme(3, 5)
        secret = group.random(rng)
        shares = scheme.split_secret(secret, rng)
        assert len(shares) == 5
        assert scheme.combine_shares(shares[1:4]) == secret
        assert scheme.combine_shares(shares) == secret

    def test_insufficient(self, rng):
        scheme = Scheme(3, 5)
        shares = scheme.split_secret(GF61(42), rng)
        with pytest.raises(InsufficientShares):
            scheme.combine_shares(shares[:2])

    def test_invalid_configuration(self):
        with pytest.raises(InvalidThreshold):
            Scheme(0, 3)
        with pytest.raises(InvalidThreshold):
            Scheme(4, 3)

    def test_repr(self):
        assert repr(Scheme(2, 3)) == 'Scheme(threshold=2, limit=3)'


class TestEdgeCases:
    """Input validation."""

    def test_k_less_than_1(self):
        with pytest.raises(InvalidThreshold):
            split(GF61(42), 0, 5)

    def test_n_less_than_k(self):
        with pytest.raises(InvalidThreshold):
            split(GF61(42), 5, 3)

    def test_threshold_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            split(GF61(42), 0, 5)

    def test_invalid_secret(self):
        with pytest.raises(InvalidSecret):
            split(GF61(M61), 3, 5)
        with pytest.raises(InvalidSecret):
            split(BN3072.zero(), 2, 3)

    def test_failed_split_consumes_no_randomness(self, rng):
        state = rng.getstate()
        with pytest.raises(InvalidThreshold):
            split(GF61(1), 4, 3, rng)
        assert rng.getstate() == state

    def test_empty_shares(self):
        with pytest.raises(InsufficientShares):
            combine([])

    def test_duplicate_index(self, rng):
        shares = split(GF61(42), 2, 3, rng)
        with pytest.raises(DuplicateIndex):
            combine([shares[0], Share(shares[0].index, shares[1].value)])

    def test_out_of_range_share(self, group, invalid_element, rng):
        shares = split(group.random(rng), 2, 3, rng)
        with pytest.raises(InvalidShareValue):
            combine([shares[0], Share(shares[1].index, invalid_element)])

    def test_index_collision_modulo_field(self):
        """Indices distinct as integers but equal in the field."""
        Z = ModularRing.configure(13, 1, name='Z13')
        shares = [Share(1, Z(2)), Share(14, Z(5))]
        with pytest.raises(InvalidFieldOperation):
            combine(shares)
