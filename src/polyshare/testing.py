"""Conformance checks for Field/Group backends.

Any backend can be driven through these to confirm the sharing engine
works over it. Each check raises AssertionError on the first failure, also
under python -O.

    from polyshare.testing import run_all
    run_all(MyGroup, rng=random.Random(1), invalid=MyGroup(MODULUS))

`invalid` is an element that fails is_valid(). The contract gives no
generic way to build one, so checks that need it are skipped without it.
"""

from itertools import combinations

from polyshare.errors import (
    DuplicateIndex, InsufficientShares, InvalidIndex, InvalidSecret,
    InvalidShareValue, InvalidThreshold,
)
from polyshare.shamir import Scheme, combine, split
from polyshare.share import Share


def _expect(error: type, fn, *args):
    try:
        fn(*args)
    except error:
        return
    raise AssertionError(f"{fn.__qualname__}{args!r} did not raise {error.__name__}")


def _valid_random(group: type, rng):
    while True:
        g = group.random(rng)
        if g.is_valid():
            return g


def check_split_invalid_args(group: type, rng=None):
    secret = _valid_random(group, rng)
    _expect(InvalidThreshold, split, secret, 0, 3, rng)
    _expect(InvalidThreshold, split, secret, 3, 2, rng)
    _expect(InvalidThreshold, Scheme, 0, 1)
    _expect(InvalidThreshold, Scheme, 3, 2)
    if not group.zero().is_valid():
        _expect(InvalidSecret, split, group.zero(), 2, 3, rng)


def check_combine_invalid(group: type, rng=None, invalid=None):
    shares = split(_valid_random(group, rng), 2, 3, rng)
    a, b, _ = shares
    _expect(InsufficientShares, combine, [])
    _expect(DuplicateIndex, combine, [a, Share(a.index, b.value)])
    _expect(InvalidIndex, combine, [Share(0, a.value), b])
    _expect(InsufficientShares, Scheme(2, 3).combine_shares, [a])
    if invalid is not None:
        _expect(InvalidShareValue, combine, [a, Share(b.index, invalid)])


def _ensure(condition: bool, message: str):
    # Explicit raise so the checks still fail under python -O
    if not condition:
        raise AssertionError(message)


def check_combine_single(group: type, rng=None):
    secret = _valid_random(group, rng)
    shares = split(secret, 1, 1, rng)
    _ensure(len(shares) == 1, f"split(k=1, n=1) gave {len(shares)} shares")
    _ensure(combine(shares) == secret, "single share did not combine to the secret")
    # k=1 shares all equal the secret, at any index
    for share in split(secret, 1, 4, rng):
        _ensure(share.value == secret, f"k=1 share {share.index} differs from the secret")
        _ensure(combine([share]) == secret,
                f"k=1 share {share.index} did not combine to the secret")


def check_combine_all_combinations(group: type, rng=None, limit: int = 5):
    for threshold in range(1, limit + 1):
        secret = _valid_random(group, rng)
        shares = Scheme(threshold, limit).split_secret(secret, rng)
        indices = [s.index for s in shares]
        _ensure(indices == list(range(1, limit + 1)),
                f"threshold={threshold} gave indices {indices}")
        for size in range(threshold, limit + 1):
            for subset in combinations(shares, size):
                _ensure(combine(list(subset)) == secret,
                        f"threshold={threshold} subset={[s.index for s in subset]}")


def check_bytes_round_trip(group: type, rng=None, samples: int = 10):
    for _ in range(samples):
        g = _valid_random(group, rng)
        data = g.to_bytes()
        _ensure(len(data) == group.SIZE,
                f"to_bytes gave {len(data)} bytes, expected {group.SIZE}")
        _ensure(group.from_bytes(data) == g, f"{g!r} did not survive a byte round trip")
    for share in split(_valid_random(group, rng), 2, 3, rng):
        _ensure(Share.from_bytes(share.to_bytes(), group) == share,
                f"share {share.index} did not survive a byte round trip")


def run_all(group: type, rng=None, invalid=None):
    """Run every conformance check against `group`."""
    check_split_invalid_args(group, rng)
    check_combine_invalid(group, rng, invalid)
    check_combine_single(group, rng)
    check_combine_all_combinations(group, rng)
    check_bytes_round_trip(group, rng)
