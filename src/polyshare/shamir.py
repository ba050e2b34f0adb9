"""Shamir secret sharing over an abstract Field/Group pair.

Information-theoretically secure threshold sharing: a secret is the
constant term of a random degree-(k-1) polynomial, shares are its values
at x = 1..n, and any k shares recover f(0) by Lagrange interpolation.

Nothing here depends on a concrete modulus. The algebra comes from the
secret's type (see polyshare.algebra); GF61 and BN3072 are ready-made
backends.
"""

import logging

from polyshare.algebra import Group
from polyshare.errors import InvalidSecret, InvalidThreshold
from polyshare.polynomial import Polynomial
from polyshare.share import Share
from polyshare.validation import validate

logger = logging.getLogger(__name__)


def split(secret: Group, k: int, n: int, rng=None) -> list:
    """Split a secret into n shares with threshold k.

    Args:
        secret: Group element to share.
        k: Minimum shares needed to reconstruct (threshold).
        n: Total number of shares to generate.
        rng: Optional random.Random instance for deterministic tests.
            Defaults to the secrets CSPRNG.

    Returns:
        List of Share(x_i, f(x_i)) for x_i in 1..n, where f is a random
        degree-(k-1) polynomial with f(0) = secret.

    Raises:
        InvalidThreshold: k < 1 or k > n.
        InvalidSecret: secret fails its group's validity test.
    """
    if k < 1:
        raise InvalidThreshold(f"Threshold k must be >= 1, got {k}")
    if n < k:
        raise InvalidThreshold(f"n must be >= k, got n={n}, k={k}")
    if not secret.is_valid():
        raise InvalidSecret(f"Secret is not a valid {type(secret).__name__} element")

    logger.debug("Splitting %s secret into %d shares, threshold %d",
                 type(secret).__name__, n, k)
    poly = Polynomial.generate(secret, k - 1, rng)
    return [Share(i, poly.evaluate(i)) for i in range(1, n + 1)]


def _lagrange_term(xs: list, i: int, target: int, value: Group) -> Group:
    """value * L_i(target), with L_i(t) = prod_{j!=i} (t - x_j) / (x_i - x_j).

    Numerator and denominator are exact integers; only their magnitudes
    enter the field, and the combined sign is applied by group negation.
    """
    xi = xs[i]
    num = 1
    den = 1
    for j, xj in enumerate(xs):
        if j == i:
            continue
        num *= target - xj
        den *= xi - xj

    field = type(value).scalars()
    basis = field.from_int(abs(num)) / field.from_int(abs(den))
    term = value * basis
    if (num < 0) != (den < 0):
        term = -term
    return term


def _interpolate(shares: list, target: int) -> Group:
    validate(shares)
    xs = [s.index for s in shares]
    result = type(shares[0].value).zero()
    for i, share in enumerate(shares):
        result = result + _lagrange_term(xs, i, target, share.value)
    return result


def combine(shares: list) -> Group:
    """Reconstruct the secret f(0) from k or more shares.

    Args:
        shares: Sequence of Share objects with distinct nonzero indices.

    Returns:
        The secret, via Lagrange interpolation at x=0. With fewer than k
        shares the result is some group element unrelated to the secret;
        use Scheme.combine_shares to check the threshold.
    """
    logger.debug("Combining %d shares", len(shares))
    return _interpolate(shares, 0)


def reconstruct_at(shares: list, target: int) -> Group:
    """Reconstruct the polynomial value at an arbitrary point.

    Args:
        shares: Sequence of Share objects.
        target: The x-value to evaluate at.

    Returns:
        f(target) via Lagrange interpolation.
    """
    return _interpolate(shares, target)


def consistency_check(shares: list, degree: int) -> list:
    """Detect corrupt shares by checking polynomial consistency.

    Given shares that should lie on a degree-d polynomial, uses
    leave-one-out interpolation to identify inconsistent shares.

    Args:
        shares: Sequence of Share objects. Must have len > degree + 1
            for anything to be detectable.
        degree: Expected polynomial degree.

    Returns:
        List of positions in `shares` that are inconsistent.
    """
    n = len(shares)
    if n <= degree + 1:
        return []

    corrupt = []
    for i in range(n):
        # Pick degree+1 shares excluding i
        others = [s for j, s in enumerate(shares) if j != i][:degree + 1]
        expected = reconstruct_at(others, shares[i].index)
        if expected != shares[i].value:
            corrupt.append(i)

    if corrupt:
        logger.warning("Consistency check flagged %d of %d shares", len(corrupt), n)
    return corrupt


class Scheme:
    """A (threshold, limit) sharing configuration.

    Same operations as split() and combine(), with the threshold
    remembered so combine_shares() can reject short share sets.
    """

    def __init__(self, threshold: int, limit: int):
        if threshold < 1:
            raise InvalidThreshold(f"Threshold must be >= 1, got {threshold}")
        if limit < threshold:
            raise InvalidThreshold(
                f"Limit must be >= threshold, got limit={limit}, threshold={threshold}")
        self.threshold = threshold
        self.limit = limit

    def split_secret(self, secret: Group, rng=None) -> list:
        return split(secret, self.threshold, self.limit, rng)

    def combine_shares(self, shares: list) -> Group:
        """Validate against the threshold, then reconstruct f(0)."""
        validate(shares, self.threshold)
        return combine(shares)

    def __repr__(self) -> str:
        return f"Scheme(threshold={self.threshold}, limit={self.limit})"
