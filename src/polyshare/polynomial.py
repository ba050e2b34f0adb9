"""Random sharing polynomials over an abstract group.

f(x) = a_0 + a_1 x + ... + a_d x^d, where a_0 is the secret and the
coefficients are group elements. Powers of x act on them as field scalars.
"""

from polyshare.algebra import Group


class Polynomial:
    """A degree-d polynomial with group coefficients, low-degree first."""

    __slots__ = ('coeffs',)

    def __init__(self, coeffs: list):
        if not coeffs:
            raise ValueError("Polynomial needs at least a constant term")
        # coeffs[0] = a_0 (secret), coeffs[d] = a_d
        self.coeffs = list(coeffs)

    @classmethod
    def generate(cls, secret: Group, degree: int, rng=None) -> "Polynomial":
        """Random polynomial of the given degree with f(0) = secret.

        Draws `degree` independent coefficients with type(secret).random().
        """
        if degree < 0:
            raise ValueError(f"Degree must be >= 0, got {degree}")
        group = type(secret)
        return cls([secret] + [group.random(rng) for _ in range(degree)])

    @property
    def degree(self) -> int:
        return len(self.coeffs) - 1

    @property
    def secret(self) -> Group:
        return self.coeffs[0]

    def evaluate(self, index: int) -> Group:
        """f(index) by Horner's method. Pure; no randomness."""
        x = type(self.coeffs[0]).scalars().from_int(index)
        result = self.coeffs[-1]
        for c in reversed(self.coeffs[:-1]):
            result = result * x + c
        return result


def evaluate(poly: Polynomial, index: int) -> Group:
    """Evaluate `poly` at `index`."""
    return poly.evaluate(index)
