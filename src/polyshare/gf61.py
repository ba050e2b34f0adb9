"""GF(M61) field arithmetic and the GF61 backend.

All operations over the Mersenne prime field M61 = 2^61 - 1.
Uses Python int to avoid overflow on the 61x61-bit multiply.
The module-level functions work on plain ints; GF61 wraps them as a
Field and Group for the sharing engine.
"""

import secrets

from polyshare.algebra import Field, Group
from polyshare.errors import InvalidEncoding, InvalidFieldOperation, InvalidSecret

M61 = (1 << 61) - 1  # 2^61 - 1 = 2305843009213693951


def _reduce(x: int) -> int:
    """Fast reduction mod M61 using Mersenne prime structure.

    For x < 2^122 (product of two 61-bit numbers):
      x mod (2^61 - 1) = (x >> 61) + (x & M61), with a final correction.
    """
    r = (x >> 61) + (x & M61)
    if r >= M61:
        r -= M61
    return r


def add(a: int, b: int) -> int:
    """(a + b) mod M61."""
    s = a + b
    if s >= M61:
        s -= M61
    return s


def sub(a: int, b: int) -> int:
    """(a - b) mod M61."""
    s = a - b
    if s < 0:
        s += M61
    return s


def mul(a: int, b: int) -> int:
    """(a * b) mod M61. Python int handles 122-bit intermediate."""
    return _reduce(a * b)


def neg(a: int) -> int:
    """(-a) mod M61."""
    return M61 - a if a != 0 else 0


def inv(a: int) -> int:
    """Multiplicative inverse via Fermat's little theorem: a^(M61-2) mod M61."""
    if a == 0:
        raise InvalidFieldOperation("Cannot invert zero in GF(M61)")
    return pow(a, M61 - 2, M61)


def div(a: int, b: int) -> int:
    """(a / b) mod M61 = a * b^(-1) mod M61."""
    return mul(a, inv(b))


def rand_element(rng=None) -> int:
    """Sample a uniform random element from GF(M61) via rejection sampling."""
    while True:
        if rng is not None:
            r = rng.getrandbits(61)
        else:
            r = secrets.randbits(61)
        if r < M61:
            return r


class GF61(Field, Group):
    """An element of GF(M61), usable as both scalar and shared value."""

    __slots__ = ('value',)

    SIZE = 8

    def __init__(self, value: int = 0):
        self.value = value

    @classmethod
    def one(cls) -> "GF61":
        return cls(1)

    @classmethod
    def zero(cls) -> "GF61":
        return cls(0)

    @classmethod
    def from_int(cls, value: int) -> "GF61":
        if value < 0:
            raise ValueError(f"Expected a non-negative integer, got {value}")
        return cls(value % M61)

    @classmethod
    def random(cls, rng=None) -> "GF61":
        return cls(rand_element(rng))

    @classmethod
    def from_bytes(cls, data: bytes) -> "GF61":
        if len(data) != cls.SIZE:
            raise InvalidEncoding(
                f"GF61 element must be {cls.SIZE} bytes, got {len(data)}")
        value = int.from_bytes(data, 'big')
        if value >= M61:
            raise InvalidSecret("Encoded value is not below M61")
        return cls(value)

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(self.SIZE, 'big')

    def is_zero(self) -> bool:
        return self.value == 0

    def is_valid(self) -> bool:
        return 0 <= self.value < M61

    def __neg__(self) -> "GF61":
        return GF61(neg(self.value))

    def __add__(self, rhs: "GF61") -> "GF61":
        if not isinstance(rhs, GF61):
            return NotImplemented
        return GF61(add(self.value, rhs.value))

    def __sub__(self, rhs: "GF61") -> "GF61":
        if not isinstance(rhs, GF61):
            return NotImplemented
        return GF61(sub(self.value, rhs.value))

    def __mul__(self, scalar: "GF61") -> "GF61":
        if not isinstance(scalar, GF61):
            return NotImplemented
        return GF61(mul(self.value, scalar.value))

    def __truediv__(self, rhs: "GF61") -> "GF61":
        if not isinstance(rhs, GF61):
            return NotImplemented
        return GF61(div(self.value, rhs.value))

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other) -> bool:
        if not isinstance(other, GF61):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash((GF61, self.value))

    def __repr__(self) -> str:
        return f"GF61({self.value})"
