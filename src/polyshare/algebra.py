"""Capability contracts for the algebra the sharing engine runs over.

The engine never touches integers or moduli directly. It needs two things:

  Group  -- where secrets and share values live. Additive: zero, negation,
            addition, subtraction, and scaling by a Field element.
  Field  -- the scalars. Identity, construction from small integers
            (share indices), and division for Lagrange coefficients.

A concrete backend (a prime field, a big-modulus ring) usually implements
both on one class. Elements are immutable; operators return new values.
"""

from abc import ABC, abstractmethod


class Field(ABC):
    """Scalar structure: identity, integer embedding and division."""

    @classmethod
    @abstractmethod
    def one(cls) -> "Field":
        """Multiplicative identity."""

    @classmethod
    @abstractmethod
    def from_int(cls, value: int) -> "Field":
        """Embed a non-negative integer, reduced into the structure."""

    @abstractmethod
    def __truediv__(self, rhs: "Field") -> "Field":
        """self / rhs. Raises InvalidFieldOperation when rhs is zero."""


class Group(ABC):
    """Additive structure holding secrets and share values.

    Subclasses set SIZE, the canonical encoded width in bytes, and may set
    scalar_field to the Field type that scales them. When left as None the
    group is its own scalar field.
    """

    SIZE: int = 0
    scalar_field: type = None

    @classmethod
    def scalars(cls) -> type:
        return cls.scalar_field if cls.scalar_field is not None else cls

    @classmethod
    @abstractmethod
    def zero(cls) -> "Group":
        """Additive identity."""

    @classmethod
    @abstractmethod
    def random(cls, rng=None) -> "Group":
        """Uniform random element.

        rng=None draws from the secrets CSPRNG. Tests may pass a
        random.Random instance for reproducibility.
        """

    @classmethod
    @abstractmethod
    def from_bytes(cls, data: bytes) -> "Group":
        """Decode exactly SIZE big-endian bytes.

        Raises InvalidEncoding on wrong length and InvalidSecret when the
        value is out of range. Never wraps.
        """

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Encode as exactly SIZE big-endian bytes."""

    @abstractmethod
    def is_zero(self) -> bool:
        ...

    @abstractmethod
    def is_valid(self) -> bool:
        """True when the value lies in the structure's valid range."""

    @abstractmethod
    def __neg__(self) -> "Group":
        ...

    @abstractmethod
    def __add__(self, rhs: "Group") -> "Group":
        ...

    @abstractmethod
    def __sub__(self, rhs: "Group") -> "Group":
        ...

    @abstractmethod
    def __mul__(self, scalar: Field) -> "Group":
        """Scale by a Field element."""
