"""Integers modulo a fixed modulus, as a Field and Group backend.

ModularRing.configure() builds an element class for one modulus and one
encoded width. The modulus is parsed and checked once, there; arithmetic
on the resulting elements does not re-validate it.

Division needs the modulus to be prime. A composite modulus still
configures, but dividing by a non-unit raises InvalidFieldOperation.
"""

import logging
import secrets

from polyshare.algebra import Field, Group
from polyshare.errors import (
    BackendError, InvalidEncoding, InvalidFieldOperation, InvalidSecret,
)

logger = logging.getLogger(__name__)

# Safe prime generated by OpenSSL
MODULUS_3072 = (
    "2810648864918553692326414703540982236400161676089967413931080487336351"
    "6641519515961428009521378377869496027800936962455043891228980078408822"
    "5795869580398834881509080164131924614291006465429565665953192856202194"
    "1244973691275871456332653319544240941768988728044605685210468374028296"
    "4701957714458934631724685968862963975144788817507488543807169523641981"
    "7000456045934837920587235314056033343426251870639134198199353490465558"
    "7887145767376775247180777074746668503322468682710283049559264203107937"
    "8931339777070725886319105725716913402872706848877536910178500140261149"
    "9189969057000333856859894169941117656216116885343666185601010378877042"
    "5973503571121826245383549444250163796809725074965822253566072469306063"
    "8712562502935193969734908755408951899112053339424522233627682399916693"
    "2471557632329647202648576232446937198924424324659833832914843985743472"
    "6497797195444870550503807350157997765978494536147484675781002402359451"
    "435754948869927"
)


def _parse_modulus(modulus) -> int:
    if isinstance(modulus, bool):
        raise BackendError(f"Modulus must be an integer, got {modulus!r}")
    if isinstance(modulus, int):
        return modulus
    if isinstance(modulus, str):
        try:
            return int(modulus, 10)
        except ValueError:
            raise BackendError(f"Malformed decimal modulus: {modulus[:32]!r}") from None
    raise BackendError(f"Modulus must be int or decimal str, got {type(modulus).__name__}")


class ModularRing(Field, Group):
    """Base for elements of Z_n. Use configure() to get a concrete class."""

    __slots__ = ('value',)

    MODULUS: int = None
    ALLOW_ZERO: bool = True

    @classmethod
    def configure(cls, modulus, size: int, *, name: str = None,
                  allow_zero: bool = True) -> type:
        """Create an element class for Z_modulus encoded in `size` bytes.

        Args:
            modulus: The modulus, as int or decimal string. Must be prime
                for division to be well defined.
            size: Canonical encoded width in bytes.
            name: Class name, for repr and debugging.
            allow_zero: Whether zero counts as a valid element. Only
                validity changes; random() still samples all of Z_n.

        Raises:
            BackendError: malformed modulus, modulus < 2, or a modulus
                that does not fit in `size` bytes.
        """
        n = _parse_modulus(modulus)
        if n < 2:
            raise BackendError(f"Modulus must be >= 2, got {n}")
        if size < 1:
            raise BackendError(f"Encoded size must be >= 1 byte, got {size}")
        if (n - 1).bit_length() > size * 8:
            raise BackendError(
                f"Modulus of {n.bit_length()} bits does not fit in {size} bytes")

        name = name or f"Z{n.bit_length()}"
        logger.debug("Configured ring %s: %d-bit modulus, %d-byte encoding",
                     name, n.bit_length(), size)
        return type(cls)(name, (cls,), {
            '__module__': __name__,
            '__slots__': (),
            'MODULUS': n,
            'SIZE': size,
            'ALLOW_ZERO': allow_zero,
        })

    def __init__(self, value: int = 0):
        if self.MODULUS is None:
            raise BackendError("ModularRing must be configured before use")
        self.value = value

    @classmethod
    def one(cls):
        return cls(1)

    @classmethod
    def zero(cls):
        return cls(0)

    @classmethod
    def from_int(cls, value: int):
        if value < 0:
            raise ValueError(f"Expected a non-negative integer, got {value}")
        return cls(value % cls.MODULUS)

    @classmethod
    def random(cls, rng=None):
        """Uniform element of Z_n. Zero is drawn even when ALLOW_ZERO is off,
        so sharing coefficients stay uniform over the whole ring.
        """
        if rng is not None:
            return cls(rng.randrange(cls.MODULUS))
        return cls(secrets.randbelow(cls.MODULUS))

    @classmethod
    def from_bytes(cls, data: bytes):
        if len(data) != cls.SIZE:
            raise InvalidEncoding(
                f"{cls.__name__} element must be {cls.SIZE} bytes, got {len(data)}")
        value = int.from_bytes(data, 'big')
        if value >= cls.MODULUS:
            raise InvalidSecret(f"Encoded value is not below the {cls.__name__} modulus")
        return cls(value)

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(self.SIZE, 'big')

    def is_zero(self) -> bool:
        return self.value == 0

    def is_valid(self) -> bool:
        if self.value == 0:
            return self.ALLOW_ZERO
        return 0 < self.value < self.MODULUS

    def __neg__(self):
        return type(self)((-self.value) % self.MODULUS)

    def __add__(self, rhs):
        if type(rhs) is not type(self):
            return NotImplemented
        return type(self)((self.value + rhs.value) % self.MODULUS)

    def __sub__(self, rhs):
        if type(rhs) is not type(self):
            return NotImplemented
        return type(self)((self.value - rhs.value) % self.MODULUS)

    def __mul__(self, scalar):
        if type(scalar) is not type(self):
            return NotImplemented
        return type(self)((self.value * scalar.value) % self.MODULUS)

    def __truediv__(self, rhs):
        if type(rhs) is not type(self):
            return NotImplemented
        try:
            h = pow(rhs.value, -1, self.MODULUS)
        except ValueError:
            raise InvalidFieldOperation(
                f"{rhs.value} has no inverse modulo the {type(self).__name__} modulus") from None
        return type(self)((self.value * h) % self.MODULUS)

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self), self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value})"


BN3072 = ModularRing.configure(MODULUS_3072, 384, name="BN3072", allow_zero=False)
