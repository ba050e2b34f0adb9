"""Share value type and its wire encoding.

A share is one point (index, f(index)) of the sharing polynomial.
Encoded as a 4-byte big-endian index followed by the value's fixed-width
group encoding.
"""

import struct
from dataclasses import dataclass

from polyshare.algebra import Group
from polyshare.errors import InvalidEncoding, InvalidIndex

_INDEX = struct.Struct('>I')


@dataclass(frozen=True)
class Share:
    """One participant's share: x-coordinate and group value."""

    index: int
    value: Group

    def to_bytes(self) -> bytes:
        if not 0 < self.index <= 0xFFFFFFFF:
            raise InvalidIndex(f"Index {self.index} does not fit the share encoding")
        return _INDEX.pack(self.index) + self.value.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes, group: type) -> "Share":
        """Decode a share whose value belongs to `group`."""
        expected = _INDEX.size + group.SIZE
        if len(data) != expected:
            raise InvalidEncoding(
                f"Share must be {expected} bytes for {group.__name__}, got {len(data)}")
        (index,) = _INDEX.unpack_from(data)
        if index == 0:
            raise InvalidIndex("Share index must be nonzero")
        return cls(index, group.from_bytes(data[_INDEX.size:]))

    def __iter__(self):
        # Unpacks like the (x, y) pair it represents.
        return iter((self.index, self.value))
