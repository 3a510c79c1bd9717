"""
Fixed-Width Binary Layouts

Account records owned by the crowdfund program are stored as flat byte
arrays with no schema information: every field sits at a known offset with a
known width, and both the on-chain program and this client must agree on the
exact arrangement.

Instead of ad hoc schema maps, each record type is described by a
StructLayout: an ordered tuple of (field name, field type) pairs. The layout
computes its own width and checks it against the declared size when the
module defining it is imported, so a miscounted field fails immediately
rather than corrupting data at runtime.

Field types:
- Bool: one byte, zero is false, anything else is true
- UInt: little-endian unsigned integer of 1, 4 or 8 bytes
- FixedBytes: opaque byte string of fixed width (public keys)
- BoundedString: u32 length prefix + UTF-8 text padded to a fixed capacity
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .errors import InvalidEncoding, MalformedLength, TruncatedInput

LENGTH_PREFIX_SIZE = 4  # u32 little-endian


def check_unsigned(value: int, size: int, field: str = "value") -> None:
    """Reject integers that do not fit in `size` unsigned bytes."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer, got {type(value).__name__}")
    if value < 0 or value >= 1 << (8 * size):
        raise ValueError(f"{field} out of range for u{size * 8}: {value}")


def decode_utf8(raw: bytes, field: str = "value") -> str:
    """Decode text strictly; there is no lossy fallback."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncoding(f"{field} is not valid UTF-8: {e}") from e


@dataclass(frozen=True)
class Bool:
    """Single byte flag. Only 0 is false."""
    size: int = 1

    def pack(self, value: bool, field: str = "value") -> bytes:
        return b"\x01" if value else b"\x00"

    def unpack(self, raw: bytes, field: str = "value") -> bool:
        return raw[0] != 0


@dataclass(frozen=True)
class UInt:
    """Little-endian unsigned integer."""
    size: int

    def pack(self, value: int, field: str = "value") -> bytes:
        check_unsigned(value, self.size, field)
        return value.to_bytes(self.size, "little")

    def unpack(self, raw: bytes, field: str = "value") -> int:
        return int.from_bytes(raw, "little")


U8 = UInt(1)
U32 = UInt(4)
U64 = UInt(8)


@dataclass(frozen=True)
class FixedBytes:
    """Opaque bytes of exactly `size` length."""
    size: int

    def pack(self, value: bytes, field: str = "value") -> bytes:
        value = bytes(value)
        if len(value) != self.size:
            raise ValueError(f"{field} must be {self.size} bytes, got {len(value)}")
        return value

    def unpack(self, raw: bytes, field: str = "value") -> bytes:
        return bytes(raw)


@dataclass(frozen=True)
class BoundedString:
    """
    Length-prefixed UTF-8 text inside a fixed-size window.

    The window is LENGTH_PREFIX_SIZE + capacity bytes. Bytes past the
    declared length are padding: zeros on encode, ignored on decode.
    """
    capacity: int

    @property
    def size(self) -> int:
        return LENGTH_PREFIX_SIZE + self.capacity

    def pack(self, value: str, field: str = "value") -> bytes:
        encoded = value.encode("utf-8")
        if len(encoded) > self.capacity:
            raise MalformedLength(
                f"{field} is {len(encoded)} bytes, capacity is {self.capacity}"
            )
        padding = bytes(self.capacity - len(encoded))
        return U32.pack(len(encoded), field) + encoded + padding

    def unpack(self, raw: bytes, field: str = "value") -> str:
        length = U32.unpack(raw[:LENGTH_PREFIX_SIZE])
        if length > self.capacity:
            raise MalformedLength(
                f"{field} declares {length} bytes, capacity is {self.capacity}"
            )
        text = raw[LENGTH_PREFIX_SIZE:LENGTH_PREFIX_SIZE + length]
        return decode_utf8(bytes(text), field)


class StructLayout:
    """
    Ordered, fixed-width record layout.

    Args:
        name: Record name used in error messages
        fields: (field name, field type) pairs in wire order
        size: Expected total width; construction fails if the fields disagree
    """

    def __init__(self, name: str, fields: Tuple[Tuple[str, Any], ...], size: int):
        names = [field_name for field_name, _ in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"{name}: duplicate field names in {names}")

        total = sum(kind.size for _, kind in fields)
        if total != size:
            raise ValueError(f"{name}: fields occupy {total} bytes, declared {size}")

        self.name = name
        self.fields = tuple(fields)
        self.size = size

    def offsets(self) -> Dict[str, Tuple[int, int]]:
        """Map each field to its (start, end) byte range."""
        ranges = {}
        offset = 0
        for field_name, kind in self.fields:
            ranges[field_name] = (offset, offset + kind.size)
            offset += kind.size
        return ranges

    def pack(self, values: Dict[str, Any]) -> bytes:
        """Serialize field values in layout order."""
        missing = [field_name for field_name, _ in self.fields if field_name not in values]
        if missing:
            raise ValueError(f"{self.name}: missing fields {missing}")

        return b"".join(
            kind.pack(values[field_name], field_name)
            for field_name, kind in self.fields
        )

    def unpack(self, data: bytes) -> Dict[str, Any]:
        """
        Deserialize a record.

        The input must be exactly `size` bytes; shorter and longer buffers
        are both rejected.
        """
        data = bytes(data)
        if len(data) != self.size:
            raise TruncatedInput(
                f"{self.name} requires exactly {self.size} bytes, got {len(data)}"
            )

        values = {}
        offset = 0
        for field_name, kind in self.fields:
            values[field_name] = kind.unpack(data[offset:offset + kind.size], field_name)
            offset += kind.size
        return values

    def __len__(self) -> int:
        return self.size
