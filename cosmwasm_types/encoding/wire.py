from __future__ import annotations

"""
Tagged binary wire primitives
-----------------------------

Low-level framing shared by every message in the schema. The layout is
protocol-buffers compatible:

- key:            uvarint((field_number << 3) | wire_type)
- VARINT (0):     unsigned LEB128, at most 10 bytes / 64 bits
- FIXED64 (1):    8 raw bytes (only ever skipped; no schema field uses it)
- LEN (2):        uvarint(len) || payload  (strings, nested messages)
- FIXED32 (5):    4 raw bytes (only ever skipped)

Groups (3/4) and the reserved wire types 6/7 are rejected as Malformed.

int64 values are carried as the two's-complement 64-bit pattern, so negative
numbers always take ten bytes.

Public API:
- encode_key / encode_uvarint / encode_int64 / encode_len_delimited / encode_string
- Reader: bounded cursor over a memoryview with read_key/read_uvarint/...
"""

from enum import IntEnum
from typing import Tuple

from ..errors import EncodeError, Malformed, Truncated

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1
MAX_VARINT_LEN = 10
MAX_FIELD_NUMBER = (1 << 29) - 1


class WireType(IntEnum):
    VARINT = 0
    FIXED64 = 1
    LEN = 2
    START_GROUP = 3
    END_GROUP = 4
    FIXED32 = 5


# ------------------------
# Encode helpers
# ------------------------

def encode_uvarint(n: int) -> bytes:
    """Minimal unsigned LEB128 for 0 <= n <= 2**64 - 1."""
    if n < 0 or n > UINT64_MAX:
        raise EncodeError("uvarint out of range", value=n)
    out = bytearray()
    while True:
        b = n & 0x7F
        n >>= 7
        if n:
            out.append(b | 0x80)
        else:
            out.append(b)
            return bytes(out)


def encode_key(field_number: int, wire_type: WireType) -> bytes:
    if not 1 <= field_number <= MAX_FIELD_NUMBER:
        raise EncodeError("field number out of range", field_number=field_number)
    return encode_uvarint((field_number << 3) | int(wire_type))


def encode_int64(value: int) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError("int64 field requires an int", got=type(value).__name__)
    if not INT64_MIN <= value <= INT64_MAX:
        raise EncodeError("int64 out of range", value=value)
    return encode_uvarint(value & UINT64_MAX)


def encode_len_delimited(payload: bytes) -> bytes:
    return encode_uvarint(len(payload)) + payload


def encode_string(value: str) -> bytes:
    if not isinstance(value, str):
        raise EncodeError("string field requires a str", got=type(value).__name__)
    try:
        raw = value.encode("utf-8", "strict")
    except UnicodeEncodeError as e:
        raise EncodeError(f"string is not encodable as UTF-8: {e.reason}", cause=e) from e
    return encode_len_delimited(raw)


# ------------------------
# Reader
# ------------------------

class Reader:
    """
    Bounded cursor over an immutable byte buffer.

    Every read checks bounds first and raises Truncated instead of slicing
    past the end; nested readers share the underlying memoryview without
    copying.
    """

    __slots__ = ("b", "i", "n", "base")

    def __init__(self, data: bytes | bytearray | memoryview, base: int = 0):
        self.b = memoryview(data)
        self.i = 0
        self.n = len(self.b)
        self.base = base

    @property
    def offset(self) -> int:
        """Absolute offset within the outermost buffer (for error reports)."""
        return self.base + self.i

    def at_end(self) -> bool:
        return self.i >= self.n

    def read_uvarint(self) -> int:
        start = self.offset
        result = 0
        shift = 0
        for count in range(MAX_VARINT_LEN):
            if self.i >= self.n:
                raise Truncated("buffer ends inside varint", offset=start)
            byte = self.b[self.i]
            self.i += 1
            if count == MAX_VARINT_LEN - 1 and byte > 0x01:
                raise Malformed("varint overflows 64 bits", offset=start)
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                return result
            shift += 7
        raise Malformed("varint longer than 10 bytes", offset=start)

    def read_key(self) -> Tuple[int, WireType]:
        start = self.offset
        key = self.read_uvarint()
        field_number = key >> 3
        wt = key & 0x07
        if field_number < 1 or field_number > MAX_FIELD_NUMBER:
            raise Malformed("invalid field number", field_number=field_number, offset=start)
        if wt in (WireType.START_GROUP, WireType.END_GROUP) or wt > WireType.FIXED32:
            raise Malformed("unsupported wire type", wire_type=wt, offset=start)
        return field_number, WireType(wt)

    def read_int64(self) -> int:
        raw = self.read_uvarint()
        return raw - (1 << 64) if raw > INT64_MAX else raw

    def take(self, k: int) -> memoryview:
        if k > self.n - self.i:
            raise Truncated("buffer ends inside field", offset=self.offset, needed=k, available=self.n - self.i)
        out = self.b[self.i:self.i + k]
        self.i += k
        return out

    def read_len_delimited(self) -> "Reader":
        length = self.read_uvarint()
        start = self.offset
        return Reader(self.take(length), base=start)

    def read_string(self) -> str:
        start = self.offset
        length = self.read_uvarint()
        raw = self.take(length)
        try:
            return bytes(raw).decode("utf-8", "strict")
        except UnicodeDecodeError as e:
            raise Malformed(f"invalid UTF-8: {e.reason}", offset=start, cause=e) from e

    def skip(self, wire_type: WireType) -> None:
        if wire_type == WireType.VARINT:
            self.read_uvarint()
        elif wire_type == WireType.FIXED64:
            self.take(8)
        elif wire_type == WireType.LEN:
            self.take(self.read_uvarint())
        elif wire_type == WireType.FIXED32:
            self.take(4)
        else:
            raise Malformed("cannot skip wire type", wire_type=int(wire_type), offset=self.offset)


__all__ = [
    "INT64_MIN",
    "INT64_MAX",
    "WireType",
    "encode_uvarint",
    "encode_key",
    "encode_int64",
    "encode_len_delimited",
    "encode_string",
    "Reader",
]
