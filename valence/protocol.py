"""Encoding and decoding of the primitive values used on the wire."""

from __future__ import annotations

import enum
import math
import struct
import uuid
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

MAX_PACKET_SIZE = 2097151
"""The maximum number of bytes in a single packet."""

MAX_STRING_LENGTH = 32767
"""The default maximum character count of a string."""

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_VARINT_MAX_BYTES = 5


class ProtocolError(ValueError):
    """Raised when a value cannot be encoded or decoded."""


class Reader:
    """A cursor over a byte string that values are decoded from."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        """The number of bytes not yet read."""
        return len(self._data) - self._pos

    def read_bytes(self, count: int) -> bytes:
        """Read exactly ``count`` bytes."""
        if count < 0:
            raise ProtocolError(f"cannot read a negative number of bytes ({count})")
        if count > self.remaining:
            raise ProtocolError(
                f"unexpected end of data (wanted {count} bytes, {self.remaining} left)"
            )
        chunk = self._data[self._pos : self._pos + count]
        self._pos += count
        return chunk

    def read_rest(self) -> bytes:
        """Read every byte that is left."""
        return self.read_bytes(self.remaining)


class NumberType(enum.Enum):
    """Fixed-size big-endian numbers."""

    U8 = ">B"
    I8 = ">b"
    U16 = ">H"
    I16 = ">h"
    U32 = ">I"
    I32 = ">i"
    U64 = ">Q"
    I64 = ">q"
    F32 = ">f"
    F64 = ">d"

    @property
    def size(self) -> int:
        return struct.calcsize(self.value)

    @property
    def is_float(self) -> bool:
        return self.value[-1] in "fd"

    def encode(self, value: int | float) -> bytes:
        """Encode ``value``; floats must be finite and integers in range."""
        if self.is_float and not math.isfinite(value):
            raise ProtocolError(f"attempt to encode non-finite {self.name.lower()} ({value})")
        try:
            return struct.pack(self.value, value)
        except (struct.error, OverflowError) as exc:
            raise ProtocolError(f"cannot encode {value!r} as {self.name.lower()}: {exc}") from exc

    def decode(self, reader: Reader) -> int | float:
        """Decode one value; floats must be finite."""
        (value,) = struct.unpack(self.value, reader.read_bytes(self.size))
        if self.is_float and not math.isfinite(value):
            raise ProtocolError(f"attempt to decode non-finite {self.name.lower()} ({value})")
        return value


def encode_varint(value: int) -> bytes:
    """Encode a signed 32-bit integer as a variable-length integer."""
    if not _I32_MIN <= value <= _I32_MAX:
        raise ProtocolError(f"value {value} does not fit in a VarInt")
    remaining = value & 0xFFFFFFFF
    out = bytearray()
    while True:
        byte = remaining & 0x7F
        remaining >>= 7
        if remaining:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def decode_varint(reader: Reader) -> int:
    """Decode a variable-length signed 32-bit integer."""
    result = 0
    for shift in range(0, 7 * _VARINT_MAX_BYTES, 7):
        byte = reader.read_bytes(1)[0]
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            result &= 0xFFFFFFFF
            return result - (1 << 32) if result > _I32_MAX else result
    raise ProtocolError("VarInt is too large")


def encode_bool(value: bool) -> bytes:
    return b"\x01" if value else b"\x00"


def decode_bool(reader: Reader) -> bool:
    byte = reader.read_bytes(1)[0]
    if byte >= 2:
        raise ProtocolError("boolean is not 0 or 1")
    return byte == 1


def encode_option(value: Optional[T], encoder: Callable[[T], bytes]) -> bytes:
    """Encode a presence flag followed by the value, if any."""
    if value is None:
        return encode_bool(False)
    return encode_bool(True) + encoder(value)


def decode_option(reader: Reader, decoder: Callable[[Reader], T]) -> Optional[T]:
    if decode_bool(reader):
        return decoder(reader)
    return None


def _check_int_bounds(value: int, minimum: int, maximum: int, action: str) -> None:
    if not minimum <= value <= maximum:
        raise ProtocolError(
            f"integer is not in bounds while {action} "
            f"(got {value}, expected {minimum}..={maximum})"
        )


def encode_bounded_int(
    value: int, number_type: NumberType | Callable[[int], bytes], minimum: int, maximum: int
) -> bytes:
    """Encode an integer that must lie within ``minimum..=maximum``.

    ``number_type`` is a :class:`NumberType` or an encoder function such as
    :func:`encode_varint`.
    """
    _check_int_bounds(value, minimum, maximum, "encoding")
    encoder = number_type.encode if isinstance(number_type, NumberType) else number_type
    return encoder(value)


def decode_bounded_int(
    reader: Reader,
    number_type: NumberType | Callable[[Reader], int],
    minimum: int,
    maximum: int,
) -> int:
    decoder = number_type.decode if isinstance(number_type, NumberType) else number_type
    value = decoder(reader)
    _check_int_bounds(value, minimum, maximum, "decoding")
    return value


def _check_min_max(min_len: int, max_len: Optional[int]) -> None:
    if max_len is not None and min_len > max_len:
        raise ValueError(f"bad bounds: minimum {min_len} exceeds maximum {max_len}")


def _bounds_text(min_len: int, max_len: Optional[int]) -> str:
    return f"{min_len}..={'' if max_len is None else max_len}"


def _in_bounds(length: int, min_len: int, max_len: Optional[int]) -> bool:
    return length >= min_len and (max_len is None or length <= max_len)


def _read_length(reader: Reader, min_len: int, max_len: Optional[int]) -> int:
    length = decode_varint(reader)
    if length < 0 or not _in_bounds(length, min_len, max_len):
        raise ProtocolError(
            f"length of array is out of bounds while decoding "
            f"(got {length}, needed {_bounds_text(min_len, max_len)})"
        )
    return length


def encode_array(
    items: Iterable[T],
    encoder: Callable[[T], bytes],
    min_len: int = 0,
    max_len: Optional[int] = None,
) -> bytes:
    """Encode a length-prefixed sequence whose length is checked against the bounds."""
    _check_min_max(min_len, max_len)
    items = list(items)
    if not _in_bounds(len(items), min_len, max_len):
        raise ProtocolError(
            f"length of array is out of bounds while encoding "
            f"(got {len(items)}, expected {_bounds_text(min_len, max_len)})"
        )
    if len(items) > _I32_MAX:
        raise ProtocolError(f"length of array ({len(items)}) exceeds the 32-bit maximum")
    return encode_varint(len(items)) + b"".join(encoder(item) for item in items)


def decode_array(
    reader: Reader,
    decoder: Callable[[Reader], T],
    min_len: int = 0,
    max_len: Optional[int] = None,
) -> list[T]:
    _check_min_max(min_len, max_len)
    length = _read_length(reader, min_len, max_len)
    return [decoder(reader) for _ in range(length)]


def encode_string(text: str, min_len: int = 0, max_len: int = MAX_STRING_LENGTH) -> bytes:
    """Encode a UTF-8 string whose character count lies within the bounds."""
    _check_min_max(min_len, max_len)
    if not min_len <= len(text) <= max_len:
        raise ProtocolError(
            f"char count of string is out of bounds while encoding "
            f"(got {len(text)}, expected {min_len}..={max_len})"
        )
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ProtocolError(f"string is not valid unicode: {exc}") from exc
    return encode_varint(len(data)) + data


def decode_string(reader: Reader, min_len: int = 0, max_len: int = MAX_STRING_LENGTH) -> str:
    _check_min_max(min_len, max_len)
    length = _read_length(reader, min_len, max_len * 4)
    try:
        text = reader.read_bytes(length).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ProtocolError(f"string is not valid UTF-8: {exc}") from exc
    if not min_len <= len(text) <= max_len:
        raise ProtocolError(
            f"char count of string is out of bounds while decoding "
            f"(got {len(text)}, expected {min_len}..={max_len})"
        )
    return text


def encode_uuid(value: uuid.UUID) -> bytes:
    """Encode a UUID as a big-endian 128-bit integer."""
    return value.bytes


def decode_uuid(reader: Reader) -> uuid.UUID:
    return uuid.UUID(bytes=reader.read_bytes(16))


def encode_long_array(words: Iterable[int]) -> bytes:
    """Encode a length-prefixed array of unsigned 64-bit words, as used for bit sets."""
    return encode_array(words, NumberType.U64.encode)


def decode_long_array(reader: Reader) -> list[int]:
    return decode_array(reader, NumberType.U64.decode)


def encode_optional_network_id(network_id: Optional[int]) -> bytes:
    """Encode an optional entity network ID as a VarInt offset by one."""
    if network_id is None:
        return encode_varint(0)
    if network_id >= _I32_MAX:
        raise ProtocolError("the largest 32-bit network ID cannot be an optional VarInt")
    return encode_varint(network_id + 1)