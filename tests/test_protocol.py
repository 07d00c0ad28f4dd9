import math
import struct
import uuid

import pytest

from valence.protocol import (
    NumberType,
    ProtocolError,
    Reader,
    decode_array,
    decode_bool,
    decode_bounded_int,
    decode_long_array,
    decode_option,
    decode_string,
    decode_uuid,
    decode_varint,
    encode_array,
    encode_bool,
    encode_bounded_int,
    encode_long_array,
    encode_option,
    encode_optional_network_id,
    encode_string,
    encode_uuid,
    encode_varint,
)


def test_varint_wire_format():
    assert encode_varint(300) == b"\xac\x02"
    assert encode_varint(-1) == b"\xff\xff\xff\xff\x0f"


@pytest.mark.parametrize("value", [0, 1, 127, 128, 255, 25565, 2**31 - 1, -(2**31), -1])
def test_varint_round_trip(value):
    data = encode_varint(value)
    assert 1 <= len(data) <= 5
    reader = Reader(data)
    assert decode_varint(reader) == value
    assert reader.remaining == 0


@pytest.mark.parametrize("value", [2**31, -(2**31) - 1])
def test_varint_out_of_range(value):
    with pytest.raises(ProtocolError):
        encode_varint(value)


def test_varint_too_long():
    with pytest.raises(ProtocolError):
        decode_varint(Reader(b"\xff" * 5 + b"\x01"))


def test_varint_truncated():
    with pytest.raises(ProtocolError):
        decode_varint(Reader(b"\x80"))


def test_bool_round_trip_and_invalid():
    assert encode_bool(True) == b"\x01"
    assert decode_bool(Reader(encode_bool(False))) is False
    assert decode_bool(Reader(encode_bool(True))) is True
    with pytest.raises(ProtocolError):
        decode_bool(Reader(b"\x02"))


@pytest.mark.parametrize(
    "number_type,value",
    [
        (NumberType.U8, 200),
        (NumberType.I8, -100),
        (NumberType.U16, 65535),
        (NumberType.I16, -300),
        (NumberType.U32, 4000000000),
        (NumberType.I32, -123456),
        (NumberType.U64, 2**64 - 1),
        (NumberType.I64, -(2**63)),
        (NumberType.F32, 1.5),
        (NumberType.F64, -2.25),
    ],
)
def test_number_round_trip(number_type, value):
    data = number_type.encode(value)
    assert len(data) == number_type.size
    assert number_type.decode(Reader(data)) == value


def test_numbers_are_big_endian():
    assert NumberType.U16.encode(258) == (258).to_bytes(2, "big")
    assert NumberType.I64.encode(-2) == (-2).to_bytes(8, "big", signed=True)


def test_number_out_of_range():
    with pytest.raises(ProtocolError):
        NumberType.U8.encode(256)
    with pytest.raises(ProtocolError):
        NumberType.I8.encode(-129)


@pytest.mark.parametrize("number_type", [NumberType.F32, NumberType.F64])
@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_non_finite_floats_rejected(number_type, value):
    with pytest.raises(ProtocolError):
        number_type.encode(value)
    with pytest.raises(ProtocolError):
        number_type.decode(Reader(struct.pack(number_type.value, value)))


def test_option_round_trip():
    data = encode_option(42, encode_varint)
    assert decode_option(Reader(data), decode_varint) == 42
    empty = encode_option(None, encode_varint)
    assert empty == encode_bool(False)
    assert decode_option(Reader(empty), decode_varint) is None


def test_bounded_int():
    data = encode_bounded_int(16, encode_varint, 2, 32)
    assert decode_bounded_int(Reader(data), decode_varint, 2, 32) == 16
    data = encode_bounded_int(7, NumberType.U8, 0, 10)
    assert decode_bounded_int(Reader(data), NumberType.U8, 0, 10) == 7
    with pytest.raises(ProtocolError):
        encode_bounded_int(33, encode_varint, 2, 32)
    with pytest.raises(ProtocolError):
        decode_bounded_int(Reader(encode_varint(1)), decode_varint, 2, 32)


@pytest.mark.parametrize("text", ["", "hello", "héllo wörld", "日本語", "🎮"])
def test_string_round_trip(text):
    data = encode_string(text)
    reader = Reader(data)
    assert decode_string(reader) == text
    assert reader.remaining == 0


def test_string_length_prefix_is_byte_count():
    text = "é" * 3
    data = encode_string(text, 0, 3)
    assert decode_varint(Reader(data)) == len(text.encode("utf-8"))


def test_string_char_bounds():
    with pytest.raises(ProtocolError):
        encode_string("abcd", 0, 3)
    with pytest.raises(ProtocolError):
        encode_string("a", 2, 5)
    with pytest.raises(ProtocolError):
        decode_string(Reader(encode_string("abcd")), 0, 3)


def test_string_bad_bounds():
    with pytest.raises(ValueError):
        encode_string("a", 5, 2)


def test_string_invalid_utf8():
    with pytest.raises(ProtocolError):
        decode_string(Reader(encode_varint(2) + b"\xff\xfe"))


def test_array_round_trip():
    items = [1, 300, -5, 0]
    data = encode_array(items, encode_varint)
    assert decode_varint(Reader(data)) == len(items)
    assert decode_array(Reader(data), decode_varint) == items


def test_array_bounds():
    with pytest.raises(ProtocolError):
        encode_array([1, 2, 3], encode_varint, 0, 2)
    with pytest.raises(ProtocolError):
        decode_array(Reader(encode_array([1, 2, 3], encode_varint)), decode_varint, 0, 2)
    with pytest.raises(ProtocolError):
        decode_array(Reader(encode_varint(-1)), decode_varint)


def test_array_truncated():
    with pytest.raises(ProtocolError):
        decode_array(Reader(encode_varint(3) + encode_varint(1)), decode_varint)


def test_uuid_round_trip():
    value = uuid.UUID("12345678-1234-5678-1234-567812345678")
    data = encode_uuid(value)
    assert len(data) == 16
    assert int.from_bytes(data, "big") == value.int
    assert decode_uuid(Reader(data)) == value


def test_long_array_round_trip():
    words = [0, 1, 2**64 - 1, 123456789]
    assert decode_long_array(Reader(encode_long_array(words))) == words


def test_optional_network_id():
    assert encode_optional_network_id(None) == encode_varint(0)
    assert decode_varint(Reader(encode_optional_network_id(41))) == 41 + 1
    with pytest.raises(ProtocolError):
        encode_optional_network_id(2**31 - 1)


def test_reader_reads_and_rest():
    reader = Reader(b"abcdef")
    assert reader.read_bytes(2) == b"ab"
    assert reader.read_rest() == b"cdef"
    assert reader.remaining == 0
    with pytest.raises(ProtocolError):
        reader.read_bytes(1)