from __future__ import annotations

import math
import struct

import pytest

from primbytes.core.errors import PreconditionError, UnsupportedTypeError
from primbytes.model.codec import (
    bits_to_float,
    char_from_bytes, char_to_bytes,
    decode_primitive, decode_value,
    double_from_bytes, double_to_bits, double_to_bytes,
    encode_primitive, encode_value,
    float_from_bytes, float_to_bits, float_to_bytes,
    int_from_bytes, int_to_bytes,
    long_from_bytes, long_to_bytes,
    primitive_size,
    short_from_bytes, short_to_bytes,
)
from primbytes.model.kinds import Primitive

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


# ---------------- byte order ----------------

def test_long_is_big_endian():
    assert long_to_bytes(1) == bytes([0, 0, 0, 0, 0, 0, 0, 1])
    assert long_to_bytes(0x0102030405060708) == bytes([1, 2, 3, 4, 5, 6, 7, 8])


def test_int_is_big_endian():
    assert int_to_bytes(256) == bytes([0, 0, 1, 0])
    assert int_to_bytes(0x11223344) == b"\x11\x22\x33\x44"


def test_short_and_char_keep_low_half_of_int_encoding():
    assert short_to_bytes(0x1234) == int_to_bytes(0x1234)[2:]
    assert char_to_bytes("A") == b"\x00\x41"


# ---------------- integers ----------------

@pytest.mark.parametrize("v", [0, 1, -1, 255, -256, INT64_MIN, INT64_MAX, 0x7F00FF00FF00FF00])
def test_long_round_trip(v):
    assert long_from_bytes(long_to_bytes(v)) == v


def test_long_extremes():
    assert long_to_bytes(-1) == b"\xff" * 8
    assert long_to_bytes(INT64_MIN) == b"\x80" + b"\x00" * 7
    assert long_to_bytes(INT64_MAX) == b"\x7f" + b"\xff" * 7
    assert long_from_bytes(b"\x80" + b"\x00" * 7) == INT64_MIN


def test_long_truncates_to_64_bits():
    assert long_to_bytes((1 << 64) + 5) == long_to_bytes(5)
    assert long_to_bytes(INT64_MAX + 1) == long_to_bytes(INT64_MIN)


@pytest.mark.parametrize("v", [0, 1, -1, 256, INT32_MIN, INT32_MAX, -123456789])
def test_int_round_trip(v):
    assert int_from_bytes(int_to_bytes(v)) == v


def test_int_bytes_round_trip_sampled():
    for seed in range(0, 1 << 32, 0x01010101 * 7):
        raw = struct.pack(">I", seed)
        assert int_to_bytes(int_from_bytes(raw)) == raw


def test_decode_accepts_signed_byte_values():
    # ByteArray-style input: negative bytes are normalized by adding 256
    assert long_from_bytes([0, 0, 0, 0, 0, 0, 0, -1]) == 255
    assert int_from_bytes([-128, 0, 0, 0]) == INT32_MIN
    assert int_from_bytes(bytearray(b"\x00\x00\x01\x00")) == 256
    assert int_from_bytes(memoryview(b"\x00\x00\x00\x02")) == 2


def test_decode_rejects_out_of_range_byte_values():
    with pytest.raises(UnsupportedTypeError):
        int_from_bytes([0, 0, 0, 256])


def test_encode_rejects_non_integers():
    with pytest.raises(UnsupportedTypeError):
        long_to_bytes(1.5)
    with pytest.raises(UnsupportedTypeError):
        int_to_bytes(True)


# ---------------- 16-bit kinds ----------------

def test_short_exhaustive_round_trip():
    for v in range(-32768, 32768):
        assert short_from_bytes(short_to_bytes(v)) == v


def test_short_bytes_exhaustive_round_trip():
    for hi in range(256):
        for lo in range(256):
            raw = bytes([hi, lo])
            assert short_to_bytes(short_from_bytes(raw)) == raw


def test_short_matches_low_half_of_padded_int_decode():
    for raw in (b"\x00\x00", b"\x7f\xff", b"\x80\x00", b"\xff\xff", b"\x12\x34"):
        low = int_from_bytes(b"\x00\x00" + raw) & 0xFFFF
        assert short_from_bytes(raw) & 0xFFFF == low


def test_short_truncates_wide_values():
    assert short_to_bytes(40000) == b"\x9c\x40"
    assert short_from_bytes(b"\x9c\x40") == 40000 - 65536
    assert short_to_bytes(-1) == b"\xff\xff"
    assert short_from_bytes(b"\x80\x00") == -32768


def test_char_exhaustive_round_trip():
    for code in range(0x10000):
        c = chr(code)
        raw = char_to_bytes(c)
        assert len(raw) == 2
        assert char_from_bytes(raw) == c
        assert ord(char_from_bytes(raw)) == int_from_bytes(b"\x00\x00" + raw) & 0xFFFF


def test_char_accepts_int_code_unit():
    assert char_to_bytes(0x263A) == b"\x26\x3a"
    assert char_to_bytes(0x1F600) == b"\xf6\x00"


@pytest.mark.parametrize("bad", ["", "ab", "\U0001F600", None, 1.0])
def test_char_rejects_non_characters(bad):
    with pytest.raises(UnsupportedTypeError):
        char_to_bytes(bad)


# ---------------- floating point ----------------

def _bits64(v: float) -> int:
    return struct.unpack(">Q", struct.pack(">d", v))[0]


@pytest.mark.parametrize("v", [0.0, -0.0, 1.0, -2.5, math.pi, 5e-324, 1.7976931348623157e308,
                               math.inf, -math.inf])
def test_double_round_trip_is_bit_exact(v):
    out = double_from_bytes(double_to_bytes(v))
    assert _bits64(out) == _bits64(v)


def test_double_known_vectors():
    assert double_to_bytes(1.0) == bytes.fromhex("3ff0000000000000")
    assert double_to_bytes(-0.0) == bytes.fromhex("8000000000000000")
    assert double_to_bytes(math.inf) == bytes.fromhex("7ff0000000000000")


@pytest.mark.parametrize("hexbits", [
    "7ff8000000000000",  # quiet NaN
    "7ff0000000000001",  # signalling NaN
    "fff8000000000bad",  # negative NaN with payload
    "7ff4000000000000",
    "0000000000000000",
    "8000000000000000",
    "0000000000000001",
])
def test_double_bytes_round_trip_preserves_nan_payloads(hexbits):
    raw = bytes.fromhex(hexbits)
    v = double_from_bytes(raw)
    assert double_to_bytes(v) == raw


def test_double_signed_zero_survives():
    assert math.copysign(1.0, double_from_bytes(double_to_bytes(-0.0))) == -1.0


def test_double_to_bits_is_reinterpretation():
    assert double_to_bits(1.0) == 0x3FF0000000000000
    assert double_to_bits(-0.0) == -(1 << 63)


def test_float_known_vectors():
    assert float_to_bytes(1.0) == bytes.fromhex("3f800000")
    assert float_to_bytes(-0.0) == bytes.fromhex("80000000")
    assert float_to_bytes(0.1) == bytes.fromhex("3dcccccd")
    assert float_to_bytes(math.inf) == bytes.fromhex("7f800000")
    assert float_from_bytes(bytes.fromhex("3f800000")) == 1.0


@pytest.mark.parametrize("hexbits", [
    "7fc00000",  # quiet NaN
    "7f800001",  # signalling NaN
    "7fa00000",  # signalling NaN, high payload bit
    "ffc00123",  # negative quiet NaN with payload
    "ff800001",
    "7f800000",
    "ff800000",
    "00000000",
    "80000000",
    "00000001",  # smallest subnormal
    "7f7fffff",  # largest finite
])
def test_float_bytes_round_trip_is_bit_exact(hexbits):
    raw = bytes.fromhex(hexbits)
    assert float_to_bytes(float_from_bytes(raw)) == raw


def test_float_bytes_round_trip_sampled():
    for bits in range(0, 1 << 32, 0x00FEDCBA):
        raw = struct.pack(">I", bits)
        assert float_to_bytes(float_from_bytes(raw)) == raw


def test_float_nan_stays_nan_through_python_float():
    v = float_from_bytes(bytes.fromhex("7f800001"))
    assert math.isnan(v)
    assert float_to_bits(v) == 0x7F800001
    assert bits_to_float(0x7F800001) != bits_to_float(0x7F800001)


def test_float_rejects_values_beyond_binary32_range():
    with pytest.raises(UnsupportedTypeError):
        float_to_bytes(1e39)


def test_float_round_trip_of_representable_values():
    for v in (0.5, -3.25, 1.401298464324817e-45, 3.4028234663852886e38):
        assert float_from_bytes(float_to_bytes(v)) == v


# ---------------- length preconditions ----------------

@pytest.mark.parametrize("decode, width", [
    (long_from_bytes, 8),
    (int_from_bytes, 4),
    (double_from_bytes, 8),
    (float_from_bytes, 4),
    (char_from_bytes, 2),
    (short_from_bytes, 2),
])
def test_decode_wrong_length_raises_precondition(decode, width):
    for n in (0, 1, width - 1, width + 1, 16):
        if n == width:
            continue
        with pytest.raises(PreconditionError) as ei:
            decode(bytes(n))
        assert ei.value.expected == width
        assert ei.value.actual == n


def test_precondition_error_is_value_error_with_operation():
    with pytest.raises(ValueError) as ei:
        long_from_bytes(b"\x00" * 7)
    err = ei.value
    assert isinstance(err, PreconditionError)
    assert err.operation == "long_from_bytes"
    assert err.code == "precondition_failed"
    assert err.details == {"operation": "long_from_bytes", "expected": 8, "actual": 7}


# ---------------- registry ----------------

def test_primitive_size_known_kinds():
    assert primitive_size("long") == 8
    assert primitive_size("INT") == 4
    assert primitive_size("double") == 8
    assert primitive_size("float") == 4
    assert primitive_size("char") == 2
    assert primitive_size("short") == 2


def test_primitive_size_unknown_raises():
    with pytest.raises(UnsupportedTypeError):
        primitive_size("u128")


def test_encode_decode_primitive_dispatch():
    assert encode_primitive("short", 1) == b"\x00\x01"
    assert decode_primitive("int", b"\x00\x00\x01\x00") == 256
    assert decode_primitive("char", b"\x00\x7a") == "z"


def test_decode_primitive_unknown_kind_raises():
    with pytest.raises(UnsupportedTypeError):
        decode_primitive("nope", b"\x00")


def test_encode_value_and_decode_value_are_tagged():
    raw = encode_value(Primitive("int", -2))
    assert raw == b"\xff\xff\xff\xfe"
    assert decode_value("int", raw) == Primitive("int", -2)
