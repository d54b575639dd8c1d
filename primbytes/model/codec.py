# primbytes/model/codec.py
"""
Fixed-width big-endian conversion between primitive values and bytes.

Integers are assembled byte by byte so the byte order stays explicit:
encode collects the least-significant byte first and reverses, decode walks
the bytes from the least-significant end. Floats are bit-reinterpreted
through the matching integer codec, never numerically converted. The 16-bit
kinds are layered on the 32-bit codec (widen, encode, keep the low half).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Sequence, Union
import struct

from primbytes.core.errors import PreconditionError, UnsupportedTypeError
from .kinds import (
    CHAR, DOUBLE, FLOAT, INT, LONG, SHORT,
    WIDTHS, Primitive, normalize_kind,
)

BytesLike = Union[bytes, bytearray, memoryview, Sequence[int]]

EIGHT_ONES = 0xFF

_F64_EXP_MASK = 0x7FF0000000000000
_F64_FRAC_MASK = 0x000FFFFFFFFFFFFF
_F32_EXP_MASK = 0x7F800000
_F32_FRAC_MASK = 0x007FFFFF
_F32_QUIET_BIT = 0x00400000
_NAN_PAYLOAD_SHIFT = 52 - 23


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------

def _as_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value & (1 << (bits - 1)):
        value -= 1 << bits
    return value


def as_bytes(raw: BytesLike, operation: str) -> bytes:
    """Accept bytes-like input or a sequence of signed/unsigned byte values."""
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw)
    out = bytearray()
    for b in raw:
        if isinstance(b, bool) or not isinstance(b, int) or not -128 <= b <= 255:
            raise UnsupportedTypeError(operation, b, hint="byte values must be in -128..255")
        out.append(b + 256 if b < 0 else b)
    return bytes(out)


def _require_int(v: Any, operation: str) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise UnsupportedTypeError(operation, v)
    return v


def _require_real(v: Any, operation: str) -> float:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise UnsupportedTypeError(operation, v)
    return float(v)


def _int_to_bytes(v: int, size: int) -> bytes:
    out = bytearray(size)
    for pos in range(size):
        out[pos] = (v >> (8 * pos)) & EIGHT_ONES
    out.reverse()
    return bytes(out)


def _int_from_bytes(raw: BytesLike, size: int, operation: str) -> int:
    data = as_bytes(raw, operation)
    if len(data) != size:
        raise PreconditionError(operation, expected=size, actual=len(data))

    # Least significant byte first, shift left by n bytes every time
    acc = 0
    for i, b in enumerate(reversed(data)):
        acc |= b << (8 * i)
    return _as_signed(acc, size * 8)


# ---------------------------------------------------------------------------
# bit reinterpretation
# ---------------------------------------------------------------------------

def double_to_bits(v: float) -> int:
    """Raw binary64 pattern of v as a signed 64-bit integer."""
    return struct.unpack(">q", struct.pack(">d", v))[0]


def bits_to_double(bits: int) -> float:
    return struct.unpack(">d", struct.pack(">Q", bits & 0xFFFFFFFFFFFFFFFF))[0]


def float_to_bits(v: float) -> int:
    """
    Raw binary32 pattern of v as a signed 32-bit integer.

    NaNs are narrowed by hand (sign plus the top 23 payload bits) so the
    signalling bit survives; the C float cast behind struct would quiet it.
    """
    bits = double_to_bits(v) & 0xFFFFFFFFFFFFFFFF
    if (bits & _F64_EXP_MASK) == _F64_EXP_MASK and bits & _F64_FRAC_MASK:
        sign = (bits >> 32) & 0x80000000
        frac = (bits & _F64_FRAC_MASK) >> _NAN_PAYLOAD_SHIFT
        if not frac:
            frac = _F32_QUIET_BIT
        return _as_signed(sign | _F32_EXP_MASK | frac, 32)
    try:
        return struct.unpack(">i", struct.pack(">f", v))[0]
    except OverflowError:
        raise UnsupportedTypeError(
            "float_to_bits", v, hint="magnitude exceeds the binary32 range"
        ) from None


def bits_to_float(bits: int) -> float:
    bits &= 0xFFFFFFFF
    if (bits & _F32_EXP_MASK) == _F32_EXP_MASK and bits & _F32_FRAC_MASK:
        sign = (bits & 0x80000000) << 32
        frac = (bits & _F32_FRAC_MASK) << _NAN_PAYLOAD_SHIFT
        return bits_to_double(sign | _F64_EXP_MASK | frac)
    return struct.unpack(">f", struct.pack(">I", bits))[0]


# ---------------------------------------------------------------------------
# 64-bit / 32-bit integers
# ---------------------------------------------------------------------------

def long_to_bytes(v: int) -> bytes:
    """8 big-endian bytes holding the same bits as the 64-bit value v."""
    return _int_to_bytes(_require_int(v, "long_to_bytes"), WIDTHS[LONG])


def long_from_bytes(raw: BytesLike) -> int:
    return _int_from_bytes(raw, WIDTHS[LONG], "long_from_bytes")


def int_to_bytes(v: int) -> bytes:
    """4 big-endian bytes holding the same bits as the 32-bit value v."""
    return _int_to_bytes(_require_int(v, "int_to_bytes"), WIDTHS[INT])


def int_from_bytes(raw: BytesLike) -> int:
    return _int_from_bytes(raw, WIDTHS[INT], "int_from_bytes")


# ---------------------------------------------------------------------------
# floating point
# ---------------------------------------------------------------------------

def double_to_bytes(v: float) -> bytes:
    return long_to_bytes(double_to_bits(_require_real(v, "double_to_bytes")))


def double_from_bytes(raw: BytesLike) -> float:
    return bits_to_double(_int_from_bytes(raw, WIDTHS[DOUBLE], "double_from_bytes"))


def float_to_bytes(v: float) -> bytes:
    return int_to_bytes(float_to_bits(_require_real(v, "float_to_bytes")))


def float_from_bytes(raw: BytesLike) -> float:
    return bits_to_float(_int_from_bytes(raw, WIDTHS[FLOAT], "float_from_bytes"))


# ---------------------------------------------------------------------------
# 16-bit kinds, layered on the 32-bit codec
# ---------------------------------------------------------------------------

def _narrow_to_bytes(v: int, size: int) -> bytes:
    return int_to_bytes(v)[-size:]


def _widen_from_bytes(raw: BytesLike, size: int, operation: str) -> int:
    data = as_bytes(raw, operation)
    if len(data) != size:
        raise PreconditionError(operation, expected=size, actual=len(data))
    return int_from_bytes(bytes(WIDTHS[INT] - size) + data)


def char_to_bytes(c: Union[str, int]) -> bytes:
    """
    2 big-endian bytes for a 16-bit character.

    Accepts a one-character str (code point <= 0xFFFF) or an int code unit,
    which is truncated to 16 bits.
    """
    if isinstance(c, str):
        if len(c) != 1 or ord(c) > 0xFFFF:
            raise UnsupportedTypeError(
                "char_to_bytes", c, hint="expected a single character in U+0000..U+FFFF"
            )
        code = ord(c)
    else:
        code = _require_int(c, "char_to_bytes")
    return _narrow_to_bytes(code, WIDTHS[CHAR])


def char_from_bytes(raw: BytesLike) -> str:
    code = _widen_from_bytes(raw, WIDTHS[CHAR], "char_from_bytes")
    return chr(code & 0xFFFF)


def short_to_bytes(v: int) -> bytes:
    return _narrow_to_bytes(_require_int(v, "short_to_bytes"), WIDTHS[SHORT])


def short_from_bytes(raw: BytesLike) -> int:
    return _as_signed(_widen_from_bytes(raw, WIDTHS[SHORT], "short_from_bytes"), 16)


# ---------------------------------------------------------------------------
# registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PrimitiveCodec:
    kind: str
    size: int
    encode: Callable[[Any], bytes]
    decode: Callable[[BytesLike], Any]


PRIMITIVES: Dict[str, PrimitiveCodec] = {
    LONG:   PrimitiveCodec(LONG,   WIDTHS[LONG],   long_to_bytes,   long_from_bytes),
    INT:    PrimitiveCodec(INT,    WIDTHS[INT],    int_to_bytes,    int_from_bytes),
    DOUBLE: PrimitiveCodec(DOUBLE, WIDTHS[DOUBLE], double_to_bytes, double_from_bytes),
    FLOAT:  PrimitiveCodec(FLOAT,  WIDTHS[FLOAT],  float_to_bytes,  float_from_bytes),
    CHAR:   PrimitiveCodec(CHAR,   WIDTHS[CHAR],   char_to_bytes,   char_from_bytes),
    SHORT:  PrimitiveCodec(SHORT,  WIDTHS[SHORT],  short_to_bytes,  short_from_bytes),
}


def get_codec(kind: str) -> PrimitiveCodec:
    return PRIMITIVES[normalize_kind(kind, operation="get_codec")]


def primitive_size(kind: str) -> int:
    return get_codec(kind).size


def encode_primitive(kind: str, value: Any) -> bytes:
    return get_codec(kind).encode(value)


def decode_primitive(kind: str, raw: BytesLike) -> Any:
    return get_codec(kind).decode(raw)


def encode_value(p: Primitive) -> bytes:
    return PRIMITIVES[p.kind].encode(p.value)


def decode_value(kind: str, raw: BytesLike) -> Primitive:
    codec = get_codec(kind)
    return Primitive(codec.kind, codec.decode(raw))
