# primbytes/model/pair.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from primbytes.core.errors import PreconditionError, UnsupportedTypeError
from .codec import (
    BytesLike, PRIMITIVES,
    as_bytes, encode_value, long_from_bytes, long_to_bytes,
)
from .kinds import CHAR, DOUBLE, INT, LONG, WIDTHS, Primitive, normalize_kind


def resolve_kind(value: Any, *, operation: str = "resolve_kind") -> Primitive:
    """
    Tag a pair element with its primitive kind.

    Tagged values pass through. Bare Python values map int -> long,
    float -> double, one-character str -> char. Everything else (bool and
    None included) is rejected.
    """
    if isinstance(value, Primitive):
        return value
    if isinstance(value, bool):
        raise UnsupportedTypeError(operation, value)
    if isinstance(value, int):
        return Primitive(LONG, value)
    if isinstance(value, float):
        return Primitive(DOUBLE, value)
    if isinstance(value, str) and len(value) == 1:
        return Primitive(CHAR, value)
    raise UnsupportedTypeError(operation, value, hint="tag the value with Primitive(kind, value)")


def _split(pair: Any, operation: str) -> Tuple[Any, Any]:
    if not isinstance(pair, (tuple, list)) or len(pair) != 2:
        raise UnsupportedTypeError(operation, pair, hint="expected a two-element pair")
    first, second = pair
    return first, second


def pair_to_bytes(pair: Any) -> bytes:
    """First element's bytes followed by the second's, no delimiter."""
    first, second = _split(pair, "pair_to_bytes")
    a = resolve_kind(first, operation="pair_to_bytes")
    b = resolve_kind(second, operation="pair_to_bytes")
    return encode_value(a) + encode_value(b)


def pair_from_bytes(raw: BytesLike, first: str, second: str) -> Tuple[Any, Any]:
    """Split raw at the first kind's width and decode both halves."""
    k1 = normalize_kind(first, operation="pair_from_bytes")
    k2 = normalize_kind(second, operation="pair_from_bytes")
    data = as_bytes(raw, "pair_from_bytes")

    w1, w2 = WIDTHS[k1], WIDTHS[k2]
    if len(data) != w1 + w2:
        raise PreconditionError("pair_from_bytes", expected=w1 + w2, actual=len(data))
    return PRIMITIVES[k1].decode(data[:w1]), PRIMITIVES[k2].decode(data[w1:])


def pair_long_long_from_bytes(raw: BytesLike) -> Tuple[int, int]:
    data = as_bytes(raw, "pair_long_long_from_bytes")
    expected = WIDTHS[LONG] * 2
    if len(data) != expected:
        raise PreconditionError("pair_long_long_from_bytes", expected=expected, actual=len(data))
    return pair_from_bytes(data, LONG, LONG)


@dataclass(frozen=True)
class PairCodec:
    """Pair codec bound to two kinds, so decode knows where to split."""
    first: str
    second: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "first", normalize_kind(self.first, operation="PairCodec"))
        object.__setattr__(self, "second", normalize_kind(self.second, operation="PairCodec"))

    @property
    def size(self) -> int:
        return WIDTHS[self.first] + WIDTHS[self.second]

    def _bind(self, value: Any, kind: str) -> Primitive:
        if isinstance(value, Primitive):
            if value.kind != kind:
                raise UnsupportedTypeError(
                    "PairCodec.encode", value, hint=f"expected a {kind} element"
                )
            return value
        return Primitive(kind, value)

    def encode(self, pair: Any) -> bytes:
        first, second = _split(pair, "PairCodec.encode")
        return encode_value(self._bind(first, self.first)) + encode_value(self._bind(second, self.second))

    def decode(self, raw: BytesLike) -> Tuple[Any, Any]:
        return pair_from_bytes(raw, self.first, self.second)


# ---------------------------------------------------------------------------
# bit stitching
# ---------------------------------------------------------------------------

def stitch_ints(hi: int, lo: int) -> int:
    """Read two 32-bit ints, back to back, as one 64-bit long."""
    return long_from_bytes(pair_to_bytes((Primitive(INT, hi), Primitive(INT, lo))))


def split_long(v: int) -> Tuple[int, int]:
    """Inverse of stitch_ints: (high int, low int) of a 64-bit long."""
    return pair_from_bytes(long_to_bytes(v), INT, INT)
