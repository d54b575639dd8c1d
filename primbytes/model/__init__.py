from .kinds import KINDS, WIDTHS, Primitive
from .codec import (
    PrimitiveCodec, PRIMITIVES,
    long_to_bytes, long_from_bytes,
    int_to_bytes, int_from_bytes,
    double_to_bytes, double_from_bytes,
    float_to_bytes, float_from_bytes,
    char_to_bytes, char_from_bytes,
    short_to_bytes, short_from_bytes,
    encode_primitive, decode_primitive, primitive_size,
    encode_value, decode_value,
)
from .pair import (
    PairCodec,
    pair_to_bytes, pair_from_bytes, pair_long_long_from_bytes,
    stitch_ints, split_long,
)

__all__ = ["KINDS", "WIDTHS", "Primitive",
           "PrimitiveCodec", "PRIMITIVES",
           "long_to_bytes", "long_from_bytes",
           "int_to_bytes", "int_from_bytes",
           "double_to_bytes", "double_from_bytes",
           "float_to_bytes", "float_from_bytes",
           "char_to_bytes", "char_from_bytes",
           "short_to_bytes", "short_from_bytes",
           "encode_primitive", "decode_primitive", "primitive_size",
           "encode_value", "decode_value",
           "PairCodec",
           "pair_to_bytes", "pair_from_bytes", "pair_long_long_from_bytes",
           "stitch_ints", "split_long"]
