# primbytes/__init__.py
"""Bit-exact big-endian conversion between primitive values and bytes."""

from .core.errors import CodecError, PreconditionError, UnsupportedTypeError, LayoutError
from .model import Primitive, PairCodec, encode_primitive, decode_primitive, primitive_size
from .layout import RecordLayout, LayoutLoader

__version__ = "0.1.0"

__all__ = ["CodecError", "PreconditionError", "UnsupportedTypeError", "LayoutError",
           "Primitive", "PairCodec",
           "encode_primitive", "decode_primitive", "primitive_size",
           "RecordLayout", "LayoutLoader"]
