# primbytes/model/kinds.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from primbytes.core.errors import UnsupportedTypeError


LONG = "long"      # 64-bit signed integer
INT = "int"        # 32-bit signed integer
DOUBLE = "double"  # IEEE-754 binary64
FLOAT = "float"    # IEEE-754 binary32
CHAR = "char"      # 16-bit character code (UTF-16 code unit)
SHORT = "short"    # 16-bit signed integer

KINDS: Tuple[str, ...] = (LONG, INT, DOUBLE, FLOAT, CHAR, SHORT)

WIDTHS: Dict[str, int] = {
    LONG:   8,
    INT:    4,
    DOUBLE: 8,
    FLOAT:  4,
    CHAR:   2,
    SHORT:  2,
}


def normalize_kind(kind: str, *, operation: str = "kind") -> str:
    """Return the canonical kind name, or raise UnsupportedTypeError."""
    k = kind.lower() if isinstance(kind, str) else None
    if k not in WIDTHS:
        raise UnsupportedTypeError(operation, kind, hint=f"known kinds: {', '.join(KINDS)}")
    return k


@dataclass(frozen=True)
class Primitive:
    """
    A value tagged with the primitive kind it should be encoded as.

    Python has a single `int` and a single `float`, so the tag is what tells
    a 32-bit int apart from a 64-bit long (or a float from a double).
    """
    kind: str
    value: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", normalize_kind(self.kind, operation="Primitive"))

    @property
    def width(self) -> int:
        return WIDTHS[self.kind]
