# primbytes/core/errors.py
from __future__ import annotations

from typing import Any


class CodecError(Exception):
    """
    Base class for all expected conversion errors in primbytes.
    """

    #: Stable machine-readable identifier (for CLI exit mapping, etc.)
    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Decode-side errors
# ---------------------------------------------------------------------------

class PreconditionError(CodecError, ValueError):
    """
    A byte sequence does not have the exact width the operation needs.

    Examples:
      - long_from_bytes() given 7 bytes
      - pair_long_long_from_bytes() given anything but 16 bytes
      - RecordLayout.unpack_many() given a partial trailing record
    """
    code = "precondition_failed"

    def __init__(self, operation: str, *, expected: int, actual: int):
        super().__init__(
            f"{operation}: expected {expected} bytes, got {actual}",
            details={"operation": operation, "expected": expected, "actual": actual},
        )
        self.operation = operation
        self.expected = expected
        self.actual = actual


# ---------------------------------------------------------------------------
# Encode-side errors
# ---------------------------------------------------------------------------

class UnsupportedTypeError(CodecError, TypeError):
    """
    A value (or kind name) is not one of the six supported primitive kinds.

    Examples:
      - pair_to_bytes() given a bool, None or a list
      - encode_primitive("u128", ...)
      - a character outside the 16-bit range
    """
    code = "unsupported_type"

    def __init__(self, operation: str, value: Any, *, hint: str | None = None):
        super().__init__(
            f"{operation}: unsupported type for {value!r}",
            hint=hint,
            details={"operation": operation, "type": type(value).__name__},
        )
        self.operation = operation
        self.value = value


# ---------------------------------------------------------------------------
# Layout metadata errors
# ---------------------------------------------------------------------------

class LayoutError(CodecError, ValueError):
    """
    Record layout metadata or a record is invalid.

    Examples:
      - layouts.yml missing 'layouts' root node
      - unknown field type
      - record missing a field during pack()
    """
    code = "layout_error"
