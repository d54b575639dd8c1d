# primbytes/layout/record.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from primbytes.core.errors import LayoutError, PreconditionError, UnsupportedTypeError
from primbytes.model.codec import PRIMITIVES, BytesLike, as_bytes
from primbytes.model.kinds import WIDTHS, normalize_kind


@dataclass(frozen=True)
class LayoutField:
    name: str
    kind: str
    offset: int

    @property
    def size(self) -> int:
        return WIDTHS[self.kind]


class RecordLayout:
    """
    A fixed sequence of named primitive fields, packed back to back with no
    markers. Every record of a layout has the same size, so a buffer of
    records can be split without any framing.
    """

    def __init__(
        self,
        name: str,
        fields: Sequence[Tuple[str, str]],
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self.name = str(name)
        self._log = logger or logging.getLogger(__name__)

        if not fields:
            raise LayoutError(f"Layout '{self.name}' has no fields")

        built: List[LayoutField] = []
        seen = set()
        offset = 0
        for fname, ftype in fields:
            if not fname:
                raise LayoutError(f"Layout '{self.name}' has a field without a name")
            if fname in seen:
                raise LayoutError(f"Layout '{self.name}' has duplicate field '{fname}'")
            try:
                kind = normalize_kind(ftype, operation=f"layout {self.name}")
            except UnsupportedTypeError as e:
                raise LayoutError(
                    f"Layout '{self.name}' field '{fname}' has unknown type '{ftype}'",
                    hint=e.hint,
                ) from e
            seen.add(fname)
            built.append(LayoutField(name=str(fname), kind=kind, offset=offset))
            offset += WIDTHS[kind]

        self.fields: Tuple[LayoutField, ...] = tuple(built)
        self.size = offset

    def __repr__(self) -> str:
        cols = ", ".join(f"{f.name}:{f.kind}" for f in self.fields)
        return f"RecordLayout({self.name!r}, [{cols}])"

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    # --- single record ---
    def pack(self, values: Mapping[str, Any]) -> bytes:
        out = bytearray()
        for f in self.fields:
            if f.name not in values:
                raise LayoutError(f"Record for layout '{self.name}' is missing field '{f.name}'")
            out += PRIMITIVES[f.kind].encode(values[f.name])
        return bytes(out)

    def unpack(self, raw: BytesLike) -> Dict[str, Any]:
        data = as_bytes(raw, f"{self.name}.unpack")
        if len(data) != self.size:
            raise PreconditionError(f"{self.name}.unpack", expected=self.size, actual=len(data))
        return {
            f.name: PRIMITIVES[f.kind].decode(data[f.offset: f.offset + f.size])
            for f in self.fields
        }

    # --- whole buffers ---
    def pack_many(self, records: Iterable[Mapping[str, Any]]) -> bytes:
        out = bytearray()
        count = 0
        for rec in records:
            out += self.pack(rec)
            count += 1
        self._log.debug("Packed %d '%s' records into %d bytes", count, self.name, len(out))
        return bytes(out)

    def unpack_many(self, raw: BytesLike) -> List[Dict[str, Any]]:
        data = as_bytes(raw, f"{self.name}.unpack_many")
        if len(data) % self.size:
            # Expected length: the buffer rounded up to the next whole record
            whole = (len(data) // self.size + 1) * self.size
            raise PreconditionError(f"{self.name}.unpack_many", expected=whole, actual=len(data))

        records = [
            self.unpack(data[pos: pos + self.size])
            for pos in range(0, len(data), self.size)
        ]
        self._log.debug("Unpacked %d '%s' records from %d bytes", len(records), self.name, len(data))
        return records
