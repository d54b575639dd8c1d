from __future__ import annotations

import pytest

from primbytes.core.errors import LayoutError, PreconditionError
from primbytes.layout.record import RecordLayout
from primbytes.model.codec import double_to_bytes, int_to_bytes, short_to_bytes


def _span() -> RecordLayout:
    return RecordLayout("span", [("start", "int"), ("end", "int")])


def test_offsets_and_size():
    layout = RecordLayout("sample", [("ts", "long"), ("ch", "short"), ("tag", "char"), ("v", "float")])
    assert layout.size == 16
    assert [f.offset for f in layout.fields] == [0, 8, 10, 12]
    assert layout.field_names == ("ts", "ch", "tag", "v")


def test_pack_uses_field_order_not_mapping_order():
    layout = _span()
    raw = layout.pack({"end": 2, "start": 1})
    assert raw == int_to_bytes(1) + int_to_bytes(2)


def test_unpack_single_record():
    layout = RecordLayout("p", [("x", "double"), ("n", "short")])
    raw = double_to_bytes(-1.5) + short_to_bytes(-7)
    assert layout.unpack(raw) == {"x": -1.5, "n": -7}


def test_unpack_wrong_length_raises():
    with pytest.raises(PreconditionError) as ei:
        _span().unpack(bytes(7))
    assert ei.value.expected == 8


def test_pack_missing_field_raises():
    with pytest.raises(LayoutError):
        _span().pack({"start": 1})


def test_pack_many_and_unpack_many():
    layout = _span()
    records = [{"start": 0, "end": 10}, {"start": -5, "end": 5}, {"start": 7, "end": 7}]
    raw = layout.pack_many(records)
    assert len(raw) == 3 * layout.size
    assert layout.unpack_many(raw) == records


def test_unpack_many_empty_buffer():
    assert _span().unpack_many(b"") == []


def test_unpack_many_partial_record_raises():
    with pytest.raises(PreconditionError) as ei:
        _span().unpack_many(bytes(12))
    assert ei.value.expected == 16
    assert ei.value.actual == 12


@pytest.mark.parametrize("fields", [
    [],
    [("a", "int"), ("a", "long")],
    [("a", "uint8")],
    [("", "int")],
])
def test_invalid_layouts_raise(fields):
    with pytest.raises(LayoutError):
        RecordLayout("bad", fields)


def test_repr_lists_fields():
    assert repr(_span()) == "RecordLayout('span', [start:int, end:int])"
