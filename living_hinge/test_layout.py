# living_hinge/test_layout.py
# Cut layout: margins, alternate-row shift, the inclusive right edge, ordering, caps.

from __future__ import annotations

import pytest

from living_hinge.errors import LayoutTooLarge, ValidationFailure
from living_hinge.layout import generate_layout
from living_hinge.metrics import compute_layout_metrics, compute_row_counts
from living_hinge.parameters import HINGE_SCHEMA, ParamDef, create
from living_hinge.types import CutSegment, ValueType


def _fixed_slits_schema(slits: int):
    """Schema whose SlitsPerRow ignores the sheet length, to reach the overhang rule."""
    return tuple(
        ParamDef("SlitsPerRow", ValueType.NUMBER, "count", formula=str(slits)) if d.name == "SlitsPerRow" else d
        for d in HINGE_SCHEMA
    )


def test_standard_layout_geometry() -> None:
    layout = generate_layout(create())
    assert layout.rows == 3
    assert layout.slits_per_row == 5
    assert layout.margin_top == 13.0           # (50 - 3 * 8) / 2
    assert layout.num_segments() == 15
    assert layout.dropped == 0

    first = layout.segments[0]
    assert first == CutSegment(row=0, start_x=10.0, end_x=25.0, y=23.0)

    # odd rows shift by SlitSpacing / 2
    row1 = [s for s in layout.segments if s.row == 1]
    assert [s.start_x for s in row1] == [11.5, 29.5, 47.5, 65.5, 83.5]
    assert {s.y for s in row1} == {31.0}

    row2 = [s for s in layout.segments if s.row == 2]
    assert [s.start_x for s in row2] == [10.0, 28.0, 46.0, 64.0, 82.0]
    assert {s.y for s in row2} == {39.0}


def test_regular_rows_are_not_shifted() -> None:
    layout = generate_layout(create({"AlternateRows": False}))
    assert layout.alternate_rows is False
    for row in range(layout.rows):
        assert [s.start_x for s in layout.segments if s.row == row] == [10.0, 28.0, 46.0, 64.0, 82.0]


def test_segments_are_row_major_then_slit_major() -> None:
    layout = generate_layout(create({"Length": 190, "Width": 90}))
    keys = [(s.row, s.start_x) for s in layout.segments]
    assert keys == sorted(keys)


def test_overhanging_slits_are_dropped_not_clipped() -> None:
    # 6 slits of 15 at pitch 18: row 0 ends at 10 + 5*18 + 15 = 115
    pset = create({"Length": 100}, schema=_fixed_slits_schema(6))
    layout = generate_layout(pset)
    right_edge = layout.inset + layout.length
    assert all(s.end_x <= right_edge for s in layout.segments)
    assert all(s.length() == 15.0 for s in layout.segments)
    # last slit dropped in every row
    assert compute_row_counts(layout) == [5, 5, 5]
    assert layout.dropped == 3


def test_slit_ending_exactly_on_the_edge_is_emitted() -> None:
    # right edge = 10 + 105 = 115, row 0 last slit ends at exactly 115;
    # row 1 is shifted by 1.5 and its last slit (end 116.5) is dropped
    pset = create({"Length": 105}, schema=_fixed_slits_schema(6))
    layout = generate_layout(pset)
    assert compute_row_counts(layout) == [6, 5, 6]
    assert layout.dropped == 1
    assert max(s.end_x for s in layout.segments) == 115.0


def test_invalid_set_is_refused() -> None:
    with pytest.raises(ValidationFailure) as exc:
        generate_layout(create({"RowOffset": 0}))
    assert "Row offset must be greater than 0" in exc.value.messages


def test_segment_cap() -> None:
    with pytest.raises(LayoutTooLarge):
        generate_layout(create(), max_segments=10)
    with pytest.raises(LayoutTooLarge):
        generate_layout(create({"Length": 100_000, "Width": 100_000, "RowOffset": 0.5}))


def test_layout_is_deterministic() -> None:
    pset = create({"Length": 137.3, "SlitSpacing": 2.2})
    assert generate_layout(pset) == generate_layout(pset)


def test_layout_does_not_touch_parameters() -> None:
    pset = create()
    before = pset.snapshot()
    generate_layout(pset)
    assert pset.snapshot() == before


def test_metrics() -> None:
    m = compute_layout_metrics(generate_layout(create()))
    assert m.num_segments == 15
    assert m.rows_used == 3
    assert m.total_cut_length == pytest.approx(225.0)
    assert m.effective_flexibility == pytest.approx(225.0 / 5000.0)


def test_unbounded_count_is_too_large() -> None:
    # a count formula that divides by zero passes the ">= 1" rule as +inf
    schema = tuple(
        ParamDef("SlitsPerRow", ValueType.NUMBER, "count", formula="1 / 0") if d.name == "SlitsPerRow" else d
        for d in HINGE_SCHEMA
    )
    pset = create(schema=schema)
    assert pset.value("SlitsPerRow") == float("inf")
    with pytest.raises(LayoutTooLarge):
        generate_layout(pset)
