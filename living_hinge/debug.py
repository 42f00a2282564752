# living_hinge/debug.py
# Debug / inspection helpers:
# - pretty-print the parameter table and cut segments
# - handy when tuning presets by hand

from __future__ import annotations

from typing import Iterable

from .metrics import compute_layout_metrics
from .parameters import ParameterSet
from .types import CutSegment, Layout


def print_parameters(pset: ParameterSet) -> None:
    for p in pset:
        kind = "=" if p.is_derived else ":"
        unit = p.unit or ""
        line = f"{p.name:18s}{kind} {p.value!s:>12} {unit:6s}"
        if p.formula:
            line += f"  [{p.formula}]"
        print(line)


def print_segments(segments: Iterable[CutSegment]) -> None:
    for s in segments:
        print(f"[R{s.row:3d}] x={s.start_x:9.3f}..{s.end_x:9.3f}  y={s.y:9.3f}  len={s.length():7.3f}")


def print_layout(layout: Layout) -> None:
    m = compute_layout_metrics(layout)
    print(f"=== Layout {layout.length:g} x {layout.width:g} ===")
    print(f"Rows: {layout.rows}  Slits/row: {layout.slits_per_row}  Alternate: {layout.alternate_rows}")
    print(f"Cuts: {m.num_segments}  Dropped: {m.dropped_segments}")
    print(f"Total cut length: {m.total_cut_length:,.2f} mm")
    print(f"Effective flexibility: {m.effective_flexibility:.4f}")
    print("-- Segments --")
    print_segments(layout.segments)
