# living_hinge/io_csv.py
# CSV export helpers:
# - cut segments in layout order (for CAM import / diffing)
# - resolved parameter table (value, unit, formula)

from __future__ import annotations

import csv
from pathlib import Path
from typing import Optional

from .parameters import ParameterSet
from .types import Layout
from .utils import fmt


def export_segments_csv(layout: Layout, path: str | Path) -> None:
    """
    Write cut segments into a CSV file, one row per slit, in layout order.
    Coordinates are full-scale drawing units (sheet starts at the inset).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = ["index", "row", "start_x", "end_x", "y", "length"]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for i, s in enumerate(layout.segments):
            w.writerow(
                {
                    "index": i,
                    "row": s.row,
                    "start_x": fmt(s.start_x),
                    "end_x": fmt(s.end_x),
                    "y": fmt(s.y),
                    "length": fmt(s.length()),
                }
            )


def export_parameters_csv(pset: ParameterSet, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = ["name", "kind", "value", "unit", "formula"]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for p in pset:
            w.writerow(
                {
                    "name": p.name,
                    "kind": "base" if p.is_base else "derived",
                    "value": p.value,
                    "unit": p.unit or "",
                    "formula": p.formula or "",
                }
            )


def export_all(layout: Layout, pset: Optional[ParameterSet], out_dir: str | Path, prefix: str = "hinge") -> None:
    """Export segments (and parameters when given) into out_dir."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    export_segments_csv(layout, out_dir / f"{prefix}_segments.csv")
    if pset is not None:
        export_parameters_csv(pset, out_dir / f"{prefix}_parameters.csv")
