# living_hinge/utils.py
# Small utilities used across the project:
# - timing context manager
# - number formatting for drawings and file names
# - JSON-friendly conversion of layouts and parameter sets
#
# Keeps dependencies minimal (stdlib only).

from __future__ import annotations

import math
import time
from contextlib import contextmanager
from dataclasses import asdict, is_dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .parameters import ParameterSet
from .types import Layout


@contextmanager
def timer(label: str = "timer") -> Iterator[Dict[str, float]]:
    """
    Usage:
      with timer("layout") as t:
          ...
      print(t["seconds"])
    """
    t0 = time.perf_counter()
    payload: Dict[str, float] = {}
    try:
        yield payload
    finally:
        payload["seconds"] = time.perf_counter() - t0


def fmt(n: float) -> str:
    """Drawing number: at most 3 decimals, no trailing zeros, no '-0'."""
    s = f"{n:.3f}".rstrip("0").rstrip(".")
    return "0" if s in ("-0", "") else s


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round like fixed-point formatting in most UIs (2.5 -> 3), not banker's rounding."""
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value {value!r}")
    d = Decimal(repr(float(value)))
    q = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # enough digits for the integer part plus the requested places
        ctx.prec = max(ctx.prec, d.adjusted() + places + 2)
        return d.quantize(q, rounding=ROUND_HALF_UP)


def _to_jsonable(obj: Any) -> Any:
    """Convert dataclasses and other objects to JSON-serializable structures."""
    if is_dataclass(obj):
        return _to_jsonable(asdict(obj))
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    return obj


def parameters_to_dict(pset: ParameterSet) -> Dict[str, Any]:
    """name -> {value, unit, formula} in schema order."""
    return {
        p.name: {
            "value": _to_jsonable(p.value),
            "unit": p.unit,
            "formula": p.formula,
        }
        for p in pset
    }


def layout_to_dict(layout: Layout, pset: Optional[ParameterSet] = None) -> Dict[str, Any]:
    """
    Convert a Layout (and optionally its ParameterSet) to a JSON-friendly dict.
    Segment order is preserved.
    """
    x0, y0, x1, y1 = layout.sheet_bounds()
    out: Dict[str, Any] = {
        "sheet": {
            "length": layout.length,
            "width": layout.width,
            "inset": layout.inset,
            "bounds": [x0, y0, x1, y1],
        },
        "rows": layout.rows,
        "slits_per_row": layout.slits_per_row,
        "alternate_rows": layout.alternate_rows,
        "margin_top": layout.margin_top,
        "dropped": layout.dropped,
        "segments": [
            {"row": s.row, "start_x": s.start_x, "end_x": s.end_x, "y": s.y}
            for s in layout.segments
        ],
    }
    if pset is not None:
        out["parameters"] = parameters_to_dict(pset)
    return _to_jsonable(out)
