# living_hinge/metrics.py
# Layout metrics:
# - number of emitted slits and slits dropped at the right edge
# - total cut length (what the laser actually travels while cutting)
# - effective flexibility (emitted cut length / sheet area)
#
# FlexibilityFactor in the ParameterSet is the nominal figure from the formula;
# these numbers describe the layout that will really be cut.

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .types import Layout


@dataclass(frozen=True)
class LayoutMetrics:
    num_segments: int
    dropped_segments: int
    rows_used: int
    total_cut_length: float
    sheet_area: float

    @property
    def effective_flexibility(self) -> float:
        if self.sheet_area <= 0:
            return 0.0
        return self.total_cut_length / self.sheet_area


def compute_total_cut_length(layout: Layout) -> float:
    """Sum of all slit lengths."""
    total = 0.0
    for s in layout.segments:
        total += s.length()
    return total


def compute_row_counts(layout: Layout) -> List[int]:
    """Emitted slits per row (index = row); rows with no slits report 0."""
    counts: Dict[int, int] = {}
    for s in layout.segments:
        counts[s.row] = counts.get(s.row, 0) + 1
    return [counts.get(r, 0) for r in range(layout.rows)]


def compute_layout_metrics(layout: Layout) -> LayoutMetrics:
    return LayoutMetrics(
        num_segments=layout.num_segments(),
        dropped_segments=layout.dropped,
        rows_used=layout.rows_used(),
        total_cut_length=compute_total_cut_length(layout),
        sheet_area=layout.length * layout.width,
    )
