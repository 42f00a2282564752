# living_hinge/types.py
# Core data structures for living hinge generation (parameters, cut segments, layouts).
# Keep this file dependency-light so it can be imported everywhere.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

Value = Union[float, int, str, bool]


class ValueType(str, Enum):
    NUMBER = "number"
    TEXT = "text"
    BOOL = "bool"


# ----------------------------
# Parameters
# ----------------------------

@dataclass
class Parameter:
    """
    One named, unit-tagged value of a ParameterSet.
    Base parameters have formula=None; derived ones carry the formula text.
    """
    name: str
    value_type: ValueType
    value: Value
    unit: Optional[str] = None
    formula: Optional[str] = None

    @property
    def is_base(self) -> bool:
        return self.formula is None

    @property
    def is_derived(self) -> bool:
        return self.formula is not None


# ----------------------------
# Layout output
# ----------------------------

@dataclass(frozen=True)
class CutSegment:
    """
    A single horizontal slit.
    Coordinates are in full-scale drawing space (sheet starts at the inset).
    """
    row: int
    start_x: float
    end_x: float
    y: float

    def length(self) -> float:
        return self.end_x - self.start_x

    def __post_init__(self):
        if self.row < 0:
            raise ValueError("CutSegment.row must be >= 0")


@dataclass(frozen=True)
class Layout:
    """Ordered cut segments (row-major, then slit-major) plus sheet bounds."""
    segments: Tuple[CutSegment, ...]
    length: float
    width: float
    inset: float
    margin_top: float
    rows: int
    slits_per_row: int
    alternate_rows: bool
    dropped: int = 0

    def num_segments(self) -> int:
        return len(self.segments)

    def rows_used(self) -> int:
        return len({s.row for s in self.segments})

    def sheet_bounds(self) -> Tuple[float, float, float, float]:
        """(x0, y0, x1, y1) of the material rectangle."""
        return (self.inset, self.inset, self.inset + self.length, self.inset + self.width)
