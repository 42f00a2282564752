# living_hinge/layout.py
# Deterministic cut layout: rows of horizontal slits on a rectangular sheet.
#
# For row r (0..rows-1):
#   y = inset + margin_top + r * RowOffset,   margin_top = (Width - rows * RowOffset) / 2
#   odd rows shift by SlitSpacing / 2 when AlternateRows is on
# For slit s (0..slits-1):
#   x = inset + shift + s * (SlitLength + SlitSpacing)
#   emitted only if x + SlitLength <= inset + Length (inclusive; overhanging slits are
#   dropped, never clipped)
#
# Segments come out row-major, then slit-major. Consumers rely on that order.

from __future__ import annotations

import math
from typing import List, Optional

from .config import DEFAULTS
from .errors import LayoutTooLarge
from .parameters import ParameterSet
from .types import CutSegment, Layout
from .validate import raise_on_errors, validate_parameters


def _count(pset: ParameterSet, name: str, limit: int) -> int:
    # Derived counts are floored by their formulas; truncate again in case a
    # caller handed us a float (fractions are dropped, never rounded).
    n = pset.number(name)
    if not math.isfinite(n):
        raise LayoutTooLarge(n, limit)
    return int(math.floor(n))


def generate_layout(
    pset: ParameterSet,
    *,
    inset: Optional[float] = None,
    max_segments: Optional[int] = None,
) -> Layout:
    """
    Build the Layout for a recomputed ParameterSet.

    Raises ValidationFailure for an invalid set and LayoutTooLarge when
    rows * slits_per_row exceeds the configured cap.
    """
    raise_on_errors(validate_parameters(pset))

    inset = DEFAULTS.sheet_inset if inset is None else float(inset)
    limit = DEFAULTS.max_segments if max_segments is None else int(max_segments)

    length = pset.number("Length")
    width = pset.number("Width")
    slit_length = pset.number("SlitLength")
    slit_spacing = pset.number("SlitSpacing")
    row_offset = pset.number("RowOffset")
    rows = _count(pset, "NumberOfRows", limit)
    slits = _count(pset, "SlitsPerRow", limit)
    alternate = bool(pset.value("AlternateRows"))

    if rows * slits > limit:
        raise LayoutTooLarge(rows * slits, limit)

    margin_top = (width - rows * row_offset) / 2
    pitch = slit_length + slit_spacing
    right_edge = inset + length

    segments: List[CutSegment] = []
    dropped = 0
    for row in range(rows):
        y = inset + margin_top + row * row_offset
        shift = slit_spacing / 2 if (alternate and row % 2 == 1) else 0.0

        for slit in range(slits):
            x = inset + shift + slit * pitch
            if x + slit_length <= right_edge:
                segments.append(CutSegment(row=row, start_x=x, end_x=x + slit_length, y=y))
            else:
                dropped += 1

    return Layout(
        segments=tuple(segments),
        length=length,
        width=width,
        inset=inset,
        margin_top=margin_top,
        rows=rows,
        slits_per_row=slits,
        alternate_rows=alternate,
        dropped=dropped,
    )
