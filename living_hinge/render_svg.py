# living_hinge/render_svg.py
# Serialize a Layout into an SVG document (full scale or scaled preview).
#
# Geometry (sheet, slits, dimension lines, font size) scales with `scale`;
# stroke widths do not, so the slit stroke is always SlitWidth.
# The generation timestamp inside <metadata> is the only non-reproducible part.

from __future__ import annotations

import json
import math
from datetime import datetime
from typing import Callable, Iterable, List, Optional
from xml.sax.saxutils import escape

from .config import DEFAULTS
from .errors import RenderFailure
from .parameters import ParameterSet
from .types import Layout
from .utils import fmt

Clock = Callable[[], datetime]


def _check_finite(values: Iterable[float], what: str) -> None:
    for v in values:
        if not isinstance(v, (int, float)) or not math.isfinite(v):
            raise RenderFailure(f"Cannot render non-finite {what}: {v!r}")


def _meta_comment(pset: ParameterSet) -> str:
    # "--" is not allowed inside XML comments
    return json.dumps(pset.snapshot(), ensure_ascii=False).replace("--", "- -")


def render(
    layout: Layout,
    pset: ParameterSet,
    scale: float = 1.0,
    *,
    clock: Optional[Clock] = None,
    labels: bool = True,
) -> str:
    """
    Render the layout. Returns the complete document or raises RenderFailure;
    never a truncated document. Does not modify layout or pset.
    """
    _check_finite([scale], "scale")
    if scale <= 0:
        raise RenderFailure(f"Scale must be positive, got {scale!r}")

    slit_width = pset.number("SlitWidth")
    length, width, inset = layout.length, layout.width, layout.inset
    _check_finite([slit_width, length, width, inset], "sheet dimension")
    for seg in layout.segments:
        _check_finite((seg.start_x, seg.end_x, seg.y), f"coordinate in row {seg.row}")

    material_color = str(pset.value("MaterialColor"))
    cut_color = str(pset.value("CutColor"))
    stamp = (clock or datetime.now)().strftime(DEFAULTS.metadata_timestamp_format)

    def s(v: float) -> str:
        return fmt(v * scale)

    canvas_w = length + 2 * inset
    canvas_h = width + 2 * inset

    out: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>\n',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{s(canvas_w)}" height="{s(canvas_h)}" '
        f'viewBox="0 0 {s(canvas_w)} {s(canvas_h)}">\n',
        f"  <metadata>Generated: {escape(stamp)}</metadata>\n",
        f"  <!-- meta: {_meta_comment(pset)} -->\n",
        "  <defs>\n",
        "    <style>\n",
        f"      .hinge-material {{ fill: {escape(material_color)}; stroke: {DEFAULTS.outline_color}; stroke-width: 0.5; }}\n",
        f"      .hinge-cut {{ stroke: {escape(cut_color)}; stroke-width: {fmt(slit_width)}; }}\n",
        f"      .hinge-dim {{ stroke: {DEFAULTS.dimension_color}; stroke-width: 0.5; }}\n",
        f"      .hinge-label {{ fill: {DEFAULTS.dimension_color}; font-family: Arial, sans-serif; "
        f"font-size: {s(DEFAULTS.label_font_size)}px; text-anchor: middle; }}\n",
        "    </style>\n",
        "  </defs>\n",
        f'  <rect x="{s(inset)}" y="{s(inset)}" width="{s(length)}" height="{s(width)}" class="hinge-material"/>\n',
        '  <g id="CUT">\n',
    ]

    for seg in layout.segments:
        out.append(
            f'    <line x1="{s(seg.start_x)}" y1="{s(seg.y)}" x2="{s(seg.end_x)}" y2="{s(seg.y)}" class="hinge-cut"/>\n'
        )
    out.append("  </g>\n")

    if labels:
        out.extend(_dimension_annotations(layout, s))

    out.append("</svg>\n")
    return "".join(out)


def _dimension_annotations(layout: Layout, s: Callable[[float], str]) -> List[str]:
    length, width, inset = layout.length, layout.width, layout.inset
    bottom = inset + width
    mid_y = inset + width / 2
    label_x = inset - 3
    return [
        '  <g id="DIMENSIONS">\n',
        # Length: under the sheet
        f'    <line x1="{s(inset)}" y1="{s(bottom + 2)}" x2="{s(inset + length)}" y2="{s(bottom + 2)}" class="hinge-dim"/>\n',
        f'    <text x="{s(inset + length / 2)}" y="{s(bottom + 9)}" class="hinge-label">{fmt(length)}mm</text>\n',
        # Width: left of the sheet, reading bottom-up
        f'    <line x1="{s(inset - 2)}" y1="{s(inset)}" x2="{s(inset - 2)}" y2="{s(bottom)}" class="hinge-dim"/>\n',
        f'    <text x="{s(label_x)}" y="{s(mid_y)}" class="hinge-label" '
        f'transform="rotate(-90, {s(label_x)}, {s(mid_y)})">{fmt(width)}mm</text>\n',
        "  </g>\n",
    ]


def render_preview(
    layout: Layout,
    pset: ParameterSet,
    scale: Optional[float] = None,
    *,
    clock: Optional[Clock] = None,
) -> str:
    """Scaled-down drawing for UI display (same cuts as the full drawing)."""
    return render(layout, pset, DEFAULTS.preview_scale if scale is None else scale, clock=clock)
