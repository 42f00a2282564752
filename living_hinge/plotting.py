# living_hinge/plotting.py
# Matplotlib preview of a layout: the sheet, every slit, and the two dimensions.
# Drawing coordinates are kept (y grows downwards, like the SVG).

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Rectangle

from .config import DEFAULTS
from .metrics import compute_layout_metrics
from .parameters import ParameterSet
from .types import Layout


@dataclass(frozen=True)
class PlotStyle:
    show_dims: bool = True
    show_title: bool = True
    show_grid: bool = False
    font_size: int = 8
    cut_linewidth: float = 1.0  # points; SlitWidth is a laser setting, not a plot width


def _title(layout: Layout, pset: ParameterSet) -> str:
    m = compute_layout_metrics(layout)
    bits = [
        f"{layout.length:g}×{layout.width:g} mm",
        f"{layout.rows} rows × {layout.slits_per_row} slits",
        f"{m.num_segments} cuts",
        f"cut {m.total_cut_length:,.1f} mm",
        f"flex {pset.number('FlexibilityFactor'):.3f}",
    ]
    if layout.dropped:
        bits.append(f"{layout.dropped} dropped")
    return " | ".join(bits)


def plot_layout(
    layout: Layout,
    pset: ParameterSet,
    style: Optional[PlotStyle] = None,
    figsize: Optional[Tuple[float, float]] = None,
) -> plt.Figure:
    """Draw the layout into a new figure and return it."""
    style = style or PlotStyle()
    inset = layout.inset
    W, H = layout.length + 2 * inset, layout.width + 2 * inset

    if figsize is None:
        # keep the sheet aspect, ~8 inches wide
        figsize = (8.0, max(2.5, 8.0 * H / W))

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    sheet = Rectangle(
        (inset, inset),
        layout.length,
        layout.width,
        facecolor=str(pset.value("MaterialColor")),
        edgecolor=DEFAULTS.outline_color,
        linewidth=0.8,
    )
    ax.add_patch(sheet)

    if layout.segments:
        lines = [[(s.start_x, s.y), (s.end_x, s.y)] for s in layout.segments]
        ax.add_collection(
            LineCollection(lines, colors=str(pset.value("CutColor")), linewidths=style.cut_linewidth)
        )

    if style.show_dims:
        ax.text(
            inset + layout.length / 2,
            inset + layout.width + inset * 0.6,
            f"{layout.length:g} mm",
            ha="center",
            va="center",
            fontsize=style.font_size,
            color=DEFAULTS.dimension_color,
        )
        ax.text(
            inset * 0.4,
            inset + layout.width / 2,
            f"{layout.width:g} mm",
            ha="center",
            va="center",
            rotation=90,
            fontsize=style.font_size,
            color=DEFAULTS.dimension_color,
        )

    if style.show_title:
        ax.set_title(_title(layout, pset), fontsize=10)

    ax.set_xlim(0, W)
    ax.set_ylim(H, 0)
    ax.set_aspect("equal", adjustable="box")
    ax.grid(bool(style.show_grid), linewidth=0.3)
    ax.tick_params(labelbottom=False, labelleft=False, bottom=False, left=False)

    fig.tight_layout()
    return fig


def show_layout(layout: Layout, pset: ParameterSet, style: Optional[PlotStyle] = None) -> None:
    """Convenience wrapper: plot and show."""
    plot_layout(layout, pset, style=style)
    plt.show()


def save_layout_png(
    layout: Layout,
    pset: ParameterSet,
    path: str,
    style: Optional[PlotStyle] = None,
    dpi: int = 200,
) -> None:
    fig = plot_layout(layout, pset, style=style)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
