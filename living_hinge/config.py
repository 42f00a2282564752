# living_hinge/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (sheet inset, debounce delay, preview scale, caps) in one place.

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Defaults:
    # Blank border around the material in the drawing (drawing units, mm at full scale)
    sheet_inset: float = 10.0

    # Quiescence window for coalescing parameter edits (seconds)
    debounce_s: float = 0.3

    # Scale used for the UI preview drawing
    preview_scale: float = 0.3

    # Hard cap on emitted cut segments (rows * slits per row)
    max_segments: int = 200_000

    # Artifact naming
    filename_timestamp_format: str = "%Y%m%d_%H%M%S"
    metadata_timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    artifact_patterns: Tuple[str, ...] = ("living_hinge_*.svg", "hinge_*.svg")

    # Annotation styling (not scaled with the drawing)
    label_font_size: float = 8.0
    dimension_color: str = "#666"
    outline_color: str = "#333"


DEFAULTS = Defaults()


def parse_size_text(size_text: str) -> Tuple[float, float]:
    """
    Parse '100x50' -> (100.0, 50.0)  (Length x Width)
    """
    s = size_text.lower().replace(" ", "")
    if "x" not in s:
        raise ValueError("size_text must be like '100x50'")
    a, b = s.split("x", 1)
    return float(a), float(b)


def parse_bool_text(s: str) -> bool:
    s = str(s).strip().lower()
    if s in ("1", "true", "yes", "y", "t", "on"):
        return True
    if s in ("0", "false", "no", "n", "f", "off"):
        return False
    raise ValueError(f"Invalid bool: {s}")
