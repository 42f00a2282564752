# living_hinge/presets.py
# The one authoritative preset table and apply_preset().
#
# A preset is a batch of base-parameter overrides followed by a recompute.
# Unknown names (including "Custom") keep the caller's current values.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .logger import get_logger
from .parameters import ParameterSet


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    overrides: Dict[str, float] = field(default_factory=dict)


def _preset(name: str, description: str, length, width, slit_length, slit_spacing, row_offset) -> Preset:
    return Preset(
        name=name,
        description=description,
        overrides={
            "Length": length,
            "Width": width,
            "SlitLength": slit_length,
            "SlitSpacing": slit_spacing,
            "RowOffset": row_offset,
        },
    )


# Values in mm
PRESETS: Dict[str, Preset] = {
    p.name.lower(): p
    for p in (
        _preset("Standard", "Standard Living Hinge", 100.0, 50.0, 15.0, 3.0, 8.0),
        _preset("Dense", "Dense Pattern (More Flexible)", 80.0, 40.0, 12.0, 2.0, 6.0),
        _preset("Sparse", "Sparse Pattern (Less Flexible)", 150.0, 75.0, 20.0, 5.0, 12.0),
        _preset("Flexible", "Flexible Pattern (Long Slits)", 120.0, 60.0, 25.0, 2.5, 7.0),
    )
}

CUSTOM = "Custom"


def available_presets() -> List[str]:
    """Names for a picker, table presets first, then Custom."""
    return [p.name for p in PRESETS.values()] + [CUSTOM]


def find_preset(name: Optional[str]) -> Optional[Preset]:
    """Case-insensitive lookup; None for unknown names."""
    if not name:
        return None
    return PRESETS.get(str(name).strip().lower())


def apply_preset(pset: ParameterSet, name: Optional[str]) -> Optional[Preset]:
    """
    Override base values from the named preset, then recompute.
    Returns the matched Preset, or None when the name is not in the table
    (the set keeps its values but is still recomputed).
    """
    preset = find_preset(name)
    if preset is None:
        if name and str(name).strip().lower() != CUSTOM.lower():
            get_logger().warn(f"Unknown preset {name!r}, keeping current values")
    else:
        pset.set_many(preset.overrides)
    pset.recompute()
    return preset
