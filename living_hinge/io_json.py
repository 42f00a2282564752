# living_hinge/io_json.py
# Hinge job files and JSON export.
#
# Job JSON shape:
# {
#   "name": "lid_hinge",                 (optional)
#   "preset": "Dense",                   (optional, case-insensitive)
#   "params": {"Length": 120, "AlternateRows": false, ...}   (optional base overrides)
# }

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .parameters import ParameterSet
from .types import Layout
from .utils import layout_to_dict


@dataclass(frozen=True)
class HingeJob:
    name: str = ""
    preset: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)


def parse_job(data: Dict[str, Any]) -> HingeJob:
    if not isinstance(data, dict):
        raise ValueError("Job JSON must be an object")
    params = data.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError("Job 'params' must be an object of base parameter values")
    preset = data.get("preset")
    return HingeJob(
        name=str(data.get("name") or "").strip(),
        preset=str(preset).strip() if preset else None,
        params=dict(params),
    )


def load_job_json(path: str | Path) -> HingeJob:
    """
    Load a job definition. Parameter names and types are checked later,
    when the values are assigned to a ParameterSet.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_job(data)


def save_layout_json(layout: Layout, path: str | Path, pset: Optional[ParameterSet] = None, *, indent: int = 2) -> None:
    """Save segments (+ parameters) for debugging/integration."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(layout_to_dict(layout, pset), f, ensure_ascii=False, indent=indent)
