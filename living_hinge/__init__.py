# living_hinge/__init__.py
"""
Living hinge pattern generator.

Parametric slit patterns for flexible cuts in rigid sheet material:
- parameter set with base values and formula-derived values (dependency ordered)
- preset table (Standard / Dense / Sparse / Flexible)
- validation gating layout and rendering
- deterministic row/slit layout (overhanging slits are dropped, not clipped)
- SVG output at full scale or preview scale + descriptive file names
- debounced refresh of a hinge instance while it is being edited
"""

from .types import (
    ValueType,
    Parameter,
    CutSegment,
    Layout,
)

from .errors import (
    HingeError,
    UnknownParameter,
    TypeMismatch,
    CyclicDependency,
    UnresolvedReference,
    ValidationFailure,
    LayoutTooLarge,
    RenderFailure,
)

from .parameters import (
    HINGE_SCHEMA,
    ParamDef,
    ParameterSet,
    create,
)

from .presets import (
    PRESETS,
    Preset,
    available_presets,
    apply_preset,
)

from .validate import validate_parameters, raise_on_errors
from .layout import generate_layout
from .metrics import LayoutMetrics, compute_layout_metrics
from .render_svg import render, render_preview
from .naming import HingeFileInfo, describe_filename, parse_filename
from .storage import DirectoryStorage, MemoryStorage, list_generated_hinges
from .debounce import DebounceScheduler
from .instance import HingeInstance

__all__ = [
    # types
    "ValueType",
    "Parameter",
    "CutSegment",
    "Layout",
    # errors
    "HingeError",
    "UnknownParameter",
    "TypeMismatch",
    "CyclicDependency",
    "UnresolvedReference",
    "ValidationFailure",
    "LayoutTooLarge",
    "RenderFailure",
    # parameters
    "HINGE_SCHEMA",
    "ParamDef",
    "ParameterSet",
    "create",
    # presets
    "PRESETS",
    "Preset",
    "available_presets",
    "apply_preset",
    # pipeline
    "validate_parameters",
    "raise_on_errors",
    "generate_layout",
    "LayoutMetrics",
    "compute_layout_metrics",
    "render",
    "render_preview",
    "HingeFileInfo",
    "describe_filename",
    "parse_filename",
    # boundaries
    "DirectoryStorage",
    "MemoryStorage",
    "list_generated_hinges",
    "DebounceScheduler",
    "HingeInstance",
]
