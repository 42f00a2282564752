# living_hinge/validate.py
# Validation rules that gate layout and rendering.
# Every rule is checked (no short-circuit) so a UI can show all problems at once.

from __future__ import annotations

from typing import List, Sequence, Tuple

from .errors import ValidationFailure
from .parameters import ParameterSet

# (parameter, label used in the message)
POSITIVE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("Length", "Length"),
    ("Width", "Width"),
    ("SlitLength", "Slit length"),
    ("SlitSpacing", "Slit spacing"),
    ("RowOffset", "Row offset"),
)


def validate_parameters(pset: ParameterSet) -> List[str]:
    """
    Return human-readable violations (empty list if the set is valid).
    Expects a recomputed set.
    """
    errors: List[str] = []

    for name, label in POSITIVE_FIELDS:
        if not pset.number(name) > 0:
            errors.append(f"{label} must be greater than 0")

    # `not >= 1` so non-finite counts (e.g. from RowOffset = 0) fail as well
    if not pset.number("NumberOfRows") >= 1:
        errors.append("Must have at least 1 row of cuts")

    if not pset.number("SlitsPerRow") >= 1:
        errors.append("Must have at least 1 slit per row")

    return errors


def is_valid(pset: ParameterSet) -> bool:
    return not validate_parameters(pset)


def raise_on_errors(messages: Sequence[str]) -> None:
    if messages:
        raise ValidationFailure(messages)
