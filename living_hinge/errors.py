# living_hinge/errors.py
# Exception taxonomy. Everything derives from ValueError so callers that
# only catch ValueError keep working.

from __future__ import annotations

from typing import Iterable, List


class HingeError(ValueError):
    """Base class for all living hinge errors."""


class UnknownParameter(HingeError, KeyError):
    def __init__(self, name: str):
        super().__init__(f"Unknown parameter: {name!r}")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])


class TypeMismatch(HingeError):
    def __init__(self, name: str, expected: str, value: object):
        super().__init__(f"Parameter {name!r} expects {expected}, got {value!r}")
        self.name = name
        self.expected = expected
        self.value = value


class CyclicDependency(HingeError):
    def __init__(self, names: Iterable[str]):
        self.names = sorted(names)
        super().__init__("Cyclic dependency between: " + ", ".join(self.names))


class UnresolvedReference(HingeError):
    def __init__(self, name: str, reference: str):
        super().__init__(f"Formula of {name!r} references unknown parameter {reference!r}")
        self.name = name
        self.reference = reference


class ValidationFailure(HingeError):
    """Carries every validation message, never just the first one."""

    def __init__(self, messages: Iterable[str]):
        self.messages: List[str] = list(messages)
        super().__init__("Validation failed:\n" + "\n".join(f"- {m}" for m in self.messages))


class LayoutTooLarge(HingeError):
    def __init__(self, requested: float, limit: int):
        super().__init__(f"Layout would need {requested:,} segments (limit {limit:,})")
        self.requested = requested
        self.limit = limit


class RenderFailure(HingeError):
    """Geometry could not be rendered; no partial document is returned."""
