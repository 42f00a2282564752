# living_hinge/parameters.py
# Parameter model + dependency resolver for one hinge instance.
#
# A ParameterSet has a closed schema: base parameters (assigned by the user or a preset)
# and derived parameters (formulas over other parameters). Unknown names are rejected,
# never silently created. recompute() evaluates every derived parameter in topological
# order over the formula-reference graph.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .config import parse_bool_text
from .errors import CyclicDependency, TypeMismatch, UnknownParameter, UnresolvedReference
from .formula import Formula
from .types import Parameter, Value, ValueType


@dataclass(frozen=True)
class ParamDef:
    """Schema entry: either a base default or a derived formula."""
    name: str
    value_type: ValueType
    unit: Optional[str]
    default: Value = 0.0
    formula: Optional[str] = None


# Order matters: it is the display/export order of every ParameterSet.
HINGE_SCHEMA: Tuple[ParamDef, ...] = (
    ParamDef("Length", ValueType.NUMBER, "mm", 100.0),
    ParamDef("Width", ValueType.NUMBER, "mm", 50.0),
    ParamDef("MaterialThickness", ValueType.NUMBER, "mm", 3.0),
    ParamDef("SlitLength", ValueType.NUMBER, "mm", 15.0),
    ParamDef("SlitWidth", ValueType.NUMBER, "mm", 1.0),
    ParamDef("SlitSpacing", ValueType.NUMBER, "mm", 3.0),
    ParamDef("RowOffset", ValueType.NUMBER, "mm", 8.0),
    ParamDef("MaterialColor", ValueType.TEXT, "color", "#F5F5DC"),
    ParamDef("CutColor", ValueType.TEXT, "color", "#FF0000"),
    ParamDef("AlternateRows", ValueType.BOOL, "boolean", True),
    ParamDef("NumberOfRows", ValueType.NUMBER, "count", formula="floor((Width - 20) / RowOffset)"),
    ParamDef("SlitsPerRow", ValueType.NUMBER, "count", formula="floor((Length - 10) / (SlitLength + SlitSpacing))"),
    ParamDef("TotalArea", ValueType.NUMBER, "mm2", formula="Length * Width"),
    ParamDef(
        "FlexibilityFactor",
        ValueType.NUMBER,
        "ratio",
        formula="(SlitLength * SlitsPerRow * NumberOfRows) / TotalArea",
    ),
)


def _finite(name: str, value: object, number: float) -> float:
    if not math.isfinite(number):
        raise TypeMismatch(name, "a finite number", value)
    return number


def coerce_value(name: str, value_type: ValueType, value: object) -> Value:
    """Convert `value` to the semantic type of a parameter or raise TypeMismatch."""
    if value_type is ValueType.NUMBER:
        if isinstance(value, bool):
            raise TypeMismatch(name, "a number", value)
        if isinstance(value, (int, float)):
            try:
                return _finite(name, value, float(value))
            except OverflowError:
                raise TypeMismatch(name, "a finite number", value) from None
        if isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                raise TypeMismatch(name, "a number", value) from None
            return _finite(name, value, number)
        raise TypeMismatch(name, "a number", value)

    if value_type is ValueType.BOOL:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value > 0
        if isinstance(value, str):
            try:
                return parse_bool_text(value)
            except ValueError:
                raise TypeMismatch(name, "a boolean", value) from None
        raise TypeMismatch(name, "a boolean", value)

    if isinstance(value, str):
        return value
    raise TypeMismatch(name, "text", value)


def dependency_order(formulas: Mapping[str, Formula], known: Iterable[str]) -> List[str]:
    """
    Topologically sort derived names so every formula runs after the derived
    values it references. Base names are already resolved.

    Raises UnresolvedReference / CyclicDependency.
    """
    known = set(known)
    for name, f in formulas.items():
        for ref in sorted(f.references):
            if ref not in known:
                raise UnresolvedReference(name, ref)

    # Kahn's algorithm; ties broken by declaration order so the result is stable.
    deps = {name: {r for r in f.references if r in formulas} for name, f in formulas.items()}
    order: List[str] = []
    ready = [n for n in formulas if not deps[n]]
    while ready:
        n = ready.pop(0)
        order.append(n)
        for m in formulas:
            if n in deps[m]:
                deps[m].discard(n)
                if not deps[m] and m not in order and m not in ready:
                    ready.append(m)

    if len(order) != len(formulas):
        raise CyclicDependency(n for n in formulas if n not in order)
    return order


class ParameterSet:
    """
    Ordered name -> Parameter mapping owned by one hinge instance.
    Not thread-safe; the owner serializes access.
    """

    def __init__(self, schema: Iterable[ParamDef] = HINGE_SCHEMA):
        self._params: Dict[str, Parameter] = {}
        self._formulas: Dict[str, Formula] = {}
        for d in schema:
            if d.name in self._params:
                raise ValueError(f"Duplicate parameter in schema: {d.name}")
            if d.formula is None:
                value = coerce_value(d.name, d.value_type, d.default)
            else:
                self._formulas[d.name] = Formula(d.formula)
                value = math.nan
            self._params[d.name] = Parameter(
                name=d.name,
                value_type=d.value_type,
                value=value,
                unit=d.unit,
                formula=d.formula,
            )
        self._order: Optional[List[str]] = None

    # ---- introspection ----

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def __iter__(self):
        return iter(self._params.values())

    def __len__(self) -> int:
        return len(self._params)

    def names(self) -> List[str]:
        return list(self._params)

    def base_names(self) -> List[str]:
        return [n for n, p in self._params.items() if p.is_base]

    def derived_names(self) -> List[str]:
        return [n for n, p in self._params.items() if p.is_derived]

    def parameter(self, name: str) -> Parameter:
        try:
            return self._params[name]
        except KeyError:
            raise UnknownParameter(name) from None

    def get(self, name: str) -> Tuple[Value, Optional[str]]:
        """Current (value, unit) of a parameter."""
        p = self.parameter(name)
        return p.value, p.unit

    def value(self, name: str) -> Value:
        return self.parameter(name).value

    def number(self, name: str) -> float:
        v = self.value(name)
        return float(v)

    def snapshot(self) -> Dict[str, Value]:
        return {n: p.value for n, p in self._params.items()}

    def copy(self) -> "ParameterSet":
        other = ParameterSet.__new__(ParameterSet)
        other._params = {
            n: Parameter(p.name, p.value_type, p.value, p.unit, p.formula) for n, p in self._params.items()
        }
        other._formulas = dict(self._formulas)
        other._order = self._order
        return other

    # ---- mutation ----

    def set_base(self, name: str, value: object) -> Value:
        p = self._params.get(name)
        if p is None or not p.is_base:
            raise UnknownParameter(name)
        p.value = coerce_value(name, p.value_type, value)
        return p.value

    def set_many(self, values: Mapping[str, object]) -> None:
        """All-or-nothing: every value is coerced before any is assigned."""
        coerced = []
        for name, value in values.items():
            p = self._params.get(name)
            if p is None or not p.is_base:
                raise UnknownParameter(name)
            coerced.append((p, coerce_value(name, p.value_type, value)))
        for p, v in coerced:
            p.value = v

    def recompute(self) -> "ParameterSet":
        """Evaluate every derived parameter in dependency order. Idempotent."""
        if self._order is None:
            self._order = dependency_order(self._formulas, self._params)

        env: Dict[str, Value] = {n: p.value for n, p in self._params.items() if p.is_base}
        for name in self._order:
            v = self._formulas[name].evaluate(env)
            env[name] = v
            self._params[name].value = v
        return self


def create(defaults: Optional[Mapping[str, object]] = None, schema: Iterable[ParamDef] = HINGE_SCHEMA) -> ParameterSet:
    """New ParameterSet seeded from the schema, with optional base overrides, recomputed."""
    pset = ParameterSet(schema)
    if defaults:
        pset.set_many(defaults)
    return pset.recompute()
