# living_hinge/formula.py
# Tiny arithmetic formula language for derived parameters:
#   numbers, parameter names, + - * /, unary minus, parentheses,
#   floor/ceil/min/max/abs/round.
#
# Formulas are parsed with the stdlib `ast` module and walked by hand;
# nothing is ever passed to eval().

from __future__ import annotations

import ast
import math
from typing import Callable, Dict, FrozenSet, Mapping


def _floor(x: float) -> float | int:
    # Non-finite values pass through so the validator can report them.
    return math.floor(x) if math.isfinite(x) else x


def _ceil(x: float) -> float | int:
    return math.ceil(x) if math.isfinite(x) else x


FUNCTIONS: Dict[str, Callable[..., float]] = {
    "floor": _floor,
    "ceil": _ceil,
    "min": min,
    "max": max,
    "abs": abs,
    "round": round,
}


def _div(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


_BINOPS: Dict[type, Callable[[float, float], float]] = {
    ast.Add: lambda a, b: a + b,
    ast.Sub: lambda a, b: a - b,
    ast.Mult: lambda a, b: a * b,
    ast.Div: _div,
}


class Formula:
    """
    A parsed formula.

    >>> f = Formula("floor((Width - 20) / RowOffset)")
    >>> sorted(f.references)
    ['RowOffset', 'Width']
    >>> f.evaluate({"Width": 50, "RowOffset": 8})
    3
    """

    def __init__(self, text: str):
        self.text = str(text).strip()
        try:
            tree = ast.parse(self.text, mode="eval")
        except SyntaxError as e:
            raise ValueError(f"Invalid formula {self.text!r}: {e.msg}") from None
        self._body = tree.body
        refs = set()
        self._check(self._body, refs)
        self.references: FrozenSet[str] = frozenset(refs)

    def __repr__(self) -> str:
        return f"Formula({self.text!r})"

    def _check(self, node: ast.AST, refs: set) -> None:
        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
                raise ValueError(f"Invalid literal in formula {self.text!r}: {node.value!r}")
        elif isinstance(node, ast.Name):
            refs.add(node.id)
        elif isinstance(node, ast.BinOp):
            if type(node.op) not in _BINOPS:
                raise ValueError(f"Unsupported operator in formula {self.text!r}")
            self._check(node.left, refs)
            self._check(node.right, refs)
        elif isinstance(node, ast.UnaryOp):
            if not isinstance(node.op, (ast.USub, ast.UAdd)):
                raise ValueError(f"Unsupported operator in formula {self.text!r}")
            self._check(node.operand, refs)
        elif isinstance(node, ast.Call):
            if not isinstance(node.func, ast.Name) or node.func.id not in FUNCTIONS or node.keywords:
                raise ValueError(f"Unsupported function call in formula {self.text!r}")
            for arg in node.args:
                self._check(arg, refs)
        else:
            raise ValueError(f"Unsupported syntax in formula {self.text!r}: {type(node).__name__}")

    def evaluate(self, values: Mapping[str, float]) -> float | int:
        """Evaluate against a name -> number mapping (KeyError on a missing name)."""
        return self._eval(self._body, values)

    def _eval(self, node: ast.AST, values: Mapping[str, float]):
        if isinstance(node, ast.Constant):
            return node.value
        if isinstance(node, ast.Name):
            v = values[node.id]
            return float(v) if isinstance(v, bool) else v
        if isinstance(node, ast.BinOp):
            return _BINOPS[type(node.op)](self._eval(node.left, values), self._eval(node.right, values))
        if isinstance(node, ast.UnaryOp):
            v = self._eval(node.operand, values)
            return -v if isinstance(node.op, ast.USub) else v
        # ast.Call, checked in __init__
        fn = FUNCTIONS[node.func.id]
        return fn(*(self._eval(a, values) for a in node.args))
