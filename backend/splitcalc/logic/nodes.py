"""
Expression tree nodes.

A tree is built for one input line and owns all of its nodes. The only
mutable state is the cell of a Variable, written by an assignment whose
left operand is that node.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

Number = Union[int, float]
Value = Union[int, float, bool]


def json_value(value: Value) -> Any:
    """JSON has no inf/nan, so those become the strings `inf`, `-inf` and `nan`."""
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
    return value


class Operator(str, Enum):
    """Binary operators understood by the evaluator."""
    ASSIGN = "<-"
    EQ = "="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"


@dataclass(frozen=True)
class Literal:
    """Numeric literal."""
    value: Number

    def to_dict(self) -> Dict[str, Any]:
        return {"literal": json_value(self.value)}


@dataclass(eq=False)
class Variable:
    """Named cell, zero on construction. Compared by identity."""
    name: str
    value: Value = 0

    def assign(self, value: Value) -> Value:
        """Store a value in the cell and return it."""
        self.value = value
        return value

    def to_dict(self) -> Dict[str, Any]:
        return {"var": self.name, "value": json_value(self.value)}


@dataclass(eq=False)
class BinaryOp:
    """Operator applied to two exclusively owned children."""
    operator: Operator
    left: "Node"
    right: "Node"

    def to_dict(self) -> Dict[str, Any]:
        return {self.operator.value: [self.left.to_dict(), self.right.to_dict()]}


Node = Union[Literal, Variable, BinaryOp]
