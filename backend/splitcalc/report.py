"""
Line reports and debug dumps.

Renders tokens, trees and values as text, and collects the outcome of
one interpreted line into a LineReport for text or JSON output.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .errors import CalcError
from .logic.lexer import Token
from .logic.nodes import BinaryOp, Literal, Node, Value, Variable, json_value


def format_value(value: Value) -> str:
    """Render an evaluation result."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
    return repr(value)


def format_tokens(tokens: Sequence[Token]) -> str:
    """Render a token table, one token per line."""
    lines = []
    for token in tokens:
        lines.append(f'"{token.text}"\t=> {token.kind.value}\t(priority: {token.priority})')
    return "\n".join(lines)


def format_tree(node: Node, indent: int = 0) -> str:
    """Render an expression tree, children indented under their operator."""
    pad = "  " * indent

    if isinstance(node, Literal):
        return f"{pad}Literal({format_value(node.value)})"

    if isinstance(node, Variable):
        return f"{pad}Variable({node.name} = {format_value(node.value)})"

    if isinstance(node, BinaryOp):
        return "\n".join([
            f"{pad}BinaryOp({node.operator.value})",
            format_tree(node.left, indent + 1),
            format_tree(node.right, indent + 1),
        ])

    raise TypeError(f"Unknown node type: {type(node).__name__}")


@dataclass
class LineReport:
    """Outcome of interpreting one line."""

    line: str
    success: bool
    value: Optional[Value] = None
    error: Optional[CalcError] = None
    tokens: List[Token] = field(default_factory=list)
    tree: Optional[Node] = None

    def render(self, result_prefix: str = "=> ") -> str:
        """Text shown to the user for this line."""
        if self.success:
            return f"{result_prefix}{format_value(self.value)}"
        return str(self.error)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result: Dict[str, Any] = {
            "line": self.line,
            "success": self.success,
        }

        if self.success:
            result["value"] = json_value(self.value)
            result["display"] = format_value(self.value)
        if self.error is not None:
            result["error"] = self.error.to_dict()
        if self.tokens:
            result["tokens"] = [t.to_dict() for t in self.tokens]
        if self.tree is not None:
            result["tree"] = self.tree.to_dict()

        return result

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON."""
        return json.dumps(self.to_dict(), indent=indent, allow_nan=False)
