"""
Error types for the splitcalc interpreter.

Every failure while processing a line is a CalcError subclass, so the
read loop can report it and move on to the next line.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CalcError(Exception):
    """Base class for all interpreter errors."""

    kind = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"kind": self.kind, "message": self.message}


class LexError(CalcError):
    """No token pattern matches at the given offset."""

    kind = "LexError"

    def __init__(self, position: int, snippet: str):
        super().__init__(f"invalid token at {position}: `{snippet}`")
        self.position = position
        self.snippet = snippet

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["position"] = self.position
        data["snippet"] = self.snippet
        return data


class ParseError(CalcError):
    """The token sequence does not form a valid expression."""

    kind = "ParseError"

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.position is not None:
            data["position"] = self.position
        return data


class EvalError(CalcError):
    """Evaluation of a well-formed tree failed."""

    kind = "EvalError"


class ConfigError(CalcError):
    """The interpreter configuration could not be loaded."""

    kind = "ConfigError"
