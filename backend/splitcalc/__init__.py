"""
splitcalc: a single-line expression interpreter.

Expressions are parsed by splitting the token list at its
lowest-priority operator, recursively, and evaluated on the resulting
binary tree.
"""

from .errors import CalcError, ConfigError, EvalError, LexError, ParseError
from .logic import (
    BinaryOp,
    ExpressionEvaluator,
    Literal,
    Lexer,
    Operator,
    Token,
    TokenKind,
    TreeBuilder,
    Variable,
    build,
    evaluate,
    lex,
)

__version__ = "1.0.0"
__all__ = [
    "CalcError",
    "ConfigError",
    "EvalError",
    "LexError",
    "ParseError",
    "BinaryOp",
    "ExpressionEvaluator",
    "Literal",
    "Lexer",
    "Operator",
    "Token",
    "TokenKind",
    "TreeBuilder",
    "Variable",
    "build",
    "evaluate",
    "lex",
]
