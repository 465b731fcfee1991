"""
Expression engine for splitcalc.

Provides lexing, tree building and evaluation of single-line expressions.
"""

from .lexer import Lexer, Token, TokenKind, lex
from .nodes import BinaryOp, Literal, Node, Operator, Variable
from .parser import TreeBuilder, build
from .evaluator import ExpressionEvaluator, evaluate

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "lex",
    "BinaryOp",
    "Literal",
    "Node",
    "Operator",
    "Variable",
    "TreeBuilder",
    "build",
    "ExpressionEvaluator",
    "evaluate",
]
