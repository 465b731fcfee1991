"""
Priority table for the tree builder.

Lower values bind looser and are split first.
"""

from __future__ import annotations

from typing import Dict

# Operator priorities. Multi-character operators come before their
# single-character prefixes, since the lexer tries them in this order.
OPERATORS: Dict[str, int] = {
    "<-": 0,
    "<=": 0,
    ">=": 0,
    "!=": 0,
    "=": 0,
    "<": 0,
    ">": 0,
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "%": 2,
    "^": 3,
}

DELIMITERS = ("(", ")")

LITERAL_PRIORITY = 1000
IDENTIFIER_PRIORITY = LITERAL_PRIORITY - 1

# Added to every token enclosed in parentheses. Must exceed every priority above.
PAREN_WEIGHT = 10000

# Delimiters are boundary markers and never become a root.
DELIMITER_PRIORITY = -1


def operator_priority(symbol: str) -> int:
    """Return the priority of an operator symbol."""
    try:
        return OPERATORS[symbol]
    except KeyError:
        raise ValueError(f"Unknown operator: {symbol}") from None
