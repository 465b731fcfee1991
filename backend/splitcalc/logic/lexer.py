"""
Lexer for splitcalc expressions.

Turns one input line into an ordered list of typed tokens.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..errors import LexError
from .priority import (
    DELIMITER_PRIORITY,
    DELIMITERS,
    IDENTIFIER_PRIORITY,
    LITERAL_PRIORITY,
    OPERATORS,
    operator_priority,
)

logger = logging.getLogger(__name__)


class TokenKind(str, Enum):
    """Kinds of lexed tokens."""
    LITERAL = "literal"
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    DELIMITER = "delimiter"


@dataclass(frozen=True)
class Token:
    """A lexed unit with its precedence priority."""
    text: str
    kind: TokenKind
    priority: int
    position: int = 0

    @classmethod
    def create(cls, text: str, kind: TokenKind, position: int = 0) -> "Token":
        """Build a token, deriving its priority from the kind and text."""
        if kind == TokenKind.LITERAL:
            priority = LITERAL_PRIORITY
        elif kind == TokenKind.IDENTIFIER:
            priority = IDENTIFIER_PRIORITY
        elif kind == TokenKind.OPERATOR:
            priority = operator_priority(text)
        else:
            priority = DELIMITER_PRIORITY
        return cls(text=text, kind=kind, priority=priority, position=position)

    @property
    def is_open(self) -> bool:
        return self.kind == TokenKind.DELIMITER and self.text == "("

    @property
    def is_close(self) -> bool:
        return self.kind == TokenKind.DELIMITER and self.text == ")"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "kind": self.kind.value,
            "priority": self.priority,
            "position": self.position,
        }


class Lexer:
    """
    Left-to-right scanner.

    At each offset the patterns are tried in a fixed order: decimal
    literal, integer literal, identifier, whitespace, operators (longest
    first), delimiters. The first match wins.
    """

    PATTERN_DOUBLE = re.compile(r"\d+\.\d+")
    PATTERN_INT = re.compile(r"\d+")
    PATTERN_IDENTIFIER = re.compile(r"[A-Za-z][A-Za-z0-9]*")
    PATTERN_SPACE = re.compile(r"\s+")

    SNIPPET_LENGTH = 10

    def tokenize(self, line: str) -> List[Token]:
        """
        Lex a line into tokens.

        Args:
            line: The raw input line.

        Returns:
            The tokens in source order.

        Raises:
            LexError: If nothing matches at some offset.
        """
        tokens: List[Token] = []
        pos = 0

        while pos < len(line):
            match = self._match(line, pos)
            if match is None:
                snippet = line[pos:pos + self.SNIPPET_LENGTH]
                raise LexError(pos, snippet)

            text, kind = match
            if kind is not None:
                tokens.append(Token.create(text, kind, pos))
            pos += len(text)

        logger.debug("lexed %d tokens from %r", len(tokens), line)
        return tokens

    def _match(self, line: str, pos: int) -> Optional[Tuple[str, Optional[TokenKind]]]:
        """Match one token at pos. Whitespace yields a None kind."""
        for pattern, kind in (
            (self.PATTERN_DOUBLE, TokenKind.LITERAL),
            (self.PATTERN_INT, TokenKind.LITERAL),
            (self.PATTERN_IDENTIFIER, TokenKind.IDENTIFIER),
            (self.PATTERN_SPACE, None),
        ):
            m = pattern.match(line, pos)
            if m:
                return m.group(), kind

        for op in OPERATORS:
            if line.startswith(op, pos):
                return op, TokenKind.OPERATOR

        for delim in DELIMITERS:
            if line.startswith(delim, pos):
                return delim, TokenKind.DELIMITER

        return None


def lex(line: str) -> List[Token]:
    """Lex a line with a default Lexer."""
    return Lexer().tokenize(line)
