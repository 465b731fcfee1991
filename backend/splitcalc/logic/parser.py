"""
Tree builder for splitcalc expressions.

Builds a binary expression tree by splitting a token span at its
minimum-priority token (the root) and recursing on both sides. Tokens
enclosed in parentheses get their priority raised by PAREN_WEIGHT, so a
parenthesised sub-expression is never split while an operator outside
it remains.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..errors import ParseError
from .lexer import Lexer, Token, TokenKind
from .nodes import BinaryOp, Literal, Node, Operator, Variable
from .priority import PAREN_WEIGHT

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Splits one owned token list into an expression tree.

    Recursion works on [start, end) index ranges into ``self.tokens``;
    sub-spans are never copied.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens: List[Token] = list(tokens)

    def build(self) -> Node:
        """
        Build the tree for the whole token list.

        Returns:
            The root node.

        Raises:
            ParseError: If the tokens do not form an expression, or nest
                too deeply to split.
        """
        try:
            return self._build(0, len(self.tokens))
        except RecursionError:
            raise ParseError("expression too deeply nested", self._position(0)) from None

    def _build(self, start: int, end: int) -> Node:
        if start >= end:
            raise ParseError("missing operand", self._position(start))

        # Strip outer pairs such as "((1+2))"
        while self._is_wrapped(start, end):
            start += 1
            end -= 1
            if start >= end:
                raise ParseError("missing operand", self._position(start))

        if end - start == 1:
            return self._terminal(self.tokens[start])

        root = self._find_root(start, end)
        token = self.tokens[root]

        if token.kind != TokenKind.OPERATOR:
            raise ParseError(f"invalid syntax `{token.text}`", token.position)
        if root == start or root == end - 1:
            raise ParseError(f"missing operand for `{token.text}`", token.position)

        logger.debug("split [%d, %d) at %d (%s)", start, end, root, token.text)
        left = self._build(start, root)
        right = self._build(root + 1, end)
        return BinaryOp(Operator(token.text), left, right)

    def _terminal(self, token: Token) -> Node:
        """Convert a single-token span into a leaf node."""
        if token.kind == TokenKind.LITERAL:
            if Lexer.PATTERN_DOUBLE.fullmatch(token.text):
                return Literal(float(token.text))
            if Lexer.PATTERN_INT.fullmatch(token.text):
                return Literal(int(token.text))
        elif token.kind == TokenKind.IDENTIFIER:
            if Lexer.PATTERN_IDENTIFIER.fullmatch(token.text):
                return Variable(token.text, 0)

        raise ParseError(f"invalid syntax `{token.text}`", token.position)

    def _is_wrapped(self, start: int, end: int) -> bool:
        """True if the first and last tokens of the span are a matching pair."""
        if end - start < 2:
            return False
        if not self.tokens[start].is_open or not self.tokens[end - 1].is_close:
            return False

        depth = 0
        for i in range(start, end):
            token = self.tokens[i]
            if token.is_open:
                depth += 1
            elif token.is_close:
                depth -= 1
            if depth == 0:
                return i == end - 1
        return False

    def _effective_priorities(self, start: int, end: int) -> List[int]:
        """Priorities of the span with parenthesis weighting applied."""
        opens = [i for i in range(start, end) if self.tokens[i].is_open]
        closes = [i for i in range(start, end) if self.tokens[i].is_close]

        if not opens and not closes:
            return [self.tokens[i].priority for i in range(start, end)]

        if not opens or not closes or opens[0] > closes[-1]:
            first = min(opens + closes)
            raise ParseError("invalid parenthesis", self.tokens[first].position)

        priorities = []
        depth = 0
        for i in range(start, end):
            token = self.tokens[i]
            if token.is_open:
                depth += 1
            elif token.is_close:
                depth -= 1
                if depth < 0:
                    raise ParseError("invalid parenthesis", token.position)

            if depth > 0 and token.kind != TokenKind.DELIMITER:
                priorities.append(token.priority + PAREN_WEIGHT)
            else:
                priorities.append(token.priority)

        if depth != 0:
            raise ParseError("invalid parenthesis", self.tokens[opens[0]].position)

        return priorities

    def _find_root(self, start: int, end: int) -> int:
        """Index of the minimum-priority token; ties go to the rightmost."""
        priorities = self._effective_priorities(start, end)

        root: Optional[int] = None
        best: Optional[int] = None
        for i in range(end - 1, start - 1, -1):
            if self.tokens[i].kind == TokenKind.DELIMITER:
                continue
            priority = priorities[i - start]
            if best is None or priority < best:
                root, best = i, priority

        if root is None:
            raise ParseError("invalid syntax", self._position(start))
        return root

    def _position(self, index: int) -> Optional[int]:
        """Character offset for a token index, if there is one."""
        if not self.tokens:
            return None
        if index < len(self.tokens):
            return self.tokens[index].position
        last = self.tokens[-1]
        return last.position + len(last.text)


def build(tokens: Sequence[Token]) -> Node:
    """Build an expression tree from tokens."""
    return TreeBuilder(tokens).build()
