"""
Expression evaluator for splitcalc trees.

Walks a tree built by the TreeBuilder and computes its value. Assignment
writes into the cell of the Variable node on its left; every other
operator evaluates its left operand, then its right, then applies the
operator.
"""

from __future__ import annotations

import logging
import math
from typing import Union

from ..errors import EvalError
from .nodes import BinaryOp, Literal, Node, Number, Operator, Value, Variable

logger = logging.getLogger(__name__)

INF = float("inf")
NAN = float("nan")


class ExpressionEvaluator:
    """
    Evaluator for expression trees.

    Integer operands stay integers where the operation allows it; any
    float operand makes the result a float. Float division by zero
    follows IEEE semantics instead of raising.
    """

    def evaluate(self, node: Node) -> Value:
        """
        Evaluate a tree.

        Args:
            node: The root of the tree.

        Returns:
            A number, or a bool for comparisons.

        Raises:
            EvalError: If evaluation fails, or the tree nests too deeply.
        """
        try:
            return self._evaluate(node)
        except RecursionError:
            raise EvalError("expression too deeply nested") from None

    def _evaluate(self, node: Node) -> Value:
        if isinstance(node, Literal):
            return node.value

        if isinstance(node, Variable):
            return node.value

        if isinstance(node, BinaryOp):
            if node.operator == Operator.ASSIGN:
                return self._eval_assign(node)

            left = self._evaluate(node.left)
            right = self._evaluate(node.right)
            return self._apply(node.operator, left, right)

        raise EvalError(f"unknown node type: {type(node).__name__}")

    def _eval_assign(self, node: BinaryOp) -> Value:
        """Store the right-hand value in the left-hand Variable."""
        target = node.left
        if not isinstance(target, Variable):
            raise EvalError("lvalue must be variable")

        value = self._evaluate(node.right)
        logger.debug("assign %s <- %r", target.name, value)
        return target.assign(value)

    def _apply(self, op: Operator, left: Value, right: Value) -> Value:
        """Apply a non-assignment operator to evaluated operands."""
        if op == Operator.EQ:
            return self._equals(left, right)

        if op == Operator.NE:
            return not self._equals(left, right)

        self._require_numeric(op, left, right)

        if op == Operator.LT:
            return left < right

        if op == Operator.LE:
            return left <= right

        if op == Operator.GT:
            return left > right

        if op == Operator.GE:
            return left >= right

        try:
            if op == Operator.ADD:
                return left + right

            if op == Operator.SUB:
                return left - right

            if op == Operator.MUL:
                return left * right

            if op == Operator.DIV:
                return self._divide(left, right)

            if op == Operator.MOD:
                return self._modulo(left, right)

            if op == Operator.POW:
                return self._power(left, right)
        except OverflowError:
            raise EvalError(f"numeric overflow in `{op.value}`") from None

        raise EvalError(f"unknown operator: {op.value}")

    def _equals(self, left: Value, right: Value) -> bool:
        """Equality where a bool never equals a number."""
        if isinstance(left, bool) != isinstance(right, bool):
            return False
        return left == right

    def _require_numeric(self, op: Operator, left: Value, right: Value) -> None:
        """Reject boolean operands for arithmetic and ordering."""
        if isinstance(left, bool) or isinstance(right, bool):
            raise EvalError(f"operand must be numeric for `{op.value}`")

    def _divide(self, left: Number, right: Number) -> Number:
        if isinstance(left, int) and isinstance(right, int):
            if right == 0:
                raise EvalError("divided by 0")
            return left // right

        try:
            return left / right
        except ZeroDivisionError:
            if left == 0 or math.isnan(left):
                return NAN
            return math.copysign(INF, left) * math.copysign(1.0, right)

    def _modulo(self, left: Number, right: Number) -> Number:
        if isinstance(left, int) and isinstance(right, int):
            if right == 0:
                raise EvalError("divided by 0")
            return left % right

        try:
            return left % right
        except ZeroDivisionError:
            return NAN

    def _power(self, left: Number, right: Number) -> Number:
        if isinstance(left, int) and isinstance(right, int) and right >= 0:
            return left ** right

        # Converting a huge integer operand raises OverflowError for the caller
        base = float(left)
        exponent = float(right)

        try:
            result: Union[float, complex] = base ** exponent
        except ZeroDivisionError:
            # 0.0 raised to a negative power
            return INF
        except OverflowError:
            negative = base < 0 and exponent.is_integer() and int(exponent) % 2 == 1
            return -INF if negative else INF

        if isinstance(result, complex):
            return NAN
        return result


def evaluate(node: Node) -> Value:
    """Evaluate a tree with a default ExpressionEvaluator."""
    return ExpressionEvaluator().evaluate(node)
