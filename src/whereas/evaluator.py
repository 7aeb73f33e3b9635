"""
Tree-walking evaluator for Resolutions.

Evaluates AST nodes against an Environment. Runtime failures are returned
as Error values, never raised, and every dispatch site checks for them so
that the first error stops evaluation of the enclosing tree.

Published lines go to a caller-supplied `emit` callback; the evaluator
performs no I/O of its own.

Integer arithmetic is NOT overflow-checked: results wrap to signed 64 bits.
Only integer literals are range-checked (at parse time).
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from whereas.errors import EvaluationError
from whereas.expressions import (
    BinaryOperator,
    BinaryPrefixExpr,
    Expression,
    Identifier,
    InfixExpr,
    InfixOperator,
    IntegerLiteral,
    PostfixExpr,
    PostfixOperator,
    StringLiteral,
    UnaryOperator,
    UnaryPrefixExpr,
)
from whereas.model import AssumeStmt, DeclStmt, IfStmt, PublishStmt, Relation, Resolution
from whereas.parser import parse_string
from whereas.values import Environment, Error, Integer, String, Value, is_error


logger = logging.getLogger(__name__)

Emit = Callable[[str], None]

_MODULUS = 1 << 64
_HALF = 1 << 63


def _wrap(n: int) -> int:
    """Reduce n to signed 64-bit two's complement."""
    return (n + _HALF) % _MODULUS - _HALF


def _truncating_divmod(a: int, b: int):
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient, a - b * quotient


def evaluate(node, env: Environment, emit: Optional[Emit] = None) -> Optional[Value]:
    """
    Evaluate an AST node.

    Args:
        node: Any expression, statement, or Resolution
        env: Bindings, read by identifiers and written by declarations
        emit: Receives the rendering of each published value

    Returns:
        - expressions: their Value, or None for an unbound identifier
        - statements and Resolutions: None, or the Error that stopped them

    Raises:
        TypeError: If node is not an AST node
    """
    if isinstance(node, IntegerLiteral):
        return Integer(node.value)

    if isinstance(node, StringLiteral):
        return String(node.value)

    if isinstance(node, Identifier):
        # A miss is not an error: callers treat it as "no value".
        return env.get(node.name)

    if isinstance(node, UnaryPrefixExpr):
        operand = evaluate(node.operand, env, emit)
        if is_error(operand):
            return operand
        return _eval_unary(node.operator, operand)

    if isinstance(node, BinaryPrefixExpr):
        first = evaluate(node.first, env, emit)
        if is_error(first):
            return first
        second = evaluate(node.second, env, emit)
        if is_error(second):
            return second
        return _eval_binary(node.operator, first, second)

    if isinstance(node, InfixExpr):
        left = evaluate(node.left, env, emit)
        if is_error(left):
            return left
        right = evaluate(node.right, env, emit)
        if is_error(right):
            return right
        return _eval_infix(node.operator, left, right)

    if isinstance(node, PostfixExpr):
        operand = evaluate(node.operand, env, emit)
        if is_error(operand):
            return operand
        return _eval_postfix(node.operator, operand)

    if isinstance(node, (DeclStmt, AssumeStmt)):
        value = evaluate(node.value, env, emit)
        if is_error(value):
            return value
        if value is not None:
            env.set(node.name.name, value)
        return None

    if isinstance(node, PublishStmt):
        value = evaluate(node.value, env, emit)
        if is_error(value):
            return value
        if value is not None and emit is not None:
            emit(value.inspect())
        return None

    if isinstance(node, IfStmt):
        return _eval_if(node, env, emit)

    if isinstance(node, Resolution):
        for stmt in node.statements():
            result = evaluate(stmt, env, emit)
            if is_error(result):
                logger.debug("evaluation stopped: %s", result.message)
                return result
        return None

    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def _eval_if(node: IfStmt, env: Environment, emit: Optional[Emit]) -> Optional[Value]:
    left = evaluate(node.left, env, emit)
    if is_error(left):
        return left
    right = evaluate(node.right, env, emit)
    if is_error(right):
        return right
    if left is None or right is None:
        return None

    if node.relation == Relation.EQUALS:
        holds = left == right
    elif node.relation == Relation.EXCEEDS:
        if not isinstance(left, Integer) or not isinstance(right, Integer):
            return Error(f"type mismatch: {left.type.value} exceeds {right.type.value}")
        holds = left.value > right.value
    else:
        return Error(f"unknown relation {node.relation}")

    if holds:
        return evaluate(node.consequence, env, emit)
    return None


def _non_numeric(value: Optional[Value]) -> Error:
    if value is None:
        return Error("missing value in numeric context")
    return Error(f"non-numeric {value.inspect()} in numeric context")


def _eval_unary(operator: UnaryOperator, operand: Optional[Value]) -> Value:
    if not isinstance(operand, Integer):
        return _non_numeric(operand)
    n = operand.value
    if operator == UnaryOperator.DOUBLE:
        return Integer(_wrap(2 * n))
    if operator == UnaryOperator.TRIPLE:
        return Integer(_wrap(3 * n))
    return Error(f"unknown operator {operator} {n}")


def _eval_binary(operator: BinaryOperator, first: Optional[Value], second: Optional[Value]) -> Value:
    if not isinstance(first, Integer):
        return _non_numeric(first)
    if not isinstance(second, Integer):
        return _non_numeric(second)
    a, b = first.value, second.value

    if operator == BinaryOperator.SUM:
        return Integer(_wrap(a + b))
    if operator == BinaryOperator.PRODUCT:
        return Integer(_wrap(a * b))
    if operator in (BinaryOperator.QUOTIENT, BinaryOperator.REMAINDER):
        if b == 0:
            return Error(f"division by zero: {operator.value} {a} {b}")
        quotient, remainder = _truncating_divmod(a, b)
        if operator == BinaryOperator.QUOTIENT:
            return Integer(_wrap(quotient))
        return Integer(_wrap(remainder))
    return Error(f"unknown operator {operator} {a} {b}")


def _eval_infix(operator: InfixOperator, left: Optional[Value], right: Optional[Value]) -> Value:
    if not isinstance(left, Integer):
        return _non_numeric(left)
    if not isinstance(right, Integer):
        return _non_numeric(right)
    if operator == InfixOperator.SUBTRACT:
        return Integer(_wrap(left.value - right.value))
    return Error(f"unknown operator {left.value} {operator} {right.value}")


def _eval_postfix(operator: PostfixOperator, operand: Optional[Value]) -> Value:
    if not isinstance(operand, Integer):
        return _non_numeric(operand)
    n = operand.value
    if operator == PostfixOperator.SQUARE:
        return Integer(_wrap(n * n))
    if operator == PostfixOperator.CUBE:
        return Integer(_wrap(n * n * n))
    return Error(f"unknown operator {n} {operator}")


def run(source: str, emit: Optional[Emit] = None) -> List[str]:
    """
    Parse and evaluate Resolution source in a fresh Environment.

    Args:
        source: Resolution text
        emit: Optional callback, called with each published line as it happens

    Returns:
        Every published line, in order

    Raises:
        WhereasError: Any lexical or parse error
        EvaluationError: If evaluation produced an Error value
    """
    resolution = parse_string(source)
    lines: List[str] = []

    def collect(line: str) -> None:
        lines.append(line)
        if emit is not None:
            emit(line)

    result = evaluate(resolution, Environment(), collect)
    if is_error(result):
        raise EvaluationError(result)
    return lines


__all__ = ["evaluate", "run", "Emit"]
