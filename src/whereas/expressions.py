"""
Expression AST for Resolutions.

Every value-producing phrase of a Resolution is parsed into one of the
immutable node types below. Operators are enums whose values are the words
that spell them in source text.

ARCHITECTURAL RULE:
    Nodes are structure only.
    They do NOT evaluate themselves (see whereas.evaluator)
    and do NOT render themselves (see whereas.backends).
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum


class Expression(ABC):
    """
    Base class for all expression nodes.

    Exists to give the expression hierarchy a common type.
    The set of subclasses is closed: every consumer dispatches on
    exactly the node types defined in this module.
    """
    pass


class UnaryOperator(Enum):
    """Prefix operators binding one operand."""

    DOUBLE = "twice"
    TRIPLE = "thrice"


class BinaryOperator(Enum):
    """
    Prefix operators binding two operands.

    No separator word is needed between the operands:
        sum Total one (1)
    """

    SUM = "sum"
    PRODUCT = "product"
    QUOTIENT = "quotient"
    REMAINDER = "remainder"


class InfixOperator(Enum):
    """
    The sole infix operator.

    Spelled "less" but it subtracts: "ten (10) less four (4)" is 6.
    It is NOT a comparison. Comparisons exist only in conditionals.
    """

    SUBTRACT = "less"


class PostfixOperator(Enum):
    """Postfix operators binding only their left operand."""

    SQUARE = "squared"
    CUBE = "cubed"


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    """
    A signed 64-bit integer written as cardinal and numeral.

    Example:
        ninety-nine (99)  ->  IntegerLiteral(99)
    """

    value: int


@dataclass(frozen=True)
class StringLiteral(Expression):
    """
    A double-quoted string.

    Example:
        "Hello, World!"  ->  StringLiteral("Hello, World!")
    """

    value: str


@dataclass(frozen=True)
class Identifier(Expression):
    """
    A capitalized name introduced by a "hereinafter" declaration.

    IMPORTANT:
        This node does NOT know whether the name was declared.
        Declaration discipline is enforced by the parser.
    """

    name: str


@dataclass(frozen=True)
class UnaryPrefixExpr(Expression):
    """
    Example:
        thrice four (4)

    Becomes:
        UnaryPrefixExpr(
            operator=UnaryOperator.TRIPLE,
            operand=IntegerLiteral(4)
        )
    """

    operator: UnaryOperator
    operand: Expression


@dataclass(frozen=True)
class BinaryPrefixExpr(Expression):
    """
    Example:
        product three (3) four (4)

    Becomes:
        BinaryPrefixExpr(
            operator=BinaryOperator.PRODUCT,
            first=IntegerLiteral(3),
            second=IntegerLiteral(4)
        )
    """

    operator: BinaryOperator
    first: Expression
    second: Expression


@dataclass(frozen=True)
class InfixExpr(Expression):
    """
    Example:
        ten (10) less six (6) less one (1)

    Becomes (left-associative):
        InfixExpr(
            operator=InfixOperator.SUBTRACT,
            left=InfixExpr(SUBTRACT, IntegerLiteral(10), IntegerLiteral(6)),
            right=IntegerLiteral(1)
        )
    """

    operator: InfixOperator
    left: Expression
    right: Expression


@dataclass(frozen=True)
class PostfixExpr(Expression):
    """
    Example:
        three (3) squared  ->  PostfixExpr(PostfixOperator.SQUARE, IntegerLiteral(3))
    """

    operator: PostfixOperator
    operand: Expression
