"""
Statement AST and the Resolution root.

A Resolution has two ordered sections:
    - Whereas statements (declarations), all of which come first
    - Resolved statements (actions)

ARCHITECTURAL RULE:
    These objects:
        - Are immutable once built (frozen dataclasses, tuples)
        - Are produced only by the parser or by explicit construction
        - Represent structure, not behavior
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from whereas.expressions import Expression, Identifier


class Relation(Enum):
    """Relations available to conditionals."""

    EQUALS = "equals"
    EXCEEDS = "exceeds"


@dataclass(frozen=True)
class DeclStmt:
    """
    Declares a name and its initial value.

    Example:
        WHEREAS the Amount in Stock (hereinafter Stock) is ninety-nine (99)

    Becomes:
        DeclStmt(name=Identifier("Stock"), value=IntegerLiteral(99))
    """

    name: Identifier
    value: Expression


@dataclass(frozen=True)
class AssumeStmt:
    """
    Reassigns a declared name.

    Example:
        RESOLVED, that the Total assume sum Total one (1)
    """

    name: Identifier
    value: Expression


@dataclass(frozen=True)
class PublishStmt:
    """
    Emits the rendering of a value.

    Example:
        RESOLVED, that this assembly publish the Greeting
    """

    value: Expression


@dataclass(frozen=True)
class IfStmt:
    """
    Runs a consequence when a relation holds.

    Example:
        RESOLVED, that if Stock exceeds ten (10), publish "Plenty"

    Properties:
        left: Left operand
        right: Right operand
        relation: EQUALS (value equality) or EXCEEDS (integer left > right)
        consequence: Any Resolved statement, including another IfStmt
    """

    left: Expression
    right: Expression
    relation: Relation
    consequence: "ResolvedStmt"


WhereasStmt = DeclStmt
ResolvedStmt = Union[AssumeStmt, IfStmt, PublishStmt]
Statement = Union[DeclStmt, AssumeStmt, IfStmt, PublishStmt]


@dataclass(frozen=True)
class Resolution:
    """
    Root of a parsed program.

    INVARIANTS (enforced by the parser, not here):
        - At least one Whereas clause precedes the first Resolved clause
        - No Whereas clause follows a Resolved clause
        - A clause may yield no statement, so either tuple may be empty
    """

    whereas_stmts: Tuple[DeclStmt, ...] = ()
    resolved_stmts: Tuple[ResolvedStmt, ...] = ()

    def get_declaration(self, name: str) -> Optional[DeclStmt]:
        """
        Retrieve the first declaration of a name.

        Args:
            name: Identifier name

        Returns:
            DeclStmt or None if the name is never declared
        """
        for stmt in self.whereas_stmts:
            if stmt.name.name == name:
                return stmt
        return None

    def statements(self) -> Tuple[Statement, ...]:
        """All statements in evaluation order."""
        return tuple(self.whereas_stmts) + tuple(self.resolved_stmts)
