"""
Resolution Analyzer: read-only diagnostics and inventory of parsed Resolutions.

This module provides lightweight analysis of Resolution objects:
    - Statement inventory
    - Identifier usage (declared, referenced, reassigned)
    - Expression complexity metrics
    - Warning flags

IMPORTANT: It does NOT modify the Resolution and does NOT evaluate it.
It works on any Resolution, including one attached to a ParseErrorList.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Set

from whereas.expressions import (
    BinaryPrefixExpr,
    Expression,
    Identifier,
    InfixExpr,
    IntegerLiteral,
    PostfixExpr,
    StringLiteral,
    UnaryPrefixExpr,
)
from whereas.model import AssumeStmt, DeclStmt, IfStmt, PublishStmt, Resolution, Statement


@dataclass
class ExpressionMetrics:
    """Metrics about a single expression tree."""
    depth: int = 0
    node_count: int = 0
    identifier_references: Set[str] = field(default_factory=set)


def _analyze_expression(expr: Expression) -> ExpressionMetrics:
    """Recursively analyze an expression tree."""
    metrics = ExpressionMetrics(depth=1, node_count=1)

    if isinstance(expr, Identifier):
        metrics.identifier_references.add(expr.name)
        return metrics

    if isinstance(expr, (IntegerLiteral, StringLiteral)):
        return metrics

    if isinstance(expr, BinaryPrefixExpr):
        children = [expr.first, expr.second]
    elif isinstance(expr, InfixExpr):
        children = [expr.left, expr.right]
    elif isinstance(expr, (UnaryPrefixExpr, PostfixExpr)):
        children = [expr.operand]
    else:
        raise TypeError(f"Unsupported Expression type: {type(expr)}")

    for child in children:
        child_metrics = _analyze_expression(child)
        metrics.depth = max(metrics.depth, 1 + child_metrics.depth)
        metrics.node_count += child_metrics.node_count
        metrics.identifier_references.update(child_metrics.identifier_references)
    return metrics


def _statement_expressions(stmt: Statement) -> Iterator[Expression]:
    """Yield every top-level expression of a statement, descending into conditionals."""
    if isinstance(stmt, (DeclStmt, AssumeStmt, PublishStmt)):
        yield stmt.value
    elif isinstance(stmt, IfStmt):
        yield stmt.left
        yield stmt.right
        yield from _statement_expressions(stmt.consequence)
    else:
        raise TypeError(f"Unsupported statement type: {type(stmt)}")


def _reassigned_names(stmt: Statement) -> Iterator[str]:
    if isinstance(stmt, AssumeStmt):
        yield stmt.name.name
    elif isinstance(stmt, IfStmt):
        yield from _reassigned_names(stmt.consequence)


def _statement_kinds(stmt: Statement) -> Iterator[str]:
    yield type(stmt).__name__
    if isinstance(stmt, IfStmt):
        yield from _statement_kinds(stmt.consequence)


@dataclass
class ResolutionReport:
    """Analysis report for a Resolution."""

    total_whereas: int = 0
    total_resolved: int = 0
    statement_counts: Dict[str, int] = field(default_factory=dict)

    # Identifier usage
    declared_names: List[str] = field(default_factory=list)
    identifier_usage: Dict[str, int] = field(default_factory=dict)
    reassigned_names: Set[str] = field(default_factory=set)
    undefined_names: Set[str] = field(default_factory=set)
    unused_names: Set[str] = field(default_factory=set)

    # Expression complexity
    total_expressions: int = 0
    max_expression_depth: int = 0
    avg_expression_depth: float = 0.0
    total_expression_nodes: int = 0

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_resolution(resolution: Resolution) -> ResolutionReport:
    """
    Perform analysis of a Resolution.

    Checks for:
    - Names referenced but never declared, and declared but never used
    - Names reassigned but never read
    - Expression complexity
    - Resolutions that take no action

    Returns a ResolutionReport with metrics and warnings.
    """
    report = ResolutionReport()
    report.total_whereas = len(resolution.whereas_stmts)
    report.total_resolved = len(resolution.resolved_stmts)

    statement_counts: Dict[str, int] = defaultdict(int)
    usage: Dict[str, int] = defaultdict(int)
    depths: List[int] = []

    for stmt in resolution.whereas_stmts:
        if stmt.name.name not in report.declared_names:
            report.declared_names.append(stmt.name.name)

    for stmt in resolution.statements():
        for kind in _statement_kinds(stmt):
            statement_counts[kind] += 1
        report.reassigned_names.update(_reassigned_names(stmt))

        for expr in _statement_expressions(stmt):
            metrics = _analyze_expression(expr)
            depths.append(metrics.depth)
            report.total_expression_nodes += metrics.node_count
            for name in metrics.identifier_references:
                usage[name] += 1

    report.statement_counts = dict(statement_counts)
    report.identifier_usage = dict(usage)

    declared = set(report.declared_names)
    referenced = set(usage) | report.reassigned_names
    report.undefined_names = referenced - declared
    report.unused_names = declared - referenced

    report.total_expressions = len(depths)
    if depths:
        report.max_expression_depth = max(depths)
        report.avg_expression_depth = sum(depths) / len(depths)

    # Warning flags
    if report.undefined_names:
        report.add_warning(
            f"Undeclared identifiers: {', '.join(sorted(report.undefined_names))}"
        )

    if report.unused_names:
        report.add_warning(
            f"Unused identifiers: {', '.join(sorted(report.unused_names))}"
        )

    write_only = (report.reassigned_names & declared) - set(usage)
    if write_only:
        report.add_warning(
            f"Reassigned but never read: {', '.join(sorted(write_only))}"
        )

    if report.total_resolved == 0:
        report.add_warning("No Resolved statements: the resolution takes no action")

    if report.max_expression_depth > 5:
        report.add_warning(
            f"High expression complexity: max depth {report.max_expression_depth}"
        )

    return report


__all__ = ["ExpressionMetrics", "ResolutionReport", "analyze_resolution"]
