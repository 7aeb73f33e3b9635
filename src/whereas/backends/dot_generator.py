"""
Graphviz DOT diagram generator for Resolutions.

Converts a Resolution into Graphviz DOT format for visualization.

Supports multiple modes:
    - SIMPLE: One node per statement, in program order
    - DETAILED: Node labels carry the statement's expressions
    - DATAFLOW: Adds edges from each declaration to the statements that read it
"""

from enum import Enum
from typing import Dict, List, Set

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
from whereas.numerals import render_numeral


class DotMode(Enum):
    """Visualization modes for DOT output."""
    SIMPLE = "simple"        # Statement order only
    DETAILED = "detailed"    # Include expressions
    DATAFLOW = "dataflow"    # Declaration -> reader edges


MAX_LABEL_LENGTH = 40


def _escape_dot_string(s: str) -> str:
    """Escape special characters for DOT labels."""
    if not s:
        return '""'
    s = s.replace('\\', '\\\\')
    s = s.replace('"', '\\"')
    s = s.replace('\n', '\\n')
    return f'"{s}"'


def _escape_dot_id(identifier: str) -> str:
    """Quote an identifier for DOT when it is not a plain word."""
    if identifier[0].isdigit() or not identifier.replace('_', '').isalnum():
        return f'"{identifier}"'
    return identifier


def _expr_to_dot_label(expr: Expression) -> str:
    """Convert an expression to a compact readable label."""
    if isinstance(expr, IntegerLiteral):
        return render_numeral(expr.value)
    if isinstance(expr, StringLiteral):
        return f'"{expr.value}"'
    if isinstance(expr, Identifier):
        return expr.name
    if isinstance(expr, UnaryPrefixExpr):
        return f"({expr.operator.value} {_expr_to_dot_label(expr.operand)})"
    if isinstance(expr, BinaryPrefixExpr):
        first = _expr_to_dot_label(expr.first)
        second = _expr_to_dot_label(expr.second)
        return f"({expr.operator.value} {first} {second})"
    if isinstance(expr, InfixExpr):
        left = _expr_to_dot_label(expr.left)
        right = _expr_to_dot_label(expr.right)
        return f"({left} {expr.operator.value} {right})"
    if isinstance(expr, PostfixExpr):
        return f"({_expr_to_dot_label(expr.operand)} {expr.operator.value})"
    return "?"


def _shorten(label: str) -> str:
    if len(label) > MAX_LABEL_LENGTH:
        return label[:MAX_LABEL_LENGTH - 3] + "..."
    return label


def _stmt_to_dot_label(stmt: Statement, detailed: bool) -> str:
    if isinstance(stmt, DeclStmt):
        if detailed:
            return f"{stmt.name.name} := {_shorten(_expr_to_dot_label(stmt.value))}"
        return f"declare {stmt.name.name}"
    if isinstance(stmt, AssumeStmt):
        if detailed:
            return f"{stmt.name.name} assume {_shorten(_expr_to_dot_label(stmt.value))}"
        return f"assume {stmt.name.name}"
    if isinstance(stmt, PublishStmt):
        if detailed:
            return f"publish {_shorten(_expr_to_dot_label(stmt.value))}"
        return "publish"
    if isinstance(stmt, IfStmt):
        consequence = _stmt_to_dot_label(stmt.consequence, detailed)
        if detailed:
            condition = (
                f"{_expr_to_dot_label(stmt.left)} {stmt.relation.value} "
                f"{_expr_to_dot_label(stmt.right)}"
            )
            return f"if {_shorten(condition)}\n{consequence}"
        return f"if {stmt.relation.value}: {consequence}"
    raise TypeError(f"Unsupported statement type: {type(stmt)}")


def _expr_names(expr: Expression) -> Set[str]:
    if isinstance(expr, Identifier):
        return {expr.name}
    if isinstance(expr, UnaryPrefixExpr):
        return _expr_names(expr.operand)
    if isinstance(expr, PostfixExpr):
        return _expr_names(expr.operand)
    if isinstance(expr, BinaryPrefixExpr):
        return _expr_names(expr.first) | _expr_names(expr.second)
    if isinstance(expr, InfixExpr):
        return _expr_names(expr.left) | _expr_names(expr.right)
    return set()


def _stmt_names(stmt: Statement) -> Set[str]:
    """Names a statement reads or reassigns."""
    if isinstance(stmt, DeclStmt):
        return _expr_names(stmt.value)
    if isinstance(stmt, AssumeStmt):
        return {stmt.name.name} | _expr_names(stmt.value)
    if isinstance(stmt, PublishStmt):
        return _expr_names(stmt.value)
    if isinstance(stmt, IfStmt):
        return _expr_names(stmt.left) | _expr_names(stmt.right) | _stmt_names(stmt.consequence)
    return set()


def generate_dot(resolution: Resolution, mode: DotMode = DotMode.SIMPLE) -> str:
    """
    Generate Graphviz DOT format for a resolution.

    Args:
        resolution: Resolution to visualize
        mode: Visualization mode (SIMPLE, DETAILED, DATAFLOW)

    Returns:
        String containing DOT graph definition
    """
    detailed = mode in (DotMode.DETAILED, DotMode.DATAFLOW)
    lines = []

    # Header
    lines.append("digraph resolution {")
    lines.append("  rankdir=TB;")
    lines.append("  node [shape=box, style=filled, fillcolor=lightblue];")

    # =========================================================================
    # NODES (one cluster per section)
    # =========================================================================

    order: List[str] = []
    declared_at: Dict[str, str] = {}
    readers: List[tuple] = []

    sections = [
        ("whereas", "Whereas", resolution.whereas_stmts, "lightyellow"),
        ("resolved", "Resolved", resolution.resolved_stmts, "lightblue"),
    ]
    for prefix, title, stmts, color in sections:
        lines.append(f"  subgraph cluster_{prefix} {{")
        lines.append(f"    label={_escape_dot_string(title)};")
        lines.append("    style=rounded;")
        for i, stmt in enumerate(stmts):
            node_id = _escape_dot_id(f"{prefix}_{i}")
            label = _escape_dot_string(_stmt_to_dot_label(stmt, detailed))
            lines.append(f"    {node_id} [label={label}, fillcolor={color}];")
            order.append(node_id)
            readers.append((node_id, _stmt_names(stmt)))
            if isinstance(stmt, DeclStmt):
                declared_at.setdefault(stmt.name.name, node_id)
        lines.append("  }")

    # =========================================================================
    # EDGES
    # =========================================================================

    for from_id, to_id in zip(order, order[1:]):
        lines.append(f"  {from_id} -> {to_id};")

    if mode == DotMode.DATAFLOW:
        for node_id, names in readers:
            for name in sorted(names):
                source = declared_at.get(name)
                if source is None or source == node_id:
                    continue
                lines.append(
                    f"  {source} -> {node_id} "
                    f"[style=dashed, color=gray, label={_escape_dot_string(name)}];"
                )

    # Footer
    lines.append("}")

    return "\n".join(lines)


def save_dot_file(resolution: Resolution, filename: str, mode: DotMode = DotMode.SIMPLE) -> None:
    """
    Generate DOT and save to file.

    Args:
        resolution: Resolution to visualize
        filename: Output file path (.dot extension recommended)
        mode: Visualization mode
    """
    dot = generate_dot(resolution, mode=mode)
    with open(filename, 'w') as f:
        f.write(dot)


__all__ = ["DotMode", "generate_dot", "save_dot_file"]
