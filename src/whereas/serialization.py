"""
Serialization helpers for Resolution ASTs.

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

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
from whereas.model import (
    AssumeStmt,
    DeclStmt,
    IfStmt,
    PublishStmt,
    Relation,
    Resolution,
    Statement,
)


def expr_to_dict(expr: Expression) -> Dict[str, Any]:
    if isinstance(expr, IntegerLiteral):
        return {"type": "int", "value": expr.value}
    if isinstance(expr, StringLiteral):
        return {"type": "str", "value": expr.value}
    if isinstance(expr, Identifier):
        return {"type": "ident", "name": expr.name}
    if isinstance(expr, UnaryPrefixExpr):
        return {
            "type": "unary",
            "operator": expr.operator.value,
            "operand": expr_to_dict(expr.operand),
        }
    if isinstance(expr, BinaryPrefixExpr):
        return {
            "type": "binary",
            "operator": expr.operator.value,
            "first": expr_to_dict(expr.first),
            "second": expr_to_dict(expr.second),
        }
    if isinstance(expr, InfixExpr):
        return {
            "type": "infix",
            "operator": expr.operator.value,
            "left": expr_to_dict(expr.left),
            "right": expr_to_dict(expr.right),
        }
    if isinstance(expr, PostfixExpr):
        return {
            "type": "postfix",
            "operator": expr.operator.value,
            "operand": expr_to_dict(expr.operand),
        }
    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def expr_from_dict(d: Dict[str, Any]) -> Expression:
    t = d.get("type")
    if t == "int":
        return IntegerLiteral(d["value"])
    if t == "str":
        return StringLiteral(d["value"])
    if t == "ident":
        return Identifier(d["name"])
    if t == "unary":
        return UnaryPrefixExpr(
            operator=UnaryOperator(d["operator"]),
            operand=expr_from_dict(d["operand"]),
        )
    if t == "binary":
        return BinaryPrefixExpr(
            operator=BinaryOperator(d["operator"]),
            first=expr_from_dict(d["first"]),
            second=expr_from_dict(d["second"]),
        )
    if t == "infix":
        return InfixExpr(
            operator=InfixOperator(d["operator"]),
            left=expr_from_dict(d["left"]),
            right=expr_from_dict(d["right"]),
        )
    if t == "postfix":
        return PostfixExpr(
            operator=PostfixOperator(d["operator"]),
            operand=expr_from_dict(d["operand"]),
        )
    raise TypeError(f"Unsupported expression dict type: {t}")


def stmt_to_dict(stmt: Statement) -> Dict[str, Any]:
    if isinstance(stmt, DeclStmt):
        return {"type": "decl", "name": stmt.name.name, "value": expr_to_dict(stmt.value)}
    if isinstance(stmt, AssumeStmt):
        return {"type": "assume", "name": stmt.name.name, "value": expr_to_dict(stmt.value)}
    if isinstance(stmt, PublishStmt):
        return {"type": "publish", "value": expr_to_dict(stmt.value)}
    if isinstance(stmt, IfStmt):
        return {
            "type": "if",
            "relation": stmt.relation.value,
            "left": expr_to_dict(stmt.left),
            "right": expr_to_dict(stmt.right),
            "consequence": stmt_to_dict(stmt.consequence),
        }
    raise TypeError(f"Unsupported statement type: {type(stmt)}")


def stmt_from_dict(d: Dict[str, Any]) -> Statement:
    t = d.get("type")
    if t == "decl":
        return DeclStmt(name=Identifier(d["name"]), value=expr_from_dict(d["value"]))
    if t == "assume":
        return AssumeStmt(name=Identifier(d["name"]), value=expr_from_dict(d["value"]))
    if t == "publish":
        return PublishStmt(value=expr_from_dict(d["value"]))
    if t == "if":
        return IfStmt(
            left=expr_from_dict(d["left"]),
            right=expr_from_dict(d["right"]),
            relation=Relation(d["relation"]),
            consequence=stmt_from_dict(d["consequence"]),
        )
    raise TypeError(f"Unsupported statement dict type: {t}")


def resolution_to_dict(r: Resolution) -> Dict[str, Any]:
    return {
        "whereas": [stmt_to_dict(s) for s in r.whereas_stmts],
        "resolved": [stmt_to_dict(s) for s in r.resolved_stmts],
    }


def resolution_from_dict(d: Dict[str, Any]) -> Resolution:
    whereas_stmts = tuple(stmt_from_dict(s) for s in d.get("whereas", []))
    for stmt in whereas_stmts:
        if not isinstance(stmt, DeclStmt):
            raise TypeError(f"Whereas clauses hold declarations only, got {type(stmt).__name__}")
    resolved_stmts = tuple(stmt_from_dict(s) for s in d.get("resolved", []))
    return Resolution(whereas_stmts=whereas_stmts, resolved_stmts=resolved_stmts)


def resolution_to_json(r: Resolution) -> str:
    return json.dumps(resolution_to_dict(r), sort_keys=True)


def resolution_from_json(s: str) -> Resolution:
    d = json.loads(s)
    return resolution_from_dict(d)


def resolution_to_yaml(r: Resolution) -> str:
    return yaml.safe_dump(resolution_to_dict(r))


def resolution_from_yaml(s: str) -> Resolution:
    d = yaml.safe_load(s)
    return resolution_from_dict(d)
