"""
Expression tree for ``calc:`` directives.

Nodes are immutable. ``RefName`` holds the identifier that stands in for an
extracted ``'Collection/path'`` or ``var(--name)`` reference; the evaluator
maps it back to a value.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class BinaryOp(StrEnum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class UnaryOp(StrEnum):
    NEG = "-"
    POS = "+"


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class NumberLiteral(_Node):
    value: float


class RefName(_Node):
    name: str = Field(description="Generated identifier for a reference")


class UnaryExpr(_Node):
    op: UnaryOp
    operand: Expr


class BinaryExpr(_Node):
    """``left op right``; chains of one precedence level nest to the left."""

    op: BinaryOp
    left: Expr
    right: Expr


class FuncCall(_Node):
    name: str
    args: list[Expr] = Field(default_factory=list)


Expr = NumberLiteral | RefName | UnaryExpr | BinaryExpr | FuncCall

for _model in (UnaryExpr, BinaryExpr, FuncCall):
    _model.model_rebuild()
