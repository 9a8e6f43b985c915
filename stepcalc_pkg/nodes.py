"""Expression tree node types produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class BinaryOp:
    op: str  # one of + - * / ^
    left: "ExpressionNode"
    right: "ExpressionNode"
    grouped: bool = False  # written inside parentheses


@dataclass(frozen=True)
class UnaryFunc:
    name: str  # sqrt, sin, cos, tan, log, ln or neg
    arg: "ExpressionNode"


ExpressionNode = Union[Literal, BinaryOp, UnaryFunc]


def count_operations(node: ExpressionNode) -> int:
    """Number of internal nodes, i.e. the steps evaluating ``node`` will record."""
    if isinstance(node, BinaryOp):
        return 1 + count_operations(node.left) + count_operations(node.right)
    if isinstance(node, UnaryFunc):
        return 1 + count_operations(node.arg)
    return 0
