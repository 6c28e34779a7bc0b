"""Minimal Go expression trees for synthesized calls.

Replacement calls are built as small immutable trees and printed with
:func:`render`. Arguments carried over from the original call are kept
as :class:`Source` leaves holding their literal text.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from dataclasses import dataclass
from typing import Union

# Go binary operator precedence, higher binds tighter.
BINARY_PRECEDENCE = {
    "||": 1,
    "&&": 2,
    "==": 3,
    "!=": 3,
    "<": 3,
    "<=": 3,
    ">": 3,
    ">=": 3,
    "+": 4,
    "-": 4,
    "|": 4,
    "^": 4,
    "*": 5,
    "/": 5,
    "%": 5,
    "<<": 5,
    ">>": 5,
    "&": 5,
    "&^": 5,
}


@dataclass(frozen=True)
class Ident:
    name: str


@dataclass(frozen=True)
class BasicLit:
    """A literal written exactly as ``value`` (quotes included for strings)."""

    value: str


@dataclass(frozen=True)
class Source:
    """An expression copied verbatim from the input file.

    ``kind`` is the grammar node type; ``operator`` is set when the
    expression is itself a binary expression. ``leading`` and ``trailing``
    hold inline comments that sat next to the argument in the call.
    """

    text: str
    kind: str
    operator: str | None = None
    leading: tuple[str, ...] = ()
    trailing: tuple[str, ...] = ()


@dataclass(frozen=True)
class Selector:
    operand: "Expr"
    field: str


@dataclass(frozen=True)
class Call:
    func: "Expr"
    args: tuple["Expr", ...] = ()


@dataclass(frozen=True)
class BinaryOp:
    left: "Expr"
    op: str
    right: "Expr"


Expr = Union[Ident, BasicLit, Source, Selector, Call, BinaryOp]


def string_literal(value: str) -> BasicLit:
    """Go interpreted string literal for plain text without quotes or escapes."""
    return BasicLit(f'"{value}"')


def _precedence(expr: Expr) -> int | None:
    if isinstance(expr, BinaryOp):
        return BINARY_PRECEDENCE[expr.op]
    if isinstance(expr, Source) and expr.kind == "binary_expression" and expr.operator:
        return BINARY_PRECEDENCE.get(expr.operator)
    return None


def _operand(expr: Expr, op: str) -> str:
    text = render(expr)
    inner = _precedence(expr)
    if inner is not None and inner <= BINARY_PRECEDENCE[op]:
        return f"({text})"
    return text


def render(expr: Expr) -> str:
    """Print ``expr`` as Go source."""
    if isinstance(expr, Ident):
        return expr.name
    if isinstance(expr, BasicLit):
        return expr.value
    if isinstance(expr, Source):
        return " ".join((*expr.leading, expr.text, *expr.trailing))
    if isinstance(expr, Selector):
        operand = render(expr.operand)
        if isinstance(expr.operand, BinaryOp) or (
            isinstance(expr.operand, Source) and expr.operand.kind in ("binary_expression", "unary_expression")
        ):
            operand = f"({operand})"
        return f"{operand}.{expr.field}"
    if isinstance(expr, Call):
        return f"{render(expr.func)}({', '.join(render(arg) for arg in expr.args)})"
    if isinstance(expr, BinaryOp):
        return f"{_operand(expr.left, expr.op)} {expr.op} {_operand(expr.right, expr.op)}"
    raise TypeError(f"Unsupported expression node: {type(expr).__name__}")
