"""Go syntax support: parsing, source edits and expression rendering."""

from .expressions import BasicLit, BinaryOp, Call, Expr, Ident, Selector, Source, render, string_literal
from .source import GO_LANGUAGE, GoSourceFile, SourceEdit, parse_go_source, statement_nodes

__all__ = [
    "GO_LANGUAGE",
    "BasicLit",
    "BinaryOp",
    "Call",
    "Expr",
    "GoSourceFile",
    "Ident",
    "Selector",
    "Source",
    "SourceEdit",
    "parse_go_source",
    "render",
    "statement_nodes",
    "string_literal",
]
