"""Helper declaration management for rewritten statement sequences.

Every statement sequence that received at least one converted call gets
exactly one ``is := is.New(t)`` declaration at its top, unless such a
declaration is already present.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging

from tree_sitter import Node

from ..golang.source import GoSourceFile

logger = logging.getLogger(__name__)


def _single(expression_list: Node | None) -> Node | None:
    if expression_list is None:
        return None
    items = [child for child in expression_list.named_children if child.type != "comment"]
    return items[0] if len(items) == 1 else None


class ScopeInitializer:
    def __init__(self, helper_name: str = "is", constructor: str = "New") -> None:
        self.helper_name = helper_name
        self.constructor = constructor

    def declaration(self, context_handle: str) -> str:
        """Source text of the helper declaration, e.g. ``is := is.New(t)``."""
        return f"{self.helper_name} := {self.helper_name}.{self.constructor}({context_handle})"

    def is_declaration(self, statement: Node, source: GoSourceFile) -> bool:
        """True for ``<helper> := <helper>.<constructor>(...)``, matched structurally."""
        if statement.type != "short_var_declaration":
            return False

        target = _single(statement.child_by_field_name("left"))
        if target is None or target.type != "identifier" or source.text(target) != self.helper_name:
            return False

        value = _single(statement.child_by_field_name("right"))
        if value is None or value.type != "call_expression":
            return False

        callee = value.child_by_field_name("function")
        if callee is None or callee.type != "selector_expression":
            return False
        operand = callee.child_by_field_name("operand")
        field = callee.child_by_field_name("field")
        return (
            operand.type == "identifier"
            and source.text(operand) == self.helper_name
            and source.text(field) == self.constructor
        )

    def insert_declaration(self, source: GoSourceFile, first: Node, context_handle: str) -> None:
        """Register an insertion of the declaration ahead of ``first``.

        On its own line the declaration reuses the indentation of ``first``;
        when ``first`` shares a line with other code (``case x: stmt``) the
        declaration is joined with a semicolon.
        """
        prefix = source.line_prefix(first.start_byte)
        text = self.declaration(context_handle)
        if prefix.strip():
            source.insert(first.start_byte, f"{text}; ")
        else:
            source.insert(first.start_byte, f"{text}\n{prefix}")
        logger.debug(f"Inserted helper declaration at line {first.start_point[0] + 1}")
