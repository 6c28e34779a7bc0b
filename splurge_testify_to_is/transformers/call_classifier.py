"""Classify expression statements inside a test function body.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node

from ..golang.source import GoSourceFile


class CallKind(Enum):
    """Outcome of classifying one expression statement."""

    NOT_A_CALL = "not-a-call"
    MIGRATED = "migrated"
    LEGACY = "legacy"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class CallClassification:
    kind: CallKind
    call: Node | None = None
    receiver: str | None = None
    operation: str | None = None


def chain_root(node: Node) -> Node:
    """Follow callee and selector operands down to the start of a call chain.

    ``is.Msg("x").AddMsg("y").Equal`` has root ``is``.
    """
    while True:
        if node.type == "call_expression":
            node = node.child_by_field_name("function")
        elif node.type == "selector_expression":
            node = node.child_by_field_name("operand")
        else:
            return node


class CallClassifier:
    """Decide whether a statement is legacy, already migrated, or neither.

    Args:
        source: File the statements belong to.
        helper_name: Identifier of the per-scope assertion helper.
        legacy_aliases: Receiver names that refer to the legacy library.
    """

    def __init__(self, source: GoSourceFile, helper_name: str, legacy_aliases: Iterable[str]) -> None:
        self.source = source
        self.helper_name = helper_name
        self.legacy_aliases = frozenset(legacy_aliases)

    def classify(self, statement: Node) -> CallClassification:
        expressions = [child for child in statement.named_children if child.type != "comment"]
        expression = expressions[0] if expressions else statement
        if expression.type != "call_expression":
            return CallClassification(CallKind.NOT_A_CALL)

        callee = expression.child_by_field_name("function")
        if callee is None or callee.type != "selector_expression":
            return CallClassification(CallKind.UNRECOGNIZED, call=expression)

        receiver = callee.child_by_field_name("operand")
        operation = self.source.text(callee.child_by_field_name("field"))

        if receiver.type == "identifier":
            name = self.source.text(receiver)
            if name == self.helper_name:
                return CallClassification(CallKind.MIGRATED, expression, name, operation)
            if name in self.legacy_aliases:
                return CallClassification(CallKind.LEGACY, expression, name, operation)
            return CallClassification(CallKind.UNRECOGNIZED, expression, name, operation)

        if receiver.type == "call_expression":
            root = chain_root(receiver)
            if root.type == "identifier" and self.source.text(root) == self.helper_name:
                return CallClassification(CallKind.MIGRATED, expression, self.helper_name, operation)

        return CallClassification(CallKind.UNRECOGNIZED, expression, None, operation)
