"""Normalize the argument list of a legacy assertion call.

The legacy library takes the testing context as its first argument; the
helper API captures it once at construction. The normalizer drops that
argument and splits the rest into the values the target operation needs
and the optional failure-message tail.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from dataclasses import dataclass, replace

from tree_sitter import Node

from ..diagnostics import DiagnosticKind
from ..golang.expressions import Source
from ..golang.source import GoSourceFile
from ..result import Result

# Every supported legacy call passes at least a subject and an expectation
# (or the context handle and a subject).
MIN_LEGACY_ARGUMENTS = 2


@dataclass(frozen=True)
class NormalizedArguments:
    positional: tuple[Source, ...]
    message: tuple[Source, ...]
    dropped_context: bool


def _inline_comment(text: str) -> str:
    """Rewrite a ``//`` comment as a block comment so it can stay inside one line."""
    if not text.startswith("//"):
        return text
    body = text[2:].strip().replace("*/", "* /")
    return f"/* {body} */"


def argument_sources(source: GoSourceFile, call: Node) -> list[Source]:
    """Wrap each argument of ``call`` as a verbatim :class:`Source` expression.

    Comments inside the argument list travel with the argument that follows
    them, or with the last argument when nothing follows.
    """
    argument_list = call.child_by_field_name("arguments")
    if argument_list is None:
        return []
    arguments: list[Source] = []
    comments: list[str] = []
    for node in argument_list.children:
        if node.type == "..." and arguments:
            # Some grammar versions leave the spread token directly in the list.
            arguments[-1] = replace(arguments[-1], text=arguments[-1].text + "...", kind="variadic_argument")
            continue
        if node.type == "comment":
            comments.append(_inline_comment(source.text(node)))
            continue
        if not node.is_named:
            continue
        operator_node = node.child_by_field_name("operator") if node.type == "binary_expression" else None
        operator = source.text(operator_node) if operator_node is not None else None
        arguments.append(Source(source.text(node), node.type, operator, leading=tuple(comments)))
        comments = []
    if comments and arguments:
        arguments[-1] = replace(arguments[-1], trailing=arguments[-1].trailing + tuple(comments))
    return arguments


def normalize_arguments(arguments: list[Source], context_handle: str, arity: int) -> Result[NormalizedArguments]:
    """Strip the context handle and split positional values from the message tail.

    Returns a skipped result when the call has fewer than
    ``MIN_LEGACY_ARGUMENTS`` arguments, spreads a slice with ``...``, or
    leaves fewer than ``arity`` values once the handle is removed.
    """
    if len(arguments) < MIN_LEGACY_ARGUMENTS:
        return Result.skipped(
            f"expected at least {MIN_LEGACY_ARGUMENTS} arguments, got {len(arguments)}",
            {"diagnostic_kind": DiagnosticKind.ARITY},
        )

    if any(argument.kind == "variadic_argument" for argument in arguments):
        return Result.skipped("variadic argument spread", {"diagnostic_kind": DiagnosticKind.ARITY})

    remaining = list(arguments)
    dropped = False
    first = remaining[0]
    if first.kind == "identifier" and first.text == context_handle:
        remaining = remaining[1:]
        dropped = True
        comments = first.leading + first.trailing
        if comments and remaining:
            remaining[0] = replace(remaining[0], leading=comments + remaining[0].leading)

    if len(remaining) < arity:
        return Result.skipped(
            f"expected {arity} value argument(s), got {len(remaining)}", {"diagnostic_kind": DiagnosticKind.ARITY}
        )

    return Result.success(
        NormalizedArguments(
            positional=tuple(remaining[:arity]),
            message=tuple(remaining[arity:]),
            dropped_context=dropped,
        )
    )
