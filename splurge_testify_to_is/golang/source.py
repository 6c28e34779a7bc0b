"""Go source files backed by a tree-sitter parse tree.

``GoSourceFile`` pairs the original bytes of a file with its syntax tree
and a list of pending text edits. The tree itself is never modified;
rewriting a statement means registering an edit against the span of its
node, and :meth:`GoSourceFile.render` applies every edit in a single
pass. This keeps comments and formatting outside the edited spans
byte-for-byte intact.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from ..exceptions import ParseError, TransformationError

GO_LANGUAGE = Language(tree_sitter_go.language())

logger = logging.getLogger(__name__)

# Opening token after which a statement sequence starts, per container kind.
_SEQUENCE_OPENERS = {
    "block": "{",
    "expression_case": ":",
    "type_case": ":",
    "communication_case": ":",
    "default_case": ":",
}


@dataclass(frozen=True)
class SourceEdit:
    """Replace bytes ``[start, end)`` with ``text``.

    ``start == end`` is an insertion. ``order`` records registration
    order so that several insertions at one offset keep their sequence.
    """

    start: int
    end: int
    text: str
    order: int

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end


class GoSourceFile:
    """A parsed Go file plus the edits registered against it."""

    def __init__(self, source: bytes, tree: Tree, source_file: str = "<string>") -> None:
        self.source = source
        self.tree = tree
        self.source_file = source_file
        self._edits: list[SourceEdit] = []

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def edits(self) -> list[SourceEdit]:
        return list(self._edits)

    @property
    def is_modified(self) -> bool:
        return bool(self._edits)

    def text(self, node: Node) -> str:
        """Literal source text of ``node``."""
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def line_prefix(self, offset: int) -> str:
        """Text between the start of the line containing ``offset`` and ``offset``."""
        line_start = self.source.rfind(b"\n", 0, offset) + 1
        return self.source[line_start:offset].decode("utf-8")

    def replace(self, node: Node, text: str) -> None:
        self.replace_span(node.start_byte, node.end_byte, text)

    def replace_span(self, start: int, end: int, text: str) -> None:
        if start > end or end > len(self.source):
            raise TransformationError(f"Invalid edit span [{start}, {end})", pattern_type="edit")
        self._edits.append(SourceEdit(start, end, text, len(self._edits)))

    def insert(self, offset: int, text: str) -> None:
        self.replace_span(offset, offset, text)

    def delete_span(self, start: int, end: int) -> None:
        self.replace_span(start, end, "")

    def render(self) -> str:
        """Apply all registered edits and return the resulting text.

        Raises:
            TransformationError: If two edits overlap.
        """
        ordered = sorted(self._edits, key=lambda e: (e.start, not e.is_insertion, e.order))
        pieces: list[bytes] = []
        cursor = 0
        for edit in ordered:
            if edit.start < cursor:
                raise TransformationError(
                    f"Overlapping edits at byte {edit.start} in {self.source_file}", pattern_type="edit"
                )
            pieces.append(self.source[cursor : edit.start])
            pieces.append(edit.text.encode("utf-8"))
            cursor = edit.end
        pieces.append(self.source[cursor:])
        return b"".join(pieces).decode("utf-8")


def _first_syntax_error(node: Node) -> Node | None:
    if node.is_error or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_syntax_error(child)
        if found is not None:
            return found
    return node


def parse_go_source(source: str | bytes, source_file: str = "<string>") -> GoSourceFile:
    """Parse Go source text.

    Raises:
        ParseError: If the text contains any syntax error. The position of
            the first offending node is reported.
    """
    data = source.encode("utf-8") if isinstance(source, str) else source
    tree = Parser(GO_LANGUAGE).parse(data)

    bad = _first_syntax_error(tree.root_node)
    if bad is not None:
        row, column = bad.start_point
        what = f"missing {bad.type}" if bad.is_missing else "syntax error"
        raise ParseError(
            f"{source_file}:{row + 1}:{column + 1}: {what}", source_file=source_file, line=row + 1, column=column + 1
        )

    logger.debug(f"Parsed {source_file} ({len(data)} bytes)")
    return GoSourceFile(data, tree, source_file)


def statement_nodes(container: Node) -> list[Node]:
    """Statements (and comments) of a block or switch/select clause, in order.

    Grammar versions differ on whether statements are wrapped in a
    ``statement_list`` node; both shapes are accepted.
    """
    opener = _SEQUENCE_OPENERS.get(container.type)
    if opener is None:
        raise TransformationError(f"Not a statement container: {container.type}", node_type=container.type)

    statements: list[Node] = []
    started = False
    for child in container.children:
        if not started:
            started = child.type == opener
            continue
        if child.type == "}":
            break
        if child.type == "statement_list":
            statements.extend(child.named_children)
        elif child.is_named:
            statements.append(child)
    return statements


def iter_top_level(root: Node, *node_types: str) -> Iterator[Node]:
    for child in root.named_children:
        if child.type in node_types:
            yield child
