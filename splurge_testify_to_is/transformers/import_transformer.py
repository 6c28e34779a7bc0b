"""Edit the import declarations of a Go file.

Legacy imports (any path under the legacy prefix) are removed line by
line, and the helper package plus ``fmt`` (when a synthesized message
needs it) are added. New specs go into the first parenthesized import
group that survives the removal, otherwise they replace a removed single
import, otherwise they follow the last import declaration, otherwise the
package clause.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import re
from dataclasses import dataclass

from tree_sitter import Node

from ..golang.source import GoSourceFile, iter_top_level

logger = logging.getLogger(__name__)

_MAJOR_VERSION = re.compile(r"^v\d+$")


@dataclass(frozen=True)
class ImportSpec:
    path: str
    name: str | None
    node: Node
    declaration: Node

    @property
    def local_name(self) -> str:
        """Identifier the package is referenced by in this file."""
        return self.name or default_local_name(self.path)


def default_local_name(path: str) -> str:
    """Package name Go binds an unaliased import of ``path`` to."""
    segments = path.split("/")
    if len(segments) > 1 and _MAJOR_VERSION.match(segments[-1]):
        return segments[-2]
    return segments[-1]


def _unquote(literal: str) -> str:
    return literal[1:-1]


def _spec_text(path: str, name: str) -> str:
    if name == default_local_name(path):
        return f'"{path}"'
    return f'{name} "{path}"'


def _declaration_text(specs: list[str], indent: str = "\t") -> str:
    if len(specs) == 1:
        return f"import {specs[0]}"
    lines = "".join(f"\n{indent}{spec}" for spec in specs)
    return f"import ({lines}\n)"


class ImportEditor:
    """Plan and register import edits for one file."""

    def __init__(self, source: GoSourceFile, legacy_prefix: str = "github.com/stretchr/") -> None:
        self.source = source
        self.legacy_prefix = legacy_prefix
        self.declarations = list(iter_top_level(source.root, "import_declaration"))
        self.specs = [spec for declaration in self.declarations for spec in self._specs_of(declaration)]
        self.removed: list[ImportSpec] = []
        self.added: list[str] = []

    def _specs_of(self, declaration: Node) -> list[ImportSpec]:
        nodes: list[Node] = []
        for child in declaration.named_children:
            if child.type == "import_spec":
                nodes.append(child)
            elif child.type == "import_spec_list":
                nodes.extend(spec for spec in child.named_children if spec.type == "import_spec")

        specs = []
        for node in nodes:
            path_node = node.child_by_field_name("path")
            name_node = node.child_by_field_name("name")
            specs.append(
                ImportSpec(
                    path=_unquote(self.source.text(path_node)),
                    name=self.source.text(name_node) if name_node is not None else None,
                    node=node,
                    declaration=declaration,
                )
            )
        return specs

    @property
    def legacy_specs(self) -> list[ImportSpec]:
        return [spec for spec in self.specs if spec.path.startswith(self.legacy_prefix)]

    def legacy_aliases(self) -> set[str]:
        """Local names under which legacy packages are imported (``_`` and ``.`` excluded)."""
        return {spec.local_name for spec in self.legacy_specs if spec.local_name not in ("_", ".")}

    def has_import(self, path: str, name: str | None = None) -> bool:
        """True when ``path`` is imported under ``name`` (its default name when omitted)."""
        name = name or default_local_name(path)
        return any(
            spec.path == path and spec.local_name == name
            for spec in self.specs
            if not spec.path.startswith(self.legacy_prefix)
        )

    # Span helpers -----------------------------------------------------

    def _line_start(self, offset: int) -> int:
        return self.source.source.rfind(b"\n", 0, offset) + 1

    def _line_end(self, offset: int) -> int:
        """Offset just past the newline that ends the line containing ``offset``."""
        end = self.source.source.find(b"\n", offset)
        return len(self.source.source) if end == -1 else end + 1

    def _line(self, start: int) -> bytes:
        return self.source.source[start : self._line_end(start)]

    def _removal_span(self, node: Node) -> tuple[int, int]:
        """Whole lines when ``node`` sits alone on its line, else just ``node``."""
        data = self.source.source
        start = self._line_start(node.start_byte)
        end = self._line_end(node.end_byte)
        before = data[start : node.start_byte]
        after = data[node.end_byte : end].strip()
        if before.strip() or (after and not after.startswith(b"//")):
            return node.start_byte, node.end_byte
        return start, end

    def _collapse_blank_line(self, start: int, end: int) -> tuple[int, int]:
        """Swallow a blank line above a removed range when nothing follows it in its group."""
        if start == 0 or self.source.source[start - 1 : start] != b"\n":
            return start, end
        previous = self._line_start(start - 1)
        if self.source.source[previous:start].strip():
            return start, end
        following = self._line(end).strip()
        if not following or following.startswith(b")"):
            return previous, end
        return start, end

    # Planning ---------------------------------------------------------

    def apply(self, required_paths: list[str], local_names: dict[str, str] | None = None) -> None:
        """Remove legacy imports and add ``required_paths`` that are missing.

        ``local_names`` maps a path to the identifier the rewritten code uses
        for it. A path imported only under another name is added again,
        aliased when that identifier differs from the package name.
        """
        local_names = local_names or {}
        legacy = self.legacy_specs
        legacy_nodes = {spec.node for spec in legacy}
        to_add = sorted({path for path in required_paths if not self.has_import(path, local_names.get(path))})
        new_specs = [_spec_text(path, local_names.get(path) or default_local_name(path)) for path in to_add]

        # Declarations losing every spec are removed as a whole.
        whole: list[Node] = []
        partial: list[ImportSpec] = []
        for declaration in self.declarations:
            specs = [spec for spec in self.specs if spec.declaration == declaration]
            if specs and all(spec.node in legacy_nodes for spec in specs):
                whole.append(declaration)
            else:
                partial.extend(spec for spec in specs if spec.node in legacy_nodes)

        surviving_lists = [
            child
            for declaration in self.declarations
            if declaration not in whole
            for child in declaration.named_children
            if child.type == "import_spec_list"
        ]

        replaced: Node | None = None
        if to_add and not surviving_lists and whole:
            replaced = whole[0]
            self.source.replace(replaced, _declaration_text(new_specs))

        spans = [self._removal_span(node) for node in whole if node != replaced]
        spans += [self._removal_span(spec.node) for spec in partial]
        for start, end in self._merge(spans):
            self.source.delete_span(*self._collapse_blank_line(start, end))

        if to_add and replaced is None:
            self._insert(new_specs, surviving_lists, whole)

        self.removed = legacy
        self.added = to_add
        if legacy or to_add:
            logger.debug(
                f"{self.source.source_file}: removed imports {[s.path for s in legacy]}, added {to_add}"
            )

    @staticmethod
    def _merge(spans: list[tuple[int, int]]) -> list[tuple[int, int]]:
        merged: list[tuple[int, int]] = []
        for start, end in sorted(spans):
            if merged and start <= merged[-1][1]:
                merged[-1] = (merged[-1][0], max(end, merged[-1][1]))
            else:
                merged.append((start, end))
        return merged

    def _insert(self, specs: list[str], surviving_lists: list[Node], removed: list[Node]) -> None:
        if surviving_lists:
            spec_list = surviving_lists[0]
            open_paren = spec_list.children[0]
            existing = [child for child in spec_list.named_children if child.type == "import_spec"]
            indent = "\t"
            if existing:
                prefix = self.source.line_prefix(existing[0].start_byte)
                indent = prefix if not prefix.strip() else "\t"
            self.source.insert(open_paren.end_byte, "".join(f"\n{indent}{spec}" for spec in specs))
            return

        remaining = [declaration for declaration in self.declarations if declaration not in removed]
        if remaining:
            self.source.insert(remaining[-1].end_byte, "\n" + _declaration_text(specs))
            return

        package = next(iter_top_level(self.source.root, "package_clause"), None)
        offset = package.end_byte if package is not None else 0
        self.source.insert(offset, "\n\n" + _declaration_text(specs))
