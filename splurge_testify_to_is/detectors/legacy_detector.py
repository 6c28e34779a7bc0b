"""Syntax-based detection of files that use the legacy assertion library.

A Go file qualifies when one of its import declarations names a path
under the legacy prefix. Imports are read from the parse tree, so a
mention of the path inside a comment or string does not count.
"""

from __future__ import annotations

from pathlib import Path

from ..exceptions import ParseError
from ..golang.source import parse_go_source
from ..transformers.import_transformer import ImportEditor


class LegacyAssertionDetector:
    """Decide whether a Go file needs migration."""

    def __init__(self, legacy_prefix: str = "github.com/stretchr/") -> None:
        self.legacy_prefix = legacy_prefix

    def imports_legacy(self, source_code: str, source_file: str = "<string>") -> bool:
        """Check parsed source for imports under the legacy prefix.

        Raises:
            ParseError: If the source does not parse.
        """
        source = parse_go_source(source_code, source_file)
        return bool(ImportEditor(source, self.legacy_prefix).legacy_specs)

    def is_legacy_file(self, file_path: str | Path) -> bool:
        """Check a file on disk.

        Unparseable files fall back to a textual check for a quoted legacy
        import path so that they are still handed to the migration, which
        then reports the syntax error.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            UnicodeDecodeError: If the file can't be decoded as UTF-8.
        """
        path = Path(file_path)
        source_code = path.read_text(encoding="utf-8")
        try:
            return self.imports_legacy(source_code, str(path))
        except ParseError:
            return f'"{self.legacy_prefix}' in source_code
