"""Non-fatal migration diagnostics.

A statement that cannot be migrated never aborts processing. Instead a
``Diagnostic`` is recorded with the statement's position and literal
source text so that it can be finished by hand.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    """Why a statement was left as written."""

    NOT_A_CALL = "not-a-call"
    UNRECOGNIZED_CALL = "unrecognized-call"
    ARITY = "arity"
    MANUAL_MIGRATION = "manual-migration"
    UNSUPPORTED_FUNCTION = "unsupported-function"
    UNEXPECTED_STATEMENT = "unexpected-statement"


@dataclass(frozen=True)
class Diagnostic:
    """A single recoverable finding.

    ``line`` and ``column`` are 1-based.
    """

    source_file: str
    line: int
    column: int
    kind: DiagnosticKind
    message: str
    statement: str

    def __str__(self) -> str:
        return f"{self.source_file}:{self.line}:{self.column}: {self.message}: {self.statement}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_file": self.source_file,
            "line": self.line,
            "column": self.column,
            "kind": self.kind.value,
            "message": self.message,
            "statement": self.statement,
        }


class DiagnosticCollector:
    """Accumulates diagnostics for one source file in report order."""

    def __init__(self, source_file: str) -> None:
        self.source_file = source_file
        self._diagnostics: list[Diagnostic] = []

    def report(self, kind: DiagnosticKind, position: tuple[int, int], message: str, statement: str) -> Diagnostic:
        """Record a diagnostic at a 0-based ``(row, column)`` position."""
        row, column = position
        diagnostic = Diagnostic(
            source_file=self.source_file,
            line=row + 1,
            column=column + 1,
            kind=kind,
            message=message,
            statement=statement,
        )
        self._diagnostics.append(diagnostic)
        logger.info(str(diagnostic))
        return diagnostic

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)
