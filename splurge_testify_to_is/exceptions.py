"""Custom exception classes for the testify-to-is migration tool.

Every exception derives from ``MigrationError`` and carries a ``details``
mapping with structured context (source file, line, column, ...) so
callers can inspect failures without parsing messages.

Only fatal conditions are modelled as exceptions. Statements that cannot
be converted are reported as diagnostics instead (see
:mod:`splurge_testify_to_is.diagnostics`).

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from typing import Any


class MigrationError(Exception):
    """Base exception for migration-related errors.

    Args:
        message: Human-readable error message.
        details: Optional mapping with structured diagnostic data.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParseError(MigrationError):
    """Raised when Go source text does not parse.

    Args:
        message: Error message describing the parse failure.
        source_file: Path to the file being parsed.
        line: Optional 1-based line of the first syntax error.
        column: Optional 1-based column of the first syntax error.
    """

    def __init__(self, message: str, source_file: str, line: int | None = None, column: int | None = None):
        details: dict[str, Any] = {"source_file": source_file}
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column
        super().__init__(message, details)
        self.source_file = source_file
        self.line = line
        self.column = column


class TransformationError(MigrationError):
    """Raised when the rewrite of a file cannot be completed.

    Args:
        message: Human-readable description of the failure.
        pattern_type: Optional transformation pattern identifier.
        node_type: Optional syntax node type that caused the error.
    """

    def __init__(self, message: str, pattern_type: str | None = None, node_type: str | None = None):
        details: dict[str, Any] = {}
        if pattern_type:
            details["pattern_type"] = pattern_type
        if node_type:
            details["node_type"] = node_type
        super().__init__(message, details)


class TransformationValidationError(TransformationError):
    """Raised when rewritten code no longer parses as Go."""

    def __init__(self, message: str):
        super().__init__(message, pattern_type="validation")


class FormatError(MigrationError):
    """Raised when the Go formatter rejects the rewritten source.

    Args:
        message: Description of the formatter failure.
        command: The formatter command that was run.
        stderr: Captured standard error of the formatter.
    """

    def __init__(self, message: str, command: str, stderr: str = ""):
        super().__init__(message, {"command": command, "stderr": stderr})
        self.command = command
        self.stderr = stderr


class ValidationError(MigrationError):
    """Raised when input or configuration validation fails.

    Args:
        message: Description of the validation failure.
        validation_type: Identifier for the kind of validation performed.
        field: Optional field name that failed validation.
    """

    def __init__(self, message: str, validation_type: str, field: str | None = None):
        details: dict[str, Any] = {"validation_type": validation_type}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(MigrationError):
    """Raised when an application configuration is invalid.

    Args:
        message: Human readable description of the configuration problem.
        config_key: Optional configuration key that caused the error.
    """

    def __init__(self, message: str, config_key: str | None = None):
        details: dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
