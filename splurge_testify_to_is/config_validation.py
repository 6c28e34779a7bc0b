"""Configuration validation using pydantic schemas.

This module provides runtime validation for ``MigrationConfig`` so that
malformed values coming from YAML files or the command line are rejected
before any file is touched.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError

GO_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# ``T`` or ``testing.T``
GO_QUALIFIED_TYPE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*\.)?[A-Za-z_][A-Za-z0-9_]*$")

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ValidatedMigrationConfig(BaseModel):
    """Validated version of MigrationConfig with runtime validation."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    # Output settings
    target_root: str | None = Field(default=None, description="Root directory for output files")
    target_suffix: str = Field(default="", description="Suffix appended to the target filename stem")
    file_patterns: list[str] = Field(default_factory=lambda: ["*_test.go"], description="File patterns to match")
    recurse_directories: bool = Field(default=True, description="Whether to recurse into subdirectories")
    backup_originals: bool = Field(default=True, description="Whether to backup original files")
    backup_root: str | None = Field(default=None, description="Root directory for backups")

    # Behavior settings
    dry_run: bool = Field(default=False, description="Whether to perform a dry run")
    fail_fast: bool = Field(default=True, description="Abort the run on the first fatal file error")
    format_output: bool = Field(default=True, description="Whether to pipe output through gofmt")
    gofmt_command: str = Field(default="gofmt", min_length=1, description="Go formatter executable")
    log_level: str = Field(default="INFO", description="Default logging level")
    verbose: bool = Field(default=False, description="Verbose progress output")

    # Migration vocabulary
    legacy_import_prefix: str = Field(default="github.com/stretchr/", min_length=1)
    legacy_aliases: list[str] = Field(default_factory=lambda: ["require", "assert"])
    helper_name: str = Field(default="is")
    helper_constructor: str = Field(default="New")
    helper_import_path: str = Field(default="github.com/ilius/is/v2", min_length=1)
    testing_context_type: str = Field(default="testing.T")

    @field_validator("file_patterns")
    @classmethod
    def validate_file_patterns(cls, v):
        """Validate file patterns are non-empty strings."""
        if not v:
            raise ValueError("file_patterns cannot be empty. Use ['*_test.go'] to match Go test files")
        for i, pattern in enumerate(v):
            if not isinstance(pattern, str) or not pattern.strip():
                raise ValueError(f"File pattern at index {i} must be a non-empty string")
        return v

    @field_validator("legacy_aliases")
    @classmethod
    def validate_legacy_aliases(cls, v):
        for alias in v:
            if not GO_IDENTIFIER.match(alias):
                raise ValueError(f"legacy alias is not a Go identifier: {alias!r}")
        return v

    @field_validator("helper_name", "helper_constructor")
    @classmethod
    def validate_identifier(cls, v):
        if not GO_IDENTIFIER.match(v):
            raise ValueError(f"not a Go identifier: {v!r}")
        return v

    @field_validator("testing_context_type")
    @classmethod
    def validate_testing_context_type(cls, v):
        """Accept ``Type`` or ``package.Type``."""
        if not GO_QUALIFIED_TYPE.match(v):
            raise ValueError(f"testing_context_type must look like 'testing.T', got: {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        if not isinstance(v, str):
            raise ValueError("log_level must be a string (DEBUG, INFO, WARNING, ERROR)")
        upper_v = v.upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, got: {v}")
        return upper_v

    @field_validator("target_root", "backup_root")
    @classmethod
    def validate_directory(cls, v):
        """Reject paths that exist but are not directories."""
        if v is None:
            return v
        path = Path(v)
        if path.exists() and not path.is_dir():
            raise ValueError(f"must be a directory, got: {v}")
        return v

    @model_validator(mode="after")
    def validate_cross_field_compatibility(self) -> Self:
        errors: list[str] = []

        if self.helper_name in self.legacy_aliases:
            errors.append(f"helper_name '{self.helper_name}' is also listed in legacy_aliases")

        if self.backup_root and not self.backup_originals:
            errors.append("backup_root specified but backup_originals is disabled")

        if self.helper_import_path.startswith(self.legacy_import_prefix):
            errors.append("helper_import_path lies under legacy_import_prefix and would be removed")

        if errors:
            raise ValueError(f"Configuration conflicts detected: {'; '.join(errors)}")

        return self


def validate_migration_config(config_dict: dict[str, Any]) -> ValidatedMigrationConfig:
    """Validate a migration configuration dictionary.

    Args:
        config_dict: Configuration dictionary to validate

    Returns:
        Validated configuration object

    Raises:
        ValidationError: If configuration is invalid
    """
    try:
        return ValidatedMigrationConfig(**config_dict)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid migration configuration: {e}", validation_type="configuration") from e


def validate_migration_config_object(config) -> ValidatedMigrationConfig:
    """Validate an existing MigrationConfig object by converting it to a dict."""
    return validate_migration_config(dict(config.__dict__))
