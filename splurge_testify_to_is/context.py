"""Pipeline context and migration configuration helpers.

This module defines immutable dataclasses used to carry configuration and
execution context through the migration pipeline. ``MigrationConfig``
holds file-discovery, output and vocabulary options (legacy aliases, helper
name, import paths); ``PipelineContext`` carries per-file runtime
information (paths, run id and metadata) between pipeline stages. Loading
configuration from YAML is handled by ``ContextManager``.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import dataclasses
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .config_validation import validate_migration_config_object
from .result import Result


@dataclass(frozen=True)
class MigrationConfig:
    """Migration behavior configuration.

    Serializable so callers can construct it from dictionaries or YAML
    configuration files. The vocabulary fields describe both the legacy
    assertion library being removed and the replacement helper API.
    """

    # Output settings
    target_root: str | None = None
    # Suffix appended to target filename stem, before ``_test.go`` is kept intact
    target_suffix: str = ""
    file_patterns: list[str] = field(default_factory=lambda: ["*_test.go"])
    recurse_directories: bool = True
    backup_originals: bool = True
    backup_root: str | None = None

    # Behavior settings
    dry_run: bool = False
    fail_fast: bool = True

    # Output formatting control
    format_output: bool = True
    """Whether to pipe generated code through gofmt"""
    gofmt_command: str = "gofmt"

    # Logging and reporting settings
    log_level: str = "INFO"
    """Default logging level (DEBUG, INFO, WARNING, ERROR)"""
    verbose: bool = False

    # Legacy library
    legacy_import_prefix: str = "github.com/stretchr/"
    legacy_aliases: list[str] = field(default_factory=lambda: ["require", "assert"])

    # Replacement helper API
    helper_name: str = "is"
    helper_constructor: str = "New"
    helper_import_path: str = "github.com/ilius/is/v2"
    testing_context_type: str = "testing.T"

    def with_override(self, **kwargs: Any) -> "MigrationConfig":
        """Return a new ``MigrationConfig`` with specified overrides.

        Args:
            **kwargs: Configuration values to override on the returned
                instance.

        Returns:
            A new ``MigrationConfig`` with the provided overrides
            applied.
        """
        return dataclasses.replace(self, **kwargs)

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If configuration is invalid.
        """
        try:
            validate_migration_config_object(self)
        except Exception as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "MigrationConfig":
        """Create config from dictionary.

        Unknown keys are ignored.

        Raises:
            ValueError: If configuration is invalid.
        """
        filtered = {k: v for k, v in config_dict.items() if k in cls.__dataclass_fields__}
        config = cls(**filtered)
        config.validate()
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class PipelineContext:
    """Immutable context object passed through the migration pipeline.

    The context bundles the source and target file paths, the active
    :class:`MigrationConfig`, a stable ``run_id`` for correlation, and
    an optional metadata mapping. Instances are frozen; use
    :meth:`with_metadata` to derive modified copies.
    """

    source_file: str
    target_file: str
    config: MigrationConfig
    run_id: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not Path(self.source_file).exists():
            # In-memory use (tests, string migration) has no file on disk.
            logging.getLogger(__name__).debug(
                "PipelineContext created with non-existent source_file: %s", self.source_file
            )

    @classmethod
    def create(
        cls,
        source_file: str,
        target_file: str | None = None,
        config: MigrationConfig | None = None,
        run_id: str | None = None,
    ) -> "PipelineContext":
        """Construct a ``PipelineContext`` from call-site information.

        Args:
            source_file: Path to the Go test file.
            target_file: Optional output path. When omitted the source path
                is reused, so files are rewritten in place.
            config: Optional ``MigrationConfig``; defaults are used when
                omitted.
            run_id: Optional run identifier; if omitted a UUID is
                generated.
        """
        if not target_file:
            target_file = str(Path(source_file))

        if not config:
            config = MigrationConfig()

        if not run_id:
            run_id = str(uuid.uuid4())

        return cls(source_file=source_file, target_file=target_file, config=config, run_id=run_id, metadata={})

    def with_metadata(self, key: str, value: Any) -> "PipelineContext":
        """Return a new context with an additional metadata entry."""
        new_metadata = {**self.metadata, key: value}
        return dataclasses.replace(self, metadata=new_metadata)

    def is_dry_run(self) -> bool:
        """Return True when no changes should be written to disk."""
        return self.config.dry_run

    def to_dict(self) -> dict[str, Any]:
        """Serialize the context to a simple dictionary."""
        return {
            "source_file": self.source_file,
            "target_file": self.target_file,
            "config": self.config.to_dict(),
            "run_id": self.run_id,
            "metadata": self.metadata,
        }

    def __str__(self) -> str:
        return f"PipelineContext(source={self.source_file}, target={self.target_file}, run_id={self.run_id[:8]}...)"


class ContextManager:
    """Helper utilities for loading and validating pipeline configuration.

    Methods return ``Result`` instances so callers can react to failures
    or warnings in a structured way.
    """

    @staticmethod
    def load_config_from_file(config_file: str) -> Result[MigrationConfig]:
        """Load a ``MigrationConfig`` from a YAML file.

        Unknown top-level keys are ignored so that older configuration
        files remain compatible.

        Args:
            config_file: Path to the YAML configuration file.

        Returns:
            A ``Result`` containing the constructed ``MigrationConfig`` on
            success or an error describing the problem.
        """
        try:
            with open(config_file, encoding="utf-8") as f:
                config_data = yaml.safe_load(f)

            if not isinstance(config_data, dict):
                return Result.failure(
                    ValueError("Configuration file must contain a dictionary"), {"config_file": config_file}
                )

            config = MigrationConfig.from_dict(config_data)
            return Result.success(config)

        except FileNotFoundError:
            return Result.failure(
                FileNotFoundError(f"Configuration file not found: {config_file}"), {"config_file": config_file}
            )
        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            return Result.failure(ValueError(f"Error loading configuration: {e}"), {"config_file": config_file})

    @staticmethod
    def write_default_config(config_file: str) -> Result[str]:
        """Write the default configuration as YAML to ``config_file``."""
        try:
            with open(config_file, "w", encoding="utf-8") as f:
                yaml.safe_dump(MigrationConfig().to_dict(), f, sort_keys=False)
            return Result.success(config_file)
        except OSError as e:
            return Result.failure(e, {"config_file": config_file})

    @staticmethod
    def validate_config(config: MigrationConfig) -> Result[MigrationConfig]:
        """Validate a ``MigrationConfig`` instance.

        Hard errors produce a failure result; settings that are legal but
        likely unintended produce a warning result.
        """
        try:
            config.validate()
        except ValueError as e:
            return Result.failure(e)

        issues = []
        if config.dry_run and config.backup_originals and config.backup_root:
            issues.append("backup_root has no effect during a dry run")
        if config.target_suffix and not config.target_root and not config.dry_run:
            issues.append("target_suffix writes new files beside the originals")

        if issues:
            return Result.warning(config, [f"Configuration issues: {', '.join(issues)}"])

        return Result.success(config)
