"""Main migration orchestrator that coordinates all jobs.

This module wires the collector, formatter and output jobs into a
per-file pipeline and provides file and directory entry points.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from pathlib import Path
from typing import Any

from .context import MigrationConfig, PipelineContext
from .detectors import LegacyAssertionDetector
from .events import EventBus, LoggingSubscriber
from .exceptions import MigrationError
from .helpers.path_utils import PathValidationError, target_path_for, validate_source_path
from .jobs import CollectorJob, FormatterJob, OutputJob
from .pipeline import Pipeline
from .result import Result


class MigrationOrchestrator:
    """Run the testify-to-is migration for files and directories.

    Args:
        event_bus: Optional external event bus. When omitted a private bus
            with a :class:`LoggingSubscriber` is created.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        if event_bus is None:
            event_bus = EventBus()
            self.logger_subscriber: LoggingSubscriber | None = LoggingSubscriber(event_bus)
        else:
            self.logger_subscriber = None
        self.event_bus = event_bus
        self._logger = logging.getLogger(__name__)

        self.collector_job = CollectorJob(self.event_bus)
        self.formatter_job = FormatterJob(self.event_bus)
        self.output_job = OutputJob(self.event_bus)

    def _create_migration_pipeline(self) -> Pipeline[str, str]:
        # collector: source text -> migrated text
        # formatter: migrated text -> gofmt'd, validated text
        # output: text -> written target path
        jobs: list[Any] = [self.collector_job, self.formatter_job, self.output_job]
        return Pipeline("migration", jobs, self.event_bus)

    def migrate_file(self, source_file: str, config: MigrationConfig | None = None) -> Result[str]:
        """Migrate a single Go test file.

        Returns:
            ``Result`` holding the target path. Its metadata carries
            ``statistics`` and ``diagnostics`` from the rewrite and, in
            dry-run mode, ``generated_code``.
        """
        if config is None:
            config = MigrationConfig()

        self._logger.info(f"Starting migration of {source_file}")

        try:
            source_path = validate_source_path(source_file)
            if not source_path.is_file():
                raise PathValidationError(f"Source path is not a file: {source_file}", source_file, "not_a_file")
            target_path = target_path_for(source_path, config.target_root, config.target_suffix)
        except PathValidationError as e:
            return Result.failure(e, {"source_file": source_file})

        context = PipelineContext.create(source_file=str(source_path), target_file=str(target_path), config=config)

        try:
            source_code = source_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self._logger.error(f"Cannot read {source_file}: {e}")
            return Result.failure(e, {"source_file": source_file})

        result = self._create_migration_pipeline().execute(context, source_code)
        if result.is_error():
            self._logger.error(f"Migration failed for {source_file}: {result.error}")
        else:
            self._logger.info(f"Migration completed for {source_file}")
        return result

    def discover_files(self, source_dir: str, config: MigrationConfig | None = None) -> list[str]:
        """Find files under ``source_dir`` that match the patterns and import the legacy library."""
        config = config or MigrationConfig()
        root = Path(source_dir)

        candidates: list[Path] = []
        for pattern in config.file_patterns:
            matches = root.rglob(pattern) if config.recurse_directories else root.glob(pattern)
            candidates.extend(path for path in matches if path.is_file())

        detector = LegacyAssertionDetector(config.legacy_import_prefix)
        found: list[str] = []
        for path in sorted(set(candidates)):
            try:
                if detector.is_legacy_file(path):
                    found.append(str(path))
            except (OSError, UnicodeDecodeError):
                self._logger.debug(f"Skipping unreadable file: {path}")
        return found

    def migrate_directory(self, source_dir: str, config: MigrationConfig | None = None) -> Result[list[str]]:
        """Migrate every matching Go test file under a directory.

        With ``fail_fast`` (the default) the first failing file aborts the
        run. Otherwise all files are attempted and a failure listing the
        failed files is returned at the end.
        """
        if config is None:
            config = MigrationConfig()

        try:
            source_path = validate_source_path(source_dir)
        except PathValidationError as e:
            return Result.failure(e)

        if not source_path.is_dir():
            return Result.failure(ValueError(f"Path is not a directory: {source_dir}"))

        self._logger.info(f"Starting migration of directory {source_dir}")

        files = self.discover_files(str(source_path), config)
        if not files:
            self._logger.warning(f"No Go test files importing {config.legacy_import_prefix} found in {source_dir}")
            return Result.success([])

        self._logger.info(f"Found {len(files)} files to migrate")

        migrated: list[str] = []
        failed: list[str] = []
        per_file: dict[str, Result[str]] = {}

        for source_file in files:
            result = self.migrate_file(source_file, config)
            per_file[source_file] = result
            if result.is_error():
                failed.append(source_file)
                if config.fail_fast:
                    return Result.failure(
                        result.error or MigrationError(f"Failed to migrate {source_file}"),
                        {
                            **(result.metadata or {}),
                            "failed_files": failed,
                            "migrated_files": migrated,
                            "file_results": per_file,
                        },
                    )
            else:
                migrated.append(str(result.data))

        self._logger.info(f"Migration completed: {len(migrated)} successful, {len(failed)} failed")

        if failed:
            return Result.failure(
                MigrationError(f"Failed to migrate {len(failed)} files", {"failed_files": failed}),
                {"failed_files": failed, "migrated_files": migrated, "file_results": per_file},
            )

        return Result.success(migrated, metadata={"file_results": per_file})
