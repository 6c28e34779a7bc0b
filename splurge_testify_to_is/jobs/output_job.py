"""Output job for writing migrated files to disk.

This job handles the final phase of the pipeline: creating an optional
backup of the original file and writing the migrated code to the
configured target.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import shutil
from pathlib import Path
from typing import Any

from ..context import PipelineContext
from ..events import EventBus
from ..pipeline import Job, Task
from ..result import Result
from ..steps import WriteOutputStep


def backup_path_for(source_file: str, backup_root: str | None = None) -> Path:
    """Where the backup of ``source_file`` is stored (``<name>.backup``)."""
    source_path = Path(source_file)
    directory = Path(backup_root) if backup_root else source_path.parent
    return directory / f"{source_path.name}.backup"


class OutputJob(Job[str, str]):
    """Write migrated Go files to the filesystem."""

    def __init__(self, event_bus: EventBus):
        super().__init__("output", [self._create_output_task(event_bus)], event_bus)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_output_task(self, event_bus: EventBus) -> Task[Any, Any]:
        steps: list[Any] = [
            WriteOutputStep("write_output", event_bus),
        ]
        return Task("output", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        """Back up the original (unless disabled or dry-run) and write the output.

        A failed backup is treated like any other file I/O failure and the
        original is left untouched.
        """
        self._logger.debug(f"Starting output job for {context.target_file}")

        if context.config.backup_originals and not context.config.dry_run:
            try:
                self._create_backup(context.source_file, context.config.backup_root)
            except OSError as e:
                self._logger.error(f"Failed to create backup for {context.source_file}: {e}")
                return Result.failure(e, {"job": self.name, "source_file": context.source_file})
        else:
            self._logger.debug(
                f"Skipping backup: dry_run={context.config.dry_run}, backup={context.config.backup_originals}"
            )

        result = super().execute(context, initial_input)

        if result.is_error():
            self._logger.error(f"Output job failed for {context.target_file}: {result.error}")
        elif context.config.dry_run:
            self._logger.info(f"Dry-run: would write output to {context.target_file}")
        else:
            self._logger.info(f"Wrote {context.target_file}")
        return result

    def _create_backup(self, source_file: str, backup_root: str | None = None) -> None:
        """Copy the original file next to itself, or under ``backup_root``.

        An existing backup is never overwritten, so re-running the migration
        keeps the very first original.
        """
        backup_path = backup_path_for(source_file, backup_root)
        backup_path.parent.mkdir(parents=True, exist_ok=True)

        if backup_path.exists():
            self._logger.info(f"Backup already exists, skipping: {backup_path}")
            return

        shutil.copy2(source_file, backup_path)
        self._logger.info(f"Created backup: {backup_path}")
