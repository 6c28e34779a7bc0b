"""Programmatic API for splurge_testify_to_is.

``migrate`` is the entry point used by the CLI and tests. It delegates to
``MigrationOrchestrator`` and returns a ``Result`` containing the list of
written target paths.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .context import MigrationConfig
from .events import EventBus
from .exceptions import MigrationError
from .migration_orchestrator import MigrationOrchestrator
from .result import Result

logger = logging.getLogger(__name__)


def _collect(res: Result[str], source: str, summary: dict[str, Any]) -> None:
    meta = res.metadata or {}
    target = str(res.data)
    summary["written"].append(target)
    summary["sources"][target] = source
    summary["diagnostics"].extend(meta.get("diagnostics", []))
    summary["warnings"].extend(res.warnings or [])
    if "statistics" in meta:
        summary["statistics"][target] = meta["statistics"]
    if "generated_code" in meta:
        summary["generated_code"][target] = meta["generated_code"]


def migrate(
    source_files: Iterable[str] | str,
    config: MigrationConfig | None = None,
    event_bus: EventBus | None = None,
) -> Result[list[str]]:
    """Migrate one or more Go test files (or directories) in order.

    Args:
        source_files: Iterable of file or directory paths, or a single path.
        config: Optional ``MigrationConfig``.
        event_bus: Optional event bus to publish pipeline events on.

    Returns:
        ``Result`` holding the written target paths. Metadata carries
        ``diagnostics`` (all files), ``statistics`` and ``sources`` keyed by
        target path and, in dry-run mode, ``generated_code``. The first
        fatal failure aborts the run when ``config.fail_fast`` is set.
    """
    files = [source_files] if isinstance(source_files, str) else list(source_files)
    if config is None:
        config = MigrationConfig()

    orchestrator = MigrationOrchestrator(event_bus)
    summary: dict[str, Any] = {
        "written": [],
        "sources": {},
        "diagnostics": [],
        "warnings": [],
        "statistics": {},
        "generated_code": {},
    }
    failures: list[tuple[str, Result[Any]]] = []

    for src in files:
        if Path(src).is_dir():
            dir_result = orchestrator.migrate_directory(src, config)
            for source, file_result in (dir_result.metadata or {}).get("file_results", {}).items():
                if not file_result.is_error():
                    _collect(file_result, source, summary)
            if dir_result.is_error():
                failures.append((src, dir_result))
                if config.fail_fast:
                    break
            continue

        res = orchestrator.migrate_file(src, config)
        if res.is_error():
            failures.append((src, res))
            if config.fail_fast:
                break
            continue
        _collect(res, src, summary)

    metadata = {key: value for key, value in summary.items() if key not in ("written", "warnings")}
    if failures:
        source, first = failures[0]
        error = first.error or MigrationError(f"Migration failed for {source}")
        metadata["failed_files"] = [path for path, _ in failures]
        return Result.failure(error, metadata)

    if summary["warnings"]:
        return Result.warning(summary["written"], summary["warnings"], metadata)
    return Result.success(summary["written"], metadata=metadata)
