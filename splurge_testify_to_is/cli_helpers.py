"""CLI helper functions for the testify-to-is migration tool.

This module contains utility functions used by the CLI commands,
separated from the main CLI module for better organization.
"""

import logging
import os
from collections.abc import Callable

from .diagnostics import Diagnostic
from .events import DiagnosticEvent, EventBus, LoggingSubscriber


def setup_logging(debug_mode: bool = False) -> None:
    """Set up logging configuration for the application."""
    log_level = logging.DEBUG if debug_mode else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging_with_level(log_level: str) -> None:
    """Set up logging with a specific level."""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def set_quiet_mode(quiet: bool = False) -> None:
    """Set quiet mode by adjusting log levels."""
    if quiet:
        logging.getLogger().setLevel(logging.WARNING)


def create_event_bus() -> EventBus:
    """Create and configure the event bus for the application."""
    return EventBus()


def attach_progress_handlers(event_bus: EventBus, verbose: bool = False) -> LoggingSubscriber:
    """Attach a logging subscriber that reports pipeline progress."""
    return LoggingSubscriber(event_bus, verbose=verbose)


def attach_diagnostic_printer(event_bus: EventBus, echo: Callable[[str], None]) -> Callable[[DiagnosticEvent], None]:
    """Print every diagnostic published on ``event_bus`` through ``echo``.

    Returns the subscribed handler so callers can unsubscribe it.
    """

    def _print(event: DiagnosticEvent) -> None:
        diagnostic: Diagnostic = event.diagnostic
        echo(str(diagnostic))

    event_bus.subscribe(DiagnosticEvent, _print)
    return _print


def validate_source_files_with_patterns(
    source_files: list[str],
    root_directory: str | None,
    file_patterns: list[str],
    recurse: bool = True,
) -> list[str]:
    """Collect the paths to migrate.

    Explicit files and directories are kept as given (directories are
    searched later by the orchestrator). When ``root_directory`` is set,
    files under it matching ``file_patterns`` are added.
    """
    import glob

    valid_files = []

    for file_path in source_files:
        if os.path.isfile(file_path) or os.path.isdir(file_path):
            valid_files.append(file_path)

    if root_directory and os.path.isdir(root_directory):
        for pattern in file_patterns:
            if recurse:
                full_pattern = os.path.join(root_directory, "**", pattern)
                matched_files = glob.glob(full_pattern, recursive=True)
            else:
                matched_files = glob.glob(os.path.join(root_directory, pattern))

            for file_path in sorted(matched_files):
                if os.path.isfile(file_path):
                    valid_files.append(file_path)

    # Remove duplicates
    seen = set()
    unique_valid_files = []
    for file_path in valid_files:
        if file_path not in seen:
            seen.add(file_path)
            unique_valid_files.append(file_path)

    return unique_valid_files
