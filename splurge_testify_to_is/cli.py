"""Command-line interface for the testify-to-is migration tool.

This module defines the public CLI commands of the
``splurge-testify-to-is`` application. It uses ``typer`` to expose the
program entrypoint while delegating the work to the programmatic API in
:mod:`splurge_testify_to_is.main` so the same logic can be used from
Python code or the CLI.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import difflib
import logging
from pathlib import Path
from typing import cast

import typer

from . import main as main_module
from .cli_adapters import build_config_from_cli
from .cli_helpers import (
    attach_diagnostic_printer,
    attach_progress_handlers,
    create_event_bus,
    set_quiet_mode,
    setup_logging,
    setup_logging_with_level,
    validate_source_files_with_patterns,
)
from .context import ContextManager, MigrationConfig
from .helpers.path_utils import normalize_path_for_display
from .result import Result

app = typer.Typer(
    name="splurge-testify-to-is",
    help="Migrate Go testify require/assert calls to github.com/ilius/is/v2",
    add_completion=False,
)

logger = logging.getLogger(__name__)


def _print_dry_run(result: Result[list[str]], diff: bool, list_files: bool, posix: bool) -> None:
    meta = result.metadata or {}
    generated: dict[str, str] = meta.get("generated_code", {})
    sources: dict[str, str] = meta.get("sources", {})

    for target, code in generated.items():
        display = normalize_path_for_display(target, force_posix=posix)
        if list_files:
            typer.echo(f"== FILES: {display} ==")
            continue

        if not diff:
            typer.echo(f"== GO: {display} ==")
            typer.echo(code)
            continue

        original = Path(sources.get(target, target))
        try:
            orig_text = original.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            orig_text = ""
        diff_lines = list(
            difflib.unified_diff(
                orig_text.splitlines(keepends=True),
                code.splitlines(keepends=True),
                fromfile=f"orig:{normalize_path_for_display(original, force_posix=posix)}",
                tofile=f"new:{display}",
            )
        )
        typer.echo(f"== DIFF: {display} ==")
        typer.echo("".join(diff_lines) if diff_lines else "<no differences detected>")


@app.command("migrate")
def migrate(
    source_files: list[str] = typer.Argument(None, help="Go test files or directories (use -d/-f to search)"),
    root_directory: str | None = typer.Option(None, "--dir", "-d", help="Root directory for input files"),
    file_patterns: list[str] | None = typer.Option(
        None, "--file", "-f", help="Glob patterns for input files (repeatable, default: *_test.go)"
    ),
    recurse: bool = typer.Option(True, "--recurse/--no-recurse", help="Recurse directories when searching for files"),
    target_root: str | None = typer.Option(None, "--target-root", "-t", help="Target root directory for output files"),
    suffix: str | None = typer.Option(None, "--suffix", help="Suffix inserted before _test.go in target filenames"),
    skip_backup: bool = typer.Option(False, "--skip-backup", help="Skip backup of original files"),
    backup_root: str | None = typer.Option(None, "--backup-root", help="Root directory for backup files"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done without writing files"),
    diff: bool = typer.Option(False, "--diff", help="With --dry-run, show unified diffs instead of full code"),
    list_files: bool = typer.Option(False, "--list", help="With --dry-run, list files only (no code shown)"),
    posix: bool = typer.Option(False, "--posix", help="Display paths with forward slashes"),
    no_format: bool = typer.Option(False, "--no-format", help="Do not run gofmt on the generated code"),
    keep_going: bool = typer.Option(False, "--keep-going", help="Continue with remaining files after a failure"),
    config_file: str | None = typer.Option(None, "--config", "-c", help="YAML configuration file to load settings from"),
    info: bool = typer.Option(False, "--info", help="Enable info logging output"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging output"),
    log_level: str | None = typer.Option(None, "--log-level", help="Set logging level (DEBUG, INFO, WARNING, ERROR)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every pipeline step"),
) -> None:
    """Rewrite testify assertions in Go test files to the is helper.

    Every statement that could not be converted is printed as
    ``file:line:col: message: statement`` on stderr. The exit code is 1 when
    any file failed to parse, format, validate or write.

    Examples:
        # Preview the conversion of one package
        splurge-testify-to-is migrate --dry-run --diff ./pkg/foo

        # Write converted copies next to the originals
        splurge-testify-to-is migrate --suffix _is -d ./pkg
    """
    if info and debug:
        typer.echo("Error: --info and --debug cannot be used together.", err=True)
        raise typer.Exit(code=2)

    base_config = MigrationConfig()
    if config_file is not None:
        config_result = ContextManager.load_config_from_file(config_file)
        if not config_result.is_success():
            typer.echo(f"Error loading configuration file: {config_result.error}", err=True)
            raise typer.Exit(code=1)
        base_config = cast(MigrationConfig, config_result.data)
        logger.info(f"Loaded configuration from: {config_file}")

    # Flags only override the configuration file when they are set.
    config_kwargs: dict[str, object] = {
        "target_root": target_root,
        "target_suffix": suffix,
        "backup_root": backup_root,
        "file_patterns": file_patterns or None,
        "log_level": log_level,
    }
    if not recurse:
        config_kwargs["recurse_directories"] = False
    if skip_backup:
        config_kwargs["backup_originals"] = False
    if dry_run:
        config_kwargs["dry_run"] = True
    if no_format:
        config_kwargs["format_output"] = False
    if keep_going:
        config_kwargs["fail_fast"] = False
    if verbose:
        config_kwargs["verbose"] = True

    config = build_config_from_cli(base_config, config_kwargs)
    validation = ContextManager.validate_config(config)
    if validation.is_error():
        typer.echo(f"Error: {validation.error}", err=True)
        raise typer.Exit(code=1)

    if debug or info:
        setup_logging(debug)
    else:
        setup_logging_with_level(config.log_level)
    # Quiet unless asked for logging explicitly
    set_quiet_mode(not (debug or info or log_level))

    for warning in validation.warnings or []:
        logger.warning(warning)

    valid_files = validate_source_files_with_patterns(
        source_files or [], root_directory, config.file_patterns, config.recurse_directories
    )
    if not valid_files:
        typer.echo("Error: no Go test files or directories to migrate.", err=True)
        raise typer.Exit(code=1)
    logger.info(f"Found {len(valid_files)} paths to process")

    event_bus = create_event_bus()
    attach_progress_handlers(event_bus, verbose=config.verbose)
    attach_diagnostic_printer(event_bus, lambda line: typer.echo(line, err=True))

    if config.dry_run:
        logger.info("Dry-run mode enabled. No files will be written.")

    result = main_module.migrate(valid_files, config=config, event_bus=event_bus)

    if result.is_error():
        typer.echo(f"Migration failed: {result.error}", err=True)
        raise typer.Exit(code=1)

    logger.info(f"Migrated: {len(result.data or [])} files")
    if config.dry_run:
        _print_dry_run(result, diff, list_files, posix)


@app.command("version")
def version() -> None:
    """Show the version of splurge-testify-to-is."""
    from . import __version__

    typer.echo(f"splurge-testify-to-is {__version__}")


@app.command("init-config")
def init_config(
    output_file: str = typer.Argument("splurge-testify-to-is.yaml", help="Output configuration file"),
) -> None:
    """Initialize a configuration file with default settings.

    The file lists every option with its default value so it can be
    edited and passed back with ``migrate --config``.
    """
    result = ContextManager.write_default_config(output_file)
    if result.is_error():
        typer.echo(f"Failed to create configuration file: {result.error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Configuration file created: {output_file}")


def main() -> None:
    """Main entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
