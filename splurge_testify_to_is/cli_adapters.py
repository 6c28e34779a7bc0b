"""Small adapters that coerce CLI runtime values into strongly-typed objects.

These helpers live at the CLI boundary and keep the rest of the library
strictly typed. Typer ``OptionInfo`` defaults leak through when command
functions are called directly, so values are unwrapped before use.
"""

from __future__ import annotations

from typing import Any

from .context import MigrationConfig

BOOLEAN_FIELDS = frozenset(
    {
        "recurse_directories",
        "backup_originals",
        "dry_run",
        "fail_fast",
        "format_output",
        "verbose",
    }
)

LIST_FIELDS = frozenset({"file_patterns", "legacy_aliases"})


def _unwrap_option(value: Any) -> Any:
    """If the value is a Typer/Click OptionInfo-like object, unwrap the default.

    Duck typing keeps Typer out of this module: OptionInfo objects expose a
    ``default`` attribute.
    """
    if hasattr(value, "default"):
        return value.default
    return value


def build_config_from_cli(base_config: MigrationConfig, cli_kwargs: dict[str, object]) -> MigrationConfig:
    """Construct a typed MigrationConfig by coercing CLI-provided values.

    Args:
        base_config: The baseline MigrationConfig instance to override.
        cli_kwargs: Dictionary of candidate overrides produced by the CLI.

    Returns:
        A new MigrationConfig instance with overrides applied.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    filtered: dict[str, Any] = {}
    valid_fields = set(MigrationConfig.__dataclass_fields__.keys())

    for key, raw_val in cli_kwargs.items():
        if key not in valid_fields:
            continue

        val = _unwrap_option(raw_val)
        if val is None:
            # the CLI did not set a value
            continue

        if key in BOOLEAN_FIELDS:
            filtered[key] = bool(val)
        elif key in LIST_FIELDS:
            if isinstance(val, str):
                # Allow comma-separated lists as a convenience
                filtered[key] = [p.strip() for p in val.split(",") if p.strip()]
            elif isinstance(val, list | tuple | set):
                filtered[key] = list(val)
            else:
                filtered[key] = [val]
        else:
            filtered[key] = str(val)

    return base_config.with_override(**filtered)
