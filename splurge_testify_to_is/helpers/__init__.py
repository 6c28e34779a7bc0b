"""Helper utilities shared across the migration tool."""

from .path_utils import (
    PathValidationError,
    normalize_path_for_display,
    target_path_for,
    validate_source_path,
    validate_target_path,
)

__all__ = [
    "PathValidationError",
    "normalize_path_for_display",
    "target_path_for",
    "validate_source_path",
    "validate_target_path",
]
