"""Path validation and target-path computation.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import platform
from pathlib import Path

from ..exceptions import ValidationError

GO_TEST_SUFFIX = "_test.go"


class PathValidationError(ValidationError):
    """Raised when path validation fails."""

    def __init__(self, message: str, path: str, validation_type: str = "path"):
        self.path = path
        self.validation_type = validation_type
        super().__init__(message, validation_type, field=path)


def validate_source_path(source_path: str | Path) -> Path:
    """Validate and normalize a source path.

    Raises:
        PathValidationError: If the path is empty, too long for the platform,
            or does not exist.
    """
    path = Path(source_path)
    path_str = str(source_path)

    if not path_str.strip():
        raise PathValidationError("Source path cannot be empty", path_str, "empty_path")

    if len(path_str) > 260 and platform.system() == "Windows":
        raise PathValidationError(
            f"Path length exceeds Windows limit of 260 characters: {len(path_str)}", path_str, "path_length"
        )

    if not path.exists():
        raise PathValidationError(f"Source path does not exist: {path_str}", path_str, "not_found")

    return path


def validate_target_path(target_path: str | Path) -> Path:
    """Validate a target path without touching the filesystem."""
    path = Path(target_path)
    if not str(target_path).strip():
        raise PathValidationError("Target path cannot be empty", str(target_path), "empty_path")
    if path.exists() and path.is_dir():
        raise PathValidationError(f"Target path is a directory: {path}", str(path), "is_directory")
    return path


def target_path_for(source_file: str | Path, target_root: str | None = None, target_suffix: str = "") -> Path:
    """Compute where the migrated version of ``source_file`` goes.

    The suffix is inserted before ``_test.go`` so that the result is still
    recognized by ``go test`` (``foo_test.go`` + ``_is`` -> ``foo_is_test.go``).
    Without a root or suffix the file is rewritten in place.
    """
    source = Path(source_file)
    name = source.name
    if target_suffix:
        if name.endswith(GO_TEST_SUFFIX):
            name = f"{name[: -len(GO_TEST_SUFFIX)]}{target_suffix}{GO_TEST_SUFFIX}"
        else:
            name = f"{source.stem}{target_suffix}{source.suffix}"
    directory = Path(target_root) if target_root else source.parent
    return validate_target_path(directory / name)


def normalize_path_for_display(path: str | Path, force_posix: bool = False) -> str:
    """Normalize a path for consistent display across platforms."""
    path_obj = Path(path)
    if force_posix or platform.system() != "Windows":
        return path_obj.as_posix()
    return str(path_obj)
