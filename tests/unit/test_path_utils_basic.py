"""Unit tests for helpers.path_utils

Covers target path computation, source/target validation and display
normalization.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from splurge_testify_to_is.helpers.path_utils import (
    PathValidationError,
    normalize_path_for_display,
    target_path_for,
    validate_source_path,
    validate_target_path,
)


def test_validate_target_path_basic(tmp_path: Path):
    p = tmp_path / "subdir" / "file_test.go"
    validated = validate_target_path(p)
    assert isinstance(validated, Path)
    assert str(validated).endswith("file_test.go")


def test_validate_target_path_rejects_directories_and_empty(tmp_path: Path):
    with pytest.raises(PathValidationError) as exc:
        validate_target_path(tmp_path)
    assert exc.value.details["validation_type"] == "is_directory"

    with pytest.raises(PathValidationError):
        validate_target_path("  ")


def test_validate_source_path(tmp_path: Path):
    src = tmp_path / "a_test.go"
    src.write_text("package a\n")

    assert validate_source_path(str(src)) == src

    with pytest.raises(PathValidationError, match="does not exist"):
        validate_source_path(tmp_path / "missing_test.go")
    with pytest.raises(PathValidationError, match="cannot be empty"):
        validate_source_path("")


@pytest.mark.parametrize(
    ("name", "suffix", "expected"),
    [
        ("foo_test.go", "", "foo_test.go"),
        ("foo_test.go", "_is", "foo_is_test.go"),
        ("helper.go", "_is", "helper_is.go"),
    ],
)
def test_target_path_for_suffix(tmp_path: Path, name: str, suffix: str, expected: str):
    assert target_path_for(tmp_path / name, target_suffix=suffix) == tmp_path / expected


def test_target_path_for_root(tmp_path: Path):
    out = tmp_path / "out"
    assert target_path_for(tmp_path / "pkg" / "foo_test.go", str(out), "_is") == out / "foo_is_test.go"


def test_normalize_path_for_display_posix():
    assert normalize_path_for_display(Path("a") / "b_test.go", force_posix=True) == "a/b_test.go"
