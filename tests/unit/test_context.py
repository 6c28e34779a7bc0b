"""Tests for the context and configuration system."""

from pathlib import Path

import pytest
import yaml

from splurge_testify_to_is.context import ContextManager, MigrationConfig, PipelineContext


def test_migration_config_defaults():
    config = MigrationConfig()

    assert config.file_patterns == ["*_test.go"]
    assert config.fail_fast is True
    assert config.backup_originals is True
    assert config.legacy_aliases == ["require", "assert"]
    assert config.helper_name == "is"
    assert config.helper_constructor == "New"
    assert config.helper_import_path == "github.com/ilius/is/v2"
    assert config.testing_context_type == "testing.T"


def test_migration_config_with_override():
    config = MigrationConfig(dry_run=False)
    new_config = config.with_override(dry_run=True, target_suffix="_is")

    assert config.dry_run is False
    assert new_config.dry_run is True
    assert new_config.target_suffix == "_is"


def test_from_dict_ignores_unknown_keys():
    config = MigrationConfig.from_dict({"dry_run": True, "line_length": 120})

    assert config.dry_run is True
    assert not hasattr(config, "line_length")


def test_from_dict_rejects_invalid_values():
    with pytest.raises(ValueError):
        MigrationConfig.from_dict({"helper_name": "not an identifier"})


def test_to_dict_round_trips():
    config = MigrationConfig(target_suffix="_is", legacy_aliases=["require"])
    assert MigrationConfig.from_dict(config.to_dict()) == config


def test_pipeline_context_create_defaults(tmp_path: Path):
    source = tmp_path / "a_test.go"
    source.write_text("package a\n", encoding="utf-8")

    context = PipelineContext.create(str(source))

    assert context.target_file == str(source)
    assert context.config == MigrationConfig()
    assert context.run_id
    assert not context.is_dry_run()


def test_pipeline_context_with_metadata_is_a_copy():
    context = PipelineContext.create("a_test.go", run_id="run-1")
    updated = context.with_metadata("key", "value")

    assert context.metadata == {}
    assert updated.metadata == {"key": "value"}
    assert updated.run_id == "run-1"
    assert updated.to_dict()["metadata"] == {"key": "value"}
    assert "a_test.go" in str(updated)


def test_load_config_from_file(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump({"dry_run": True, "helper_name": "check", "unknown": 1}), encoding="utf-8")

    result = ContextManager.load_config_from_file(str(config_file))

    assert result.is_success()
    assert result.data.dry_run is True
    assert result.data.helper_name == "check"


def test_load_config_missing_file(tmp_path: Path):
    result = ContextManager.load_config_from_file(str(tmp_path / "missing.yaml"))

    assert result.is_error()
    assert isinstance(result.error, FileNotFoundError)


@pytest.mark.parametrize("content", ["- a\n- b\n", "helper_name: [1, 2\n", "log_level: LOUD\n"])
def test_load_config_rejects_bad_content(tmp_path: Path, content: str):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(content, encoding="utf-8")

    result = ContextManager.load_config_from_file(str(config_file))

    assert result.is_error()


def test_write_default_config_can_be_loaded_back(tmp_path: Path):
    config_file = tmp_path / "defaults.yaml"

    written = ContextManager.write_default_config(str(config_file))
    loaded = ContextManager.load_config_from_file(str(config_file))

    assert written.is_success()
    assert loaded.data == MigrationConfig()


def test_validate_config_reports_errors_and_warnings():
    assert ContextManager.validate_config(MigrationConfig()).is_success()
    assert ContextManager.validate_config(MigrationConfig(helper_name="require")).is_error()

    warned = ContextManager.validate_config(MigrationConfig(target_suffix="_is"))
    assert warned.is_warning()
    assert warned.warnings
