from pathlib import Path

from splurge_testify_to_is.context import MigrationConfig, PipelineContext
from splurge_testify_to_is.events import EventBus
from splurge_testify_to_is.jobs.output_job import OutputJob, backup_path_for

GO_CODE = "package example\n"


def test_backup_path_next_to_source_or_under_root(tmp_path):
    src = tmp_path / "a_test.go"

    assert backup_path_for(str(src)) == tmp_path / "a_test.go.backup"
    assert backup_path_for(str(src), str(tmp_path / "bk")) == tmp_path / "bk" / "a_test.go.backup"


def test_create_backup_creates_file(tmp_path):
    src = tmp_path / "source_test.go"
    src.write_text(GO_CODE)

    OutputJob(EventBus())._create_backup(str(src))

    assert (tmp_path / "source_test.go.backup").read_text() == GO_CODE


def test_create_backup_skips_if_exists(tmp_path):
    src = tmp_path / "source_test.go"
    src.write_text(GO_CODE)
    backup = tmp_path / "source_test.go.backup"
    backup.write_text("old")

    # should not raise and should not overwrite
    OutputJob(EventBus())._create_backup(str(src))
    assert backup.read_text() == "old"


def test_create_backup_with_custom_root(tmp_path):
    src = tmp_path / "source_test.go"
    src.write_text(GO_CODE)
    backup_root = tmp_path / "backups" / "nested"

    OutputJob(EventBus())._create_backup(str(src), str(backup_root))

    assert (backup_root / "source_test.go.backup").exists()
    assert not (tmp_path / "source_test.go.backup").exists()


def test_execute_backs_up_then_writes(tmp_path):
    src = tmp_path / "a_test.go"
    src.write_text(GO_CODE)
    context = PipelineContext.create(str(src))

    result = OutputJob(EventBus()).execute(context, "package example\n\n// migrated\n")

    assert result.is_success()
    assert src.read_text() == "package example\n\n// migrated\n"
    assert (tmp_path / "a_test.go.backup").read_text() == GO_CODE


def test_execute_skips_backup_when_disabled_or_dry_run(tmp_path):
    src = tmp_path / "a_test.go"
    src.write_text(GO_CODE)

    for config in (MigrationConfig(backup_originals=False), MigrationConfig(dry_run=True)):
        OutputJob(EventBus()).execute(PipelineContext.create(str(src), config=config), GO_CODE)

    assert not (tmp_path / "a_test.go.backup").exists()


def test_failed_backup_leaves_original_untouched(tmp_path, monkeypatch):
    src = tmp_path / "a_test.go"
    src.write_text(GO_CODE)

    def broken_copy(source, destination):
        raise PermissionError("read-only")

    monkeypatch.setattr("splurge_testify_to_is.jobs.output_job.shutil.copy2", broken_copy)

    result = OutputJob(EventBus()).execute(PipelineContext.create(str(src)), "package changed\n")

    assert result.is_error()
    assert isinstance(result.error, PermissionError)
    assert result.metadata["source_file"] == str(src)
    assert Path(src).read_text() == GO_CODE
