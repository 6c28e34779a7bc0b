"""Data-driven migration tests over the Go files in tests/data/go.

Each ``testify_given_NN.txt`` is migrated without gofmt and compared with
``is_expected_NN.txt`` byte for byte. Migrating the expected output again
must not change it.
"""

from pathlib import Path

import pytest

from splurge_testify_to_is.context import MigrationConfig
from splurge_testify_to_is.diagnostics import DiagnosticKind
from splurge_testify_to_is.main import migrate
from tests.test_utils import data_pairs, migrate_go

PAIRS = data_pairs()


def test_test_data_exists():
    assert len(PAIRS) >= 4


@pytest.mark.parametrize(("given", "expected"), PAIRS, ids=[p[0].stem for p in PAIRS])
def test_given_migrates_to_expected(given: Path, expected: Path):
    rendered, _ = migrate_go(given.read_text(encoding="utf-8"))
    assert rendered == expected.read_text(encoding="utf-8")


@pytest.mark.parametrize("expected", [p[1] for p in PAIRS], ids=[p[1].stem for p in PAIRS])
def test_migration_is_idempotent(expected: Path):
    code = expected.read_text(encoding="utf-8")
    rendered, report = migrate_go(code)

    assert rendered == code
    assert report.conversions == 0
    assert report.declarations_inserted == 0


def test_closure_subtests_are_reported_not_converted():
    given = Path(PAIRS[1][0])
    _, report = migrate_go(given.read_text(encoding="utf-8"))

    assert [d.kind for d in report.diagnostics] == [DiagnosticKind.UNRECOGNIZED_CALL] * 2
    assert [d.line for d in report.diagnostics] == [11, 14]


def test_partial_conversion_reports_leftovers():
    given = Path(PAIRS[2][0])
    _, report = migrate_go(given.read_text(encoding="utf-8"))

    messages = [d.message for d in report.diagnostics]
    assert messages == ["assert.Panics: no helper equivalent, migrate manually", "unrecognized call"]
    assert report.conversions == 6
    assert report.declarations_inserted == 5


def test_pipeline_writes_expected_output(tmp_path: Path):
    given, expected = PAIRS[0]
    target = tmp_path / "msg_test.go"
    target.write_text(given.read_text(encoding="utf-8"), encoding="utf-8")

    result = migrate([str(target)], MigrationConfig(format_output=False))

    assert result.is_success()
    assert target.read_text(encoding="utf-8") == expected.read_text(encoding="utf-8")
    assert (tmp_path / "msg_test.go.backup").read_text(encoding="utf-8") == given.read_text(encoding="utf-8")
