"""Tests for the Result container."""

import pytest

from splurge_testify_to_is.result import Result, ResultStatus


def test_success_result():
    result = Result.success("code", {"k": 1})

    assert result.is_success()
    assert result.status == ResultStatus.SUCCESS
    assert result.unwrap() == "code"
    assert result.metadata == {"k": 1}
    assert result.warnings == []


def test_failure_result_raises_on_unwrap():
    error = ValueError("bad")
    result = Result.failure(error)

    assert result.is_error()
    with pytest.raises(ValueError):
        result.unwrap()


def test_warning_result_keeps_data():
    result = Result.warning("code", ["gofmt missing"])

    assert result.is_warning()
    assert result.unwrap() == "code"
    assert result.warnings == ["gofmt missing"]


def test_skipped_result_stores_reason():
    result = Result.skipped("unsupported function", {"diagnostic_kind": "x"})

    assert result.is_skipped()
    assert result.reason == "unsupported function"
    assert result.metadata["diagnostic_kind"] == "x"
    with pytest.raises(RuntimeError, match="unsupported function"):
        result.unwrap()


def test_inconsistent_results_are_rejected():
    with pytest.raises(ValueError):
        Result(status=ResultStatus.SUCCESS, error=ValueError("x"))
    with pytest.raises(ValueError):
        Result(status=ResultStatus.ERROR, data="x")


def test_map_applies_to_success_and_passes_errors():
    assert Result.success(2).map(lambda x: x * 3).unwrap() == 6
    assert Result.failure(ValueError("x")).map(lambda x: x).is_error()
    assert Result.skipped("why").map(lambda x: x).is_skipped()

    mapped = Result.success(1).map(lambda x: 1 / 0)
    assert mapped.is_error()
    assert isinstance(mapped.error, ZeroDivisionError)


def test_map_keeps_warnings():
    mapped = Result.warning(1, ["w"]).map(lambda x: x + 1)
    assert mapped.is_warning()
    assert mapped.data == 2


def test_to_dict_and_str():
    assert Result.failure(ValueError("bad")).to_dict()["error"] == "bad"
    assert Result.success("x").to_dict()["status"] == "success"
    assert "skipped" in str(Result.skipped("why"))
    assert "error" in str(Result.failure(ValueError("bad")))
