"""Tests for building helper calls from legacy calls."""

import pytest

from splurge_testify_to_is.diagnostics import DiagnosticKind
from splurge_testify_to_is.golang.expressions import Source
from splurge_testify_to_is.transformers.call_synthesizer import (
    MANUAL_MIGRATION,
    SYNTHESIS_RULES,
    CallSynthesizer,
)


def ident(name: str) -> Source:
    return Source(name, "identifier")


def literal(text: str) -> Source:
    return Source(text, "interpreted_string_literal")


T = ident("t")
A = ident("a")
B = ident("b")


def _text(operation: str, *arguments: Source, helper: str = "is") -> str:
    result = CallSynthesizer(helper).synthesize(operation, [T, *arguments], "t")
    return result.unwrap().text


@pytest.mark.parametrize(
    ("operation", "expected"),
    [
        ("Equal", "is.Equal(a, b)"),
        ("EqualValues", "is.Equal(a, b)"),
        ("ObjectsAreEqual", "is.Equal(a, b)"),
        ("ObjectsAreEqualValues", "is.Equal(a, b)"),
        ("EqualError", "is.ErrMsg(a, b)"),
        ("NotEqual", "is.NotEqual(a, b)"),
        ("Contains", "is.Contains(a, b)"),
        ("IsType", "is.EqualType(a, b)"),
        ("Len", "is.Equal(len(a), b)"),
        ("GreaterOrEqual", 'is.AddMsg("expected %v >= %v", a, b).True(a >= b)'),
    ],
)
def test_two_value_rules(operation: str, expected: str):
    assert _text(operation, A, B) == expected


@pytest.mark.parametrize(
    ("operation", "expected"),
    [
        ("Nil", "is.Nil(a)"),
        ("NotNil", "is.NotNil(a)"),
        ("False", "is.False(a)"),
        ("True", "is.True(a)"),
        ("Error", "is.Err(a)"),
        ("NoError", "is.NotErr(a)"),
        ("Empty", "is.Equal(len(a), 1)"),
    ],
)
def test_one_value_rules(operation: str, expected: str):
    assert _text(operation, A) == expected


def test_every_rule_is_covered():
    two = {"Equal", "EqualValues", "ObjectsAreEqual", "ObjectsAreEqualValues", "EqualError", "NotEqual"}
    two |= {"Contains", "IsType", "Len", "GreaterOrEqual"}
    one = {"Nil", "NotNil", "False", "True", "Error", "NoError", "Empty"}

    assert set(SYNTHESIS_RULES) == two | one
    assert {op for op, rule in SYNTHESIS_RULES.items() if rule.arity == 2} == two
    assert not MANUAL_MIGRATION & set(SYNTHESIS_RULES)


def test_literal_message_is_passed_through():
    result = CallSynthesizer().synthesize("Equal", [T, A, B, literal('"x %v"'), A], "t")

    synthesized = result.unwrap()
    assert synthesized.text == 'is.Msg("x %v", a).Equal(a, b)'
    assert synthesized.requires_fmt is False


def test_raw_string_message_is_passed_through():
    raw = Source("`x`", "raw_string_literal")
    assert CallSynthesizer().synthesize("True", [T, A, raw], "t").unwrap().text == "is.Msg(`x`).True(a)"


def test_non_literal_message_is_stringified():
    tail = [Source("1234", "int_literal"), Source("true", "true")]
    result = CallSynthesizer().synthesize("Equal", [T, A, B, *tail], "t")

    synthesized = result.unwrap()
    assert synthesized.text == "is.Msg(fmt.Sprint(1234, true)).Equal(a, b)"
    assert synthesized.requires_fmt is True


def test_greater_or_equal_with_message_chains_add_msg():
    result = CallSynthesizer().synthesize("GreaterOrEqual", [T, A, B, literal('"too small"')], "t")

    assert result.unwrap().text == 'is.Msg("too small").AddMsg("expected %v >= %v", a, b).True(a >= b)'


def test_greater_or_equal_wraps_low_precedence_operands():
    left = Source("x == y", "binary_expression", "==")
    result = CallSynthesizer().synthesize("GreaterOrEqual", [T, left, B], "t")

    assert result.unwrap().text == 'is.AddMsg("expected %v >= %v", x == y, b).True((x == y) >= b)'


def test_custom_helper_name():
    assert _text("Equal", A, B, helper="check") == "check.Equal(a, b)"


@pytest.mark.parametrize("operation", sorted(MANUAL_MIGRATION))
def test_manual_migration_operations_are_declined(operation: str):
    result = CallSynthesizer().synthesize(operation, [T, A, B], "t")

    assert result.is_skipped()
    assert result.metadata["diagnostic_kind"] == DiagnosticKind.MANUAL_MIGRATION
    assert "manually" in result.reason


def test_unknown_operation_is_declined():
    result = CallSynthesizer().synthesize("Eventually", [T, A, B], "t")

    assert result.is_skipped()
    assert result.metadata["diagnostic_kind"] == DiagnosticKind.UNSUPPORTED_FUNCTION


def test_arity_failures_are_declined():
    short = CallSynthesizer().synthesize("True", [T], "t")
    missing = CallSynthesizer().synthesize("Equal", [T, A], "t")

    assert short.is_skipped()
    assert missing.is_skipped()
    assert missing.metadata["diagnostic_kind"] == DiagnosticKind.ARITY
