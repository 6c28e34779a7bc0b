"""Tests for the Go expression printer."""

import pytest

from splurge_testify_to_is.golang.expressions import (
    BasicLit,
    BinaryOp,
    Call,
    Ident,
    Selector,
    Source,
    render,
    string_literal,
)


def test_render_leaves():
    assert render(Ident("is")) == "is"
    assert render(BasicLit("1")) == "1"
    assert render(Source("c[\"a\"]", "index_expression")) == 'c["a"]'
    assert render(string_literal("expected %v")) == '"expected %v"'


def test_render_source_with_comments():
    source = Source("x", "identifier", leading=("/* a */",), trailing=("/* b */",))
    assert render(source) == "/* a */ x /* b */"


def test_render_method_call_chain():
    msg = Call(Selector(Ident("is"), "Msg"), (string_literal("boom"),))
    expr = Call(Selector(msg, "Equal"), (Source("a", "identifier"), Source("b", "identifier")))

    assert render(expr) == 'is.Msg("boom").Equal(a, b)'


def test_render_call_without_arguments():
    assert render(Call(Ident("f"))) == "f()"


def test_binary_operands_with_higher_precedence_are_not_wrapped():
    left = Source("a+1", "binary_expression", "+")
    expr = BinaryOp(left, ">=", Source("b", "identifier"))

    assert render(expr) == "a+1 >= b"


def test_binary_operands_with_equal_or_lower_precedence_are_wrapped():
    left = Source("a == b", "binary_expression", "==")
    right = Source("x || y", "binary_expression", "||")

    assert render(BinaryOp(left, ">=", right)) == "(a == b) >= (x || y)"


def test_nested_binary_op_precedence():
    inner = BinaryOp(Ident("a"), "&&", Ident("b"))
    assert render(BinaryOp(inner, "||", Ident("c"))) == "a && b || c"
    assert render(BinaryOp(Ident("c"), "&&", BinaryOp(Ident("a"), "||", Ident("b")))) == "c && (a || b)"


def test_selector_wraps_operator_operands():
    assert render(Selector(Source("-x", "unary_expression"), "Field")) == "(-x).Field"
    assert render(Selector(BinaryOp(Ident("a"), "+", Ident("b")), "Field")) == "(a + b).Field"


def test_render_rejects_unknown_nodes():
    with pytest.raises(TypeError):
        render("not an expression")  # type: ignore[arg-type]
