"""Tests for parsing Go source and applying text edits."""

import pytest

from splurge_testify_to_is.exceptions import ParseError, TransformationError
from splurge_testify_to_is.golang.source import iter_top_level, parse_go_source, statement_nodes
from tests.test_utils import go_source

SIMPLE = """
package example

func TestX(t *testing.T) {
	a := 1
	// note
	require.Equal(t, a, 1)
}
"""


def _body(source):
    function = next(iter_top_level(source.root, "function_declaration"))
    return function.child_by_field_name("body")


def test_parse_valid_source_has_no_edits():
    source = go_source(SIMPLE)

    assert source.source_file == "example_test.go"
    assert not source.is_modified
    assert source.render() == source.source.decode("utf-8")


def test_parse_error_reports_position():
    with pytest.raises(ParseError) as exc_info:
        parse_go_source("package example\n\nfunc TestX(t *testing.T) {\n\ta := \n", "broken_test.go")

    error = exc_info.value
    assert error.source_file == "broken_test.go"
    assert error.line is not None and error.line >= 3
    assert "broken_test.go:" in str(error)


def test_parse_accepts_bytes():
    source = parse_go_source(b"package example\n")
    assert source.root.type == "source_file"


def test_statement_nodes_lists_statements_and_comments_in_order():
    source = go_source(SIMPLE)
    statements = statement_nodes(_body(source))

    assert [node.type for node in statements] == ["short_var_declaration", "comment", "expression_statement"]
    assert source.text(statements[-1]) == "require.Equal(t, a, 1)"


def test_statement_nodes_rejects_non_containers():
    source = go_source(SIMPLE)
    function = next(iter_top_level(source.root, "function_declaration"))

    with pytest.raises(TransformationError):
        statement_nodes(function)


def test_statement_nodes_of_empty_block():
    source = go_source("package example\n\nfunc TestX(t *testing.T) {}\n")
    assert statement_nodes(_body(source)) == []


def test_line_prefix_returns_indentation():
    source = go_source(SIMPLE)
    statement = statement_nodes(_body(source))[0]

    assert source.line_prefix(statement.start_byte) == "\t"


def test_replace_keeps_text_outside_the_span():
    source = go_source(SIMPLE)
    call = statement_nodes(_body(source))[-1]

    source.replace(call, "is.Equal(a, 1)")

    rendered = source.render()
    assert "\tis.Equal(a, 1)\n" in rendered
    assert "// note" in rendered
    assert "require" not in rendered


def test_insertion_precedes_replacement_at_same_offset():
    source = go_source(SIMPLE)
    call = statement_nodes(_body(source))[-1]

    source.replace(call, "REPLACED")
    source.insert(call.start_byte, "INSERTED ")

    assert "INSERTED REPLACED" in source.render()


def test_insertions_at_same_offset_keep_registration_order():
    source = go_source("package example\n")

    source.insert(0, "// one\n")
    source.insert(0, "// two\n")

    assert source.render() == "// one\n// two\npackage example\n"


def test_overlapping_edits_raise():
    source = go_source(SIMPLE)
    call = statement_nodes(_body(source))[-1]

    source.replace(call, "x")
    source.replace_span(call.start_byte + 1, call.end_byte + 1, "y")

    with pytest.raises(TransformationError):
        source.render()


def test_invalid_span_is_rejected():
    source = go_source("package example\n")

    with pytest.raises(TransformationError):
        source.replace_span(5, 2, "")
    with pytest.raises(TransformationError):
        source.replace_span(0, 10_000, "")


def test_delete_span_removes_text():
    source = go_source("package example\n\n// gone\n")
    start = source.source.index(b"// gone")

    source.delete_span(start, start + len("// gone\n"))

    assert source.render() == "package example\n\n"
    assert source.edits[0].text == ""
