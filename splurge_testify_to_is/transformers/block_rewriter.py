"""Walk statement sequences and rewrite legacy assertion calls in place.

Each statement sequence (a block or a switch/select clause) keeps its own
conversion count and its own notion of whether the helper declaration is
already present. Nested sequences are reached through blocks, both
branches of ``if`` statements, ``for`` bodies, switch and select clauses
and labeled statements. Function literals are never entered.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging

from tree_sitter import Node

from ..diagnostics import DiagnosticCollector, DiagnosticKind
from ..golang.source import GoSourceFile, statement_nodes
from .argument_normalizer import argument_sources
from .call_classifier import CallClassifier, CallKind
from .call_synthesizer import CallSynthesizer
from .scope_initializer import ScopeInitializer
from .test_function_locator import CandidateFunction

logger = logging.getLogger(__name__)

# Statement kinds that are never conversion targets and hold no nested sequence.
PASSTHROUGH_STATEMENTS = frozenset(
    {
        "short_var_declaration",
        "assignment_statement",
        "var_declaration",
        "const_declaration",
        "type_declaration",
        "return_statement",
        "defer_statement",
        "go_statement",
        "inc_statement",
        "dec_statement",
        "send_statement",
        "break_statement",
        "continue_statement",
        "goto_statement",
        "fallthrough_statement",
        "empty_statement",
        "comment",
    }
)

SWITCH_STATEMENTS = frozenset({"expression_switch_statement", "type_switch_statement", "select_statement"})
CLAUSES = frozenset({"expression_case", "type_case", "communication_case", "default_case"})


class BlockRewriter:
    """Rewrite the statement sequences of test functions in one file."""

    def __init__(
        self,
        source: GoSourceFile,
        classifier: CallClassifier,
        synthesizer: CallSynthesizer,
        initializer: ScopeInitializer,
        diagnostics: DiagnosticCollector,
    ) -> None:
        self.source = source
        self.classifier = classifier
        self.synthesizer = synthesizer
        self.initializer = initializer
        self.diagnostics = diagnostics
        self.conversions = 0
        self.declarations_inserted = 0
        self.requires_fmt = False

    def rewrite_function(self, function: CandidateFunction) -> int:
        """Rewrite ``function`` and return the number of conversions made in it."""
        before = self.conversions
        self.rewrite_sequence(function.body, function.context_handle)
        converted = self.conversions - before
        if converted:
            logger.debug(f"{function.name}: converted {converted} call(s)")
        return converted

    def rewrite_sequence(self, container: Node, context_handle: str) -> int:
        """Rewrite one statement sequence and finalize its helper declaration."""
        statements = statement_nodes(container)
        converted = 0
        has_declaration = False

        for statement in statements:
            if self.initializer.is_declaration(statement, self.source):
                has_declaration = True
                continue
            converted += self._visit(statement, context_handle)

        if converted and not has_declaration:
            self.initializer.insert_declaration(self.source, statements[0], context_handle)
            self.declarations_inserted += 1
        return converted

    def _visit(self, statement: Node, context_handle: str) -> int:
        """Process one statement; returns 1 when it was converted in place."""
        kind = statement.type

        if kind == "expression_statement":
            return self._rewrite_expression_statement(statement, context_handle)

        if kind in PASSTHROUGH_STATEMENTS:
            return 0

        if kind == "block":
            self.rewrite_sequence(statement, context_handle)
        elif kind == "if_statement":
            self.rewrite_sequence(statement.child_by_field_name("consequence"), context_handle)
            alternative = statement.child_by_field_name("alternative")
            if alternative is not None:
                self._visit(alternative, context_handle)
        elif kind == "for_statement":
            self.rewrite_sequence(statement.child_by_field_name("body"), context_handle)
        elif kind in SWITCH_STATEMENTS:
            for clause in statement.named_children:
                if clause.type in CLAUSES:
                    self.rewrite_sequence(clause, context_handle)
        elif kind == "labeled_statement":
            label = statement.child_by_field_name("label")
            inner = [child for child in statement.named_children if child != label and child.type != "comment"]
            return self._visit(inner[0], context_handle) if inner else 0
        else:
            self._report(statement, DiagnosticKind.UNEXPECTED_STATEMENT, f"unexpected statement kind {kind}")
        return 0

    def _rewrite_expression_statement(self, statement: Node, context_handle: str) -> int:
        classification = self.classifier.classify(statement)

        if classification.kind == CallKind.MIGRATED:
            return 0
        if classification.kind == CallKind.NOT_A_CALL:
            self._report(statement, DiagnosticKind.NOT_A_CALL, "expression statement is not a call")
            return 0
        if classification.kind == CallKind.UNRECOGNIZED:
            self._report(statement, DiagnosticKind.UNRECOGNIZED_CALL, "unrecognized call")
            return 0

        call = classification.call
        result = self.synthesizer.synthesize(
            classification.operation, argument_sources(self.source, call), context_handle
        )
        if not result.is_success():
            kind = (result.metadata or {}).get("diagnostic_kind", DiagnosticKind.UNSUPPORTED_FUNCTION)
            self._report(statement, kind, f"{classification.receiver}.{classification.operation}: {result.reason}")
            return 0

        synthesized = result.unwrap()
        self.source.replace(call, synthesized.text)
        self.requires_fmt = self.requires_fmt or synthesized.requires_fmt
        self.conversions += 1
        return 1

    def _report(self, statement: Node, kind: DiagnosticKind, message: str) -> None:
        self.diagnostics.report(kind, tuple(statement.start_point), message, self.source.text(statement))
