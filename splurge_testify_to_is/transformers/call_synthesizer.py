"""Synthesize helper-API calls from legacy assertion calls.

Each supported legacy operation maps to a :class:`SynthesisRule` that
states how many positional values it consumes and how to build the
replacement from them. Values past the positional ones form the failure
message: a leading string literal is passed to ``Msg`` unchanged, any
other tail is collapsed into a single ``fmt.Sprint(...)`` argument.

Examples (helper ``is``, context handle ``t``)::

    require.Equal(t, a, b)                  -> is.Equal(a, b)
    require.Equal(t, a, b, "got %v", a)     -> is.Msg("got %v", a).Equal(a, b)
    require.Equal(t, a, b, 1234, true)      -> is.Msg(fmt.Sprint(1234, true)).Equal(a, b)
    require.Len(t, seq, 3)                  -> is.Equal(len(seq), 3)
    require.GreaterOrEqual(t, a, b)         -> is.AddMsg("expected %v >= %v", a, b).True(a >= b)

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ..diagnostics import DiagnosticKind
from ..golang.expressions import BasicLit, BinaryOp, Call, Expr, Ident, Selector, Source, render, string_literal
from ..result import Result
from .argument_normalizer import normalize_arguments

STRING_LITERAL_KINDS = frozenset({"interpreted_string_literal", "raw_string_literal"})

Builder = Callable[[Expr, tuple[Expr, ...]], Expr]


@dataclass(frozen=True)
class SynthesisRule:
    arity: int
    build: Builder


@dataclass(frozen=True)
class SynthesizedCall:
    operation: str
    expression: Expr
    requires_fmt: bool

    @property
    def text(self) -> str:
        return render(self.expression)


def method_call(receiver: Expr, method: str, args: tuple[Expr, ...]) -> Call:
    return Call(Selector(receiver, method), args)


def _direct(method: str) -> Builder:
    def build(receiver: Expr, args: tuple[Expr, ...]) -> Expr:
        return method_call(receiver, method, args)

    return build


def _length_equals(receiver: Expr, args: tuple[Expr, ...]) -> Expr:
    sequence, expected = args
    return method_call(receiver, "Equal", (Call(Ident("len"), (sequence,)), expected))


def _empty(receiver: Expr, args: tuple[Expr, ...]) -> Expr:
    # Compares against 1, matching the established conversion output.
    (sequence,) = args
    return method_call(receiver, "Equal", (Call(Ident("len"), (sequence,)), BasicLit("1")))


def _greater_or_equal(receiver: Expr, args: tuple[Expr, ...]) -> Expr:
    a, b = args
    annotated = method_call(receiver, "AddMsg", (string_literal("expected %v >= %v"), a, b))
    return method_call(annotated, "True", (BinaryOp(a, ">=", b),))


SYNTHESIS_RULES: dict[str, SynthesisRule] = {
    "Equal": SynthesisRule(2, _direct("Equal")),
    "EqualValues": SynthesisRule(2, _direct("Equal")),
    "ObjectsAreEqual": SynthesisRule(2, _direct("Equal")),
    "ObjectsAreEqualValues": SynthesisRule(2, _direct("Equal")),
    "EqualError": SynthesisRule(2, _direct("ErrMsg")),
    "NotEqual": SynthesisRule(2, _direct("NotEqual")),
    "Nil": SynthesisRule(1, _direct("Nil")),
    "NotNil": SynthesisRule(1, _direct("NotNil")),
    "False": SynthesisRule(1, _direct("False")),
    "True": SynthesisRule(1, _direct("True")),
    "Error": SynthesisRule(1, _direct("Err")),
    "NoError": SynthesisRule(1, _direct("NotErr")),
    "Contains": SynthesisRule(2, _direct("Contains")),
    "IsType": SynthesisRule(2, _direct("EqualType")),
    "Len": SynthesisRule(2, _length_equals),
    "Empty": SynthesisRule(1, _empty),
    "GreaterOrEqual": SynthesisRule(2, _greater_or_equal),
}

# Known operations without a helper equivalent.
MANUAL_MIGRATION = frozenset({"Fail", "FailNow", "Panics", "NotPanics", "Regexp", "Exactly"})


class CallSynthesizer:
    """Build replacement calls against the helper named ``helper_name``."""

    def __init__(self, helper_name: str = "is", rules: dict[str, SynthesisRule] | None = None) -> None:
        self.helper_name = helper_name
        self.rules = SYNTHESIS_RULES if rules is None else rules

    def message_call(self, tail: tuple[Source, ...]) -> tuple[Call, bool]:
        """``helper.Msg(...)`` for a non-empty message tail, and whether ``fmt`` is used."""
        helper = Ident(self.helper_name)
        if tail[0].kind in STRING_LITERAL_KINDS:
            return method_call(helper, "Msg", tail), False
        stringified = Call(Selector(Ident("fmt"), "Sprint"), tail)
        return method_call(helper, "Msg", (stringified,)), True

    def synthesize(self, operation: str, arguments: list[Source], context_handle: str) -> Result[SynthesizedCall]:
        """Convert one legacy call, or return a skipped result explaining why not.

        The skip metadata carries a ``diagnostic_kind`` entry.
        """
        if operation in MANUAL_MIGRATION:
            return Result.skipped(
                "no helper equivalent, migrate manually",
                {"diagnostic_kind": DiagnosticKind.MANUAL_MIGRATION},
            )

        rule = self.rules.get(operation)
        if rule is None:
            return Result.skipped(
                "unsupported function", {"diagnostic_kind": DiagnosticKind.UNSUPPORTED_FUNCTION}
            )

        normalized = normalize_arguments(arguments, context_handle, rule.arity)
        if not normalized.is_success():
            return Result.skipped(
                normalized.reason or "arity",
                {"diagnostic_kind": (normalized.metadata or {}).get("diagnostic_kind", DiagnosticKind.ARITY)},
            )
        args = normalized.unwrap()

        receiver: Expr = Ident(self.helper_name)
        requires_fmt = False
        if args.message:
            receiver, requires_fmt = self.message_call(args.message)

        expression = rule.build(receiver, args.positional)
        return Result.success(SynthesizedCall(operation, expression, requires_fmt))
