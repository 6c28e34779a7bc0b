"""Parsing steps for the migration pipeline.

These steps parse Go source into a :class:`GoSourceFile`, register the
assertion-migration edits against it, and render the edited text for
the formatting and output steps.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import time

from ..context import PipelineContext
from ..events import DiagnosticEvent, TransformationCompletedEvent
from ..exceptions import ParseError, TransformationError
from ..golang.source import GoSourceFile, parse_go_source
from ..pipeline import Step
from ..result import Result
from ..transformers import AssertionMigrationTransformer


class ParseSourceStep(Step[str, GoSourceFile]):
    """Parse Go source text with tree-sitter.

    A file with any syntax error is a failure; nothing is rewritten.
    """

    def execute(self, context: PipelineContext, source_code: str) -> Result[GoSourceFile]:
        try:
            return Result.success(parse_go_source(source_code, context.source_file))
        except ParseError as e:
            return Result.failure(e, {"source_file": context.source_file})


class TransformTestifyStep(Step[GoSourceFile, GoSourceFile]):
    """Register the legacy-to-helper rewrite edits on a parsed file.

    Statements that cannot be converted are published as
    :class:`DiagnosticEvent` instances and listed in the result metadata
    under ``diagnostics``; per-file counters are stored under
    ``statistics``.
    """

    def execute(self, context: PipelineContext, source: GoSourceFile) -> Result[GoSourceFile]:
        report = AssertionMigrationTransformer(context.config).transform(source)

        for diagnostic in report.diagnostics:
            self.event_bus.publish(
                DiagnosticEvent(timestamp=time.time(), run_id=context.run_id, context=context, diagnostic=diagnostic)
            )

        statistics = report.statistics()
        self.event_bus.publish(
            TransformationCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                transformation_type="testify_to_is",
                statistics=statistics,
            )
        )

        return Result.success(
            source,
            metadata={
                "statistics": statistics,
                "diagnostics": report.diagnostics,
                "imports_removed": report.imports_removed,
                "imports_added": report.imports_added,
            },
        )


class GenerateCodeStep(Step[GoSourceFile, str]):
    """Apply the registered edits and return the resulting source text."""

    def execute(self, context: PipelineContext, source: GoSourceFile) -> Result[str]:
        try:
            return Result.success(source.render(), metadata={"modified": source.is_modified})
        except TransformationError as e:
            return Result.failure(e)
