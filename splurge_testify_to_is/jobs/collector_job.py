"""Collector job: parse, migrate and render one Go test file.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from typing import Any

from ..context import PipelineContext
from ..events import EventBus
from ..pipeline import Job, Task
from ..result import Result
from ..steps import GenerateCodeStep, ParseSourceStep, TransformTestifyStep


class CollectorJob(Job[str, str]):
    """Turn Go source text into migrated (unformatted) source text."""

    def __init__(self, event_bus: EventBus):
        super().__init__("collector", [self._create_parsing_task(event_bus)], event_bus)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_parsing_task(self, event_bus: EventBus) -> Task[str, str]:
        steps: list[Any] = [
            ParseSourceStep("parse_source", event_bus),
            TransformTestifyStep("transform_testify", event_bus),
            GenerateCodeStep("generate_code", event_bus),
        ]
        return Task("parsing", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        """Run the collector job.

        Args:
            context: Pipeline execution context.
            initial_input: The Go source text of ``context.source_file``.
        """
        if not isinstance(initial_input, str):
            return Result.failure(TypeError(f"Expected source text for {context.source_file}"))

        self._logger.debug(f"Starting collection job for {context.source_file}")
        result = super().execute(context, initial_input)

        if result.is_error():
            self._logger.error(f"Collection job failed for {context.source_file}: {result.error}")
        return result
