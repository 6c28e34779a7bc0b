"""Formatter job: gofmt and syntax validation of generated code.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from typing import Any

from ..context import PipelineContext
from ..events import EventBus
from ..pipeline import Job, Task
from ..result import Result
from ..steps import FormatCodeStep, ValidateGeneratedCodeStep


class FormatterJob(Job[str, str]):
    """Format and validate generated Go code."""

    def __init__(self, event_bus: EventBus):
        super().__init__("formatter", [self._create_formatting_task(event_bus)], event_bus)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_formatting_task(self, event_bus: EventBus) -> Task[Any, Any]:
        steps: list[Any] = [
            FormatCodeStep("format_code", event_bus),
            ValidateGeneratedCodeStep("validate_code", event_bus),
        ]
        return Task("formatting", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        self._logger.debug(f"Starting formatting job for {context.source_file}")
        result = super().execute(context, initial_input)

        if result.is_warning():
            for warning in result.warnings or []:
                self._logger.warning(f"{context.source_file}: {warning}")
        elif result.is_error():
            self._logger.error(f"Formatting job failed for {context.source_file}: {result.error}")
        return result
