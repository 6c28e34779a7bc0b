"""Formatting steps used by the migration pipeline.

Generated Go code is piped through ``gofmt`` and then re-parsed to make
sure the rewrite produced valid Go. A missing ``gofmt`` is not fatal: the
unformatted code is passed on with a warning. A ``gofmt`` rejection is.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import shutil
import subprocess

from ..context import PipelineContext
from ..exceptions import FormatError, ParseError, TransformationValidationError
from ..golang.source import parse_go_source
from ..pipeline import Step
from ..result import Result


def run_gofmt(code: str, command: str = "gofmt") -> str:
    """Format ``code`` with gofmt read from stdin.

    Raises:
        FileNotFoundError: If ``command`` is not on PATH.
        FormatError: If gofmt exits non-zero.
    """
    executable = shutil.which(command)
    if executable is None:
        raise FileNotFoundError(f"{command} not found on PATH")

    proc = subprocess.run([executable], input=code, capture_output=True, text=True, encoding="utf-8")
    if proc.returncode != 0:
        raise FormatError(f"{command} rejected the generated code: {proc.stderr.strip()}", command, proc.stderr)
    return proc.stdout


class FormatCodeStep(Step[str, str]):
    """Format generated code with gofmt when enabled in the configuration."""

    def execute(self, context: PipelineContext, code: str) -> Result[str]:
        if not context.config.format_output:
            return Result.success(code, metadata={"gofmt_applied": False})

        try:
            formatted = run_gofmt(code, context.config.gofmt_command)
        except FileNotFoundError as e:
            return Result.warning(code, [f"Code formatting skipped: {e}"], metadata={"gofmt_applied": False})
        except FormatError as e:
            return Result.failure(e, {"source_file": context.source_file})

        return Result.success(
            formatted,
            metadata={
                "gofmt_applied": True,
                "original_lines": len(code.splitlines()),
                "formatted_lines": len(formatted.splitlines()),
            },
        )


class ValidateGeneratedCodeStep(Step[str, str]):
    """Check that the generated code still parses as Go."""

    def execute(self, context: PipelineContext, code: str) -> Result[str]:
        try:
            parse_go_source(code, context.source_file)
        except ParseError as e:
            return Result.failure(TransformationValidationError(f"Generated code does not parse: {e.message}"))
        return Result.success(code)
