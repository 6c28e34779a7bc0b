"""Output steps used by the migration pipeline.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from pathlib import Path

from ..context import PipelineContext
from ..pipeline import Step
from ..result import Result


class WriteOutputStep(Step[str, str]):
    """Write generated code to the configured target file.

    In dry-run mode nothing is written; the generated code is returned in
    the result metadata under ``generated_code`` instead.
    """

    def execute(self, context: PipelineContext, code: str) -> Result[str]:
        if context.config.dry_run:
            return Result.success(
                str(context.target_file),
                metadata={
                    "dry_run": True,
                    "target_file": context.target_file,
                    "generated_code": code,
                },
            )

        try:
            target_path = Path(context.target_file)
            target_path.parent.mkdir(parents=True, exist_ok=True)

            with open(target_path, "w", encoding="utf-8", newline="") as f:
                f.write(code)
            return Result.success(str(context.target_file), metadata={"target_file": context.target_file})
        except OSError as e:
            return Result.failure(e, {"target_file": context.target_file})
