"""Step modules for individual pipeline operations."""

from .format_steps import FormatCodeStep, ValidateGeneratedCodeStep
from .output_steps import WriteOutputStep
from .parse_steps import GenerateCodeStep, ParseSourceStep, TransformTestifyStep

__all__ = [
    "ParseSourceStep",
    "TransformTestifyStep",
    "GenerateCodeStep",
    "FormatCodeStep",
    "ValidateGeneratedCodeStep",
    "WriteOutputStep",
]
