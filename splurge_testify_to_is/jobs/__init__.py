"""Job modules for high-level pipeline phases."""

from .collector_job import CollectorJob
from .formatter_job import FormatterJob
from .output_job import OutputJob

__all__ = ["CollectorJob", "FormatterJob", "OutputJob"]
