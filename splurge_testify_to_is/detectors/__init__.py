"""Detection of Go test files that still use the legacy assertion library."""

from .legacy_detector import LegacyAssertionDetector

__all__ = ["LegacyAssertionDetector"]
