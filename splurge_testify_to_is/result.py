"""Result type for functional error handling.

``Result[T]`` is an immutable outcome value: a success carrying data, a
success with warnings, an error carrying an exception, or a skip carrying
a reason. Pipeline steps return results instead of raising, and the
call synthesizer uses ``skipped`` results to decline a conversion.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class ResultStatus(Enum):
    """Possible statuses for a ``Result``."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Immutable result value with structured errors and warnings.

    Use the ``success``, ``failure``, ``warning`` and ``skipped``
    constructors rather than instantiating the class directly.
    """

    status: ResultStatus
    data: T | None = None
    error: Exception | None = None
    warnings: list[str] | None = None
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        """Reject inconsistent combinations and normalize empty containers."""
        if self.status == ResultStatus.SUCCESS and self.error is not None:
            raise ValueError("Success results cannot have errors")
        if self.status == ResultStatus.ERROR and self.data is not None:
            raise ValueError("Error results cannot have data")
        if self.warnings is None:
            object.__setattr__(self, "warnings", [])
        if self.metadata is None:
            object.__setattr__(self, "metadata", {})

    @classmethod
    def success(cls, data: T, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a successful result."""
        return cls(status=ResultStatus.SUCCESS, data=data, error=None, metadata=metadata or {})

    @classmethod
    def failure(cls, error: Exception, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create an error result."""
        return cls(status=ResultStatus.ERROR, error=error, metadata=metadata or {})

    @classmethod
    def warning(cls, data: T, warnings: list[str], metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a result that succeeded with warnings."""
        return cls(status=ResultStatus.WARNING, data=data, warnings=warnings, metadata=metadata or {})

    @classmethod
    def skipped(cls, reason: str, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a skipped result.

        Args:
            reason: Explanation for why the operation was skipped. Stored
                under the ``reason`` metadata key.
            metadata: Optional additional metadata.
        """
        return cls(status=ResultStatus.SKIPPED, metadata={**(metadata or {}), "reason": reason})

    def is_success(self) -> bool:
        """Return True when the result is a success."""
        return self.status == ResultStatus.SUCCESS

    def is_error(self) -> bool:
        """Check if result is an error."""
        return self.status == ResultStatus.ERROR

    def is_warning(self) -> bool:
        """Check if result has warnings."""
        return self.status == ResultStatus.WARNING

    def is_skipped(self) -> bool:
        """Check if result was skipped."""
        return self.status == ResultStatus.SKIPPED

    @property
    def reason(self) -> str | None:
        """Skip reason, if this result was skipped."""
        return (self.metadata or {}).get("reason")

    def map(self, func: Callable[[T], R]) -> "Result[R]":
        """Apply ``func`` to the data of a successful (or warning) result.

        Errors and skips pass through unchanged; an exception raised by
        ``func`` becomes an error result.
        """
        if self.is_error():
            return Result[R](
                status=ResultStatus.ERROR, error=self.error, warnings=self.warnings, metadata=self.metadata
            )

        if self.is_skipped():
            return Result[R](status=ResultStatus.SKIPPED, metadata=self.metadata)

        if self.data is None:
            return Result.failure(ValueError("Cannot map over None data"), self.metadata)

        try:
            new_data = func(self.data)
            status = ResultStatus.WARNING if self.warnings else ResultStatus.SUCCESS
            return Result[R](status=status, data=new_data, error=None, warnings=self.warnings, metadata=self.metadata)
        except Exception as e:
            return Result.failure(e, self.metadata)

    def unwrap(self) -> T:
        """Return data if successful or raise an exception.

        Raises:
            Exception: The stored error, or ``RuntimeError`` when the result
                was skipped or carries no data.
        """
        if self.is_error():
            raise self.error or RuntimeError("Result contains error")
        if self.is_skipped():
            raise RuntimeError(f"Result was skipped: {self.reason}")
        if self.data is None:
            raise RuntimeError("Result contains no data")
        return self.data

    def to_dict(self) -> dict[str, Any]:
        """Convert the result to a plain dictionary."""
        return {
            "status": self.status.value,
            "data": self.data,
            "error": str(self.error) if self.error else None,
            "warnings": self.warnings,
            "metadata": self.metadata,
        }

    def __str__(self) -> str:
        if self.is_success():
            return f"Result(success, data={self.data})"
        elif self.is_error():
            return f"Result(error, error={self.error})"
        elif self.is_warning():
            return f"Result(warning, data={self.data}, warnings={self.warnings})"
        else:
            return f"Result(skipped, reason={self.reason})"
