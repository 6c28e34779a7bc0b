"""Event system for pipeline observability.

This module provides a lightweight, thread-safe publish/subscribe
mechanism and a set of strongly-typed event dataclasses used to
observe pipeline execution. Besides lifecycle events for pipelines,
jobs and steps, the migration publishes a ``DiagnosticEvent`` for every
statement it had to leave as written, and a
``TransformationCompletedEvent`` carrying per-file statistics.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from .context import PipelineContext
from .diagnostics import Diagnostic
from .result import Result

T = TypeVar("T")
EventHandler = Callable[[Any], None]


@dataclass(frozen=True)
class BaseEvent:
    """Base event class that carries common event metadata."""

    timestamp: float
    run_id: str

    def __post_init__(self) -> None:
        if self.timestamp < 0:
            raise ValueError("Timestamp cannot be negative")


@dataclass(frozen=True)
class PipelineStartedEvent(BaseEvent):
    """Event fired when pipeline execution starts."""

    context: PipelineContext


@dataclass(frozen=True)
class PipelineCompletedEvent(BaseEvent):
    """Event fired when pipeline execution completes."""

    context: PipelineContext
    final_result: Result[Any]
    duration_ms: float


@dataclass(frozen=True)
class StepStartedEvent(BaseEvent):
    """Event fired when a step starts execution."""

    context: PipelineContext
    step_name: str
    step_type: str


@dataclass(frozen=True)
class StepCompletedEvent(BaseEvent):
    """Event fired when a step completes execution."""

    context: PipelineContext
    step_name: str
    step_type: str
    result: Result[Any]
    duration_ms: float


@dataclass(frozen=True)
class JobStartedEvent(BaseEvent):
    """Event fired when a job starts execution."""

    context: PipelineContext
    job_name: str
    job_type: str
    task_count: int


@dataclass(frozen=True)
class JobCompletedEvent(BaseEvent):
    """Event fired when a job completes execution."""

    context: PipelineContext
    job_name: str
    job_type: str
    final_result: Result[Any]
    duration_ms: float


@dataclass(frozen=True)
class TransformationCompletedEvent(BaseEvent):
    """Event fired when the assertion rewrite of one file completes."""

    context: PipelineContext
    transformation_type: str
    statistics: dict[str, Any]


@dataclass(frozen=True)
class DiagnosticEvent(BaseEvent):
    """Event fired for each statement that was left for manual migration."""

    context: PipelineContext
    diagnostic: Diagnostic


@dataclass(frozen=True)
class ErrorEvent(BaseEvent):
    """Event fired when a fatal error occurs."""

    context: PipelineContext
    error: Exception
    error_type: str
    component: str


class EventBus:
    """Thread-safe event publication and subscription system.

    The EventBus maintains per-event-type subscriber lists and
    guarantees that handlers are invoked outside the internal lock to
    avoid blocking publishers. Handlers are simple callables that take
    a single event instance.
    """

    def __init__(self) -> None:
        self._subscribers: dict[type, list[EventHandler]] = defaultdict(list)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def clear_subscribers(self, event_type: type[T] | None = None) -> None:
        """Clear subscribers for a specific event type or all subscribers."""
        with self._lock:
            if event_type:
                self._subscribers[event_type].clear()
                self._logger.debug(f"Cleared subscribers for {event_type.__name__}")
            else:
                self._subscribers.clear()
                self._logger.debug("Cleared all subscribers")

    def get_subscriber_count(self, event_type: type[T]) -> int:
        """Return the number of subscribers registered for an event type."""
        with self._lock:
            return len(self._subscribers.get(event_type, []))

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for events of a specific type.

        Args:
            event_type: The event dataclass/type to subscribe to.
            handler: Callable that accepts a single event instance.
        """
        with self._lock:
            self._subscribers[event_type].append(handler)
            self._logger.debug(f"Subscribed handler {handler} to {event_type.__name__}")

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Remove a previously registered handler for an event type."""
        with self._lock:
            if event_type in self._subscribers and handler in self._subscribers[event_type]:
                self._subscribers[event_type].remove(handler)
                self._logger.debug(f"Unsubscribed handler {handler} from {event_type.__name__}")

    def publish(self, event: Any) -> None:
        """Publish an event to all matching subscribers.

        Handlers registered for the concrete type of ``event`` are invoked
        synchronously. Errors raised by handlers are logged but do not
        interrupt delivery to other handlers.
        """
        event_type = type(event)

        with self._lock:
            handlers = self._subscribers.get(event_type, []).copy()

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(f"Event handler error for {event_type.__name__}: {e}", exc_info=True)


class EventSubscriber(ABC):
    """Base class for event subscribers.

    Subclasses implement ``_setup_subscriptions`` to register handlers and
    ``unsubscribe_all`` to remove them.
    """

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self._setup_subscriptions()

    @abstractmethod
    def _setup_subscriptions(self) -> None:
        """Set up event subscriptions."""

    @abstractmethod
    def unsubscribe_all(self) -> None:
        """Unsubscribe from all events."""


class LoggingSubscriber(EventSubscriber):
    """Event subscriber that logs pipeline events using the logging module.

    With ``verbose`` enabled step-level events are logged at INFO instead
    of DEBUG.
    """

    def __init__(self, event_bus: EventBus, verbose: bool = False):
        self.verbose = verbose
        self._logger = logging.getLogger(__name__)
        super().__init__(event_bus)

    def _handlers(self) -> list[tuple[type, Callable[[Any], None]]]:
        return [
            (PipelineStartedEvent, self._on_pipeline_started),
            (PipelineCompletedEvent, self._on_pipeline_completed),
            (StepStartedEvent, self._on_step_started),
            (StepCompletedEvent, self._on_step_completed),
            (TransformationCompletedEvent, self._on_transformation_completed),
            (DiagnosticEvent, self._on_diagnostic),
            (ErrorEvent, self._on_error),
        ]

    def _setup_subscriptions(self) -> None:
        for event_type, handler in self._handlers():
            self.event_bus.subscribe(event_type, handler)

    def unsubscribe_all(self) -> None:
        for event_type, handler in self._handlers():
            self.event_bus.unsubscribe(event_type, handler)

    def _step_level(self) -> int:
        return logging.INFO if self.verbose else logging.DEBUG

    def _on_pipeline_started(self, event: PipelineStartedEvent) -> None:
        self._logger.info(
            f"Pipeline started: {event.context.source_file} -> {event.context.target_file} (run_id: {event.run_id})"
        )

    def _on_pipeline_completed(self, event: PipelineCompletedEvent) -> None:
        status = "FAILED" if event.final_result.is_error() else "SUCCESS"
        self._logger.info(f"Pipeline completed in {event.duration_ms:.2f}ms: {status}")

    def _on_step_started(self, event: StepStartedEvent) -> None:
        self._logger.log(self._step_level(), f"Step started: {event.step_name} ({event.step_type})")

    def _on_step_completed(self, event: StepCompletedEvent) -> None:
        status = event.result.status.value.upper()
        self._logger.log(
            self._step_level(), f"Step completed in {event.duration_ms:.2f}ms: {event.step_name} ({status})"
        )

    def _on_transformation_completed(self, event: TransformationCompletedEvent) -> None:
        stats = ", ".join(f"{key}={value}" for key, value in sorted(event.statistics.items()))
        self._logger.info(f"{event.transformation_type} finished for {event.context.source_file}: {stats}")

    def _on_diagnostic(self, event: DiagnosticEvent) -> None:
        self._logger.debug(f"Diagnostic ({event.diagnostic.kind.value}): {event.diagnostic}")

    def _on_error(self, event: ErrorEvent) -> None:
        self._logger.error(f"Error in {event.component}: {event.error}")
