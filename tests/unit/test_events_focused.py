"""Tests for the event bus and the logging subscriber."""

import logging
import time

from splurge_testify_to_is.context import PipelineContext
from splurge_testify_to_is.diagnostics import Diagnostic, DiagnosticKind
from splurge_testify_to_is.events import (
    DiagnosticEvent,
    EventBus,
    LoggingSubscriber,
    PipelineStartedEvent,
    StepStartedEvent,
    TransformationCompletedEvent,
)


def _context() -> PipelineContext:
    return PipelineContext.create("a_test.go", run_id="run-1")


def _step_started() -> StepStartedEvent:
    return StepStartedEvent(
        timestamp=time.time(), run_id="run-1", context=_context(), step_name="parse_source", step_type="ParseSourceStep"
    )


def test_subscribe_publish_unsubscribe():
    bus = EventBus()
    received = []

    bus.subscribe(StepStartedEvent, received.append)
    bus.publish(_step_started())
    bus.unsubscribe(StepStartedEvent, received.append)
    bus.publish(_step_started())

    assert len(received) == 1
    assert bus.get_subscriber_count(StepStartedEvent) == 0


def test_handlers_only_receive_their_event_type():
    bus = EventBus()
    received = []
    bus.subscribe(PipelineStartedEvent, received.append)

    bus.publish(_step_started())

    assert received == []


def test_failing_handler_does_not_stop_delivery(caplog):
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("handler broke")

    bus.subscribe(StepStartedEvent, broken)
    bus.subscribe(StepStartedEvent, received.append)

    with caplog.at_level(logging.ERROR):
        bus.publish(_step_started())

    assert len(received) == 1
    assert "handler broke" in caplog.text


def test_clear_subscribers():
    bus = EventBus()
    bus.subscribe(StepStartedEvent, lambda e: None)
    bus.subscribe(PipelineStartedEvent, lambda e: None)

    bus.clear_subscribers(StepStartedEvent)
    assert bus.get_subscriber_count(StepStartedEvent) == 0
    assert bus.get_subscriber_count(PipelineStartedEvent) == 1

    bus.clear_subscribers()
    assert bus.get_subscriber_count(PipelineStartedEvent) == 0


def test_logging_subscriber_step_events_follow_verbosity(caplog):
    bus = EventBus()
    LoggingSubscriber(bus)

    with caplog.at_level(logging.INFO, logger="splurge_testify_to_is.events"):
        bus.publish(_step_started())
    assert "Step started" not in caplog.text

    verbose_bus = EventBus()
    LoggingSubscriber(verbose_bus, verbose=True)
    with caplog.at_level(logging.INFO, logger="splurge_testify_to_is.events"):
        verbose_bus.publish(_step_started())
    assert "Step started: parse_source" in caplog.text


def test_logging_subscriber_logs_transformation_and_diagnostics(caplog):
    bus = EventBus()
    subscriber = LoggingSubscriber(bus)
    diagnostic = Diagnostic("a_test.go", 3, 2, DiagnosticKind.UNRECOGNIZED_CALL, "unrecognized call", "t.Log(1)")

    with caplog.at_level(logging.DEBUG, logger="splurge_testify_to_is.events"):
        bus.publish(
            TransformationCompletedEvent(
                timestamp=time.time(),
                run_id="run-1",
                context=_context(),
                transformation_type="testify_to_is",
                statistics={"conversions": 2},
            )
        )
        bus.publish(DiagnosticEvent(timestamp=time.time(), run_id="run-1", context=_context(), diagnostic=diagnostic))

    assert "testify_to_is finished for a_test.go: conversions=2" in caplog.text
    assert "a_test.go:3:2: unrecognized call: t.Log(1)" in caplog.text

    subscriber.unsubscribe_all()
    assert bus.get_subscriber_count(DiagnosticEvent) == 0
