"""Pipeline architecture for functional composition.

This module provides the ``Step``, ``Task``, ``Job`` and ``Pipeline``
abstractions that run one file through parse, transform, format and
output. Each level threads data from one unit to the next, stops at the
first error, and merges warnings and metadata from every unit so that
statistics recorded early (for example by the transform step) survive
to the final result.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .context import PipelineContext
from .events import (
    EventBus,
    JobCompletedEvent,
    JobStartedEvent,
    PipelineCompletedEvent,
    PipelineStartedEvent,
    StepCompletedEvent,
    StepStartedEvent,
)
from .result import Result

T = TypeVar("T")
R = TypeVar("R")


def _combine(results: list[Result[Any]]) -> Result[Any]:
    """Fold a run of non-error results into one, keeping the last data."""
    warnings: list[str] = []
    metadata: dict[str, Any] = {}
    data = None
    for result in results:
        warnings.extend(result.warnings or [])
        metadata.update(result.metadata or {})
        if result.data is not None:
            data = result.data
    if warnings:
        return Result.warning(data, warnings, metadata)
    return Result.success(data, metadata)


class Step(ABC, Generic[T, R]):
    """Atomic operation with a single responsibility.

    A ``Step`` transforms input of type ``T`` into output of type
    ``R``. Concrete steps implement ``execute`` and are run with the
    ``run`` helper that publishes start/completion events and handles
    exceptions.
    """

    def __init__(self, name: str, event_bus: EventBus) -> None:
        self.name = name
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    @abstractmethod
    def execute(self, context: PipelineContext, input_data: T) -> Result[R]:
        """Transformation implemented by subclasses.

        Args:
            context: Pipeline execution context.
            input_data: Input data for transformation.

        Returns:
            ``Result`` containing transformed data or an error.
        """

    def run(self, context: PipelineContext, input_data: T) -> Result[R]:
        """Execute the step with event publishing and error handling.

        Exceptions raised by ``execute`` are converted into an error
        ``Result``.
        """
        self.event_bus.publish(
            StepStartedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                step_name=self.name,
                step_type=self.__class__.__name__,
            )
        )

        start_time = time.time()

        try:
            self._logger.debug(f"Starting step: {self.name}")
            result = self.execute(context, input_data)
            self._logger.debug(f"Completed step: {self.name} ({result.status.value})")
        except Exception as e:
            self._logger.error(f"Exception in step {self.name}: {e}", exc_info=True)
            result = Result.failure(e, {"step": self.name, "context": context.run_id})

        duration_ms = (time.time() - start_time) * 1000

        self.event_bus.publish(
            StepCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                step_name=self.name,
                step_type=self.__class__.__name__,
                result=result,
                duration_ms=duration_ms,
            )
        )

        return result


class Task(Generic[T, R]):
    """Collection of related steps executed sequentially.

    A ``Task`` threads data through its steps, short-circuiting when a
    step produces an error. Skipped steps pass their input through.
    """

    def __init__(self, name: str, steps: list[Step], event_bus: EventBus) -> None:
        self.name = name
        self.steps = steps
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def execute(self, context: PipelineContext, input_data: T) -> Result[R]:
        """Execute the configured steps in sequence.

        Returns:
            ``Result`` containing the final transformed data on success or
            the first error encountered.
        """
        self._logger.debug(f"Starting task: {self.name} with {len(self.steps)} steps")

        current_data: Any = input_data
        step_results: list[Result[Any]] = []

        for i, step in enumerate(self.steps):
            self._logger.debug(f"Executing step {i + 1}/{len(self.steps)}: {step.name}")

            result = step.run(context, current_data)

            if result.is_error():
                self._logger.error(f"Step {step.name} failed, aborting task {self.name}")
                error = result.error or RuntimeError(f"Task {self.name} failed at step {step.name}")
                return Result.failure(
                    error,
                    {
                        **(result.metadata or {}),
                        "task": self.name,
                        "failed_step": step.name,
                        "step_index": i,
                        "context": context.run_id,
                    },
                )

            step_results.append(result)

            if result.data is not None:
                current_data = result.data

        return _combine(step_results)

    def add_step(self, step: Step) -> None:
        self.steps.append(step)
        self._logger.debug(f"Added step {step.name} to task {self.name}")


class Job(Generic[T, R]):
    """High-level processing unit composed of tasks."""

    def __init__(self, name: str, tasks: list[Task], event_bus: EventBus) -> None:
        self.name = name
        self.tasks = tasks
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def _publish_completed(self, context: PipelineContext, result: Result[Any], start_time: float) -> None:
        self.event_bus.publish(
            JobCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                job_name=self.name,
                job_type=self.__class__.__name__,
                final_result=result,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[R]:
        """Execute all tasks, threading data through them.

        Args:
            context: Pipeline execution context.
            initial_input: Optional initial input for the first task.

        Returns:
            ``Result`` containing final transformed data on success or the
            first encountered error.
        """
        self.event_bus.publish(
            JobStartedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                job_name=self.name,
                job_type=self.__class__.__name__,
                task_count=len(self.tasks),
            )
        )

        self._logger.debug(f"Starting job: {self.name} with {len(self.tasks)} tasks")
        start_time = time.time()

        task_results: list[Result[Any]] = []
        current_input = initial_input

        for i, task in enumerate(self.tasks):
            self._logger.debug(f"Executing task {i + 1}/{len(self.tasks)}: {task.name}")

            result = task.execute(context, current_input)

            if result.is_error():
                self._logger.error(f"Task {task.name} failed, aborting job {self.name}")
                self._publish_completed(context, result, start_time)
                error = result.error or RuntimeError(f"Job {self.name} failed at task {task.name}")
                return Result.failure(
                    error,
                    {
                        **(result.metadata or {}),
                        "job": self.name,
                        "failed_task": task.name,
                        "task_index": i,
                        "context": context.run_id,
                    },
                )

            task_results.append(result)

            if result.data is not None:
                current_input = result.data

        final_result = _combine(task_results)
        self._publish_completed(context, final_result, start_time)
        return final_result

    def add_task(self, task: Task) -> None:
        self.tasks.append(task)
        self._logger.debug(f"Added task {task.name} to job {self.name}")


class Pipeline(Generic[T, R]):
    """Main pipeline orchestrator.

    Coordinates execution of ``Job`` instances for a single file.
    """

    def __init__(self, name: str, jobs: list[Job], event_bus: EventBus) -> None:
        self.name = name
        self.jobs = jobs
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def _publish_completed(self, context: PipelineContext, result: Result[Any], start_time: float) -> None:
        self.event_bus.publish(
            PipelineCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                final_result=result,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[R]:
        """Execute all jobs in the pipeline in order.

        Returns:
            ``Result`` containing final transformed data on success or the
            first error encountered.
        """
        self.event_bus.publish(PipelineStartedEvent(timestamp=time.time(), run_id=context.run_id, context=context))

        start_time = time.time()
        self._logger.debug(f"Starting pipeline: {self.name} with {len(self.jobs)} jobs")

        job_results: list[Result[Any]] = []
        current_input = initial_input

        for i, job in enumerate(self.jobs):
            self._logger.debug(f"Executing job {i + 1}/{len(self.jobs)}: {job.name}")

            result = job.execute(context, current_input)

            if result.is_error():
                self._logger.error(f"Job {job.name} failed, aborting pipeline {self.name}")
                self._publish_completed(context, result, start_time)
                error = result.error or RuntimeError(f"Pipeline {self.name} failed at job {job.name}")
                return Result.failure(
                    error,
                    {
                        **(result.metadata or {}),
                        "pipeline": self.name,
                        "failed_job": job.name,
                        "job_index": i,
                        "context": context.run_id,
                    },
                )

            job_results.append(result)

            if result.data is not None:
                current_input = result.data

        final_result = _combine(job_results)
        self._publish_completed(context, final_result, start_time)
        return final_result

    def add_job(self, job: Job) -> None:
        self.jobs.append(job)
        self._logger.debug(f"Added job {job.name} to pipeline {self.name}")
