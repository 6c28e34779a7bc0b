from splurge_testify_to_is.context import PipelineContext
from splurge_testify_to_is.pipeline import Job, Pipeline, Step, Task
from splurge_testify_to_is.result import Result


class DummyEventBus:
    def __init__(self):
        self.published = []

    def publish(self, event):
        self.published.append(event)


class AddOneStep(Step):
    def execute(self, context: PipelineContext, input_data: int) -> Result[int]:
        return Result.success(input_data + 1, {self.name: input_data})


class WarnStep(Step):
    def execute(self, context: PipelineContext, input_data: int) -> Result[int]:
        return Result.warning(input_data, [f"{self.name} warned"])


class FailStep(Step):
    def execute(self, context: PipelineContext, input_data: int) -> Result[int]:
        return Result.failure(RuntimeError("boom"), {"why": "testing"})


class RaiseStep(Step):
    def execute(self, context: PipelineContext, input_data: int) -> Result[int]:
        raise ValueError("exploded")


def make_context():
    return PipelineContext.create(source_file="s_test.go", run_id="test")


def test_task_threads_data_and_merges_metadata():
    eb = DummyEventBus()
    task = Task("t", [AddOneStep("s1", eb), AddOneStep("s2", eb)], eb)

    res = task.execute(make_context(), 0)

    assert res.is_success()
    assert res.data == 2
    assert res.metadata == {"s1": 0, "s2": 1}
    # started + completed per step
    assert len(eb.published) == 4


def test_task_failure_short_circuits():
    eb = DummyEventBus()
    task = Task("t", [FailStep("bad", eb), AddOneStep("never", eb)], eb)

    res = task.execute(make_context(), 0)

    assert res.is_error()
    assert res.metadata["failed_step"] == "bad"
    assert res.metadata["why"] == "testing"
    assert len(eb.published) == 2


def test_step_exception_becomes_failure():
    eb = DummyEventBus()
    res = RaiseStep("raise", eb).run(make_context(), 0)

    assert res.is_error()
    assert isinstance(res.error, ValueError)
    assert res.metadata["step"] == "raise"


def test_warnings_are_collected():
    eb = DummyEventBus()
    task = Task("t", [WarnStep("w1", eb), AddOneStep("s", eb), WarnStep("w2", eb)], eb)

    res = task.execute(make_context(), 5)

    assert res.is_warning()
    assert res.data == 6
    assert res.warnings == ["w1 warned", "w2 warned"]


def test_job_and_pipeline_thread_results():
    eb = DummyEventBus()
    job1 = Job("j1", [Task("t1", [AddOneStep("a", eb)], eb)], eb)
    job2 = Job("j2", [Task("t2", [AddOneStep("b", eb)], eb)], eb)

    res = Pipeline("p", [job1, job2], eb).execute(make_context(), 10)

    assert res.is_success()
    assert res.data == 12
    assert res.metadata == {"a": 10, "b": 11}


def test_pipeline_stops_at_failing_job():
    eb = DummyEventBus()
    failing = Job("j1", [Task("t1", [FailStep("bad", eb)], eb)], eb)
    later = Job("j2", [Task("t2", [AddOneStep("b", eb)], eb)], eb)

    res = Pipeline("p", [failing, later], eb).execute(make_context(), 0)

    assert res.is_error()
    assert res.metadata["failed_job"] == "j1"
    assert res.metadata["failed_task"] == "t1"
    assert "b" not in res.metadata


def test_add_step_task_job():
    eb = DummyEventBus()
    task = Task("t", [], eb)
    task.add_step(AddOneStep("a", eb))
    job = Job("j", [], eb)
    job.add_task(task)
    pipeline = Pipeline("p", [], eb)
    pipeline.add_job(job)

    assert pipeline.execute(make_context(), 1).data == 2
