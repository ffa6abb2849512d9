import asyncio

import pytest

from coevent.cotask import CoTask
from coevent.executor import Executor
from coevent.sleep import Sleep


@pytest.fixture
def executor():
    event_loop = asyncio.new_event_loop()
    yield Executor(event_loop)
    event_loop.close()


def _wait(executor, future):
    executor.loop.run_until_complete(asyncio.wait_for(future, 5))


def test_example_ordering(executor):
    events = []
    done = executor.loop.create_future()

    async def test_sleep():
        events.append("sleep")
        await Sleep(0, 10)
        events.append("sleep end")
        done.set_result(None)

    def add_co_task():
        executor.run_task(lambda: test_sleep())
        events.append("add task")

    executor.loop.call_soon(add_co_task)
    _wait(executor, done)
    assert events == ["sleep", "add task", "sleep end"]
    assert executor.task_count == 0


def test_task_count_tracks_suspended(executor):
    done = executor.loop.create_future()

    async def body():
        await Sleep(0, 20)
        done.set_result("slept")

    executor.run_task(body)
    assert executor.task_count == 1
    _wait(executor, done)
    assert done.result() == "slept"
    assert executor.task_count == 0


def test_synchronous_task_not_kept(executor):
    out = []

    async def body():
        out.append("ran")

    executor.run_task(body)
    assert out == ["ran"]
    assert executor.task_count == 0


def test_cotask_failure_is_kept_in_task(executor):
    reached = executor.loop.create_future()

    class _Failing(CoTask):
        async def co_handle(self):
            await Sleep(0, 5)
            reached.set_result(None)
            raise KeyError("missing")

    job = _Failing()
    executor.run_task(job)
    assert executor.task_count == 1
    _wait(executor, reached)
    assert job.task.is_ready() is True
    assert executor.task_count == 0
    with pytest.raises(KeyError):
        job.task.result()


def test_run_task_rejects_non_callable(executor):
    with pytest.raises(TypeError):
        executor.run_task(42)


def test_loop_attribute():
    marker = object()
    assert Executor(marker).loop is marker