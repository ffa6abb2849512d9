import asyncio
import time
from contextlib import closing

import pytest

from coevent.awaiter import BaseAwaiter
from coevent.executor import Executor
from coevent.task import Task


@pytest.fixture
def loop():
    with closing(asyncio.new_event_loop()) as event_loop:
        yield event_loop


class _TimeoutSleep(BaseAwaiter):
    def __init__(self, loop):
        super().__init__()
        self._loop = loop

    async def wait(self, sec):
        timer = self._loop.call_later(sec + 0.000001, self.resume)
        await self
        timer.cancel()
        return sec


class _LoopTimer(BaseAwaiter):
    def __init__(self, delay):
        super().__init__()
        self.delay = delay

    def handle(self):
        self.loop.call_later(self.delay, self.resume)


def test_example_wait_returns_seconds(loop):
    executor = Executor(loop)
    events = []
    finished = loop.create_future()

    async def test_sleep():
        events.append("sleep")
        events.append(await _TimeoutSleep(loop).wait(1))
        events.append("sleep end")
        finished.set_result(None)

    start = time.monotonic()
    loop.call_soon(executor.run_task, lambda: test_sleep())
    loop.run_until_complete(asyncio.wait_for(finished, 5))
    assert events == ["sleep", 1, "sleep end"]
    assert executor.task_count == 0
    assert time.monotonic() - start >= 0.9


def test_handle_uses_executor_loop(loop):
    executor = Executor(loop)
    awaiter = _LoopTimer(0.01)
    finished = loop.create_future()

    async def body():
        await awaiter
        finished.set_result("woken")

    executor.run_task(body)
    assert awaiter.loop is loop
    loop.run_until_complete(asyncio.wait_for(finished, 5))
    assert finished.result() == "woken"


def test_await_resume_is_none():
    awaiter = BaseAwaiter()
    got = []

    async def body():
        got.append(await awaiter)

    task = Task(body())
    task.set_executor(Executor(None))
    assert task.resume() is True
    awaiter.resume()
    assert got == [None]


def test_loop_without_executor_raises():
    with pytest.raises(RuntimeError):
        BaseAwaiter().loop


def test_suspend_without_executor_raises():
    async def body():
        await BaseAwaiter()

    task = Task(body())
    with pytest.raises(RuntimeError, match="no executor"):
        task.resume()
    task.destroy()