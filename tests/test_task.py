import pytest

from coevent.awaiter import BaseAwaiter
from coevent.task import Context, Task


async def _one():
    return 1


async def _boom():
    raise ValueError("boom")


def _started(coro):
    task = Task(coro)
    task.resume()
    return task


def test_task_returns_value_without_awaits():
    task = Task(_one())
    assert task.is_ready() is False
    assert task.resume() is False
    assert task.is_ready() is True
    assert task.result() == 1


def test_result_before_run_raises():
    task = Task(_one())
    with pytest.raises(RuntimeError, match="never set"):
        task.result()
    task.destroy()


def test_rejects_non_coroutine():
    with pytest.raises(TypeError):
        Task(_one)


@pytest.mark.parametrize(
    "make_inner",
    [lambda: Task(_one()), lambda: _started(_one())],
    ids=["fresh", "finished"],
)
def test_awaiting_inner_task_gives_its_value(make_inner):
    inner = make_inner()

    async def outer():
        return await inner

    assert _started(outer()).result() == 1


def test_exception_is_stored_and_propagates():
    inner = Task(_boom())

    async def outer():
        await inner

    task = Task(outer())
    assert task.resume() is False
    for failed in (task, inner):
        with pytest.raises(ValueError, match="boom"):
            failed.result()


def test_destroy_callback_only_for_top_level():
    calls = []
    inner = Task(_one())
    inner.set_destroy(lambda: calls.append("inner"))

    async def outer():
        return await inner

    task = Task(outer())
    task.set_destroy(lambda: calls.append("outer"))
    task.resume()
    assert calls == ["outer"]


def test_destroy_twice():
    task = Task(_one())
    assert task.destroy() is True
    assert task.destroy() is False
    assert task.is_ready() is True
    assert task.resume() is False


def test_suspend_and_resume_through_awaiter():
    awaiter = BaseAwaiter()
    steps = []

    async def body():
        steps.append("before")
        await awaiter
        steps.append("after")
        return "done"

    task = Task(body())
    marker = object()
    task.set_executor(marker)
    assert task.resume() is True
    assert steps == ["before"]
    assert awaiter.executor is marker
    awaiter.resume()
    assert steps == ["before", "after"]
    assert task.result() == "done"


def test_unsupported_yield_raises():
    class _Odd:
        def __await__(self):
            yield 5

    async def body():
        await _Odd()

    task = Task(body())
    with pytest.raises(TypeError):
        task.resume()
    task.destroy()


def test_context_defaults():
    ctx = Context()
    assert ctx.executor is None
    assert ctx.destroy is None