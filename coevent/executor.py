"""Runs coroutine tasks on an event loop and keeps suspended ones alive."""

from __future__ import annotations

from typing import Callable, Dict, Union

from .cotask import CoTask


class _FunctionTask(CoTask):
    def __init__(self, factory: Callable) -> None:
        self._factory = factory

    async def co_handle(self):
        await self._factory()


class Executor:
    """Starts tasks whose awaiters register events on ``loop``."""

    def __init__(self, loop) -> None:
        self.loop = loop
        self._tasks: Dict[int, CoTask] = {}

    @property
    def task_count(self) -> int:
        """Number of tasks still suspended."""
        return len(self._tasks)

    def run_task(self, task: Union[CoTask, Callable]) -> None:
        """Run a CoTask, or a callable returning a coroutine or Task."""
        if not isinstance(task, CoTask):
            if not callable(task):
                raise TypeError(f"cannot run {type(task).__name__} as a task")
            task = _FunctionTask(task)
        if not task.run(self):
            key = id(task)
            self._tasks[key] = task
            task.task.set_destroy(lambda: self._tasks.pop(key, None))