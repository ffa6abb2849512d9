"""Base class for units of coroutine work run by an executor."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .task import Task


class CoTask(ABC):
    """A job whose body is the coroutine returned by :meth:`co_handle`."""

    task: Optional[Task] = None

    @abstractmethod
    def co_handle(self):
        """Return the coroutine (or Task) that does the work."""

    def run(self, executor) -> bool:
        """Start the work on ``executor``; return True if it finished at once."""
        handle = self.co_handle()
        task = handle if isinstance(handle, Task) else Task(handle)
        self.task = task
        task.set_executor(executor)
        task.resume()
        return task.is_ready()