"""Base class for objects a task suspends on until an event resumes it."""

from __future__ import annotations

from typing import Any, Callable, Generator, Optional


class BaseAwaiter:
    """Suspends the awaiting task; :meth:`handle` arranges for :meth:`resume`.

    Subclasses override :meth:`handle` to register an event on :attr:`loop`
    whose callback calls :meth:`resume`.
    """

    def __init__(self) -> None:
        self.executor: Any = None
        self._resume: Optional[Callable[[], Any]] = None

    def await_suspend(self, context, resume: Callable[[], Any]) -> None:
        """Bind to the suspending task's executor and register the event."""
        self._resume = resume
        if context.executor is None:
            raise RuntimeError("coroutine context has no executor")
        self.executor = context.executor
        self.handle()

    def handle(self) -> None:
        """Register whatever will later resume the task."""

    def resume(self) -> None:
        """Resume the suspended task, if there is one."""
        if self._resume is not None:
            self._resume()

    @property
    def loop(self):
        """The event loop of the executor running the suspended task."""
        if self.executor is None:
            raise RuntimeError("awaiter is not bound to an executor")
        return self.executor.loop

    def __await__(self) -> Generator["BaseAwaiter", None, None]:
        yield self