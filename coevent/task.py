"""Lazily started coroutine tasks driven by awaiters."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Generator, Optional


@dataclass
class Context:
    """State shared by a top-level task and the awaiters it suspends on."""

    executor: Any = None
    destroy: Optional[Callable[[], None]] = None


_UNSET = object()


class Task:
    """A coroutine that starts suspended and is advanced with :meth:`resume`.

    Awaiting a task from another coroutine runs it inline; its awaiters then
    suspend the outermost task, which shares its context with them.
    """

    def __init__(self, coro) -> None:
        if not inspect.iscoroutine(coro):
            raise TypeError(f"expected a coroutine object, got {type(coro).__name__}")
        self._coro = coro
        self._done = False
        self._value: Any = _UNSET
        self._exception: Optional[BaseException] = None
        self.context = Context()

    def is_ready(self) -> bool:
        """True once the coroutine has finished or been destroyed."""
        return self._coro is None or self._done

    def resume(self) -> bool:
        """Run until the next suspension; return True while still suspended."""
        if self.is_ready():
            return False
        try:
            awaiter = self._coro.send(None)
        except StopIteration as stop:
            self._finish(value=stop.value)
            return False
        except Exception as exc:  # kept for result(), as the task's outcome
            self._finish(exception=exc)
            return False
        suspend = getattr(awaiter, "await_suspend", None)
        if suspend is None:
            raise TypeError(f"task suspended on unsupported object {awaiter!r}")
        suspend(self.context, self.resume)
        return not self.is_ready()

    def destroy(self) -> bool:
        """Close the coroutine; return False if it was already destroyed."""
        if self._coro is None:
            return False
        coro, self._coro = self._coro, None
        coro.close()
        return True

    def result(self) -> Any:
        """Return the coroutine's value, or raise the exception it raised."""
        if self._exception is not None:
            raise self._exception
        if self._value is not _UNSET:
            return self._value
        raise RuntimeError("The return value was never set, did you execute the coroutine?")

    def __await__(self) -> Generator[Any, None, Any]:
        if self.is_ready():
            return self.result()
        try:
            value = yield from self._coro.__await__()
        except Exception as exc:
            self._done = True
            self._exception = exc
            raise
        self._done = True
        self._value = value
        return value

    def set_executor(self, executor) -> None:
        self.context.executor = executor

    def set_destroy(self, destroy: Callable[[], None]) -> None:
        self.context.destroy = destroy

    def _finish(self, value: Any = None, exception: Optional[BaseException] = None) -> None:
        self._done = True
        if exception is not None:
            self._exception = exception
        else:
            self._value = value
        if self.context.destroy is not None:
            self.context.destroy()