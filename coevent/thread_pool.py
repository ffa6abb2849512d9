"""A pool of threads, each running its own event loop and executor."""

from __future__ import annotations

import asyncio
import threading
from collections import deque
from typing import Callable, Deque, List, Optional, Union

from .cotask import CoTask
from .eventfd import EventFd
from .executor import Executor

TaskLike = Union[CoTask, Callable]


class ThreadContext:
    """Task queue of one worker, with a descriptor to notify it."""

    def __init__(self) -> None:
        self._fd = EventFd()
        self._stop = False
        self._lock = threading.Lock()
        self._queue: Deque[TaskLike] = deque()

    @property
    def eventfd(self) -> EventFd:
        return self._fd

    def is_stopped(self) -> bool:
        return self._stop

    def stop(self) -> None:
        """Ask the worker to stop and wake it."""
        self._stop = True
        self._fd.write(1)

    def pop(self) -> Optional[TaskLike]:
        """Return the next queued task, or None if there is none."""
        with self._lock:
            if not self._queue:
                return None
            return self._queue.popleft()

    def push(self, task: TaskLike) -> None:
        """Queue ``task`` and wake the worker."""
        with self._lock:
            self._queue.append(task)
            self._fd.write(1)


class Worker:
    """A thread that runs the tasks queued on its :class:`ThreadContext`."""

    def __init__(self, ctx: ThreadContext, worker_id: int) -> None:
        self.worker_id = worker_id
        self.executor: Optional[Executor] = None
        self._ctx = ctx
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread = threading.Thread(
            target=self._run, name=f"coevent-worker-{worker_id}", daemon=True
        )
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the thread to end; return True if it has."""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        loop = asyncio.SelectorEventLoop()
        self._loop = loop
        self.executor = Executor(loop)
        fileno = self._ctx.eventfd.fileno()
        loop.add_reader(fileno, self._handle)
        try:
            loop.run_forever()
        finally:
            loop.remove_reader(fileno)
            loop.close()

    def _handle(self) -> None:
        try:
            self._ctx.eventfd.read()
        except BlockingIOError:
            pass
        if not self._ctx.is_stopped():
            while (task := self._ctx.pop()) is not None:
                self.executor.run_task(task)
        if self._ctx.is_stopped():
            self._loop.stop()


class ThreadPool:
    """Hands tasks to ``num`` workers in turn."""

    def __init__(self, num: int) -> None:
        if num < 1:
            raise ValueError(f"thread pool needs at least one thread, got {num}")
        self._lock = threading.Lock()
        self._num = num
        self._index = 0
        self._closed = False
        self._contexts: List[ThreadContext] = []
        self.workers: List[Worker] = []
        for worker_id in range(num):
            ctx = ThreadContext()
            self.workers.append(Worker(ctx, worker_id))
            self._contexts.append(ctx)

    def add(self, task: TaskLike) -> None:
        """Queue a CoTask, or a callable returning a coroutine or Task."""
        if not isinstance(task, CoTask) and not callable(task):
            raise TypeError(f"cannot run {type(task).__name__} as a task")
        with self._lock:
            if self._closed:
                raise RuntimeError("thread pool is closed")
            self._contexts[self._index].push(task)
            self._index = (self._index + 1) % self._num

    def close(self) -> None:
        """Stop every worker, wait for them, and release their descriptors."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        for ctx in self._contexts:
            ctx.stop()
        for worker in self.workers:
            worker.join()
        for ctx in self._contexts:
            ctx.eventfd.close()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args) -> None:
        self.close()