"""Waiting on several channels at once."""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from .awaiter import BaseAwaiter
from .eventfd import EventFd, add_read_watch, remove_read_watch


class MultiEventfd(BaseAwaiter):
    """Suspend until any one of the given :class:`EventFd` is written to."""

    def __init__(self, fds: Sequence[EventFd]) -> None:
        super().__init__()
        self.fds = list(fds)
        self._watches: List[Tuple[int, Callable[[], None]]] = []
        self._fired = False

    def handle(self) -> None:
        self._fired = False
        self._watches = []
        loop = self.loop
        for fd in self.fds:
            callback = self._make_callback(fd)
            fileno = fd.fileno()
            self._watches.append((fileno, callback))
            add_read_watch(loop, fileno, callback)

    def _make_callback(self, fd: EventFd) -> Callable[[], None]:
        def on_read() -> None:
            self._on_read(fd)

        return on_read

    def _on_read(self, fd: EventFd) -> None:
        if self._fired:
            return
        self._fired = True
        try:
            fd.read()
        except BlockingIOError:
            pass
        loop = self.loop
        for fileno, callback in self._watches:
            remove_read_watch(loop, fileno, callback)
        self._watches = []
        self.resume()


def select(*args):
    """Wait until one of the channels has data or is closed.

    Returns a coroutine whose value is True if any channel holds data, or,
    after waiting, if not every channel is closed.
    """
    if not args:
        raise ValueError("select needs at least one channel")
    channels = list(args)

    async def wait() -> bool:
        if not all(ch.is_empty() for ch in channels):
            return True
        await MultiEventfd([ch.eventfd for ch in channels])
        return not all(ch.is_closed() for ch in channels)

    return wait()