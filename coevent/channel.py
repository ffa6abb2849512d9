"""A queue that tasks can wait on, closable to wake every waiter."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque, Generic, Tuple, TypeVar

from .eventfd import EventFd, EventFdAwaiter

T = TypeVar("T")


class ChannelClosed(Exception):
    """The channel has been closed."""


class ChannelEmpty(Exception):
    """The channel holds no items right now."""


class Channel(Generic[T]):
    """FIFO of items shared between tasks, possibly on different threads."""

    def __init__(self) -> None:
        self._fd = EventFd()
        self._lock = threading.RLock()
        self._queue: Deque[T] = deque()
        self._closed = False

    @property
    def eventfd(self) -> EventFd:
        """Descriptor written to on every push and on close."""
        return self._fd

    def close(self) -> None:
        """Close the channel and wake the tasks waiting on it."""
        if self._closed:
            return
        with self._lock:
            self._closed = True
            self._fd.write(1)

    def push(self, item: T) -> bool:
        """Add ``item``; return False if the channel is closed."""
        if self._closed:
            return False
        with self._lock:
            self._queue.append(item)
            self._fd.write(1)
        return True

    async def pop(self) -> T:
        """Wait for and return the next item; raise ChannelClosed once closed."""
        self._ensure_open()
        awaiter = EventFdAwaiter(self._fd)
        while True:
            found, item = self._take()
            if found:
                break
            await awaiter
            if self._closed:
                break
        # Pass the wake-up on to any other waiter.
        self._fd.write(1)
        if not found:
            raise ChannelClosed("channel is closed")
        return item

    def try_pop(self) -> T:
        """Return the next item without waiting.

        Raises ChannelClosed if the channel is closed, ChannelEmpty if it
        holds nothing.
        """
        self._ensure_open()
        found, item = self._take()
        if not found:
            raise ChannelEmpty("channel is empty")
        return item

    def is_closed(self) -> bool:
        return self._closed

    def is_empty(self) -> bool:
        return not self._queue

    def _ensure_open(self) -> None:
        if self._closed:
            raise ChannelClosed("channel is closed")

    def _take(self) -> Tuple[bool, Any]:
        with self._lock:
            if self._queue:
                return True, self._queue.popleft()
        return False, None

    def __del__(self) -> None:
        fd = getattr(self, "_fd", None)
        if fd is not None:
            fd.close()