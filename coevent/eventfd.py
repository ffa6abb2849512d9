"""Counting notification descriptors and an awaiter that waits on one."""

from __future__ import annotations

import os
import struct
import threading
from typing import Callable, Dict, List, Tuple

from .awaiter import BaseAwaiter

_MAX_VALUE = 0xFFFFFFFFFFFFFFFE
_COUNTER = struct.Struct("=Q")


class EventFd:
    """A non-blocking counter descriptor: writes add, a read takes the total."""

    def __init__(self) -> None:
        self._closed = False
        if hasattr(os, "eventfd"):
            fd = os.eventfd(0, os.EFD_CLOEXEC | os.EFD_NONBLOCK)
            self._read_fd = self._write_fd = fd
            self._native = True
        else:
            self._read_fd, self._write_fd = os.pipe()
            os.set_blocking(self._read_fd, False)
            os.set_blocking(self._write_fd, False)
            self._native = False

    @property
    def closed(self) -> bool:
        return self._closed

    def fileno(self) -> int:
        """Descriptor that becomes readable while the counter is non-zero."""
        if self._closed:
            raise ValueError("event fd is closed")
        return self._read_fd

    def write(self, value: int) -> None:
        """Add ``value`` to the counter."""
        if self._closed:
            raise ValueError("event fd is closed")
        if not 0 <= value <= _MAX_VALUE:
            raise ValueError(f"event fd value out of range: {value}")
        if self._native:
            os.eventfd_write(self._write_fd, value)
        elif value:
            os.write(self._write_fd, _COUNTER.pack(value))

    def read(self) -> int:
        """Return the counter and reset it; BlockingIOError if it is zero."""
        if self._closed:
            raise ValueError("event fd is closed")
        if self._native:
            return os.eventfd_read(self._read_fd)
        data = b""
        while True:
            try:
                chunk = os.read(self._read_fd, 4096)
            except BlockingIOError:
                break
            if not chunk:
                break
            data += chunk
        if not data:
            raise BlockingIOError("event fd counter is zero")
        return sum(value for (value,) in _COUNTER.iter_unpack(data))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        os.close(self._read_fd)
        if self._write_fd != self._read_fd:
            os.close(self._write_fd)

    def __enter__(self) -> "EventFd":
        return self

    def __exit__(self, *args) -> None:
        self.close()


_watches: Dict[Tuple[int, int], List[Callable[[], None]]] = {}
_watch_lock = threading.Lock()


def add_read_watch(loop, fd: int, callback: Callable[[], None]) -> None:
    """Call ``callback`` once when ``fd`` becomes readable on ``loop``.

    Several callbacks may wait on the same descriptor; all fire together.
    """
    key = (id(loop), fd)
    with _watch_lock:
        callbacks = _watches.get(key)
        if callbacks is None:
            callbacks = _watches[key] = []
            loop.add_reader(fd, _dispatch, loop, fd)
        callbacks.append(callback)


def remove_read_watch(loop, fd: int, callback: Callable[[], None]) -> None:
    """Cancel a watch added with :func:`add_read_watch`, if still pending."""
    key = (id(loop), fd)
    with _watch_lock:
        callbacks = _watches.get(key)
        if not callbacks or callback not in callbacks:
            return
        callbacks.remove(callback)
        if callbacks:
            return
        del _watches[key]
    loop.remove_reader(fd)


def _dispatch(loop, fd: int) -> None:
    with _watch_lock:
        callbacks = _watches.pop((id(loop), fd), [])
    loop.remove_reader(fd)
    for callback in callbacks:
        callback()


class EventFdAwaiter(BaseAwaiter):
    """Suspend until the given :class:`EventFd` is written to."""

    def __init__(self, fd: EventFd) -> None:
        super().__init__()
        self.fd = fd

    def handle(self) -> None:
        add_read_watch(self.loop, self.fd.fileno(), self._on_read)

    def _on_read(self) -> None:
        try:
            self.fd.read()
        except BlockingIOError:
            pass
        self.resume()