"""A mutex for tasks: waiting for it suspends the task instead of a thread."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from .eventfd import EventFd, EventFdAwaiter


class LockGuard:
    """Holds a locked :class:`Mutex` and unlocks it once when released."""

    def __init__(self, unlock: Callable[[], None]) -> None:
        self._unlock: Optional[Callable[[], None]] = unlock

    def release(self) -> None:
        """Unlock the mutex; later calls do nothing."""
        unlock, self._unlock = self._unlock, None
        if unlock is not None:
            unlock()

    def __enter__(self) -> "LockGuard":
        return self

    def __exit__(self, *args) -> None:
        self.release()


class Mutex:
    """Mutual exclusion between tasks, also across threads and event loops."""

    def __init__(self) -> None:
        self._fd = EventFd()
        self._guard = threading.Lock()
        self._locked = False

    @property
    def locked(self) -> bool:
        return self._locked

    async def lock(self) -> LockGuard:
        """Wait until the mutex is free, take it and return its guard."""
        awaiter = EventFdAwaiter(self._fd)
        while True:
            with self._guard:
                if not self._locked:
                    self._locked = True
                    break
            await awaiter
        return LockGuard(self.unlock)

    def unlock(self) -> None:
        """Free the mutex and wake the tasks waiting for it."""
        self._locked = False
        self._fd.write(1)

    def __del__(self) -> None:
        fd = getattr(self, "_fd", None)
        if fd is not None:
            fd.close()