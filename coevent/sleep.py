"""Awaiter that resumes a task after a delay."""

from __future__ import annotations

from .awaiter import BaseAwaiter


class Sleep(BaseAwaiter):
    """Suspend for ``sec`` seconds plus ``ms`` milliseconds; reusable."""

    def __init__(self, sec: int, ms: int = 0) -> None:
        super().__init__()
        self.seconds = sec + ms / 1000
        self._timer = None

    def handle(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self.loop.call_later(self.seconds, self.resume)