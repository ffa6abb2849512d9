"""Event-loop driven coroutine tasks with sleeps, channels, a mutex, select and a thread pool."""

__version__ = "0.1.0"
__all__ = [
    "awaiter",
    "channel",
    "cotask",
    "eventfd",
    "executor",
    "mutex",
    "select",
    "sleep",
    "task",
    "thread_pool",
]