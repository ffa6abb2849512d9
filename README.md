# coevent

Coroutine tasks driven by an event loop, and the primitives for
coordinating them: timed sleeps, counter-style notification descriptors,
channels, a mutex for tasks, waiting on several channels at once, and a pool
of worker threads that each run their own loop.

The event loop is any object with `call_later`, `add_reader` and
`remove_reader`, such as `asyncio.SelectorEventLoop`. Descriptors come from
`os.eventfd` where the platform has it and from a non-blocking pipe
otherwise, so a POSIX system is expected.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Building blocks

- `coevent.task.Task(coro)` wraps a coroutine object. It starts suspended;
  `resume()` runs it to its next suspension and returns `True` while it is
  still suspended. `is_ready()`, `destroy()` and `result()` report and end
  it; `result()` returns the coroutine's value, re-raises its exception, or
  raises `RuntimeError` if it has not finished. A task can also be awaited
  from another coroutine, which runs it inline.
- `coevent.cotask.CoTask` is an abstract base for units of work: override
  `co_handle()` to return a coroutine (or a `Task`); `run(executor)` starts
  it and returns `True` if it finished without suspending.
- `coevent.executor.Executor(loop)` runs tasks with `run_task(task)`, where
  `task` is a `CoTask` or a callable returning a coroutine or `Task`. Tasks
  that suspend are kept until they finish; `task_count` says how many.
- `coevent.awaiter.BaseAwaiter` is the base for anything a task can wait on:
  subclass it, override `handle()` to register a callback on `self.loop`,
  and call `resume()` from that callback.
- `coevent.sleep.Sleep(sec, ms=0)` suspends a task for `sec` seconds plus
  `ms` milliseconds. One instance can be awaited repeatedly.
- `coevent.eventfd.EventFd` is a non-blocking counter: `write(value)` adds,
  `read()` returns and resets the total (raising `BlockingIOError` when it is
  zero), `close()` releases it; it is also a context manager.
  `EventFdAwaiter(fd)` suspends a task until the descriptor is written to.
- `coevent.mutex.Mutex` is a lock for tasks, usable across threads.
  `await mutex.lock()` waits for it and returns a `LockGuard`, which unlocks
  once, on `release()` or on leaving a `with` block. `unlock()` and the
  `locked` property are also available.
- `coevent.channel.Channel` is an unbounded FIFO. `push(item)` returns
  `False` once the channel is closed. `await pop()` waits for the next item
  and raises `ChannelClosed` when the channel is, or becomes, closed.
  `try_pop()` raises `ChannelClosed` or `ChannelEmpty` instead of waiting.
  `close()`, `is_closed()` and `is_empty()` complete it.
- `coevent.select.select(*channels)` returns a coroutine that is `True` at
  once if any channel holds data; otherwise it waits until one of them is
  pushed to or closed, and is then `False` only if every channel is closed.
  `MultiEventfd(fds)` is the awaiter behind it.
- `coevent.thread_pool.ThreadPool(num)` starts `num` worker threads, each
  with its own loop and `Executor`, and hands tasks given to `add(task)` to
  them in turn. `close()` (or leaving a `with` block) stops every worker at
  once and waits for the threads; tasks still suspended at that moment are
  abandoned, not finished.

## Example

```python
import asyncio

from coevent.channel import Channel, ChannelClosed
from coevent.executor import Executor
from coevent.sleep import Sleep

loop = asyncio.SelectorEventLoop()
executor = Executor(loop)
chan = Channel()


async def producer():
    for i in range(10):
        chan.push(i)
        await Sleep(0, 200)
    chan.close()


async def consumer():
    while True:
        try:
            value = await chan.pop()
        except ChannelClosed:
            break
        print("got", value)
    loop.stop()


executor.run_task(consumer)
executor.run_task(producer)
loop.run_forever()
loop.close()
```

## What it does not do

The package is a library only: it installs no command, and it provides no
event loop of its own. Tasks run on whatever loop an `Executor` is given or,
in a `ThreadPool`, on the loops its workers create.