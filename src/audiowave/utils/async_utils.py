"""Async helpers for offloading blocking decode work to worker threads.

Callers may pass their own executor (a sample provider keeps a single-worker
one so its jobs never overlap); otherwise a shared IO pool is used.
"""

from __future__ import annotations

import asyncio
import atexit
from concurrent.futures import Executor, ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, TypeVar

T = TypeVar("T")

_IO_EXECUTOR = ThreadPoolExecutor(max_workers=4, thread_name_prefix="audiowave-io")


@atexit.register
def _shutdown_io_executor() -> None:
    _IO_EXECUTOR.shutdown(wait=False, cancel_futures=True)


def single_worker_executor(name: str) -> ThreadPoolExecutor:
    """Return a one-thread executor for strictly sequential background jobs."""
    return ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)


async def run_blocking(
    func: Callable[..., T],
    /,
    *args: Any,
    executor: Executor | None = None,
    **kwargs: Any,
) -> T:
    """Run blocking callable on ``executor`` (or the IO pool) and await it."""
    if not callable(func):
        raise TypeError("func must be callable")
    loop = asyncio.get_running_loop()
    bound = partial(func, *args, **kwargs)
    future = loop.run_in_executor(executor or _IO_EXECUTOR, bound)
    # Some environments can miss thread->loop wakeups for executor completion.
    # Polling with a short timeout keeps completion deterministic.
    while True:
        try:
            return await asyncio.wait_for(asyncio.shield(future), timeout=0.1)
        except asyncio.TimeoutError:
            continue
