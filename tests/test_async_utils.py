"""Tests for blocking-call offload helpers."""

from __future__ import annotations

import asyncio
import threading

import pytest

from audiowave.utils.async_utils import run_blocking, single_worker_executor


def test_run_blocking_uses_supplied_executor() -> None:
    executor = single_worker_executor("audiowave-test")

    def _work(value: int, *, offset: int) -> tuple[int, str]:
        return value + offset, threading.current_thread().name

    try:
        result, thread_name = asyncio.run(
            run_blocking(_work, 2, offset=3, executor=executor)
        )
    finally:
        executor.shutdown(wait=True)

    assert result == 5
    assert thread_name.startswith("audiowave-test")


def test_run_blocking_rejects_non_callable() -> None:
    with pytest.raises(TypeError):
        asyncio.run(run_blocking(42))  # type: ignore[arg-type]
