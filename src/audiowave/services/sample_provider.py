"""Single-job sample loader that decodes off the event loop.

`SampleProvider` owns one audio source. Each `request()` issues a new
generation id and cancels the task of the previous one; a completion is only
delivered when its generation is still the latest, so stale decodes that
finish late on the worker thread are dropped without cooperative cancellation.
Listeners always run on the event loop that issued the request.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from contextlib import suppress
from pathlib import Path

from audiowave.errors import (
    AudioProcessingError,
    AudioWaveError,
    RequestSupersededError,
)
from audiowave.events import (
    ProviderState,
    ProviderStateChanged,
    SampleResult,
    SamplesFailed,
    SamplesReady,
)
from audiowave.services.audio_decode import (
    AudioSource,
    DecodedSamples,
    decode_samples,
    open_audio_source,
)
from audiowave.utils.async_utils import run_blocking, single_worker_executor

SampleListener = Callable[[SampleResult], None]
StateListener = Callable[[ProviderStateChanged], None]
logger = logging.getLogger(__name__)


class SampleProvider:
    """Decode-and-notify wrapper with at most one job in flight."""

    def __init__(
        self,
        track_path: Path | str,
        *,
        decoder: Callable[[AudioSource], DecodedSamples] = decode_samples,
        on_state_change: StateListener | None = None,
    ) -> None:
        self._source = open_audio_source(track_path)
        self._decoder = decoder
        self._on_state_change = on_state_change
        self._state: ProviderState = "idle"
        self._generation = 0
        self._task: asyncio.Task[None] | None = None
        self._waiter: tuple[int, asyncio.Future[SampleResult]] | None = None
        self._decoded: DecodedSamples | None = None
        self._executor: ThreadPoolExecutor | None = None

    @property
    def source(self) -> AudioSource:
        return self._source

    @property
    def state(self) -> ProviderState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def samples(self) -> list[float] | None:
        """Last successfully delivered buffer, if any."""
        if self._decoded is None:
            return None
        return self._decoded.samples

    def request(self, listener: SampleListener | None = None) -> int:
        """Start a decode, superseding any in-flight one. Returns its generation.

        Must be called from a running event loop.
        """
        loop = asyncio.get_running_loop()
        self._generation += 1
        generation = self._generation
        self._supersede_previous()
        self._set_state("processing")
        logger.debug(
            "Sample request scheduled",
            extra={
                "event": "sample_request",
                "generation": generation,
                "path": str(self._source.path),
            },
        )
        self._task = loop.create_task(self._run(generation, listener))
        return generation

    async def load(self) -> SampleResult:
        """Request samples and wait for this generation's result."""
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[SampleResult] = loop.create_future()

        def _deliver(result: SampleResult) -> None:
            if not waiter.done():
                waiter.set_result(result)

        generation = self.request(_deliver)
        self._waiter = (generation, waiter)
        return await waiter

    async def aclose(self) -> None:
        """Cancel the in-flight job and release the worker thread."""
        task = self._task
        self._generation += 1
        self._supersede_previous()
        self._task = None
        if task is not None:
            with suppress(asyncio.CancelledError):
                await task
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        if self._state == "processing":
            self._set_state("idle")

    def _worker(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = single_worker_executor("audiowave-decode")
        return self._executor

    async def _run(self, generation: int, listener: SampleListener | None) -> None:
        result: SampleResult
        try:
            decoded = await run_blocking(
                self._decoder, self._source, executor=self._worker()
            )
        except AudioWaveError as exc:
            result = SamplesFailed(generation=generation, error=exc)
        except Exception as exc:
            logger.exception(
                "Unexpected decoder error",
                extra={"event": "sample_decode_error", "generation": generation},
            )
            result = SamplesFailed(
                generation=generation, error=AudioProcessingError(str(exc))
            )
        else:
            result = SamplesReady(generation=generation, decoded=decoded)

        if generation != self._generation:
            logger.debug(
                "Dropping stale sample result",
                extra={
                    "event": "sample_result_stale",
                    "generation": generation,
                    "latest_generation": self._generation,
                },
            )
            return

        if isinstance(result, SamplesReady):
            self._decoded = result.decoded
            self._set_state("completed")
            logger.info(
                "Samples ready",
                extra={
                    "event": "samples_ready",
                    "generation": generation,
                    "sample_count": len(result.samples),
                },
            )
        else:
            self._set_state("failed")
            logger.warning(
                "Sample decode failed: %s",
                result.message,
                extra={"event": "samples_failed", "generation": generation},
            )
        if listener is not None:
            listener(result)

    def _supersede_previous(self) -> None:
        task = self._task
        if task is not None and not task.done():
            task.cancel()
        if self._waiter is not None:
            waiter_generation, waiter = self._waiter
            if not waiter.done():
                waiter.set_exception(RequestSupersededError(waiter_generation))
        self._waiter = None

    def _set_state(self, state: ProviderState) -> None:
        previous = self._state
        self._state = state
        if self._on_state_change is not None and previous != state:
            self._on_state_change(
                ProviderStateChanged(
                    previous=previous,
                    current=state,
                    generation=self._generation,
                )
            )
