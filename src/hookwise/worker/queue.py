"""
Background event worker.

Verified events are handed off here so the HTTP response does not wait on
downstream processing. Failures are logged only; nothing propagates back
to the request that submitted the event.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from hookwise.core.exceptions import DecodeError, HookwiseError, UnhandledEventTypeError
from hookwise.core.logging import get_logger

T = TypeVar("T")


@dataclass
class WorkerStats:
    """Counters for processed items."""

    submitted: int = 0
    processed: int = 0
    unhandled: int = 0
    decode_errors: int = 0
    failed: int = 0


class EventWorker(Generic[T]):
    """
    Single-consumer asyncio queue.

    Items must be immutable values owned by the worker once submitted.
    """

    def __init__(
        self,
        processor: Callable[[T], Awaitable[Any]],
        name: str = "events",
        maxsize: int = 0,
    ) -> None:
        self._processor = processor
        self._name = name
        self._queue: asyncio.Queue[T] = asyncio.Queue(maxsize=maxsize)
        self._task: asyncio.Task[None] | None = None
        self._logger = get_logger(f"worker.{name}")
        self.stats = WorkerStats()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"hookwise-{self._name}")
        self._logger.debug("Worker started")

    def submit(self, item: T) -> None:
        """Enqueue ``item`` without waiting for it to be processed."""
        self._queue.put_nowait(item)
        self.stats.submitted += 1

    async def drain(self) -> None:
        """Wait until every submitted item has been processed."""
        await self._queue.join()

    async def stop(self) -> None:
        """Drain the queue, then cancel the consumer."""
        if self._task is None:
            return
        if self.running:
            await self.drain()
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        self._logger.debug("Worker stopped")

    async def _run(self) -> None:
        while True:
            item = await self._queue.get()
            try:
                await self._process(item)
            finally:
                self._queue.task_done()

    async def _process(self, item: T) -> None:
        try:
            await self._processor(item)
        except UnhandledEventTypeError as e:
            self.stats.unhandled += 1
            self._logger.warning(f"Ignoring event: {e}")
        except DecodeError as e:
            self.stats.decode_errors += 1
            label = f" {e.event_type}" if e.event_type else ""
            self._logger.error(f"Failed to decode event{label}: {e}")
        except HookwiseError as e:
            self.stats.failed += 1
            self._logger.error(f"Event processing failed: {e}")
        except Exception:
            self.stats.failed += 1
            self._logger.exception("Unexpected error while processing event")
        else:
            self.stats.processed += 1
