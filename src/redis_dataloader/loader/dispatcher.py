"""
Batch Dispatcher

Coalesces single-key load() calls into one batch function call.

Algorithm:
1. Queue (key, future) instead of calling the batch function immediately
2. The first queued key schedules a dispatch on the next loop iteration
   (or after batch_window seconds when configured)
3. If the queue reaches max_batch_size, dispatch immediately
4. On dispatch: snapshot and clear the queue, call the batch function once
5. Resolve each future with its positional result; exception instances
   become future exceptions
6. If the batch function fails, every future in the batch gets the error;
   if the batch task is cancelled, every future in the batch is cancelled

No memoization: the same key loaded twice in one tick appears twice in the
batch. The batch function is responsible for deduplicating.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic, TypeVar

from redis_dataloader.core.config.constants import Stage
from redis_dataloader.core.exceptions import BatchSizeMismatchError
from redis_dataloader.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)

K = TypeVar("K")
V = TypeVar("V")

BatchFn = Callable[[list[K]], Awaitable[Sequence[Any]]]


class BatchDispatcher(Generic[K, V]):
    """
    Per-tick batching of load() calls.

    Args:
        batch_fn: Async function from a list of keys to an equally long
            sequence of values or exception instances
        max_batch_size: Dispatch as soon as this many keys are queued
        batch_window: Seconds to wait before dispatching (0 = next loop iteration)
    """

    def __init__(
        self,
        batch_fn: BatchFn,
        max_batch_size: int | None = None,
        batch_window: float = 0.0,
    ):
        if max_batch_size is not None and max_batch_size < 1:
            raise ValueError("max_batch_size must be at least 1")
        self._batch_fn = batch_fn
        self._max_batch_size = max_batch_size
        self._batch_window = batch_window
        self._queue: list[tuple[K, asyncio.Future]] = []
        self._scheduled: asyncio.Handle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of keys waiting for the next dispatch."""
        return len(self._queue)

    async def load(self, key: K) -> V:
        """
        Queue a key and wait for its result.

        Raises:
            Exception: The error returned or raised for this key
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()
        self._queue.append((key, future))

        if self._max_batch_size is not None and len(self._queue) >= self._max_batch_size:
            self._dispatch()
        elif self._scheduled is None:
            if self._batch_window > 0:
                self._scheduled = loop.call_later(self._batch_window, self._dispatch)
            else:
                self._scheduled = loop.call_soon(self._dispatch)

        return await future

    async def load_many(self, keys: Sequence[K]) -> list[V | Exception]:
        """
        Load several keys in the same tick.

        Returns:
            One entry per key: the value, or the exception for that key
        """
        return await asyncio.gather(*(self.load(key) for key in keys), return_exceptions=True)

    def _dispatch(self) -> None:
        if self._scheduled is not None:
            self._scheduled.cancel()
            self._scheduled = None
        if not self._queue:
            return

        batch = self._queue
        self._queue = []

        task = asyncio.get_running_loop().create_task(self._run_batch(batch))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_batch(self, batch: list[tuple[K, asyncio.Future]]) -> None:
        keys = [key for key, _ in batch]
        log_stage(logger, Stage.DISPATCH, "Dispatching batch", level="debug", batch_size=len(keys))

        try:
            results = await self._batch_fn(keys)
            if len(results) != len(keys):
                raise BatchSizeMismatchError(
                    "Batch function must return one result per key",
                    details={"keys": len(keys), "results": len(results)},
                )
        except asyncio.CancelledError:
            for _, future in batch:
                future.cancel()
            raise
        except Exception as e:
            # Propagate to every caller in the batch
            for _, future in batch:
                if not future.done():
                    future.set_exception(e)
            return

        for (_, future), result in zip(batch, results):
            if future.done():
                continue
            if isinstance(result, BaseException):
                future.set_exception(result)
            else:
                future.set_result(result)
