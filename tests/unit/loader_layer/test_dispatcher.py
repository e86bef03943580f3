"""
Unit Tests for the Batch Dispatcher

Tests per-tick coalescing, max_batch_size splitting, batch windows and
error propagation.
"""

import asyncio

import pytest

from redis_dataloader.core.exceptions import BatchSizeMismatchError
from redis_dataloader.loader.dispatcher import BatchDispatcher


class EchoBatch:
    """Batch function returning each key doubled, recording batches."""

    def __init__(self):
        self.batches = []

    async def __call__(self, keys):
        self.batches.append(list(keys))
        return [key * 2 for key in keys]


@pytest.mark.unit
class TestBatchDispatcher:
    """Test coalescing of load() calls."""

    @pytest.mark.asyncio
    async def test_same_tick_loads_share_a_batch(self):
        echo = EchoBatch()
        dispatcher = BatchDispatcher(echo)

        results = await asyncio.gather(dispatcher.load(1), dispatcher.load(2), dispatcher.load(1))

        assert results == [2, 4, 2]
        assert echo.batches == [[1, 2, 1]]

    @pytest.mark.asyncio
    async def test_sequential_loads_get_separate_batches(self):
        echo = EchoBatch()
        dispatcher = BatchDispatcher(echo)

        await dispatcher.load(1)
        await dispatcher.load(2)

        assert echo.batches == [[1], [2]]

    @pytest.mark.asyncio
    async def test_max_batch_size_splits(self):
        """Test that a full queue dispatches immediately."""
        echo = EchoBatch()
        dispatcher = BatchDispatcher(echo, max_batch_size=2)

        results = await dispatcher.load_many([1, 2, 3, 4, 5])

        assert results == [2, 4, 6, 8, 10]
        assert echo.batches == [[1, 2], [3, 4], [5]]

    def test_invalid_max_batch_size(self):
        with pytest.raises(ValueError):
            BatchDispatcher(EchoBatch(), max_batch_size=0)

    @pytest.mark.asyncio
    async def test_batch_window_collects_later_loads(self):
        """Test that loads within the window join the pending batch."""
        echo = EchoBatch()
        dispatcher = BatchDispatcher(echo, batch_window=0.05)

        async def late_load():
            await asyncio.sleep(0.01)
            return await dispatcher.load(2)

        results = await asyncio.gather(dispatcher.load(1), late_load())

        assert results == [2, 4]
        assert echo.batches == [[1, 2]]

    @pytest.mark.asyncio
    async def test_pending_counts_queued_keys(self):
        dispatcher = BatchDispatcher(EchoBatch(), batch_window=0.01)

        task = asyncio.ensure_future(dispatcher.load(1))
        await asyncio.sleep(0)
        assert dispatcher.pending == 1

        assert await task == 2
        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_exception_results_reject_only_their_key(self):
        async def mixed(keys):
            return [ValueError(f"bad {key}") if key < 0 else key for key in keys]

        dispatcher = BatchDispatcher(mixed)

        results = await dispatcher.load_many([1, -1, 2])

        assert results[0] == 1
        assert isinstance(results[1], ValueError)
        assert results[2] == 2

    @pytest.mark.asyncio
    async def test_raising_batch_fn_rejects_every_key(self):
        async def broken(keys):
            raise ConnectionError("down")

        dispatcher = BatchDispatcher(broken)

        results = await dispatcher.load_many([1, 2])

        assert all(isinstance(result, ConnectionError) for result in results)

    @pytest.mark.asyncio
    async def test_length_mismatch_rejects_every_key(self):
        async def short(keys):
            return keys[:1]

        dispatcher = BatchDispatcher(short)

        with pytest.raises(BatchSizeMismatchError):
            await asyncio.gather(dispatcher.load(1), dispatcher.load(2))

    @pytest.mark.asyncio
    async def test_cancelled_batch_cancels_waiting_loads(self):
        """Test that cancelling an in-flight batch does not leave callers hanging."""
        started = asyncio.Event()

        async def stuck(keys):
            started.set()
            await asyncio.Event().wait()

        dispatcher = BatchDispatcher(stuck)
        loads = [asyncio.ensure_future(dispatcher.load(key)) for key in (1, 2)]

        await started.wait()
        for task in list(dispatcher._tasks):
            task.cancel()

        results = await asyncio.wait_for(asyncio.gather(*loads, return_exceptions=True), timeout=1)

        assert all(isinstance(result, asyncio.CancelledError) for result in results)
