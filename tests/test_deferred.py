"""Unit tests for the AsyncObject deferred handle."""

import asyncio

import pytest

from askai.deferred import AsyncObject
from askai.values import ArrayValue


async def _produce(value, delay=0):
    await asyncio.sleep(delay)
    return value


async def _fail():
    raise RuntimeError("boom")


class TestAsyncObject:

    @pytest.mark.asyncio
    async def test_await_returns_value(self):
        array = ArrayValue([["x"]])
        assert await AsyncObject(_produce(array)) is array

    @pytest.mark.asyncio
    async def test_pending_until_scheduled_and_finished(self):
        handle = AsyncObject(_produce(ArrayValue([["x"]]), delay=0.01))
        assert not handle.done()
        handle.schedule()
        assert not handle.done()
        await handle
        assert handle.done()
        assert handle.result() == ArrayValue([["x"]])

    @pytest.mark.asyncio
    async def test_awaiting_twice_runs_once(self):
        calls = []

        async def work():
            calls.append(1)
            return ArrayValue([["once"]])

        handle = AsyncObject(work())
        first = await handle
        second = await handle
        assert first is second
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_done_callback(self):
        seen = []
        handle = AsyncObject(_produce(ArrayValue([["cb"]])))
        handle.add_done_callback(lambda fut: seen.append(fut.result()))
        await handle
        await asyncio.sleep(0)
        assert seen == [ArrayValue([["cb"]])]

    @pytest.mark.asyncio
    async def test_failure_propagates(self):
        with pytest.raises(RuntimeError, match="boom"):
            await AsyncObject(_fail())

    def test_result_before_schedule(self):
        coro = _produce(ArrayValue([]))
        handle = AsyncObject(coro)
        with pytest.raises(asyncio.InvalidStateError):
            handle.result()
        coro.close()

    def test_resolve_from_sync_code(self):
        assert AsyncObject(_produce(ArrayValue([["sync"]]))).resolve() == ArrayValue([["sync"]])

    def test_repr(self):
        coro = _produce(ArrayValue([]))
        assert repr(AsyncObject(coro)) == "AsyncObject(pending)"
        coro.close()
