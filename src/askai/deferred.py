"""
Deferred result handle returned to the evaluation scheduler.

``AsyncObject`` wraps the coroutine that finishes an evaluation.  It is
returned from ``calculate`` before any I/O happens; whoever drives the
engine decides when and how the work runs:

- asyncio hosts ``await`` the handle (or call ``schedule()`` to start it as
  a task and attach callbacks)
- synchronous hosts call ``resolve()`` at their boundary, which runs the
  coroutine on a private event loop
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Generator, Optional

from askai.values import ArrayValue


class AsyncObject:
    """Placeholder for an ArrayValue that is still being computed.

    The wrapped awaitable runs at most once.  Errors raised by it (transport
    failures, malformed payloads) are re-raised to whoever awaits the handle.
    """

    def __init__(self, awaitable: Awaitable[ArrayValue]) -> None:
        self._awaitable = awaitable
        self._future: Optional[asyncio.Future] = None

    def schedule(self) -> asyncio.Future:
        """Start the work on the running event loop and return its future."""
        if self._future is None:
            self._future = asyncio.ensure_future(self._awaitable)
        return self._future

    def add_done_callback(self, callback: Callable[[asyncio.Future], Any]) -> None:
        self.schedule().add_done_callback(callback)

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def result(self) -> ArrayValue:
        """Result of a finished handle; raises if it is still pending or failed."""
        if self._future is None:
            raise asyncio.InvalidStateError("AsyncObject has not been scheduled")
        return self._future.result()

    def resolve(self) -> ArrayValue:
        """Run the work to completion from synchronous code.

        Must not be called while an event loop is running in this thread.
        """
        async def _wait() -> ArrayValue:
            return await self

        return asyncio.run(_wait())

    def __await__(self) -> Generator[Any, None, ArrayValue]:
        return self.schedule().__await__()

    def __repr__(self) -> str:
        state = "done" if self.done() else "pending"
        return f"AsyncObject({state})"
