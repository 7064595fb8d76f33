"""Simulated Latency — the fixed pause every remote-looking operation takes.

Invariants:
    - wait() suspends exactly once per call for delay_ms (skipped when 0)
    - The pause happens before any store access, so a store mutation never
      straddles a suspension point
    - run() finishes the pause and the operation even when the caller is
      cancelled while waiting; only the caller's await is abandoned
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")

Sleeper = Callable[[float], Awaitable[None]]


class SimulatedLatency:
    """Injectable delay. Tests build it with delay_ms=0 or a recording sleeper."""

    def __init__(self, delay_ms: int, sleep: Sleeper = asyncio.sleep):
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.delay_ms = delay_ms
        self._sleep = sleep
        self._in_flight: set[asyncio.Task] = set()

    @classmethod
    def none(cls) -> "SimulatedLatency":
        return cls(0)

    async def wait(self) -> None:
        if self.delay_ms:
            await self._sleep(self.delay_ms / 1000)

    async def run(self, operation: Callable[..., T], *args, **kwargs) -> T:
        """Pause, then call operation(*args, **kwargs) in a task the caller cannot cancel."""

        async def delayed() -> T:
            await self.wait()
            return operation(*args, **kwargs)

        task = asyncio.ensure_future(delayed())
        # the loop holds tasks weakly; keep abandoned ones alive until done
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return await asyncio.shield(task)

    async def drain(self) -> None:
        """Wait for every in-flight operation, including abandoned ones."""
        while self._in_flight:
            await asyncio.gather(*self._in_flight)
