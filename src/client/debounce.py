"""Cancellable delayed task with a single outstanding handle."""

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class DelayedTask:
    """Run an async callback after a delay; rescheduling replaces the pending run.

    Once the delay has elapsed the running callback is detached from the handle,
    so cancel() and schedule() never interrupt work that has already started.
    Must be used from inside a running event loop.
    """

    def __init__(self):
        self._task: asyncio.Task | None = None
        self._running: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while a scheduled callback is still waiting for its delay."""
        return self._task is not None and not self._task.done()

    def schedule(self, delay: float, callback: Callable[[], Awaitable[object]]) -> None:
        self.cancel()
        task = asyncio.get_running_loop().create_task(self._run(delay, callback))
        self._task = task
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def wait_running(self) -> None:
        """Wait for callbacks that already started (not the pending one)."""
        started = [t for t in self._running if t is not self._task]
        if started:
            await asyncio.gather(*started, return_exceptions=True)

    async def _run(self, delay: float, callback: Callable[[], Awaitable[object]]) -> None:
        await asyncio.sleep(delay)
        self._task = None
        try:
            await callback()
        except Exception:
            # Nobody awaits this task; log instead of losing the traceback
            logger.exception("Delayed callback failed")
