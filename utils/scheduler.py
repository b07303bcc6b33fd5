"""
Deferred Task Scheduling
Runs a coroutine once after a delay and hands back a cancellable handle
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger('RankedBot.Scheduler')


class ScheduledTask:
    """Handle on one deferred callback"""

    def __init__(self, name: str, delay: float):
        self.name = name
        self.delay = delay
        self.error: Optional[BaseException] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task is not None and self._task.cancelled()

    def cancel(self) -> bool:
        """Cancel the callback if it has not run yet"""
        if self._task is None or self._task.done():
            return False
        logger.info(f'Cancelling scheduled task {self.name}')
        return self._task.cancel()

    async def wait(self):
        """Wait for the callback to finish or be cancelled"""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise


class TaskScheduler:
    def __init__(self):
        self._pending: Set[ScheduledTask] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule(self, delay: float, callback: Callable[[], Awaitable[None]],
                 name: str = 'deferred') -> ScheduledTask:
        """
        Run callback once after delay seconds

        Errors raised by the callback are logged and kept on the handle,
        never re-raised and never retried.

        Args:
            delay: Seconds to wait before running
            callback: Coroutine function taking no arguments
            name: Label used in logs

        Returns:
            ScheduledTask handle
        """
        handle = ScheduledTask(name, delay)

        async def runner():
            await asyncio.sleep(delay)
            try:
                await callback()
            except Exception as e:
                handle.error = e
                logger.warning(f'Scheduled task {name} failed: {e}')

        handle._task = asyncio.get_running_loop().create_task(runner(), name=name)
        self._pending.add(handle)
        handle._task.add_done_callback(lambda _: self._pending.discard(handle))
        return handle

    def cancel_all(self) -> int:
        cancelled = 0
        for handle in list(self._pending):
            if handle.cancel():
                cancelled += 1
        return cancelled
