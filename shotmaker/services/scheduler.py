"""Cancellable repeating tasks on the asyncio event loop.

Each animated sequence of the wizard (agent log, typewriter reveal, export
progress) owns one ScheduledTask. The owner cancels it on teardown so no tick
can mutate state after the step or component is gone.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# A tick callback returns False to stop the schedule; anything else continues.
TickCallback = Callable[[], Optional[bool]]


class ScheduledTask:
    """Handle for a callback that runs every `interval` seconds."""

    def __init__(self, name: str, interval: float, callback: TickCallback):
        self.name = name
        self.interval = interval
        self._callback = callback
        self._task: Optional[asyncio.Task] = None
        self._cancelled = False

    def start(self) -> "ScheduledTask":
        """Start ticking on the running loop."""
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(
                self._run(), name=self.name
            )
        return self

    async def _run(self) -> None:
        while not self._cancelled:
            await asyncio.sleep(self.interval)
            if self._cancelled:
                break
            if self._callback() is False:
                break
        logger.debug(f"Scheduled task '{self.name}' finished")

    def cancel(self) -> None:
        """Stop the schedule. Safe to call repeatedly or after completion."""
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    async def wait(self) -> None:
        """Wait until the schedule finishes or is cancelled."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._cancelled:
                raise


def schedule_every(name: str, interval: float, callback: TickCallback) -> ScheduledTask:
    """Create and start a repeating task on the running loop."""
    return ScheduledTask(name, interval, callback).start()


class TaskGroup:
    """The set of scheduled tasks owned by one step or component."""

    def __init__(self):
        self._tasks: dict[str, ScheduledTask] = {}

    def every(self, name: str, interval: float, callback: TickCallback) -> ScheduledTask:
        """Start a named schedule, replacing (and cancelling) one with the same name."""
        self.cancel(name)
        handle = schedule_every(name, interval, callback)
        self._tasks[name] = handle
        return handle

    def get(self, name: str) -> Optional[ScheduledTask]:
        return self._tasks.get(name)

    def cancel(self, name: str) -> None:
        handle = self._tasks.pop(name, None)
        if handle is not None:
            handle.cancel()

    def cancel_all(self) -> None:
        for name in list(self._tasks):
            self.cancel(name)

    @property
    def active(self) -> bool:
        """True while any owned schedule is still running."""
        return any(not handle.done and not handle.cancelled for handle in self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)
