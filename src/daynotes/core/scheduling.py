"""Cancellable delayed tasks for the auto-save debounce."""

import asyncio
import threading
from collections.abc import Callable
from typing import Protocol


class ScheduledTask(Protocol):
    """Handle for a pending callback."""

    def cancel(self) -> None:
        """Prevent the callback from running if it has not started yet."""
        ...


class Scheduler(Protocol):
    """Runs a callback once after a delay."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """Arm callback to run after delay seconds."""
        ...


class ThreadingScheduler:
    """Scheduler using daemon ``threading.Timer`` threads."""

    def __init__(self, name: str = "daynotes-autosave"):
        self.name = name

    def schedule(
        self, delay: float, callback: Callable[[], None]
    ) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.name = self.name
        timer.start()
        return timer


class AsyncioScheduler:
    """Scheduler using an asyncio event loop's ``call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """
        Initialize scheduler.

        Args:
            loop: Event loop to schedule on (defaults to the running loop)
        """
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)
