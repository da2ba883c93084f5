"""Tests for daynotes.core.scheduling module."""

import asyncio
import threading
import time

import pytest

from daynotes.core.autosave import AutoSaveController
from daynotes.core.scheduling import AsyncioScheduler, ThreadingScheduler


class TestThreadingScheduler:
    """Tests for the thread-based scheduler."""

    def test_runs_callback(self):
        """Callbacks run after the delay."""
        fired = threading.Event()

        ThreadingScheduler().schedule(0.01, fired.set)

        assert fired.wait(timeout=2.0)

    def test_cancel_prevents_callback(self):
        """Cancelled timers never run."""
        fired = threading.Event()

        task = ThreadingScheduler().schedule(0.2, fired.set)
        task.cancel()

        assert not fired.wait(timeout=0.4)

    def test_timers_are_daemons(self):
        """Pending timers do not keep the process alive."""
        task = ThreadingScheduler().schedule(10, lambda: None)
        try:
            assert task.daemon is True
        finally:
            task.cancel()

    def test_autosave_with_real_timers(self, memory_store):
        """Debounced writes land once the quiet period passes."""
        controller = AutoSaveController(
            memory_store, scheduler=ThreadingScheduler(), delay=0.05
        )
        controller.on_edit("2024-03-05", "a")
        controller.on_edit("2024-03-05", "b")

        for _ in range(100):
            if not controller.has_pending("2024-03-05"):
                break
            time.sleep(0.02)

        assert memory_store.get("2024-03-05") == "b"
        assert memory_store.writes == 1


class TestAsyncioScheduler:
    """Tests for the event-loop scheduler."""

    @pytest.mark.asyncio
    async def test_runs_callback(self):
        """Callbacks run on the running loop."""
        fired = asyncio.Event()

        AsyncioScheduler().schedule(0.01, fired.set)

        await asyncio.wait_for(fired.wait(), timeout=2.0)

    @pytest.mark.asyncio
    async def test_cancel_prevents_callback(self):
        """Cancelled handles never run."""
        calls = []

        handle = AsyncioScheduler().schedule(0.01, lambda: calls.append(1))
        handle.cancel()
        await asyncio.sleep(0.05)

        assert calls == []

    @pytest.mark.asyncio
    async def test_flush_beats_pending_timer(self, memory_store):
        """An explicit save on the loop supersedes the debounce."""
        controller = AutoSaveController(
            memory_store, scheduler=AsyncioScheduler(), delay=0.02
        )
        controller.on_edit("2024-03-05", "a")
        controller.flush("2024-03-05", "b")

        await asyncio.sleep(0.06)

        assert memory_store.get("2024-03-05") == "b"
        assert memory_store.writes == 1
