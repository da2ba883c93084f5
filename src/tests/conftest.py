"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from daynotes.core.autosave import AutoSaveController
from daynotes.core.notebook import NoteBook
from daynotes.storage import InMemoryNoteStore, SqliteNoteStore


class ManualTask:
    """Scheduled callback driven by ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        """Run the callback regardless of cancellation (a late timer)."""
        self.fired = True
        self.callback()


class ManualScheduler:
    """Deterministic scheduler with a controllable clock."""

    def __init__(self):
        self.now = 0.0
        self.tasks: list[ManualTask] = []

    def schedule(self, delay: float, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(self.now + delay, callback)
        self.tasks.append(task)
        return task

    @property
    def active(self) -> list[ManualTask]:
        return [t for t in self.tasks if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every active task that falls due."""
        self.now += seconds
        due = sorted(
            (t for t in self.active if t.due <= self.now), key=lambda t: t.due
        )
        for task in due:
            if not task.cancelled:
                task.fire()


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def db_path(tmp_path):
    """Path for a temporary notes database."""
    return tmp_path / "daynotes.db"


@pytest.fixture
def sqlite_store(db_path):
    """SQLite note store in a temp directory."""
    store = SqliteNoteStore(db_path=db_path)
    yield store
    store.close()


@pytest.fixture
def memory_store():
    """In-memory note store."""
    return InMemoryNoteStore()


@pytest.fixture(params=["sqlite", "memory"])
def store(request, db_path):
    """Each NoteStore implementation in turn."""
    if request.param == "memory":
        yield InMemoryNoteStore()
        return
    sqlite = SqliteNoteStore(db_path=db_path)
    yield sqlite
    sqlite.close()


@pytest.fixture
def scheduler():
    """Manual scheduler with a controllable clock."""
    return ManualScheduler()


@pytest.fixture
def controller(memory_store, scheduler):
    """Auto-save controller with a 1 second debounce on the memory store."""
    return AutoSaveController(memory_store, scheduler=scheduler, delay=1.0)


@pytest.fixture
def notebook(memory_store, controller):
    """NoteBook over the memory store and manual scheduler."""
    return NoteBook(store=memory_store, autosave=controller)


@pytest.fixture
def sample_snapshot():
    """Sample (date key, body) pairs."""
    return [
        ("2024-03-05", "Met with team about roadmap"),
        ("2024-03-06", "Roadmap review continued"),
        ("2024-02-28", "Quarterly planning notes"),
        ("2024-03-07", ""),
    ]
