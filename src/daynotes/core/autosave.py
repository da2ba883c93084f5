"""Debounced auto-save for notes being edited.

Edits are buffered per date key and written once the editor has been quiet
for the debounce delay. An explicit save flushes the buffer immediately and
cancels the timer, so a late timer can never overwrite a newer save.

Every armed timer carries a generation number. A timer whose generation is
no longer the current one for its key does nothing when it fires, which
covers timers that were cancelled too late to stop.
"""

import logging
from dataclasses import dataclass
from threading import RLock

from daynotes.core.config import AUTOSAVE_DEBOUNCE_SECONDS
from daynotes.core.scheduling import ScheduledTask, Scheduler, ThreadingScheduler
from daynotes.storage.note_store import NoteStore, PersistenceError, validate_key

logger = logging.getLogger(__name__)


def _check_body(body: object) -> None:
    if not isinstance(body, str):
        raise TypeError(f"Note body must be str, got {type(body).__name__}")


@dataclass
class PendingEdit:
    """Latest unsaved body for a key and the timer that will write it."""

    body: str
    generation: int
    task: ScheduledTask | None = None


class AutoSaveController:
    """Coalesces rapid edits into single NoteStore writes."""

    def __init__(
        self,
        store: NoteStore,
        scheduler: Scheduler | None = None,
        delay: float | None = None,
    ):
        """
        Initialize auto-save controller.

        Args:
            store: Store that receives the writes
            scheduler: Timer source (defaults to ThreadingScheduler)
            delay: Debounce delay in seconds (defaults to AUTOSAVE_DEBOUNCE_SECONDS)
        """
        self.store = store
        self.scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self.delay = AUTOSAVE_DEBOUNCE_SECONDS if delay is None else delay
        if self.delay <= 0:
            raise ValueError(f"Debounce delay must be positive, got {self.delay}")
        self._pending: dict[str, PendingEdit] = {}
        self._generation = 0
        self._lock = RLock()

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def on_edit(self, key: str, body: str) -> None:
        """
        Record the latest body for key and re-arm its debounce timer.

        Any timer already armed for key is cancelled first, so at most one
        write is pending per key.
        """
        validate_key(key)
        _check_body(body)
        with self._lock:
            current = self._pending.get(key)
            if current is not None and current.task is not None:
                current.task.cancel()

            generation = self._next_generation()
            edit = PendingEdit(body=body, generation=generation)
            self._pending[key] = edit
            edit.task = self.scheduler.schedule(
                self.delay, lambda: self._on_timer(key, generation)
            )
            logger.debug("Auto-save armed for %s (generation %d)", key, generation)

    def _on_timer(self, key: str, generation: int) -> None:
        with self._lock:
            edit = self._pending.get(key)
            if edit is None or edit.generation != generation:
                logger.debug("Ignoring stale auto-save timer for %s", key)
                return
            edit.task = None

            try:
                stored = self.store.get(key) or ""
                if stored == edit.body:
                    logger.debug("Auto-save skipped for %s, no changes", key)
                else:
                    self.store.set(key, edit.body)
                    logger.debug("Auto-saved note %s", key)
            except PersistenceError:
                # Body stays pending for the next edit or flush
                logger.error("Auto-save failed for %s", key, exc_info=True)
                return

            del self._pending[key]

    def flush(self, key: str, body: str | None = None) -> bool:
        """
        Write the latest body for key now and cancel its timer.

        Args:
            key: Date key to save
            body: Body to record before writing (explicit save of editor text)

        Returns:
            True if a write happened, False if nothing was pending

        Raises:
            PersistenceError: If the write failed; the body stays pending
        """
        validate_key(key)
        if body is not None:
            _check_body(body)
        with self._lock:
            edit = self._pending.get(key)
            if edit is not None and edit.task is not None:
                edit.task.cancel()

            if body is not None:
                edit = PendingEdit(body=body, generation=0)
            if edit is None:
                return False

            # Invalidates any timer that escaped cancellation
            edit.generation = self._next_generation()
            edit.task = None
            self._pending[key] = edit

            self.store.set(key, edit.body)
            del self._pending[key]
            logger.info("Saved note %s (%d chars)", key, len(edit.body))
            return True

    def close(self, key: str) -> bool:
        """Tear down the edit session for key, saving anything pending."""
        return self.flush(key)

    def discard(self, key: str) -> bool:
        """
        Drop the pending body for key without writing it.

        Returns:
            True if there was something to drop
        """
        with self._lock:
            edit = self._pending.pop(key, None)
            if edit is None:
                return False
            if edit.task is not None:
                edit.task.cancel()
            logger.debug("Discarded unsaved edit for %s", key)
            return True

    def close_all(self) -> None:
        """
        Flush every pending key.

        Raises:
            PersistenceError: If any key could not be saved; the others are
                still attempted
        """
        failed: list[str] = []
        first_error: PersistenceError | None = None
        for key in self.pending_keys():
            try:
                self.flush(key)
            except PersistenceError as e:
                failed.append(key)
                first_error = first_error or e
        if first_error is not None:
            raise PersistenceError(
                f"Failed to save notes: {', '.join(failed)}"
            ) from first_error

    def has_pending(self, key: str) -> bool:
        with self._lock:
            return key in self._pending

    def pending_body(self, key: str) -> str | None:
        with self._lock:
            edit = self._pending.get(key)
            return edit.body if edit is not None else None

    def pending_keys(self) -> list[str]:
        with self._lock:
            return sorted(self._pending)
