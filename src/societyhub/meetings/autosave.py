"""Debounced autosave for meeting minutes.

Every edit replaces the buffer and restarts an idle timer. When the timer
runs out the buffer is written to the store, unless it equals the last value
the store confirmed. Commits never overlap.
"""

from __future__ import annotations

import asyncio
import logging

from ..notifications import Notifier, Severity
from ..records.models import Meeting
from ..store import RecordStore, StoreError

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 1.0


class MinutesAutosave:
    """Edit buffer for one meeting's minutes."""

    def __init__(
        self,
        store: RecordStore,
        meeting_id: str,
        notifier: Notifier,
        *,
        saved: str | None = None,
        delay: float = DEFAULT_DELAY,
    ):
        self.store = store
        self.meeting_id = meeting_id
        self.notifier = notifier
        self.delay = delay
        self.saved = saved or ""  # last value the store confirmed
        self.buffer = self.saved
        self.saving = False
        self._closed = False
        self._timer: asyncio.Task[None] | None = None
        self._committing: asyncio.Task[None] | None = None
        self._lock = asyncio.Lock()

    @property
    def dirty(self) -> bool:
        return self.buffer != self.saved

    def edit(self, text: str) -> None:
        """Record a keystroke: replace the buffer and restart the idle timer."""
        if self._closed:
            raise RuntimeError("Autosave is closed")
        self.buffer = text
        self._cancel_timer()
        self._timer = asyncio.create_task(self._debounce())

    async def flush(self) -> bool:
        """Commit pending edits now instead of waiting for the timer."""
        self._cancel_timer()
        return await self._commit(explicit=False)

    async def save_now(self) -> bool:
        """The explicit save button: always writes and confirms with a toast."""
        self._cancel_timer()
        return await self._commit(explicit=True)

    async def wait_idle(self) -> None:
        """Wait for the current timer (and the commit it triggers) to finish."""
        while self._timer is not None and not self._timer.done():
            await asyncio.gather(self._timer, return_exceptions=True)

    async def close(self) -> None:
        """Drop pending edits; nothing more is written or announced."""
        self._closed = True
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        # A timer that already started committing runs to completion
        timer = self._timer
        if timer is not None and timer is not self._committing and not timer.done():
            timer.cancel()

    async def _debounce(self) -> None:
        await asyncio.sleep(self.delay)
        self._committing = asyncio.current_task()
        try:
            await self._commit(explicit=False)
        finally:
            if self._committing is asyncio.current_task():
                self._committing = None

    async def _commit(self, explicit: bool) -> bool:
        async with self._lock:
            if self._closed:
                return False
            text = self.buffer
            if not explicit and text == self.saved:
                return True

            self.saving = True
            try:
                await self.store.update(Meeting.table, self.meeting_id, {"minutes": text})
            except StoreError as e:
                logger.warning("Saving minutes of %s failed: %s", self.meeting_id, e.message)
                if not self._closed:
                    message = "Failed to save minutes" if explicit else "Failed to auto-save minutes"
                    self.notifier.notify(message, Severity.ERROR)
                return False
            finally:
                self.saving = False

            self.saved = text
            if explicit and not self._closed:
                self.notifier.notify("Minutes saved successfully", Severity.SUCCESS)
            return True
