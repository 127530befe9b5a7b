"""Meeting detail page state."""

from __future__ import annotations

import asyncio
import logging

from ..notifications import Notifier, Severity
from ..records.detail import load_detail
from ..records.models import Meeting
from ..store import RecordStore, StoreError
from .autosave import DEFAULT_DELAY, MinutesAutosave

logger = logging.getLogger(__name__)


class MeetingSession:
    """One open meeting: its record, minutes autosave and attendance list.

    ``not_found`` is set instead of raising when the meeting no longer exists.
    """

    def __init__(
        self,
        store: RecordStore,
        notifier: Notifier,
        meeting: Meeting | None,
        delay: float = DEFAULT_DELAY,
    ):
        self.store = store
        self.notifier = notifier
        self.meeting = meeting
        self.not_found = meeting is None
        self.minutes: MinutesAutosave | None = None
        if meeting is not None:
            self.minutes = MinutesAutosave(
                store, meeting.id, notifier, saved=meeting.minutes, delay=delay
            )
        self._attendance_lock = asyncio.Lock()

    @classmethod
    async def open(
        cls,
        store: RecordStore,
        meeting_id: str,
        notifier: Notifier,
        delay: float = DEFAULT_DELAY,
    ) -> MeetingSession:
        detail = await load_detail(store, Meeting, meeting_id)
        return cls(store, notifier, detail.record, delay=delay)

    @property
    def attendees(self) -> list[str]:
        return list(self.meeting.attendees) if self.meeting else []

    async def reload(self) -> bool:
        if self.meeting is None:
            return False
        detail = await load_detail(self.store, Meeting, self.meeting.id)
        if detail.not_found:
            self.meeting = None
            self.not_found = True
            return False
        self.meeting = detail.record
        return True

    async def toggle_attendance(self, member_id: str) -> list[str]:
        """Add or remove ``member_id`` optimistically, then persist the whole list."""
        if self.meeting is None:
            return []

        async with self._attendance_lock:
            current = self.attendees
            if member_id in current:
                updated = [m for m in current if m != member_id]
            else:
                updated = [*current, member_id]
            self.meeting = self.meeting.model_copy(update={"attendees": updated})

            try:
                await self.store.update(Meeting.table, self.meeting.id, {"attendees": updated})
            except StoreError as e:
                logger.warning("Attendance update for %s failed: %s", self.meeting.id, e.message)
                self.notifier.notify("Failed to update attendance", Severity.ERROR)
                try:
                    await self.reload()
                except StoreError:
                    logger.warning("Reload of meeting %s failed", self.meeting.id)
                return self.attendees

        self.notifier.notify("Attendance updated", Severity.INFO)
        return self.attendees

    async def delete(self) -> bool:
        if self.meeting is None:
            return False
        try:
            await self.store.delete(Meeting.table, self.meeting.id)
        except StoreError as e:
            logger.warning("Delete of meeting %s failed: %s", self.meeting.id, e.message)
            self.notifier.notify("Failed to delete meeting", Severity.ERROR)
            return False

        await self.close()
        self.meeting = None
        self.notifier.notify("Meeting deleted successfully", Severity.SUCCESS)
        return True

    async def close(self) -> None:
        if self.minutes is not None:
            await self.minutes.close()
