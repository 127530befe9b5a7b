"""Tests for MeetingSession attendance and loading."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from societyhub.meetings import MeetingSession
from societyhub.notifications import NotificationCenter, Severity
from societyhub.records.detail import load_detail
from societyhub.records.models import Event
from societyhub.store import RecordNotFound, StoreError

MEETING = {
    "id": "m1",
    "title": "O-Week kickoff",
    "date": "2026-08-15T17:00:00",
    "location": "Society Room",
    "minutes": "Draft",
    "attendees": ["u1"],
}


@pytest.fixture
def store():
    store = AsyncMock()
    rows = {"m1": dict(MEETING)}

    async def get(table, record_id):
        if record_id not in rows:
            raise RecordNotFound(table, record_id)
        return dict(rows[record_id])

    async def update(table, record_id, fields):
        rows[record_id].update(fields)
        return dict(rows[record_id])

    store.get.side_effect = get
    store.update.side_effect = update
    store.rows = rows
    return store


@pytest.fixture
def center():
    return NotificationCenter()


class TestOpen:
    @pytest.mark.asyncio
    async def test_open_existing(self, store, center):
        session = await MeetingSession.open(store, "m1", center)

        assert not session.not_found
        assert session.attendees == ["u1"]
        assert session.minutes.saved == "Draft"

    @pytest.mark.asyncio
    async def test_open_missing_sets_not_found(self, store, center):
        session = await MeetingSession.open(store, "gone", center)

        assert session.not_found
        assert session.meeting is None
        assert session.attendees == []
        assert await session.toggle_attendance("u1") == []

    @pytest.mark.asyncio
    async def test_other_store_errors_propagate(self, store, center):
        store.get.side_effect = StoreError("down", status_code=503)

        with pytest.raises(StoreError):
            await MeetingSession.open(store, "m1", center)


class TestAttendance:
    @pytest.mark.asyncio
    async def test_toggle_adds_then_removes(self, store, center):
        session = await MeetingSession.open(store, "m1", center)

        assert await session.toggle_attendance("u2") == ["u1", "u2"]
        assert store.rows["m1"]["attendees"] == ["u1", "u2"]

        assert await session.toggle_attendance("u1") == ["u2"]
        assert store.update.await_args.args == ("meetings", "m1", {"attendees": ["u2"]})
        assert center.messages(Severity.INFO) == ["Attendance updated", "Attendance updated"]

    @pytest.mark.asyncio
    async def test_failed_toggle_restores_store_list(self, store, center):
        session = await MeetingSession.open(store, "m1", center)
        store.update.side_effect = StoreError("boom", status_code=500)

        attendees = await session.toggle_attendance("u2")

        assert attendees == ["u1"]
        assert center.messages(Severity.ERROR) == ["Failed to update attendance"]

    @pytest.mark.asyncio
    async def test_meeting_deleted_elsewhere(self, store, center):
        session = await MeetingSession.open(store, "m1", center)
        store.update.side_effect = RecordNotFound("meetings", "m1")
        del store.rows["m1"]

        assert await session.toggle_attendance("u2") == []
        assert session.not_found


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, store, center):
        session = await MeetingSession.open(store, "m1", center)

        assert await session.delete() is True

        store.delete.assert_awaited_once_with("meetings", "m1")
        assert session.meeting is None
        assert center.messages() == ["Meeting deleted successfully"]
        with pytest.raises(RuntimeError):
            session.minutes.edit("late")

    @pytest.mark.asyncio
    async def test_delete_failure(self, store, center):
        store.delete.side_effect = StoreError("boom")
        session = await MeetingSession.open(store, "m1", center)

        assert await session.delete() is False
        assert session.meeting is not None
        assert center.messages(Severity.ERROR) == ["Failed to delete meeting"]


class TestLoadDetail:
    @pytest.mark.asyncio
    async def test_found(self):
        store = AsyncMock()
        store.get.return_value = {"id": "e1", "name": "O-Week", "date_start": "2026-09-01"}

        detail = await load_detail(store, Event, "e1")

        assert detail.record.name == "O-Week"
        assert not detail.not_found
        store.get.assert_awaited_once_with("events", "e1")

    @pytest.mark.asyncio
    async def test_not_found(self):
        store = AsyncMock()
        store.get.side_effect = RecordNotFound("events", "e1")

        detail = await load_detail(store, Event, "e1")

        assert detail.not_found
        assert detail.record is None
