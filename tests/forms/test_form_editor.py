"""Tests for FormEditor create/edit submissions."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from societyhub.forms import BUG_FORM, TASK_FORM, FormEditor
from societyhub.notifications import NotificationCenter, Severity
from societyhub.records import RecordList
from societyhub.records.models import BugIssue, Task
from societyhub.store import StoreError


@pytest.fixture
def store():
    store = AsyncMock()
    store.insert.side_effect = lambda table, fields: {"id": "srv-1", **fields}
    store.update.side_effect = lambda table, record_id, fields: {
        "id": record_id,
        "event_id": "e1",
        "title": "Old",
        **fields,
    }
    return store


@pytest.fixture
def center():
    return NotificationCenter()


class TestCreate:
    @pytest.mark.asyncio
    async def test_invalid_title_is_never_sent(self, store, center):
        editor = FormEditor(store, TASK_FORM, center, context={"event_id": "e1"})

        result = await editor.submit({"title": "a"})

        assert result is None
        assert editor.error_for("title") == "Task title must be at least 2 characters."
        store.insert.assert_not_called()
        assert editor.is_open
        assert center.messages() == []

    @pytest.mark.asyncio
    async def test_valid_create_appends_store_record(self, store, center):
        tasks = RecordList([Task(id="t1", event_id="e1", title="Existing")])
        editor = FormEditor(
            store, TASK_FORM, center, context={"event_id": "e1"}, on_created=tasks.add
        )

        result = await editor.submit({"title": "ab"})

        assert result.id == "srv-1"
        assert [t.id for t in tasks] == ["t1", "srv-1"]
        store.insert.assert_awaited_once()
        table, fields = store.insert.await_args.args
        assert table == "tasks"
        assert fields["event_id"] == "e1"
        assert fields["title"] == "ab"
        assert "id" not in fields
        assert center.messages(Severity.SUCCESS) == ["Task created successfully"]
        assert not editor.is_open
        assert editor.errors == []

    @pytest.mark.asyncio
    async def test_newest_first_list_gets_record_on_top(self, store, center):
        bugs = RecordList(
            [BugIssue(id="b1", title="Old", description="x" * 10, reported_by="Sara")],
            newest_first=True,
        )
        editor = FormEditor(store, BUG_FORM, center, on_created=bugs.add)

        await editor.submit(
            {"title": "Crash", "description": "Crashes on save every time", "reported_by": "Omar"}
        )

        assert [b.id for b in bugs] == ["srv-1", "b1"]
        assert center.messages() == ["Issue created successfully"]

    @pytest.mark.asyncio
    async def test_store_failure_keeps_values_and_form_open(self, store, center):
        store.insert.side_effect = StoreError("boom", status_code=500)
        created = []
        editor = FormEditor(store, TASK_FORM, center, context={"event_id": "e1"}, on_created=created.append)

        result = await editor.submit({"title": "Order snacks", "priority": "high"})

        assert result is None
        assert editor.values["title"] == "Order snacks"
        assert editor.values["priority"] == "high"
        assert editor.is_open
        assert not editor.pending
        assert created == []
        assert center.messages(Severity.ERROR) == ["Failed to save task"]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_logged_and_notified(self, store, center, caplog):
        store.insert.side_effect = RuntimeError("driver blew up")
        created = []
        editor = FormEditor(store, TASK_FORM, center, context={"event_id": "e1"}, on_created=created.append)

        result = await editor.submit({"title": "Order snacks"})

        assert result is None
        assert editor.is_open
        assert not editor.pending
        assert created == []
        assert center.messages(Severity.ERROR) == ["Failed to save task"]
        assert "Unexpected error saving task" in caplog.text

    @pytest.mark.asyncio
    async def test_malformed_store_reply_is_a_failed_save(self, store, center):
        store.insert.side_effect = None
        store.insert.return_value = {"id": "x1"}
        editor = FormEditor(store, TASK_FORM, center, context={"event_id": "e1"})

        result = await editor.submit({"title": "Order snacks"})

        assert result is None
        assert editor.record is None
        assert editor.is_open
        assert editor.values["title"] == "Order snacks"
        assert center.messages() == ["Failed to save task"]

    @pytest.mark.asyncio
    async def test_second_submit_while_pending_is_ignored(self, store, center):
        gate = asyncio.Event()

        async def slow_insert(table, fields):
            await gate.wait()
            return {"id": "srv-1", **fields}

        store.insert.side_effect = slow_insert
        editor = FormEditor(store, TASK_FORM, center, context={"event_id": "e1"})

        first = asyncio.create_task(editor.submit({"title": "ab"}))
        await asyncio.sleep(0)
        assert editor.pending

        assert await editor.submit() is None
        gate.set()
        assert (await first).id == "srv-1"
        assert store.insert.await_count == 1


class TestEdit:
    @pytest.mark.asyncio
    async def test_edit_prefills_and_updates(self, store, center):
        record = Task(id="t1", event_id="e1", title="Old", priority="low")
        replaced = []
        editor = FormEditor(store, TASK_FORM, center, record=record, on_updated=replaced.append)

        assert editor.is_edit
        assert editor.values["title"] == "Old"
        assert editor.values["priority"] == "low"

        editor.set(title="New title")
        result = await editor.submit()

        table, record_id, fields = store.update.await_args.args
        assert (table, record_id) == ("tasks", "t1")
        assert fields["title"] == "New title"
        assert result.title == "New title"
        assert replaced == [result]
        assert center.messages() == ["Task updated successfully"]
        store.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_defaults_prefill_new_form(self, store, center):
        editor = FormEditor(store, TASK_FORM, center)

        assert editor.values == {"status": "todo", "priority": "medium", "category": "general"}
        assert not editor.is_edit
