"""Tests for record models and collection helpers."""

from __future__ import annotations

import pytest

from societyhub.records import DuplicateRecordError, RecordList
from societyhub.records.collection import (
    append_record,
    ensure_unique,
    prepend_record,
    remove_record,
    replace_record,
)
from societyhub.records.models import Meeting, Task, model_for


def task(task_id: str, title: str | None = None) -> Task:
    return Task(id=task_id, event_id="e1", title=title or task_id)


class TestModels:
    def test_extra_columns_are_kept(self):
        record = Task.from_row({"id": "t1", "event_id": "e1", "title": "x", "sprint": 3})

        assert record.to_row()["sprint"] == 3

    def test_enum_values_are_plain_strings(self):
        record = Task.from_row({"id": "t1", "event_id": "e1", "title": "x", "status": "completed"})

        assert record.to_row()["status"] == "completed"

    def test_meeting_attendees_default_empty(self):
        meeting = Meeting(id="m1", title="Kickoff", date="2026-08-15")

        assert meeting.attendees == []

    def test_model_for(self):
        assert model_for("tasks") is Task
        with pytest.raises(ValueError):
            model_for("users")


class TestCollectionHelpers:
    def test_ensure_unique(self):
        assert [r.id for r in ensure_unique([task("a"), task("b")])] == ["a", "b"]
        with pytest.raises(DuplicateRecordError):
            ensure_unique([task("a"), task("a")])

    def test_append_and_prepend(self):
        records = (task("a"),)

        assert [r.id for r in append_record(records, task("b"))] == ["a", "b"]
        assert [r.id for r in prepend_record(records, task("b"))] == ["b", "a"]
        with pytest.raises(DuplicateRecordError):
            append_record(records, task("a"))

    def test_replace_and_remove(self):
        records = (task("a"), task("b"))

        replaced = replace_record(records, task("a", "Renamed"))

        assert [r.title for r in replaced] == ["Renamed", "b"]
        assert [r.id for r in remove_record(records, "a")] == ["b"]
        assert records[0].title == "a"


class TestRecordList:
    def test_add_appends_by_default(self):
        items = RecordList([task("a")])

        items.add(task("b"))

        assert [r.id for r in items] == ["a", "b"]
        assert len(items) == 2

    def test_newest_first(self):
        items = RecordList([task("a")], newest_first=True)

        items.add(task("b"))

        assert [r.id for r in items] == ["b", "a"]

    def test_replace_and_remove(self):
        items = RecordList([task("a"), task("b")])

        items.replace(task("b", "Renamed"))
        items.remove("a")

        assert [r.title for r in items] == ["Renamed"]
