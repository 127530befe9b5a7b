"""Tests for the board reducer."""

from __future__ import annotations

import pytest

from societyhub.board import (
    TASK_BOARD,
    AddRecord,
    BoardState,
    MoveRecord,
    Reconcile,
    RemoveRecord,
    ReplaceRecord,
    SetRecords,
    reduce,
)
from societyhub.records import DuplicateRecordError
from societyhub.records.models import Task


def task(task_id: str, status: str = "todo", **fields) -> Task:
    return Task(id=task_id, event_id="e1", title=fields.pop("title", task_id), status=status, **fields)


def ids(state: BoardState) -> list[str]:
    return [r.id for r in state.records]


def statuses(state: BoardState) -> dict[str, str]:
    return {r.id: r.status for r in state.records}


class TestMoveRecord:
    def test_move_into_empty_column_changes_status_in_place(self):
        state = BoardState.of([task("t1"), task("t2")])

        after = reduce(state, MoveRecord("t1", "todo", 0, "in_progress", 0))

        assert ids(after) == ["t1", "t2"]
        assert statuses(after) == {"t1": "in_progress", "t2": "todo"}

    def test_drop_outside_any_column_returns_same_state(self):
        state = BoardState.of([task("t1"), task("t2")])

        after = reduce(state, MoveRecord("t1", "todo", 0, None, 0))

        assert after is state

    def test_drop_on_own_slot_returns_same_state(self):
        state = BoardState.of([task("t1"), task("t2")])

        after = reduce(state, MoveRecord("t2", "todo", 1, "todo", 1))

        assert after is state

    def test_move_before_existing_record_in_destination(self):
        state = BoardState.of([task("t1"), task("t2", "in_progress"), task("t3", "in_progress")])

        after = reduce(state, MoveRecord("t1", "todo", 0, "in_progress", 1))

        assert after.column("in_progress")[1].id == "t1"
        assert [r.id for r in after.column("in_progress")] == ["t2", "t1", "t3"]

    def test_index_past_end_appends_to_column(self):
        state = BoardState.of([task("t1"), task("t2", "completed"), task("t3")])

        after = reduce(state, MoveRecord("t1", "todo", 0, "completed", 99))

        assert [r.id for r in after.column("completed")] == ["t2", "t1"]
        assert [r.id for r in after.column("todo")] == ["t3"]

    def test_reorder_within_column_keeps_status(self):
        state = BoardState.of([task("t1"), task("t2"), task("t3")])

        after = reduce(state, MoveRecord("t3", "todo", 2, "todo", 0))

        assert [r.id for r in after.column("todo")] == ["t3", "t1", "t2"]
        assert all(r.status == "todo" for r in after.records)

    def test_move_of_missing_record_is_ignored(self):
        state = BoardState.of([task("t1")])

        after = reduce(state, MoveRecord("gone", "todo", 0, "completed", 0))

        assert after is state

    def test_move_keeps_other_fields(self):
        state = BoardState.of([task("t1", title="Book sound system", priority="high")])

        after = reduce(state, MoveRecord("t1", "todo", 0, "completed", 0))

        moved = after.get("t1")
        assert moved.title == "Book sound system"
        assert moved.priority == "high"
        assert moved.status == "completed"

    def test_original_state_is_not_mutated(self):
        state = BoardState.of([task("t1"), task("t2")])

        reduce(state, MoveRecord("t1", "todo", 0, "completed", 0))

        assert statuses(state) == {"t1": "todo", "t2": "todo"}

    def test_every_record_stays_in_exactly_one_column(self):
        state = BoardState.of([task(f"t{i}", s) for i, s in enumerate(["todo", "todo", "in_progress", "completed"])])

        after = reduce(state, MoveRecord("t0", "todo", 0, "completed", 0))
        after = reduce(after, MoveRecord("t2", "in_progress", 0, "todo", 5))

        per_column = [r.id for status in TASK_BOARD.statuses for r in after.column(status)]
        assert sorted(per_column) == sorted(ids(state))
        assert len(per_column) == len(set(per_column))


class TestMoveRecordFlags:
    def test_changes_status(self):
        assert MoveRecord("t1", "todo", 0, "completed").changes_status
        assert not MoveRecord("t1", "todo", 0, "todo", 1).changes_status
        assert not MoveRecord("t1", "todo", 0, None).changes_status

    def test_is_noop(self):
        assert MoveRecord("t1", "todo", 0, None).is_noop
        assert MoveRecord("t1", "todo", 3, "todo", 3).is_noop
        assert not MoveRecord("t1", "todo", 3, "todo", 0).is_noop


class TestOtherActions:
    def test_set_records_replaces_everything(self):
        state = BoardState.of([task("t1")])

        after = reduce(state, SetRecords((task("t2"), task("t3"))))

        assert ids(after) == ["t2", "t3"]

    def test_reconcile_equals_fresh_list(self):
        state = reduce(BoardState.of([task("t1"), task("t2")]), MoveRecord("t1", "todo", 0, "completed", 0))
        fresh = (task("t1"), task("t2"))

        after = reduce(state, Reconcile(fresh))

        assert after == BoardState.of(fresh)

    def test_set_records_rejects_duplicate_ids(self):
        with pytest.raises(DuplicateRecordError):
            reduce(BoardState(), SetRecords((task("t1"), task("t1"))))

    def test_add_appends(self):
        state = BoardState.of([task("t1")])

        after = reduce(state, AddRecord(task("t2")))

        assert ids(after) == ["t1", "t2"]

    def test_add_duplicate_raises(self):
        with pytest.raises(DuplicateRecordError):
            reduce(BoardState.of([task("t1")]), AddRecord(task("t1")))

    def test_replace_swaps_in_place(self):
        state = BoardState.of([task("t1"), task("t2")])

        after = reduce(state, ReplaceRecord(task("t1", "completed", title="Renamed")))

        assert ids(after) == ["t1", "t2"]
        assert after.get("t1").title == "Renamed"

    def test_replace_unknown_is_ignored(self):
        state = BoardState.of([task("t1")])

        assert reduce(state, ReplaceRecord(task("t9"))) is state

    def test_remove(self):
        state = BoardState.of([task("t1"), task("t2")])

        after = reduce(state, RemoveRecord("t1"))

        assert ids(after) == ["t2"]
        assert reduce(after, RemoveRecord("t1")) is after

    def test_unknown_action_raises(self):
        with pytest.raises(TypeError):
            reduce(BoardState(), object())


class TestBoardState:
    def test_column_with_predicate_filters_view(self):
        state = BoardState.of([task("t1", priority="high"), task("t2", priority="low")])

        high = state.column("todo", lambda r: r.priority == "high")

        assert [r.id for r in high] == ["t1"]
        assert len(state) == 2

    def test_index_of_missing(self):
        assert BoardState().index_of("t1") == -1
        assert BoardState().get("t1") is None
