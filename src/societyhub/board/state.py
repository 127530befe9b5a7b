"""Board state and the reducer that drives it.

Board state is an immutable, ordered tuple of status records. Every change
goes through ``reduce(state, action)``, which returns a new state (or the
very same object when the action changes nothing).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from ..records.collection import (
    append_record,
    ensure_unique,
    remove_record,
    replace_record,
)
from ..records.models import StatusRecord


@dataclass(frozen=True)
class BoardState:
    records: tuple[StatusRecord, ...] = ()

    @classmethod
    def of(cls, records: Iterable[StatusRecord]) -> BoardState:
        """Build a state, rejecting duplicate ids."""
        return cls(ensure_unique(records))

    def get(self, record_id: str) -> StatusRecord | None:
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def index_of(self, record_id: str) -> int:
        for i, record in enumerate(self.records):
            if record.id == record_id:
                return i
        return -1

    def column(
        self,
        status: str,
        predicate: Callable[[StatusRecord], bool] | None = None,
    ) -> list[StatusRecord]:
        """Records in ``status``, in display order."""
        return [
            r for r in self.records if r.status == status and (predicate is None or predicate(r))
        ]

    def __len__(self) -> int:
        return len(self.records)


# --- Actions ---


@dataclass(frozen=True)
class MoveRecord:
    """A drop of one record from a source slot onto a destination slot.

    ``destination_status`` is None when the drop landed outside every column.
    """

    record_id: str
    source_status: str
    source_index: int
    destination_status: str | None
    destination_index: int = 0

    @property
    def changes_status(self) -> bool:
        return (
            self.destination_status is not None
            and self.destination_status != self.source_status
        )

    @property
    def is_noop(self) -> bool:
        return self.destination_status is None or (
            self.destination_status == self.source_status
            and self.destination_index == self.source_index
        )


@dataclass(frozen=True)
class SetRecords:
    """Replace the whole state with a freshly loaded list."""

    records: tuple[StatusRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Reconcile:
    """Discard local state in favor of an authoritative reload."""

    records: tuple[StatusRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AddRecord:
    record: StatusRecord


@dataclass(frozen=True)
class ReplaceRecord:
    record: StatusRecord


@dataclass(frozen=True)
class RemoveRecord:
    record_id: str


BoardAction = MoveRecord | SetRecords | Reconcile | AddRecord | ReplaceRecord | RemoveRecord


def reduce(state: BoardState, action: BoardAction) -> BoardState:
    """Apply ``action`` to ``state``."""
    if isinstance(action, MoveRecord):
        return _move(state, action)
    if isinstance(action, (SetRecords, Reconcile)):
        return BoardState.of(action.records)
    if isinstance(action, AddRecord):
        return BoardState(append_record(state.records, action.record))
    if isinstance(action, ReplaceRecord):
        if state.get(action.record.id) is None:
            return state
        return BoardState(replace_record(state.records, action.record))
    if isinstance(action, RemoveRecord):
        if state.get(action.record_id) is None:
            return state
        return BoardState(remove_record(state.records, action.record_id))
    raise TypeError(f"Unknown board action: {action!r}")


def _move(state: BoardState, action: MoveRecord) -> BoardState:
    if action.is_noop:
        return state

    position = state.index_of(action.record_id)
    if position < 0:
        # Deleted elsewhere while being dragged
        return state

    record = state.records[position]
    moved = record.model_copy(update={"status": action.destination_status})
    remaining = [r for r in state.records if r.id != action.record_id]

    slots = [i for i, r in enumerate(remaining) if r.status == action.destination_status]
    if not slots:
        insert_at = min(position, len(remaining))
    elif action.destination_index < len(slots):
        insert_at = slots[max(action.destination_index, 0)]
    else:
        insert_at = slots[-1] + 1

    remaining.insert(insert_at, moved)
    return BoardState(tuple(remaining))
