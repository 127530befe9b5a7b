"""Immutable helpers for merging store results into an in-memory collection."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Generic, TypeVar

from .models import Record

R = TypeVar("R", bound=Record)


class DuplicateRecordError(ValueError):
    """Raised when a collection would hold two records with the same id."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Duplicate record id: {record_id}")


def ensure_unique(records: Iterable[R]) -> tuple[R, ...]:
    """Return ``records`` as a tuple, rejecting repeated ids."""
    seen: set[str] = set()
    result = []
    for record in records:
        if record.id in seen:
            raise DuplicateRecordError(record.id)
        seen.add(record.id)
        result.append(record)
    return tuple(result)


def append_record(records: Sequence[R], record: R) -> tuple[R, ...]:
    """Append a newly created record."""
    if any(r.id == record.id for r in records):
        raise DuplicateRecordError(record.id)
    return (*records, record)


def prepend_record(records: Sequence[R], record: R) -> tuple[R, ...]:
    """Put a newly created record first (newest-first lists such as bug reports)."""
    if any(r.id == record.id for r in records):
        raise DuplicateRecordError(record.id)
    return (record, *records)


def replace_record(records: Sequence[R], record: R) -> tuple[R, ...]:
    """Swap in the store's copy of ``record``; unknown ids leave the list as is."""
    return tuple(record if r.id == record.id else r for r in records)


def remove_record(records: Sequence[R], record_id: str) -> tuple[R, ...]:
    return tuple(r for r in records if r.id != record_id)


class RecordList(Generic[R]):
    """A parent view's in-memory collection that editors merge results into."""

    def __init__(self, records: Iterable[R] = (), newest_first: bool = False):
        self.records: tuple[R, ...] = ensure_unique(records)
        self.newest_first = newest_first

    def add(self, record: R) -> None:
        if self.newest_first:
            self.records = prepend_record(self.records, record)
        else:
            self.records = append_record(self.records, record)

    def replace(self, record: R) -> None:
        self.records = replace_record(self.records, record)

    def remove(self, record_id: str) -> None:
        self.records = remove_record(self.records, record_id)

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
