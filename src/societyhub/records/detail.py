"""Detail views: load one record, or report that it is gone."""

from __future__ import annotations

from dataclasses import dataclass

from ..store.base import RecordNotFound, RecordStore
from .models import Record


@dataclass(frozen=True)
class DetailState:
    record: Record | None = None
    not_found: bool = False


async def load_detail(store: RecordStore, model: type[Record], record_id: str) -> DetailState:
    """Fetch ``record_id`` from ``model``'s table.

    A missing row gives ``DetailState(not_found=True)``; other store errors
    propagate.
    """
    try:
        row = await store.get(model.table, record_id)
    except RecordNotFound:
        return DetailState(not_found=True)
    return DetailState(record=model.from_row(row))
