"""StatusBoard - optimistic drag-and-drop board over a record store.

A move is applied to local state immediately; the status change is then
persisted in the background. On failure the board reloads its scope from the
store and replaces local state wholesale, then re-applies the destination of
every move still waiting on the store. A successful update writes the row the
store returned back into local state.

Status updates for the same record are issued one at a time, in the order
the moves happened. Once the board is closed, late results are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..notifications import Notifier, Severity
from ..records.models import StatusRecord
from ..store import RecordStore, StoreError
from .columns import BoardKind, Column
from .state import (
    AddRecord,
    BoardAction,
    BoardState,
    MoveRecord,
    Reconcile,
    RemoveRecord,
    ReplaceRecord,
    SetRecords,
    reduce,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnView:
    column: Column
    records: list[StatusRecord]

    @property
    def count(self) -> int:
        return len(self.records)


class StatusBoard:
    """Owns the board state for one board kind and scope (e.g. one event)."""

    def __init__(
        self,
        store: RecordStore,
        kind: BoardKind,
        notifier: Notifier,
        scope: dict[str, Any] | None = None,
    ):
        self.store = store
        self.kind = kind
        self.notifier = notifier
        self.scope = dict(scope or {})
        self._state = BoardState()
        self._closed = False
        self._pending: set[asyncio.Task[None]] = set()
        self._locks: dict[str, asyncio.Lock] = {}
        # Updates not yet answered per record, and the latest destination asked for
        self._queued: dict[str, int] = {}
        self._targets: dict[str, str] = {}
        self._failed_moves = 0

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def dispatch(self, action: BoardAction) -> BoardState:
        self._state = reduce(self._state, action)
        return self._state

    # --- Loading ---

    async def fetch(self) -> tuple[StatusRecord, ...]:
        """Read the authoritative list for this board's scope."""
        rows = await self.store.list(self.kind.table, filters=self.scope)
        return tuple(self.kind.model.from_row(row) for row in rows)

    async def load(self) -> bool:
        """Replace local state with the store's list. Returns False on failure."""
        try:
            records = await self.fetch()
        except StoreError as e:
            logger.warning("Failed to load %s: %s", self.kind.label, e.message)
            if not self._closed:
                self.notifier.notify(f"Failed to load {self.kind.label}", Severity.ERROR)
            return False

        if not self._closed:
            self.dispatch(SetRecords(records))
        return True

    async def reconcile(self) -> bool:
        """Throw away optimistic state and reload from the store."""
        try:
            records = await self.fetch()
        except Exception as e:
            if isinstance(e, StoreError):
                logger.warning("Reconciliation reload failed for %s: %s", self.kind.label, e.message)
            else:
                logger.exception("Reconciliation reload failed for %s", self.kind.label)
            if not self._closed:
                self.notifier.notify(f"Failed to load {self.kind.label}", Severity.ERROR)
            return False

        if self._closed:
            return False
        self.dispatch(Reconcile(records))
        for record_id, status in self._targets.items():
            record = self._state.get(record_id)
            if record is not None and record.status != status:
                self.dispatch(ReplaceRecord(record.model_copy(update={"status": status})))
        logger.info("Reconciled %s board (%d records)", self.kind.name, len(records))
        return True

    # --- Moves ---

    def move(self, action: MoveRecord) -> BoardState:
        """Apply a drop optimistically and persist the status change in the background.

        Must be called from a running event loop when the status changes.
        """
        if action.is_noop:
            return self._state
        if action.destination_status not in self.kind.statuses:
            raise ValueError(
                f"{action.destination_status!r} is not a {self.kind.name} column"
            )

        before = self._state
        after = self.dispatch(action)

        if action.changes_status and after is not before:
            record_id = action.record_id
            self._queued[record_id] = self._queued.get(record_id, 0) + 1
            self._targets[record_id] = action.destination_status
            task = asyncio.create_task(
                self._persist_status(record_id, action.destination_status)
            )
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        return after

    async def move_and_wait(self, action: MoveRecord) -> bool:
        """Move, then wait for every outstanding persistence request.

        Returns False if any status update failed while waiting; the board has
        then been reloaded from the store.
        """
        failed = self._failed_moves
        self.move(action)
        await self.drain()
        return self._failed_moves == failed

    async def drain(self) -> None:
        """Wait until no status update is in flight."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _persist_status(self, record_id: str, status: str) -> None:
        lock = self._locks.setdefault(record_id, asyncio.Lock())
        try:
            async with lock:
                await self._send_status(record_id, status)
        finally:
            if record_id not in self._queued:
                self._locks.pop(record_id, None)

    async def _send_status(self, record_id: str, status: str) -> None:
        try:
            row = await self.store.update(self.kind.table, record_id, {"status": status})
            record = self.kind.model.from_row(row)
        except Exception as e:
            self._settle(record_id)
            if isinstance(e, StoreError):
                logger.warning("Status update for %s failed: %s", record_id, e.message)
            else:
                logger.exception("Unexpected error updating status of %s", record_id)
            if self._closed:
                return
            self._failed_moves += 1
            self.notifier.notify("Failed to update status", Severity.ERROR)
            await self.reconcile()
            return

        superseded = self._settle(record_id)
        if self._closed:
            return
        if not superseded:
            self.dispatch(ReplaceRecord(record))
        title = self.kind.column(status).title
        self.notifier.notify(f"Moved to {title}", Severity.SUCCESS)

    def _settle(self, record_id: str) -> bool:
        """Count one update of ``record_id`` as answered. True if later ones are queued."""
        remaining = self._queued.pop(record_id, 1) - 1
        if remaining:
            self._queued[record_id] = remaining
            return True
        self._targets.pop(record_id, None)
        return False

    # --- Editor results and deletes ---

    def add(self, record: StatusRecord | dict) -> BoardState:
        return self.dispatch(AddRecord(self._coerce(record)))

    def replace(self, record: StatusRecord | dict) -> BoardState:
        return self.dispatch(ReplaceRecord(self._coerce(record)))

    async def delete(self, record_id: str) -> bool:
        """Delete a record in the store, then drop it locally."""
        try:
            await self.store.delete(self.kind.table, record_id)
        except StoreError as e:
            logger.warning("Delete of %s failed: %s", record_id, e.message)
            if not self._closed:
                self.notifier.notify(f"Failed to delete {self.kind.model.__name__}", Severity.ERROR)
            return False

        if not self._closed:
            self.dispatch(RemoveRecord(record_id))
        return True

    # --- Views ---

    def columns(
        self, predicate: Callable[[StatusRecord], bool] | None = None
    ) -> list[ColumnView]:
        """Records grouped by column; ``predicate`` filters the view only."""
        return [
            ColumnView(column=col, records=self._state.column(col.id, predicate))
            for col in self.kind.columns
        ]

    def close(self) -> None:
        """Stop applying results; in-flight requests still run to completion."""
        self._closed = True

    def _coerce(self, record: StatusRecord | dict) -> StatusRecord:
        if isinstance(record, dict):
            return self.kind.model.from_row(record)
        return record
