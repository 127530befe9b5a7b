"""Local record store backed by aiosqlite."""

from __future__ import annotations

import json
import logging
import secrets
from enum import Enum
from pathlib import Path
from typing import Any

import aiosqlite

from ..records.models import MODELS
from .base import RecordNotFound, RecordStore, StoreError

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

# Columns holding JSON-encoded lists
_JSON_COLUMNS: dict[str, set[str]] = {"meetings": {"attendees"}}


def _to_param(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return value


class SqliteStore(RecordStore):
    """RecordStore over a single aiosqlite connection.

    Use ``await SqliteStore.open(path)`` to connect and create the schema.
    """

    def __init__(self, db: aiosqlite.Connection):
        self._db = db
        self._columns: dict[str, set[str]] = {}

    @classmethod
    async def open(cls, db_path: str | Path) -> SqliteStore:
        """Connect to ``db_path`` and make sure every table exists."""
        if str(db_path) != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        db = await aiosqlite.connect(str(db_path))
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys=ON")
        await db.executescript(SCHEMA_PATH.read_text())
        await db.commit()
        return cls(db)

    @property
    def connection(self) -> aiosqlite.Connection:
        return self._db

    async def close(self) -> None:
        await self._db.close()

    # --- RecordStore ---

    async def list(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        columns = await self._table_columns(table)
        where = []
        values = []
        for key, val in (filters or {}).items():
            if key not in columns:
                raise StoreError(f"Unknown column {table}.{key}", status_code=400)
            if val is None:
                where.append(f"{key} IS NULL")
            else:
                where.append(f"{key} = ?")
                values.append(_to_param(val))

        sql = f"SELECT * FROM {table}"
        if where:
            sql += " WHERE " + " AND ".join(where)

        direction = "DESC" if descending else "ASC"
        if order_by:
            if order_by not in columns:
                raise StoreError(f"Unknown column {table}.{order_by}", status_code=400)
            sql += f" ORDER BY {order_by} {direction}, rowid {direction}"
        else:
            sql += " ORDER BY rowid"

        rows = await self._fetchall(sql, values)
        return [self._decode(table, row) for row in rows]

    async def get(self, table: str, record_id: str) -> dict[str, Any]:
        await self._table_columns(table)
        rows = await self._fetchall(f"SELECT * FROM {table} WHERE id = ?", (record_id,))
        if not rows:
            raise RecordNotFound(table, record_id)
        return self._decode(table, rows[0])

    async def insert(self, table: str, fields: dict[str, Any]) -> dict[str, Any]:
        columns = await self._table_columns(table)
        record_id = fields.get("id") or secrets.token_hex(8)

        names = ["id"]
        values: list[Any] = [record_id]
        for key, val in fields.items():
            if key == "id":
                continue
            if key not in columns:
                logger.debug("Ignoring unknown column %s.%s on insert", table, key)
                continue
            names.append(key)
            values.append(_to_param(val))

        placeholders = ", ".join("?" for _ in names)
        await self._execute(
            f"INSERT INTO {table} ({', '.join(names)}) VALUES ({placeholders})", values
        )
        return await self.get(table, record_id)

    async def update(
        self, table: str, record_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        columns = await self._table_columns(table)
        current = await self.get(table, record_id)

        sets = []
        values = []
        for key, val in fields.items():
            if key in ("id", "created_at") or key not in columns:
                continue
            sets.append(f"{key} = ?")
            values.append(_to_param(val))

        if not sets:
            return current

        values.append(record_id)
        await self._execute(f"UPDATE {table} SET {', '.join(sets)} WHERE id = ?", values)
        return await self.get(table, record_id)

    async def delete(self, table: str, record_id: str) -> None:
        await self.get(table, record_id)
        await self._execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))

    # --- Internal ---

    async def _table_columns(self, table: str) -> set[str]:
        if table not in MODELS:
            raise StoreError(f"Unknown table: {table}", status_code=400)
        if table not in self._columns:
            rows = await self._fetchall(f"PRAGMA table_info({table})", ())
            self._columns[table] = {row[1] for row in rows}
        return self._columns[table]

    async def _fetchall(self, sql: str, params) -> list[aiosqlite.Row]:
        try:
            cursor = await self._db.execute(sql, params)
            return list(await cursor.fetchall())
        except aiosqlite.Error as e:
            raise StoreError(f"Query failed: {e}", detail=str(e)) from e

    async def _execute(self, sql: str, params) -> None:
        try:
            await self._db.execute(sql, params)
            await self._db.commit()
        except aiosqlite.IntegrityError as e:
            await self._db.rollback()
            raise StoreError(f"Constraint violated: {e}", status_code=409, detail=str(e)) from e
        except aiosqlite.Error as e:
            await self._db.rollback()
            raise StoreError(f"Write failed: {e}", detail=str(e)) from e

    def _decode(self, table: str, row: aiosqlite.Row) -> dict[str, Any]:
        data = dict(row)
        for column in _JSON_COLUMNS.get(table, ()):
            raw = data.get(column)
            if isinstance(raw, str):
                try:
                    data[column] = json.loads(raw)
                except json.JSONDecodeError:
                    logger.warning("Malformed JSON in %s.%s for %s", table, column, data["id"])
                    data[column] = []
        return data
