"""Persistence collaborator interface shared by the local and remote stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StoreError(Exception):
    """Raised when the backing store rejects or fails a request."""

    def __init__(self, message: str, status_code: int = 0, detail: str = ""):
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class RecordNotFound(StoreError):
    """Raised when a row addressed by id does not exist (any more)."""

    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table} {record_id} not found", status_code=404)


class RecordStore(ABC):
    """Async CRUD over the society's tables.

    Rows travel as plain dicts; callers turn them into record models.
    """

    @abstractmethod
    async def list(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Return rows of ``table`` whose columns equal every value in ``filters``."""

    @abstractmethod
    async def get(self, table: str, record_id: str) -> dict[str, Any]:
        """Return one row. Raises RecordNotFound."""

    @abstractmethod
    async def insert(self, table: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Insert a row and return it with its store-assigned ``id``."""

    @abstractmethod
    async def update(
        self, table: str, record_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        """Update only ``fields`` of one row and return the full row."""

    @abstractmethod
    async def delete(self, table: str, record_id: str) -> None:
        """Delete one row. Raises RecordNotFound."""

    async def close(self) -> None:
        """Release connections held by the store."""
