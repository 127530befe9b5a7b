"""Persistence collaborators."""

from __future__ import annotations

from ..config import Settings
from .base import RecordNotFound, RecordStore, StoreError
from .rest import RestStore
from .sqlite import SqliteStore


async def open_store(settings: Settings) -> RecordStore:
    """Build the store selected by ``settings.backend``."""
    settings.validate()
    if settings.backend == "rest":
        return RestStore(
            settings.rest_url,
            api_key=settings.api_key,
            timeout=settings.request_timeout,
        )
    return await SqliteStore.open(settings.db_path)


__all__ = [
    "RecordNotFound",
    "RecordStore",
    "RestStore",
    "SqliteStore",
    "StoreError",
    "open_store",
]
