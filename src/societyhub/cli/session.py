"""Store and notifier wiring shared by the CLI commands."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator, Coroutine
from dataclasses import dataclass
from typing import Any, TypeVar

import typer

from ..config import ConfigError, Settings
from ..notifications import ConsoleNotifier
from ..store import RecordStore, StoreError, open_store
from .output import console, print_error

T = TypeVar("T")


@dataclass
class CliSession:
    settings: Settings
    store: RecordStore
    notifier: ConsoleNotifier


@contextlib.asynccontextmanager
async def cli_session() -> AsyncIterator[CliSession]:
    """Open the configured store for one command and close it afterwards."""
    settings = Settings.load()
    try:
        store = await open_store(settings)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1) from e
    except StoreError as e:
        print_error(e.message)
        raise typer.Exit(1) from e

    try:
        yield CliSession(settings=settings, store=store, notifier=ConsoleNotifier(console))
    finally:
        await store.close()


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a command coroutine, turning store failures into exit code 1."""
    try:
        return asyncio.run(coro)
    except StoreError as e:
        print_error(e.message)
        raise typer.Exit(1) from e
