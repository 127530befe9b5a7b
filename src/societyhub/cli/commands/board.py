"""Kanban board commands for tasks and the content pipeline."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.columns import Columns
from rich.panel import Panel

from ...board import BOARD_KINDS, BoardKind, MoveRecord, StatusBoard
from ...dashboard import TaskFilters, filter_tasks
from ...forms import FORMS, FormEditor
from ...records.models import StatusRecord
from ..output import (
    console,
    print_error,
    print_field_errors,
    print_info,
    print_success,
    short_date,
)
from ..session import cli_session, run

app = typer.Typer(help="Show and move cards on the status boards")


def _kind(name: str):
    try:
        return BOARD_KINDS[name]
    except KeyError:
        print_error(f"Unknown board {name!r} (expected: {', '.join(BOARD_KINDS)})")
        raise typer.Exit(1) from None


def _render(board: StatusBoard, predicate=None) -> None:
    panels = []
    for view in board.columns(predicate):
        lines = []
        for record in view.records:
            due = getattr(record, "due_date", None) or getattr(record, "scheduled_date", None)
            lines.append(f"[cyan]{record.title}[/cyan]\n[dim]{record.id} - {short_date(due)}[/dim]")
        body = "\n".join(lines) if lines else "[dim]empty[/dim]"
        panels.append(Panel(body, title=f"{view.column.title} ({view.count})", expand=True))
    console.print(Columns(panels, equal=True, expand=True))


def print_counts(board: StatusBoard, record: StatusRecord) -> None:
    counts = ", ".join(f"{v.column.title}: {v.count}" for v in board.columns())
    print_info(f"id: {record.id} ({counts})")


async def add_card(session, kind: BoardKind, event_id: str, values: dict) -> StatusBoard:
    """Create a card through its form and add it to the event's board."""
    board = StatusBoard(session.store, kind, session.notifier, scope={"event_id": event_id})
    await board.load()
    editor = FormEditor(
        session.store,
        FORMS[kind.table],
        session.notifier,
        context={"event_id": event_id},
        on_created=board.add,
    )
    record = await editor.submit(values)
    if record is None:
        print_field_errors(editor.errors)
        raise typer.Exit(1)
    print_counts(board, record)
    return board


@app.command("show")
def show_board(
    kind: Annotated[str, typer.Argument(help="tasks or content")],
    event_id: Annotated[str, typer.Option("--event", "-e", help="Event ID")],
    assignee: Annotated[
        Optional[str], typer.Option("--assignee", "-a", help="Only this assignee (tasks)")
    ] = None,
    priority: Annotated[
        Optional[str], typer.Option("--priority", "-p", help="Only this priority (tasks)")
    ] = None,
):
    """Show a board for one event."""
    run(_show_board(kind, event_id, TaskFilters(assignee or "all", priority or "all")))


async def _show_board(kind_name: str, event_id: str, filters: TaskFilters) -> None:
    kind = _kind(kind_name)
    async with cli_session() as session:
        board = StatusBoard(session.store, kind, session.notifier, scope={"event_id": event_id})
        if not await board.load():
            raise typer.Exit(1)

    predicate = None
    if kind.name == "tasks" and filters.active:
        visible = {t.id for t in filter_tasks(board.state.records, filters)}

        def predicate(record) -> bool:
            return record.id in visible

    _render(board, predicate)


@app.command("move")
def move_card(
    kind: Annotated[str, typer.Argument(help="tasks or content")],
    record_id: Annotated[str, typer.Argument(help="Card ID")],
    status: Annotated[str, typer.Argument(help="Destination column")],
    event_id: Annotated[str, typer.Option("--event", "-e", help="Event ID")],
    index: Annotated[
        Optional[int], typer.Option("--index", "-i", help="Position in the column (default: last)")
    ] = None,
):
    """Move a card to another column (or position)."""
    run(_move_card(kind, record_id, status, event_id, index))


async def _move_card(
    kind_name: str, record_id: str, status: str, event_id: str, index: int | None
) -> None:
    kind = _kind(kind_name)
    if status not in kind.statuses:
        print_error(f"Unknown column {status!r} (expected: {', '.join(kind.statuses)})")
        raise typer.Exit(1)

    async with cli_session() as session:
        board = StatusBoard(session.store, kind, session.notifier, scope={"event_id": event_id})
        if not await board.load():
            raise typer.Exit(1)

        record = board.state.get(record_id)
        if record is None:
            print_error(f"No card {record_id} on this board")
            raise typer.Exit(1)

        source = board.state.column(record.status)
        source_index = [r.id for r in source].index(record_id)
        if index is None:
            destination = board.state.column(status)
            index = len(destination) - 1 if status == record.status else len(destination)

        moved = await board.move_and_wait(
            MoveRecord(
                record_id=record_id,
                source_status=record.status,
                source_index=source_index,
                destination_status=status,
                destination_index=index,
            )
        )

    _render(board)
    if not moved:
        raise typer.Exit(1)


@app.command("delete")
def delete_card(
    kind: Annotated[str, typer.Argument(help="tasks or content")],
    record_id: Annotated[str, typer.Argument(help="Card ID")],
    event_id: Annotated[str, typer.Option("--event", "-e", help="Event ID")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Delete a card from a board."""
    run(_delete_card(kind, record_id, event_id, yes))


async def _delete_card(kind_name: str, record_id: str, event_id: str, yes: bool) -> None:
    kind = _kind(kind_name)
    async with cli_session() as session:
        board = StatusBoard(session.store, kind, session.notifier, scope={"event_id": event_id})
        if not await board.load():
            raise typer.Exit(1)

        record = board.state.get(record_id)
        if record is None:
            print_error(f"No card {record_id} on this board")
            raise typer.Exit(1)
        if not yes and not typer.confirm(f"Delete {record.title!r}?"):
            raise typer.Abort()

        if not await board.delete(record_id):
            raise typer.Exit(1)
        print_success(f"{FORMS[kind.table].name} deleted successfully")

    _render(board)
