"""Task commands."""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from ...board import TASK_BOARD, StatusBoard
from ...dashboard import TaskFilters, event_names, filter_tasks, sort_by_due_date
from ...forms import TASK_FORM, FormEditor
from ...records.detail import load_detail
from ...records.models import Event, Task, TeamMember
from ..output import console, create_table, print_error, print_field_errors, print_info, short_date
from ..session import cli_session, run
from .board import add_card, print_counts

app = typer.Typer(help="List, create and edit tasks")


@app.command("list")
def list_tasks(
    event_id: Annotated[Optional[str], typer.Option("--event", "-e", help="Event ID")] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-a")] = None,
    priority: Annotated[Optional[str], typer.Option("--priority", "-p")] = None,
):
    """List tasks across events, soonest due first."""
    run(_list_tasks(TaskFilters(assignee or "all", priority or "all", event_id or "all")))


async def _list_tasks(filters: TaskFilters) -> None:
    async with cli_session() as session:
        tasks = [Task.from_row(r) for r in await session.store.list(Task.table)]
        events = [Event.from_row(r) for r in await session.store.list(Event.table)]
        members = [TeamMember.from_row(r) for r in await session.store.list(TeamMember.table)]

    tasks = sort_by_due_date(filter_tasks(tasks, filters))
    if not tasks:
        print_info("No tasks found")
        return

    names = event_names(events)
    people = {m.id: m.name for m in members}
    table = create_table(
        "Tasks",
        [("ID", "dim"), ("Title", "cyan"), ("Event", ""), ("Status", "magenta"),
         ("Priority", "yellow"), ("Assignee", ""), ("Due", "")],
    )
    for task in tasks:
        table.add_row(
            task.id,
            task.title,
            names.get(task.event_id, "-"),
            task.status,
            task.priority,
            people.get(task.assigned_to or "", task.assigned_to or "Unassigned"),
            short_date(task.due_date),
        )
    console.print(table)


@app.command("add")
def add_task(
    event_id: Annotated[str, typer.Option("--event", "-e", help="Event ID")],
    title: Annotated[str, typer.Option("--title", "-t", help="Task title")],
    priority: Annotated[str, typer.Option("--priority", "-p")] = "medium",
    category: Annotated[str, typer.Option("--category", "-c")] = "general",
    status: Annotated[str, typer.Option("--status", "-s")] = "todo",
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-a")] = None,
    due_date: Annotated[Optional[str], typer.Option("--due", help="YYYY-MM-DD")] = None,
    description: Annotated[Optional[str], typer.Option("--description")] = None,
):
    """Create a task and show the event's board."""
    run(
        _add_task(
            event_id,
            {
                "title": title,
                "priority": priority,
                "category": category,
                "status": status,
                "assigned_to": assignee,
                "due_date": due_date,
                "description": description,
            },
        )
    )


async def _add_task(event_id: str, values: dict) -> None:
    async with cli_session() as session:
        await add_card(session, TASK_BOARD, event_id, values)


@app.command("edit")
def edit_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    priority: Annotated[Optional[str], typer.Option("--priority", "-p")] = None,
    category: Annotated[Optional[str], typer.Option("--category", "-c")] = None,
    status: Annotated[Optional[str], typer.Option("--status", "-s")] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-a")] = None,
    due_date: Annotated[Optional[str], typer.Option("--due", help="YYYY-MM-DD")] = None,
    description: Annotated[Optional[str], typer.Option("--description")] = None,
):
    """Edit a task; only the given fields change."""
    values = {
        "title": title,
        "priority": priority,
        "category": category,
        "status": status,
        "assigned_to": assignee,
        "due_date": due_date,
        "description": description,
    }
    run(_edit_task(task_id, {k: v for k, v in values.items() if v is not None}))


async def _edit_task(task_id: str, values: dict) -> None:
    async with cli_session() as session:
        detail = await load_detail(session.store, Task, task_id)
        if detail.not_found:
            print_error("Task not found.")
            raise typer.Exit(1)

        task = detail.record
        board = StatusBoard(
            session.store, TASK_BOARD, session.notifier, scope={"event_id": task.event_id}
        )
        await board.load()
        editor = FormEditor(
            session.store, TASK_FORM, session.notifier, record=task, on_updated=board.replace
        )
        saved = await editor.submit(values)

    if saved is None:
        print_field_errors(editor.errors)
        raise typer.Exit(1)
    print_counts(board, saved)
