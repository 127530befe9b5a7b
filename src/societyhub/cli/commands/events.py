"""Event commands."""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from ...dashboard import budget_summary, filter_events, task_progress
from ...forms import EVENT_FORM, FormEditor
from ...records.detail import load_detail
from ...records.models import BudgetItem, Event, Task
from ..output import (
    console,
    create_table,
    money,
    print_error,
    print_field_errors,
    print_info,
    short_date,
)
from ..session import cli_session, run

app = typer.Typer(help="Browse and create events")


@app.command("list")
def list_events(
    search: Annotated[
        Optional[str],
        typer.Option("--search", "-q", help="Match name or location"),
    ] = None,
    status: Annotated[
        str,
        typer.Option("--status", "-s", help="planning, active, completed, cancelled or all"),
    ] = "all",
):
    """List events."""
    run(_list_events(search or "", status))


async def _list_events(search: str, status: str) -> None:
    async with cli_session() as session:
        rows = await session.store.list(Event.table, order_by="date_start")

    events = filter_events([Event.from_row(r) for r in rows], search, status)
    if not events:
        print_info("No events found")
        return

    table = create_table(
        "Events",
        [("ID", "dim"), ("Name", "cyan"), ("Type", ""), ("Starts", ""), ("Status", "magenta"),
         ("Budget", "yellow")],
    )
    for event in events:
        table.add_row(
            event.id,
            event.name,
            event.event_type,
            short_date(event.date_start),
            event.status,
            money(event.budget_total),
        )
    console.print(table)


@app.command("show")
def show_event(event_id: Annotated[str, typer.Argument(help="Event ID")]):
    """Show one event with task progress and budget totals."""
    run(_show_event(event_id))


async def _show_event(event_id: str) -> None:
    async with cli_session() as session:
        detail = await load_detail(session.store, Event, event_id)
        if detail.not_found:
            print_error("Event not found.")
            raise typer.Exit(1)

        tasks = await session.store.list(Task.table, filters={"event_id": event_id})
        items = await session.store.list(BudgetItem.table, filters={"event_id": event_id})

    event = detail.record
    progress = task_progress([Task.from_row(r) for r in tasks])
    budget = budget_summary([BudgetItem.from_row(r) for r in items], event.budget_total)

    console.print(f"[bold]{event.name}[/bold] [dim]({event.event_type}, {event.status})[/dim]")
    console.print(f"  {short_date(event.date_start)} at {event.location or '-'}")
    if event.description:
        console.print(f"  {event.description}")
    console.print(f"  Tasks: {progress.completed} / {progress.total} completed")
    console.print(
        f"  Budget: {money(budget.total_actual)} of {money(budget.total_budget)} "
        f"({budget.percent_display})"
    )


@app.command("add")
def add_event(
    name: Annotated[str, typer.Option("--name", "-n", help="Event name")],
    date_start: Annotated[str, typer.Option("--date", "-d", help="Start date (YYYY-MM-DD)")],
    location: Annotated[str, typer.Option("--location", "-l", help="Venue")],
    budget: Annotated[float, typer.Option("--budget", "-b", help="Total budget")],
    event_type: Annotated[str, typer.Option("--type", "-t", help="Event type")] = "General",
    description: Annotated[Optional[str], typer.Option("--description")] = None,
):
    """Create an event."""
    run(
        _add_event(
            {
                "name": name,
                "date_start": date_start,
                "location": location,
                "budget_total": budget,
                "event_type": event_type,
                "description": description,
            }
        )
    )


async def _add_event(values: dict) -> None:
    async with cli_session() as session:
        editor = FormEditor(session.store, EVENT_FORM, session.notifier)
        event = await editor.submit(values)

    if event is None:
        print_field_errors(editor.errors)
        raise typer.Exit(1)
    print_info(f"id: {event.id}")
