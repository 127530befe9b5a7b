"""Main CLI application using Typer."""

from __future__ import annotations

import logging
from typing import Annotated

import typer

from ..config import Settings
from ..dashboard import (
    dashboard_stats,
    dashboard_task_list,
    event_names,
    priority_tasks,
    upcoming_events,
)
from ..records.models import Event, Task
from ..store.seed import seed_store
from .commands import board, budget, bugs, config, content, events, meetings, tasks, team
from .output import console, create_table, money, print_info, print_success, short_date
from .session import cli_session, run

app = typer.Typer(
    name="societyhub",
    help="Student society dashboard: events, tasks, budgets, content and meetings",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(events.app, name="events")
app.add_typer(board.app, name="board")
app.add_typer(tasks.app, name="tasks")
app.add_typer(content.app, name="content")
app.add_typer(budget.app, name="budget")
app.add_typer(budget.inventory_app, name="inventory")
app.add_typer(bugs.app, name="bugs")
app.add_typer(meetings.app, name="meetings")
app.add_typer(team.app, name="team")
app.add_typer(config.app, name="config")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose logging"),
    ] = False,
):
    """Student society dashboard.

    Examples:
        societyhub seed                              # Demo data
        societyhub dashboard                         # Overview
        societyhub board show tasks -e EVENT_ID      # Task board
        societyhub board move tasks TASK_ID completed -e EVENT_ID
    """
    level = "DEBUG" if verbose else Settings.load().log_level.upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)


@app.command("init")
def init():
    """Create the local database schema."""
    run(_init())


async def _init() -> None:
    async with cli_session() as session:
        print_success(f"Store ready ({session.settings.backend})")


@app.command("seed")
def seed():
    """Load demo data into an empty store."""
    run(_seed())


async def _seed() -> None:
    async with cli_session() as session:
        seeded = await seed_store(session.store)
    if seeded:
        print_success("Demo data loaded")
    else:
        print_info("Store already has events, nothing seeded")


@app.command("dashboard")
def dashboard(
    status: Annotated[
        str,
        typer.Option("--status", "-s", help="Task list tab: todo, in_progress or completed"),
    ] = "todo",
):
    """Show the overview: stats, upcoming events and priority tasks."""
    run(_dashboard(status))


async def _dashboard(status: str) -> None:
    async with cli_session() as session:
        events_ = [Event.from_row(r) for r in await session.store.list(Event.table)]
        tasks_ = [Task.from_row(r) for r in await session.store.list(Task.table)]

    stats = dashboard_stats(events_, tasks_)
    spent = stats.spent_percent if isinstance(stats.spent_percent, str) else f"{stats.spent_percent}%"
    console.print("[bold]Overview[/bold]")
    console.print(f"  Active events: {stats.active_events}")
    console.print(f"  Pending tasks: {stats.open_tasks}")
    console.print(f"  Total budget:  {money(stats.total_budget)} across {stats.event_count} events")
    console.print(f"  Spent:         {money(stats.total_spent)} ({spent} of total)")

    upcoming = create_table("Upcoming Events", [("Name", "cyan"), ("Date", ""), ("Status", "magenta")])
    for event in upcoming_events(events_):
        upcoming.add_row(event.name, short_date(event.date_start), event.status)
    console.print(upcoming)

    names = event_names(events_)
    urgent = priority_tasks(tasks_)
    if urgent:
        table = create_table("Priority Tasks", [("Title", "cyan"), ("Event", ""), ("Due", "")])
        for task in urgent:
            table.add_row(task.title, names.get(task.event_id, "-"), short_date(task.due_date))
        console.print(table)
    else:
        print_info("No high priority tasks")

    listed = dashboard_task_list(tasks_, events_, status)
    table = create_table(
        f"Tasks ({len(listed)} {status.replace('_', ' ')})",
        [("Title", "cyan"), ("Event", ""), ("Due", "")],
    )
    for task in listed:
        table.add_row(task.title, names.get(task.event_id, "-"), short_date(task.due_date))
    console.print(table)


if __name__ == "__main__":
    app()
