"""Bug and issue commands."""

from __future__ import annotations

from typing import Annotated

import typer

from ...dashboard import filter_bugs
from ...forms import BUG_FORM, FormEditor
from ...records.models import BugIssue
from ..output import console, create_table, print_field_errors, print_info
from ..session import cli_session, run

app = typer.Typer(help="Report and track application issues")

_PRIORITY_STYLES = {"critical": "red", "high": "yellow", "medium": "blue", "low": "dim"}


@app.command("list")
def list_bugs(
    view: Annotated[
        str,
        typer.Option("--view", "-v", help="all, active, resolved or an exact status"),
    ] = "all",
):
    """List reported bugs, newest first."""
    run(_list_bugs(view))


async def _list_bugs(view: str) -> None:
    async with cli_session() as session:
        rows = await session.store.list(BugIssue.table, order_by="created_at", descending=True)

    bugs = filter_bugs([BugIssue.from_row(r) for r in rows], view)
    if not bugs:
        if view == "all":
            print_info("There are no reported bugs at the moment. Everything looks good!")
        else:
            print_info(f"No bugs match the '{view}' filter.")
        return

    table = create_table(
        "Bugs & Issues",
        [("ID", "dim"), ("Title", "cyan"), ("Status", "magenta"), ("Priority", ""),
         ("Reporter", ""), ("Reported", "dim")],
    )
    for bug in bugs:
        style = _PRIORITY_STYLES.get(bug.priority, "")
        table.add_row(
            bug.id,
            bug.title,
            bug.status,
            f"[{style}]{bug.priority}[/{style}]" if style else bug.priority,
            bug.reported_by,
            (bug.created_at or "")[:16],
        )
    console.print(table)


@app.command("report")
def report_bug(
    title: Annotated[str, typer.Option("--title", "-t")],
    description: Annotated[str, typer.Option("--description", "-d")],
    reported_by: Annotated[str, typer.Option("--by", "-b", help="Reporter name")],
    priority: Annotated[str, typer.Option("--priority", "-p")] = "medium",
):
    """Report a bug."""
    run(
        _report_bug(
            {
                "title": title,
                "description": description,
                "reported_by": reported_by,
                "priority": priority,
            }
        )
    )


async def _report_bug(values: dict) -> None:
    async with cli_session() as session:
        editor = FormEditor(session.store, BUG_FORM, session.notifier)
        bug = await editor.submit(values)

    if bug is None:
        print_field_errors(editor.errors)
        raise typer.Exit(1)
    print_info(f"id: {bug.id}")
