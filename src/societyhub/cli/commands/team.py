"""Team roster commands."""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from ...forms import TEAM_MEMBER_FORM, FormEditor
from ...records.models import TeamMember
from ..output import console, create_table, print_field_errors, print_info
from ..session import cli_session, run

app = typer.Typer(help="Society team roster")


@app.command("list")
def list_team():
    """List team members by name."""
    run(_list_team())


async def _list_team() -> None:
    async with cli_session() as session:
        rows = await session.store.list(TeamMember.table, order_by="name")

    if not rows:
        print_info("No team members yet")
        return

    table = create_table(
        "Team", [("ID", "dim"), ("Name", "cyan"), ("Role", "magenta"), ("Email", ""), ("Phone", "")]
    )
    for member in (TeamMember.from_row(r) for r in rows):
        table.add_row(member.id, member.name, member.role, member.email, member.phone or "-")
    console.print(table)


@app.command("add")
def add_member(
    name: Annotated[str, typer.Option("--name", "-n")],
    role: Annotated[str, typer.Option("--role", "-r")],
    email: Annotated[str, typer.Option("--email")],
    phone: Annotated[Optional[str], typer.Option("--phone")] = None,
):
    """Add a team member."""
    run(_add_member({"name": name, "role": role, "email": email, "phone": phone}))


async def _add_member(values: dict) -> None:
    async with cli_session() as session:
        editor = FormEditor(session.store, TEAM_MEMBER_FORM, session.notifier)
        member = await editor.submit(values)

    if member is None:
        print_field_errors(editor.errors)
        raise typer.Exit(1)
    print_info(f"id: {member.id}")
