"""Content pipeline commands."""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from ...board import CONTENT_BOARD
from ..session import cli_session, run
from .board import add_card

app = typer.Typer(help="Plan content ideas for an event")


@app.command("add")
def add_content(
    event_id: Annotated[str, typer.Option("--event", "-e", help="Event ID")],
    title: Annotated[str, typer.Option("--title", "-t", help="Content title")],
    platform: Annotated[
        str, typer.Option("--platform", "-p", help="instagram, tiktok, facebook or general")
    ] = "instagram",
    status: Annotated[str, typer.Option("--status", "-s")] = "idea",
    scheduled: Annotated[Optional[str], typer.Option("--scheduled", help="YYYY-MM-DD")] = None,
    description: Annotated[Optional[str], typer.Option("--description")] = None,
):
    """Add a content idea to an event's pipeline."""
    run(
        _add_content(
            event_id,
            {
                "title": title,
                "platform": platform,
                "status": status,
                "scheduled_date": scheduled,
                "description": description,
            },
        )
    )


async def _add_content(event_id: str, values: dict) -> None:
    async with cli_session() as session:
        await add_card(session, CONTENT_BOARD, event_id, values)
