"""Meeting commands."""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from ...forms import MEETING_FORM, FormEditor
from ...meetings import MeetingSession
from ...records.models import Meeting, TeamMember
from ..output import console, create_table, print_error, print_field_errors, print_info
from ..session import cli_session, run

app = typer.Typer(help="Meetings, minutes and attendance")


@app.command("list")
def list_meetings():
    """List meetings, most recent first."""
    run(_list_meetings())


async def _list_meetings() -> None:
    async with cli_session() as session:
        rows = await session.store.list(Meeting.table, order_by="date", descending=True)

    if not rows:
        print_info("No meetings scheduled")
        return

    table = create_table(
        "Meetings",
        [("ID", "dim"), ("Title", "cyan"), ("Date", ""), ("Location", ""), ("Attendees", "yellow")],
    )
    for meeting in (Meeting.from_row(r) for r in rows):
        table.add_row(
            meeting.id, meeting.title, meeting.date[:16], meeting.location, str(len(meeting.attendees))
        )
    console.print(table)


@app.command("add")
def add_meeting(
    title: Annotated[str, typer.Option("--title", "-t")],
    date: Annotated[str, typer.Option("--date", "-d", help="YYYY-MM-DD or YYYY-MM-DDTHH:MM")],
    location: Annotated[str, typer.Option("--location", "-l")],
    agenda: Annotated[Optional[str], typer.Option("--agenda")] = None,
    link: Annotated[Optional[str], typer.Option("--link", help="Online meeting link")] = None,
    event_id: Annotated[Optional[str], typer.Option("--event", "-e", help="Related event ID")] = None,
):
    """Schedule a meeting."""
    run(
        _add_meeting(
            {
                "title": title,
                "date": date,
                "location": location,
                "agenda": agenda,
                "meeting_link": link,
                "event_id": event_id,
            }
        )
    )


async def _add_meeting(values: dict) -> None:
    async with cli_session() as session:
        editor = FormEditor(session.store, MEETING_FORM, session.notifier, context={"attendees": []})
        meeting = await editor.submit(values)

    if meeting is None:
        print_field_errors(editor.errors)
        raise typer.Exit(1)
    print_info(f"id: {meeting.id}")


async def _open(session, meeting_id: str) -> MeetingSession:
    meeting = await MeetingSession.open(
        session.store, meeting_id, session.notifier, delay=session.settings.autosave_delay
    )
    if meeting.not_found:
        print_error("Meeting not found.")
        raise typer.Exit(1)
    return meeting


@app.command("show")
def show_meeting(meeting_id: Annotated[str, typer.Argument(help="Meeting ID")]):
    """Show agenda, minutes and attendance."""
    run(_show_meeting(meeting_id))


async def _show_meeting(meeting_id: str) -> None:
    async with cli_session() as session:
        meeting_session = await _open(session, meeting_id)
        members = [TeamMember.from_row(r) for r in await session.store.list(TeamMember.table)]
        await meeting_session.close()

    meeting = meeting_session.meeting
    console.print(f"[bold]{meeting.title}[/bold] [dim]{meeting.date} at {meeting.location}[/dim]")
    if meeting.meeting_link:
        console.print(f"  Link: {meeting.meeting_link}")
    console.print("[bold]Agenda[/bold]")
    console.print(f"  {meeting.agenda or '-'}")
    console.print("[bold]Minutes[/bold]")
    console.print(f"  {meeting.minutes or '-'}")
    console.print("[bold]Attendance[/bold]")
    for member in members:
        mark = "[green]x[/green]" if member.id in meeting.attendees else " "
        console.print(f"  [{mark}] {member.name} [dim]({member.id})[/dim]")


@app.command("minutes")
def write_minutes(
    meeting_id: Annotated[str, typer.Argument(help="Meeting ID")],
    text: Annotated[str, typer.Argument(help="New minutes text")],
):
    """Replace a meeting's minutes."""
    run(_write_minutes(meeting_id, text))


async def _write_minutes(meeting_id: str, text: str) -> None:
    async with cli_session() as session:
        meeting_session = await _open(session, meeting_id)
        meeting_session.minutes.edit(text)
        saved = await meeting_session.minutes.save_now()
        await meeting_session.close()

    if not saved:
        raise typer.Exit(1)


@app.command("attend")
def toggle_attendance(
    meeting_id: Annotated[str, typer.Argument(help="Meeting ID")],
    member_id: Annotated[str, typer.Argument(help="Team member ID")],
):
    """Mark a team member present, or absent if already present."""
    run(_toggle_attendance(meeting_id, member_id))


async def _toggle_attendance(meeting_id: str, member_id: str) -> None:
    async with cli_session() as session:
        meeting_session = await _open(session, meeting_id)
        attendees = await meeting_session.toggle_attendance(member_id)
        await meeting_session.close()

    state = "present" if member_id in attendees else "absent"
    print_info(f"{member_id} is {state} ({len(attendees)} attending)")
