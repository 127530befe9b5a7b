"""End-to-end tests for the CLI against a temporary SQLite store."""

from __future__ import annotations

import asyncio

import pytest
import yaml
from typer.testing import CliRunner

from societyhub.cli.app import app
from societyhub.store import SqliteStore, StoreError

runner = CliRunner()


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point config and database at a temp dir."""
    path = tmp_path / "society.db"
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("SOCIETYHUB_DB_PATH", str(path))
    for name in ("SOCIETYHUB_BACKEND", "SOCIETYHUB_REST_URL", "SOCIETYHUB_AUTOSAVE_DELAY"):
        monkeypatch.delenv(name, raising=False)
    return path


@pytest.fixture
def seeded(db_path):
    result = runner.invoke(app, ["seed"])
    assert result.exit_code == 0, result.output
    return db_path


def fetch(db_path, table: str, **filters) -> list[dict]:
    async def _fetch():
        store = await SqliteStore.open(db_path)
        try:
            return await store.list(table, filters=filters)
        finally:
            await store.close()

    return asyncio.run(_fetch())


def oweek_id(db_path) -> str:
    return fetch(db_path, "events", name="O-Week 2026")[0]["id"]


class TestSetup:
    def test_init_creates_database(self, db_path):
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0, result.output
        assert "Store ready (sqlite)" in result.output
        assert db_path.exists()

    def test_seed_only_once(self, seeded):
        result = runner.invoke(app, ["seed"])

        assert result.exit_code == 0
        assert "nothing seeded" in result.output

    def test_unknown_backend_fails(self, db_path, monkeypatch):
        monkeypatch.setenv("SOCIETYHUB_BACKEND", "firebase")

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "Unknown backend" in result.output


class TestDashboard:
    def test_overview(self, seeded):
        result = runner.invoke(app, ["dashboard"])

        assert result.exit_code == 0, result.output
        assert "Active events: 2" in result.output
        assert "Pending tasks: 4" in result.output
        assert "$8,000" in result.output


class TestBoard:
    def test_move_task_to_completed(self, seeded):
        event_id = oweek_id(seeded)
        task = fetch(seeded, "tasks", title="Print welcome packs")[0]

        result = runner.invoke(
            app, ["board", "move", "tasks", task["id"], "completed", "--event", event_id]
        )

        assert result.exit_code == 0, result.output
        assert "Moved to Completed" in result.output
        assert fetch(seeded, "tasks", id=task["id"])[0]["status"] == "completed"

    def test_move_to_unknown_column(self, seeded):
        event_id = oweek_id(seeded)
        task = fetch(seeded, "tasks", title="Print welcome packs")[0]

        result = runner.invoke(
            app, ["board", "move", "tasks", task["id"], "blocked", "--event", event_id]
        )

        assert result.exit_code == 1
        assert fetch(seeded, "tasks", id=task["id"])[0]["status"] == "todo"

    def test_failed_move_exits_nonzero(self, seeded, monkeypatch):
        async def refuse(self, table, record_id, fields):
            raise StoreError("database is locked", status_code=503)

        monkeypatch.setattr(SqliteStore, "update", refuse)
        event_id = oweek_id(seeded)
        task = fetch(seeded, "tasks", title="Print welcome packs")[0]

        result = runner.invoke(
            app, ["board", "move", "tasks", task["id"], "completed", "--event", event_id]
        )

        assert result.exit_code == 1
        assert "Failed to update status" in result.output
        assert "Moved to" not in result.output
        assert fetch(seeded, "tasks", id=task["id"])[0]["status"] == "todo"

    def test_delete_card(self, seeded):
        event_id = oweek_id(seeded)
        idea = fetch(seeded, "content_ideas", title="Campus tour reel")[0]

        result = runner.invoke(
            app, ["board", "delete", "content", idea["id"], "--event", event_id, "--yes"]
        )

        assert result.exit_code == 0, result.output
        assert "Content deleted successfully" in result.output
        assert fetch(seeded, "content_ideas", id=idea["id"]) == []

    def test_delete_asks_first(self, seeded):
        event_id = oweek_id(seeded)
        task = fetch(seeded, "tasks", title="Order snacks")[0]

        result = runner.invoke(
            app, ["board", "delete", "tasks", task["id"], "--event", event_id], input="n\n"
        )

        assert result.exit_code == 1
        assert len(fetch(seeded, "tasks", id=task["id"])) == 1

    def test_delete_unknown_card(self, seeded):
        result = runner.invoke(
            app, ["board", "delete", "tasks", "missing", "--event", oweek_id(seeded), "--yes"]
        )

        assert result.exit_code == 1
        assert "No card missing on this board" in result.output

    def test_show_content_board(self, seeded):
        result = runner.invoke(app, ["board", "show", "content", "--event", oweek_id(seeded)])

        assert result.exit_code == 0, result.output
        assert "Posted (0)" in result.output


class TestTasks:
    def test_short_title_is_rejected(self, seeded):
        result = runner.invoke(
            app, ["tasks", "add", "--event", oweek_id(seeded), "--title", "a"]
        )

        assert result.exit_code == 1
        assert "Task title must be at least 2 characters." in result.output
        assert fetch(seeded, "tasks", title="a") == []

    def test_add_task(self, seeded):
        result = runner.invoke(
            app, ["tasks", "add", "--event", oweek_id(seeded), "--title", "ab", "--priority", "high"]
        )

        assert result.exit_code == 0, result.output
        assert "Task created successfully" in result.output
        assert "To Do: 3" in result.output
        assert fetch(seeded, "tasks", title="ab")[0]["priority"] == "high"

    def test_edit_task(self, seeded):
        task = fetch(seeded, "tasks", title="Order snacks")[0]

        result = runner.invoke(
            app, ["tasks", "edit", task["id"], "--title", "Order snacks and water", "--status", "in_progress"]
        )

        assert result.exit_code == 0, result.output
        assert "Task updated successfully" in result.output
        assert "In Progress: 2" in result.output
        row = fetch(seeded, "tasks", id=task["id"])[0]
        assert row["title"] == "Order snacks and water"
        assert row["status"] == "in_progress"
        assert row["priority"] == "high"

    def test_edit_rejects_invalid_values(self, seeded):
        task = fetch(seeded, "tasks", title="Order snacks")[0]

        result = runner.invoke(app, ["tasks", "edit", task["id"], "--title", "x"])

        assert result.exit_code == 1
        assert "Task title must be at least 2 characters." in result.output
        assert fetch(seeded, "tasks", id=task["id"])[0]["title"] == "Order snacks"

    def test_edit_missing_task(self, seeded):
        result = runner.invoke(app, ["tasks", "edit", "missing", "--title", "Anything"])

        assert result.exit_code == 1
        assert "Task not found." in result.output


class TestContent:
    def test_add_content_idea(self, seeded):
        result = runner.invoke(
            app,
            ["content", "add", "--event", oweek_id(seeded), "--title", "Stall map post", "--platform", "facebook"],
        )

        assert result.exit_code == 0, result.output
        assert "Content created successfully" in result.output
        assert "Idea: 2" in result.output
        row = fetch(seeded, "content_ideas", title="Stall map post")[0]
        assert row["platform"] == "facebook"
        assert row["status"] == "idea"

    def test_unknown_platform(self, seeded):
        result = runner.invoke(
            app,
            ["content", "add", "--event", oweek_id(seeded), "--title", "Stall map post", "--platform", "myspace"],
        )

        assert result.exit_code == 1
        assert "Platform must be one of" in result.output
        assert fetch(seeded, "content_ideas", title="Stall map post") == []


class TestBudgetAndBugs:
    def test_budget_show(self, seeded):
        result = runner.invoke(app, ["budget", "show", oweek_id(seeded)])

        assert result.exit_code == 0, result.output
        assert "$5,000" in result.output
        assert "$1,200" in result.output

    def test_event_not_found(self, seeded):
        result = runner.invoke(app, ["events", "show", "missing"])

        assert result.exit_code == 1
        assert "Event not found." in result.output

    def test_bug_report_validation(self, seeded):
        result = runner.invoke(
            app, ["bugs", "report", "--title", "Crash", "--description", "broken", "--by", "Sara"]
        )

        assert result.exit_code == 1
        assert "Please provide a detailed description." in result.output

    def test_bug_report(self, seeded):
        result = runner.invoke(
            app,
            [
                "bugs", "report",
                "--title", "Crash on save",
                "--description", "The task dialog crashes when saving.",
                "--by", "Sara",
                "--priority", "high",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Issue created successfully" in result.output
        assert len(fetch(seeded, "bugs_and_issues")) == 2


class TestMeetings:
    def test_write_minutes(self, seeded):
        meeting = fetch(seeded, "meetings")[0]

        result = runner.invoke(app, ["meetings", "minutes", meeting["id"], "Roles agreed"])

        assert result.exit_code == 0, result.output
        assert "Minutes saved successfully" in result.output
        assert fetch(seeded, "meetings")[0]["minutes"] == "Roles agreed"

    def test_toggle_attendance(self, seeded):
        meeting = fetch(seeded, "meetings")[0]

        result = runner.invoke(app, ["meetings", "attend", meeting["id"], "guest"])

        assert result.exit_code == 0, result.output
        assert "guest is present (3 attending)" in result.output
        assert fetch(seeded, "meetings")[0]["attendees"][-1] == "guest"

    def test_add_meeting(self, seeded):
        result = runner.invoke(
            app,
            ["meetings", "add", "--title", "Sponsor review", "--date", "2026-08-22T18:00", "--location", "Library"],
        )

        assert result.exit_code == 0, result.output
        assert "Meeting created successfully" in result.output
        row = fetch(seeded, "meetings", title="Sponsor review")[0]
        assert row["attendees"] == []
        assert row["date"] == "2026-08-22T18:00"

    def test_add_meeting_bad_date(self, seeded):
        result = runner.invoke(
            app, ["meetings", "add", "--title", "Sponsor review", "--date", "next week", "--location", "Library"]
        )

        assert result.exit_code == 1
        assert "Date must be a valid date." in result.output


class TestTeam:
    def test_list(self, seeded):
        result = runner.invoke(app, ["team", "list"])

        assert result.exit_code == 0, result.output
        assert "Omar Farooq" in result.output
        assert "Treasurer" in result.output

    def test_add_member(self, seeded):
        result = runner.invoke(
            app, ["team", "add", "--name", "Hina Raza", "--role", "Design Lead", "--email", "hina@society.edu"]
        )

        assert result.exit_code == 0, result.output
        assert "Team member created successfully" in result.output
        assert len(fetch(seeded, "team_members")) == 5

    def test_invalid_email(self, seeded):
        result = runner.invoke(
            app, ["team", "add", "--name", "Hina Raza", "--role", "Design Lead", "--email", "hina"]
        )

        assert result.exit_code == 1
        assert "Enter a valid email address." in result.output
        assert len(fetch(seeded, "team_members")) == 4


class TestConfigCommands:
    def test_set_and_show(self, db_path, tmp_path):
        result = runner.invoke(app, ["config", "set", "autosave_delay", "2.5"])

        assert result.exit_code == 0, result.output
        data = yaml.safe_load((tmp_path / ".societyhub" / "config.yaml").read_text())
        assert data["autosave_delay"] == 2.5

        result = runner.invoke(app, ["config", "show"])
        assert "autosave_delay: 2.5s" in result.output

    def test_set_unknown_key(self, db_path):
        result = runner.invoke(app, ["config", "set", "color", "blue"])

        assert result.exit_code == 1
