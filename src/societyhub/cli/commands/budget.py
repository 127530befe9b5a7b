"""Budget and inventory commands."""

from __future__ import annotations

from typing import Annotated

import typer

from ...dashboard import budget_summary, inventory_summary
from ...forms import BUDGET_ITEM_FORM, INVENTORY_FORM, FormEditor
from ...records.collection import RecordList
from ...records.detail import load_detail
from ...records.models import BudgetItem, Event, InventoryItem
from ..output import console, create_table, money, print_error, print_field_errors, print_info
from ..session import cli_session, run

app = typer.Typer(help="Track event budgets")
inventory_app = typer.Typer(help="Track event inventory")


async def _load_event(session, event_id: str) -> Event:
    detail = await load_detail(session.store, Event, event_id)
    if detail.not_found:
        print_error("Event not found.")
        raise typer.Exit(1)
    return detail.record


def _print_budget(event: Event, items: RecordList[BudgetItem]) -> None:
    summary = budget_summary(items, event.budget_total)

    console.print(f"[bold]{event.name}[/bold] budget")
    spent_style = "red" if summary.total_actual > summary.total_budget else "green"
    remaining_style = "red" if summary.over_budget else "bold"
    console.print(f"  Total budget: {money(summary.total_budget)}")
    console.print(
        f"  Actual spent: [{spent_style}]{money(summary.total_actual)}[/{spent_style}]"
        f" ({summary.percent_display})"
    )
    console.print(f"  Remaining:    [{remaining_style}]{money(summary.remaining)}[/{remaining_style}]")

    if not len(items):
        print_info("No expenses recorded.")
        return

    table = create_table(
        "Expenses",
        [("ID", "dim"), ("Description", ""), ("Category", ""), ("Estimated", "yellow"),
         ("Actual", "")],
    )
    for item in items:
        actual = money(item.actual_cost)
        if item.actual_cost > item.estimated_cost:
            actual = f"[red]{actual}[/red]"
        table.add_row(item.id, item.description, item.category, money(item.estimated_cost), actual)
    table.add_row("", "Total", "", money(summary.total_estimated), money(summary.total_actual))
    console.print(table)


@app.command("show")
def show_budget(event_id: Annotated[str, typer.Argument(help="Event ID")]):
    """Show an event's expenses against its budget."""
    run(_show_budget(event_id))


async def _show_budget(event_id: str) -> None:
    async with cli_session() as session:
        event = await _load_event(session, event_id)
        rows = await session.store.list(BudgetItem.table, filters={"event_id": event_id})
    _print_budget(event, RecordList(BudgetItem.from_row(r) for r in rows))


@app.command("add")
def add_expense(
    event_id: Annotated[str, typer.Argument(help="Event ID")],
    description: Annotated[str, typer.Option("--description", "-d")],
    category: Annotated[str, typer.Option("--category", "-c")] = "General",
    estimated: Annotated[float, typer.Option("--estimated", "-e")] = 0,
    actual: Annotated[float, typer.Option("--actual", "-a")] = 0,
):
    """Record an expense line."""
    run(
        _add_expense(
            event_id,
            {
                "description": description,
                "category": category,
                "estimated_cost": estimated,
                "actual_cost": actual,
            },
        )
    )


async def _add_expense(event_id: str, values: dict) -> None:
    async with cli_session() as session:
        event = await _load_event(session, event_id)
        rows = await session.store.list(BudgetItem.table, filters={"event_id": event_id})
        items = RecordList(BudgetItem.from_row(r) for r in rows)
        editor = FormEditor(
            session.store,
            BUDGET_ITEM_FORM,
            session.notifier,
            context={"event_id": event_id},
            on_created=items.add,
        )
        created = await editor.submit(values)

    if created is None:
        print_field_errors(editor.errors)
        raise typer.Exit(1)
    _print_budget(event, items)


@inventory_app.command("show")
def show_inventory(event_id: Annotated[str, typer.Argument(help="Event ID")]):
    """List an event's inventory."""
    run(_show_inventory(event_id))


async def _show_inventory(event_id: str) -> None:
    async with cli_session() as session:
        event = await _load_event(session, event_id)
        rows = await session.store.list(InventoryItem.table, filters={"event_id": event_id})

    items = [InventoryItem.from_row(r) for r in rows]
    if not items:
        print_info("No inventory items listed.")
        return

    summary = inventory_summary(items)
    table = create_table(
        f"{event.name} inventory",
        [("ID", "dim"), ("Item", "cyan"), ("Quantity", "yellow"), ("Status", "magenta")],
    )
    for item in items:
        table.add_row(item.id, item.name, str(item.quantity), item.status)
    console.print(table)
    counts = ", ".join(f"{status}: {n}" for status, n in summary.counts.items())
    print_info(f"{summary.item_count} items, {summary.total_quantity} units ({counts})")


@inventory_app.command("add")
def add_inventory(
    event_id: Annotated[str, typer.Argument(help="Event ID")],
    name: Annotated[str, typer.Option("--name", "-n")],
    quantity: Annotated[int, typer.Option("--quantity", "-q")] = 1,
    status: Annotated[str, typer.Option("--status", "-s")] = "needed",
):
    """Add an inventory item."""
    run(_add_inventory(event_id, {"name": name, "quantity": quantity, "status": status}))


async def _add_inventory(event_id: str, values: dict) -> None:
    async with cli_session() as session:
        await _load_event(session, event_id)
        editor = FormEditor(
            session.store, INVENTORY_FORM, session.notifier, context={"event_id": event_id}
        )
        item = await editor.submit(values)

    if item is None:
        print_field_errors(editor.errors)
        raise typer.Exit(1)
