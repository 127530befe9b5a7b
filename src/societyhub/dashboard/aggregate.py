"""Pure aggregations behind the dashboard cards, budget tracker and lists.

Nothing here caches or mutates its input: callers recompute on every render
because the underlying collections change under them (form saves, board
moves). Percentages with a zero denominator come back as ``NOT_APPLICABLE``.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone
from typing import TypeVar

from ..records.models import (
    BudgetItem,
    BugIssue,
    BugStatus,
    Event,
    EventStatus,
    InventoryItem,
    InventoryStatus,
    Record,
    Task,
    TaskPriority,
    TaskStatus,
)
from .models import (
    NOT_APPLICABLE,
    BudgetSummary,
    DashboardStats,
    InventorySummary,
    TaskFilters,
    TaskProgress,
)

R = TypeVar("R", bound=Record)

ACTIVE_EVENT_STATUSES = (EventStatus.PLANNING, EventStatus.ACTIVE)

BUG_VIEWS: dict[str, tuple[str, ...]] = {
    "active": (BugStatus.OPEN, BugStatus.IN_PROGRESS),
    "resolved": (BugStatus.RESOLVED, BugStatus.CLOSED),
}


def parse_date(value: str | None) -> datetime | None:
    """Parse an ISO date or timestamp into a naive UTC datetime."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def percentage(part: float, whole: float) -> float | str:
    if not whole:
        return NOT_APPLICABLE
    return part / whole * 100


# --- Budget ---


def budget_summary(items: Iterable[BudgetItem], total_budget: float = 0) -> BudgetSummary:
    """Totals for one event's expense table.

    ``remaining`` may go negative; that is flagged through ``over_budget``.
    """
    items = list(items)
    total_estimated = sum(item.estimated_cost for item in items)
    total_actual = sum(item.actual_cost for item in items)
    return BudgetSummary(
        total_budget=total_budget,
        total_estimated=total_estimated,
        total_actual=total_actual,
        remaining=total_budget - total_actual,
        percent_used=percentage(total_actual, total_budget),
    )


def over_estimate(items: Iterable[BudgetItem]) -> list[BudgetItem]:
    """Line items whose actual cost exceeds the estimate."""
    return [item for item in items if item.actual_cost > item.estimated_cost]


# --- Dashboard ---


def dashboard_stats(events: Sequence[Event], tasks: Sequence[Task]) -> DashboardStats:
    total_budget = sum(e.budget_total for e in events)
    total_spent = sum(e.budget_spent for e in events)
    spent = percentage(total_spent, total_budget)
    return DashboardStats(
        event_count=len(events),
        active_events=sum(1 for e in events if e.status in ACTIVE_EVENT_STATUSES),
        total_budget=total_budget,
        total_spent=total_spent,
        spent_percent=spent if spent == NOT_APPLICABLE else _round_half_up(spent),
        open_tasks=sum(1 for t in tasks if t.status != TaskStatus.COMPLETED),
    )


def task_progress(tasks: Sequence[Task]) -> TaskProgress:
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    pct = percentage(completed, len(tasks))
    return TaskProgress(
        completed=completed,
        total=len(tasks),
        percent=pct if pct == NOT_APPLICABLE else _round_half_up(pct),
    )


def status_counts(records: Iterable[Record], statuses: Iterable[str]) -> dict[str, int]:
    """Count records per status; every listed status appears, zero-filled."""
    counts = {str(s): 0 for s in statuses}
    for record in records:
        status = getattr(record, "status", None)
        if status in counts:
            counts[status] += 1
    return counts


def sort_by_due_date(tasks: Iterable[Task]) -> list[Task]:
    """Earliest due date first; undated tasks last, otherwise in input order."""

    def key(task: Task):
        due = parse_date(task.due_date)
        return (due is None, due or datetime.min)

    return sorted(tasks, key=key)


def priority_tasks(tasks: Iterable[Task]) -> list[Task]:
    """High-priority tasks that are not completed, soonest first."""
    return sort_by_due_date(
        t for t in tasks if t.priority == TaskPriority.HIGH and t.status != TaskStatus.COMPLETED
    )


def dashboard_task_list(
    tasks: Iterable[Task],
    events: Iterable[Event],
    status: str = TaskStatus.TODO,
) -> list[Task]:
    """Tasks belonging to the listed events and in ``status``, soonest first."""
    event_ids = {e.id for e in events}
    return sort_by_due_date(t for t in tasks if t.event_id in event_ids and t.status == status)


def upcoming_events(events: Iterable[Event], limit: int = 5) -> list[Event]:
    """Events by start date ascending (ties by name); undated events last."""

    def key(event: Event):
        start = parse_date(event.date_start)
        return (start is None, start or datetime.min, event.name.lower())

    return sorted(events, key=key)[:limit]


def event_names(events: Iterable[Event]) -> dict[str, str]:
    return {e.id: e.name for e in events}


# --- Filters ---


def filter_records(records: Iterable[R], predicate: Callable[[R], bool] | None = None) -> list[R]:
    if predicate is None:
        return list(records)
    return [r for r in records if predicate(r)]


def filter_tasks(tasks: Iterable[Task], filters: TaskFilters) -> list[Task]:
    result = list(tasks)
    if filters.assignee != "all":
        result = [t for t in result if t.assigned_to == filters.assignee]
    if filters.priority != "all":
        result = [t for t in result if t.priority == filters.priority]
    if filters.event_id != "all":
        result = [t for t in result if t.event_id == filters.event_id]
    return result


def filter_events(
    events: Iterable[Event], query: str = "", status: str = "all"
) -> list[Event]:
    """Case-insensitive search over name and location, plus a status filter."""
    result = list(events)
    if query:
        needle = query.lower()
        result = [
            e for e in result if needle in e.name.lower() or needle in (e.location or "").lower()
        ]
    if status and status != "all":
        result = [e for e in result if e.status == status]
    return result


def filter_bugs(bugs: Iterable[BugIssue], view: str = "all") -> list[BugIssue]:
    """Bugs for the ``all``/``active``/``resolved`` tabs or one exact status, newest first."""
    if view == "all":
        selected = list(bugs)
    elif view in BUG_VIEWS:
        selected = [b for b in bugs if b.status in BUG_VIEWS[view]]
    else:
        selected = [b for b in bugs if b.status == view]

    def key(bug: BugIssue):
        created = parse_date(bug.created_at)
        return (created is not None, created or datetime.min)

    return sorted(selected, key=key, reverse=True)


# --- Inventory ---


def inventory_summary(items: Iterable[InventoryItem]) -> InventorySummary:
    items = list(items)
    return InventorySummary(
        counts=status_counts(items, InventoryStatus),
        total_quantity=sum(item.quantity for item in items),
        item_count=len(items),
    )
