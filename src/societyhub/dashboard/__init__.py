"""Dashboard aggregations."""

from .aggregate import (
    budget_summary,
    dashboard_stats,
    dashboard_task_list,
    event_names,
    filter_bugs,
    filter_events,
    filter_records,
    filter_tasks,
    inventory_summary,
    over_estimate,
    percentage,
    priority_tasks,
    sort_by_due_date,
    status_counts,
    task_progress,
    upcoming_events,
)
from .models import (
    NOT_APPLICABLE,
    BudgetSummary,
    DashboardStats,
    InventorySummary,
    TaskFilters,
    TaskProgress,
)

__all__ = [
    "BudgetSummary",
    "DashboardStats",
    "InventorySummary",
    "NOT_APPLICABLE",
    "TaskFilters",
    "TaskProgress",
    "budget_summary",
    "dashboard_stats",
    "dashboard_task_list",
    "event_names",
    "filter_bugs",
    "filter_events",
    "filter_records",
    "filter_tasks",
    "inventory_summary",
    "over_estimate",
    "percentage",
    "priority_tasks",
    "sort_by_due_date",
    "status_counts",
    "task_progress",
    "upcoming_events",
]
