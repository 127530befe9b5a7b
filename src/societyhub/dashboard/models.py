"""Summary shapes produced by the aggregators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

# Shown instead of a percentage whose denominator is zero
NOT_APPLICABLE: Final = "N/A"

Percentage = float | str


@dataclass(frozen=True)
class BudgetSummary:
    total_budget: float
    total_estimated: float
    total_actual: float
    remaining: float
    percent_used: Percentage

    @property
    def over_budget(self) -> bool:
        return self.remaining < 0

    @property
    def percent_display(self) -> str:
        if self.percent_used == NOT_APPLICABLE:
            return NOT_APPLICABLE
        return f"{self.percent_used:.0f}%"


@dataclass(frozen=True)
class DashboardStats:
    event_count: int
    active_events: int
    total_budget: float
    total_spent: float
    spent_percent: int | str
    open_tasks: int


@dataclass(frozen=True)
class TaskProgress:
    completed: int
    total: int
    percent: int | str


@dataclass(frozen=True)
class InventorySummary:
    counts: dict[str, int] = field(default_factory=dict)
    total_quantity: int = 0
    item_count: int = 0


@dataclass(frozen=True)
class TaskFilters:
    """Task list filters; ``"all"`` switches a criterion off."""

    assignee: str = "all"
    priority: str = "all"
    event_id: str = "all"

    @property
    def active(self) -> bool:
        return any(v != "all" for v in (self.assignee, self.priority, self.event_id))
