"""Record models for the society's tables.

Each model mirrors one backend table. Extra columns returned by the store are
kept on the instance so a record can round-trip without losing fields.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class EventStatus(StrEnum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EventType(StrEnum):
    O_WEEK = "O-Week"
    BASANT = "Basant"
    SRC_FESTIVAL = "SRC Festival"
    COKE_STUDIO = "Coke Studio"
    GENERAL = "General"


class TaskStatus(StrEnum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskCategory(StrEnum):
    GENERAL = "general"
    CONTENT = "content"
    LOGISTICS = "logistics"
    FOOD = "food"
    PROPS = "props"
    SPONSORS = "sponsors"


class ContentStatus(StrEnum):
    IDEA = "idea"
    PLANNED = "planned"
    IN_PRODUCTION = "in_production"
    POSTED = "posted"


class ContentPlatform(StrEnum):
    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    FACEBOOK = "facebook"
    GENERAL = "general"


class InventoryStatus(StrEnum):
    NEEDED = "needed"
    ACQUIRED = "acquired"
    AVAILABLE = "available"


class BugStatus(StrEnum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class BugPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Record(BaseModel):
    """Base for every stored row: a stable string id plus arbitrary fields."""

    model_config = ConfigDict(extra="allow", use_enum_values=True)

    table: ClassVar[str] = ""

    id: str
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> Record:
        return cls.model_validate(row)

    def to_row(self) -> dict:
        return self.model_dump()


class StatusRecord(Record):
    """A record whose ``status`` places it in exactly one board column."""

    status: str


class Event(Record):
    table: ClassVar[str] = "events"

    name: str
    event_type: EventType = EventType.GENERAL
    date_start: str
    date_end: str | None = None
    location: str = ""
    status: EventStatus = EventStatus.PLANNING
    budget_total: float = 0
    budget_spent: float = 0
    description: str | None = None


class Task(StatusRecord):
    table: ClassVar[str] = "tasks"

    event_id: str
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    category: TaskCategory = TaskCategory.GENERAL
    assigned_to: str | None = None
    due_date: str | None = None


class ContentIdea(StatusRecord):
    table: ClassVar[str] = "content_ideas"

    event_id: str
    title: str
    description: str | None = None
    platform: ContentPlatform = ContentPlatform.GENERAL
    status: ContentStatus = ContentStatus.IDEA
    scheduled_date: str | None = None


class InventoryItem(Record):
    table: ClassVar[str] = "inventory_items"

    event_id: str
    name: str
    quantity: int = 1
    status: InventoryStatus = InventoryStatus.NEEDED


class BudgetItem(Record):
    table: ClassVar[str] = "budget_items"

    event_id: str
    description: str
    estimated_cost: float = 0
    actual_cost: float = 0
    category: str = ""


class Meeting(Record):
    table: ClassVar[str] = "meetings"

    title: str
    date: str
    location: str = ""
    agenda: str | None = None
    minutes: str | None = None
    attendees: list[str] = Field(default_factory=list)
    meeting_link: str | None = None
    event_id: str | None = None


class TeamMember(Record):
    table: ClassVar[str] = "team_members"

    name: str
    role: str
    email: str
    phone: str | None = None
    avatar: str | None = None
    joined_at: str | None = None


class BugIssue(Record):
    table: ClassVar[str] = "bugs_and_issues"

    title: str
    description: str
    status: BugStatus = BugStatus.OPEN
    priority: BugPriority = BugPriority.MEDIUM
    reported_by: str


MODELS: dict[str, type[Record]] = {
    model.table: model
    for model in (
        Event,
        Task,
        ContentIdea,
        InventoryItem,
        BudgetItem,
        Meeting,
        TeamMember,
        BugIssue,
    )
}


def model_for(table: str) -> type[Record]:
    """Return the record model backing ``table``."""
    try:
        return MODELS[table]
    except KeyError:
        raise ValueError(f"Unknown table: {table}") from None
