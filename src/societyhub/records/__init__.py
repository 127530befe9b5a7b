"""Record models and collection helpers."""

from .collection import (
    DuplicateRecordError,
    RecordList,
    append_record,
    ensure_unique,
    prepend_record,
    remove_record,
    replace_record,
)
from .models import (
    MODELS,
    BudgetItem,
    BugIssue,
    ContentIdea,
    Event,
    InventoryItem,
    Meeting,
    Record,
    StatusRecord,
    Task,
    TeamMember,
    model_for,
)

__all__ = [
    "BudgetItem",
    "BugIssue",
    "ContentIdea",
    "DuplicateRecordError",
    "Event",
    "InventoryItem",
    "MODELS",
    "Meeting",
    "Record",
    "RecordList",
    "StatusRecord",
    "Task",
    "TeamMember",
    "append_record",
    "ensure_unique",
    "model_for",
    "prepend_record",
    "remove_record",
    "replace_record",
]
