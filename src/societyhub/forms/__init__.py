"""Form validation and create/edit editors."""

from .editor import FormEditor
from .schema import (
    BUDGET_ITEM_FORM,
    BUG_FORM,
    CONTENT_FORM,
    EVENT_FORM,
    FORMS,
    INVENTORY_FORM,
    MEETING_FORM,
    TASK_FORM,
    TEAM_MEMBER_FORM,
    FieldError,
    FieldRule,
    FormSchema,
    ValidationError,
    check,
    validate,
)

__all__ = [
    "BUDGET_ITEM_FORM",
    "BUG_FORM",
    "CONTENT_FORM",
    "EVENT_FORM",
    "FORMS",
    "FieldError",
    "FieldRule",
    "FormEditor",
    "FormSchema",
    "INVENTORY_FORM",
    "MEETING_FORM",
    "TASK_FORM",
    "TEAM_MEMBER_FORM",
    "ValidationError",
    "check",
    "validate",
]
