"""Declarative validation tables for the create/edit forms.

Each form is a ``FormSchema``: a table mapping field name to a ``FieldRule``.
``validate`` is pure: it returns cleaned values and field-level errors and
never touches the store.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from ..records.models import (
    BudgetItem,
    BugIssue,
    BugPriority,
    BugStatus,
    ContentIdea,
    ContentPlatform,
    ContentStatus,
    Event,
    EventStatus,
    EventType,
    InventoryItem,
    InventoryStatus,
    Meeting,
    Record,
    Task,
    TaskCategory,
    TaskPriority,
    TaskStatus,
    TeamMember,
)

FIELD_TYPES = ("str", "int", "float", "date", "list")


@dataclass(frozen=True)
class FieldRule:
    type: str = "str"
    required: bool = True
    min_length: int | None = None
    min_value: float | None = None
    choices: tuple[str, ...] | None = None
    contains: str | None = None
    default: Any = None  # initial value of a new form
    message: str = ""  # overrides the generated constraint message

    def __post_init__(self) -> None:
        if self.type not in FIELD_TYPES:
            raise ValueError(f"Unknown field type: {self.type}")


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class ValidationError(Exception):
    """Raised when a submission fails its form's rules."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


@dataclass(frozen=True)
class FormSchema:
    name: str  # shown in notifications, e.g. "Task created successfully"
    model: type[Record]
    rules: dict[str, FieldRule] = field(default_factory=dict)

    @property
    def table(self) -> str:
        return self.model.table

    def defaults(self) -> dict[str, Any]:
        return {k: r.default for k, r in self.rules.items() if r.default is not None}


def _label(name: str) -> str:
    return name.replace("_", " ").capitalize()


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "") or value == []


def _check(name: str, rule: FieldRule, value: Any) -> tuple[Any, str | None]:
    """Coerce one value and return (clean value, error message or None)."""
    if rule.type in ("int", "float"):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return value, f"{_label(name)} must be a number."
        if number != number or number in (float("inf"), float("-inf")):
            return value, f"{_label(name)} must be a number."
        if rule.type == "int":
            if not number.is_integer():
                return value, f"{_label(name)} must be a whole number."
            number = int(number)
        if rule.min_value is not None and number < rule.min_value:
            return number, rule.message or f"{_label(name)} must be at least {rule.min_value:g}."
        return number, None

    if rule.type == "date":
        if isinstance(value, (date, datetime)):
            return value.isoformat(), None
        try:
            datetime.fromisoformat(str(value))
        except ValueError:
            return value, f"{_label(name)} must be a valid date."
        return str(value), None

    if rule.type == "list":
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
            return value, f"{_label(name)} must be a list of values."
        return list(value), None

    if not isinstance(value, str):
        return value, f"{_label(name)} must be text."
    if rule.choices is not None and value not in rule.choices:
        return value, f"{_label(name)} must be one of: {', '.join(rule.choices)}."
    if rule.min_length is not None and len(value) < rule.min_length:
        return value, rule.message or (
            f"{_label(name)} must be at least {rule.min_length} characters."
        )
    if rule.contains is not None and rule.contains not in value:
        return value, rule.message or f"{_label(name)} is not valid."
    return value, None


def validate(
    schema: FormSchema, values: Mapping[str, Any]
) -> tuple[dict[str, Any], list[FieldError]]:
    """Check ``values`` against every rule of ``schema``.

    Returns the cleaned values (coerced numbers, ISO dates) and a list of
    errors, one per failing field. Fields not in the schema are dropped.
    Rule defaults only pre-fill a new form; a blank required field fails.
    """
    cleaned: dict[str, Any] = {}
    errors: list[FieldError] = []

    for name, rule in schema.rules.items():
        value = values.get(name)
        if _is_blank(value):
            if rule.required:
                errors.append(FieldError(name, rule.message or f"{_label(name)} is required."))
            elif name in values:
                cleaned[name] = None
            continue

        clean, error = _check(name, rule, value)
        if error:
            errors.append(FieldError(name, error))
        else:
            cleaned[name] = clean

    return cleaned, errors


def check(schema: FormSchema, values: Mapping[str, Any]) -> dict[str, Any]:
    """Like ``validate`` but raise ValidationError instead of returning errors."""
    cleaned, errors = validate(schema, values)
    if errors:
        raise ValidationError(errors)
    return cleaned


def _choices(enum) -> tuple[str, ...]:
    return tuple(member.value for member in enum)


TASK_FORM = FormSchema(
    name="Task",
    model=Task,
    rules={
        "title": FieldRule(min_length=2, message="Task title must be at least 2 characters."),
        "status": FieldRule(choices=_choices(TaskStatus), default="todo"),
        "priority": FieldRule(choices=_choices(TaskPriority), default="medium"),
        "category": FieldRule(choices=_choices(TaskCategory), default="general"),
        "description": FieldRule(required=False),
        "assigned_to": FieldRule(required=False),
        "due_date": FieldRule(type="date", required=False),
    },
)

CONTENT_FORM = FormSchema(
    name="Content",
    model=ContentIdea,
    rules={
        "title": FieldRule(min_length=2, message="Title must be at least 2 characters."),
        "description": FieldRule(required=False),
        "platform": FieldRule(choices=_choices(ContentPlatform), default="instagram"),
        "status": FieldRule(choices=_choices(ContentStatus), default="idea"),
        "scheduled_date": FieldRule(type="date", required=False),
    },
)

EVENT_FORM = FormSchema(
    name="Event",
    model=Event,
    rules={
        "name": FieldRule(min_length=2, message="Event name must be at least 2 characters."),
        "event_type": FieldRule(choices=_choices(EventType), default="General"),
        "date_start": FieldRule(type="date"),
        "date_end": FieldRule(type="date", required=False),
        "location": FieldRule(min_length=2, message="Location must be at least 2 characters."),
        "budget_total": FieldRule(
            type="float", min_value=1, message="Budget must be at least 1."
        ),
        "description": FieldRule(required=False),
        "status": FieldRule(choices=_choices(EventStatus), default="planning"),
    },
)

BUDGET_ITEM_FORM = FormSchema(
    name="Budget item",
    model=BudgetItem,
    rules={
        "description": FieldRule(
            min_length=2, message="Description must be at least 2 characters."
        ),
        "category": FieldRule(min_length=1, message="Category is required.", default="General"),
        "estimated_cost": FieldRule(
            type="float", min_value=0, default=0, message="Cost cannot be negative."
        ),
        "actual_cost": FieldRule(
            type="float", min_value=0, default=0, message="Cost cannot be negative."
        ),
    },
)

INVENTORY_FORM = FormSchema(
    name="Inventory item",
    model=InventoryItem,
    rules={
        "name": FieldRule(min_length=2, message="Item name must be at least 2 characters."),
        "quantity": FieldRule(
            type="int", min_value=1, default=1, message="Quantity must be at least 1."
        ),
        "status": FieldRule(choices=_choices(InventoryStatus), default="needed"),
    },
)

BUG_FORM = FormSchema(
    name="Issue",
    model=BugIssue,
    rules={
        "title": FieldRule(min_length=2, message="Issue title must be at least 2 characters."),
        "status": FieldRule(choices=_choices(BugStatus), default="open"),
        "reported_by": FieldRule(min_length=1, message="Reporter is required."),
        "description": FieldRule(
            min_length=10, message="Please provide a detailed description."
        ),
        "priority": FieldRule(choices=_choices(BugPriority), default="medium"),
    },
)

MEETING_FORM = FormSchema(
    name="Meeting",
    model=Meeting,
    rules={
        "title": FieldRule(min_length=2, message="Meeting title must be at least 2 characters."),
        "date": FieldRule(type="date"),
        "location": FieldRule(min_length=1, message="Location is required."),
        "meeting_link": FieldRule(required=False),
        "agenda": FieldRule(required=False),
        "event_id": FieldRule(required=False),
        "attendees": FieldRule(type="list", required=False),
    },
)

TEAM_MEMBER_FORM = FormSchema(
    name="Team member",
    model=TeamMember,
    rules={
        "name": FieldRule(min_length=2, message="Name must be at least 2 characters."),
        "role": FieldRule(min_length=1, message="Role is required."),
        "email": FieldRule(contains="@", message="Enter a valid email address."),
        "phone": FieldRule(required=False),
    },
)

FORMS: dict[str, FormSchema] = {
    schema.table: schema
    for schema in (
        TASK_FORM,
        CONTENT_FORM,
        EVENT_FORM,
        BUDGET_ITEM_FORM,
        INVENTORY_FORM,
        BUG_FORM,
        MEETING_FORM,
        TEAM_MEMBER_FORM,
    )
}
