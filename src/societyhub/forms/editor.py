"""Create/edit dialog logic.

A ``FormEditor`` collects values for one record, validates them locally and
issues exactly one store request per valid submission. Unlike the boards it
never updates anything before the store answers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..notifications import Notifier, Severity
from ..records.models import Record
from ..store import RecordStore, StoreError
from .schema import FieldError, FormSchema, ValidationError, check

logger = logging.getLogger(__name__)


class FormEditor:
    """Form state for creating a record, or editing ``record`` when given.

    Args:
        store: Persistence collaborator.
        schema: Validation table for the record kind.
        notifier: Receives success/error toasts.
        record: Existing record to edit; None opens a create form.
        context: Fields sent with every create but not edited by the user
            (e.g. the owning ``event_id``).
        on_created: Called with the stored record after a create.
        on_updated: Called with the stored record after an update.
    """

    def __init__(
        self,
        store: RecordStore,
        schema: FormSchema,
        notifier: Notifier,
        *,
        record: Record | None = None,
        context: Mapping[str, Any] | None = None,
        on_created: Callable[[Record], Any] | None = None,
        on_updated: Callable[[Record], Any] | None = None,
    ):
        self.store = store
        self.schema = schema
        self.notifier = notifier
        self.record = record
        self.context = dict(context or {})
        self.on_created = on_created
        self.on_updated = on_updated

        self.values: dict[str, Any] = schema.defaults()
        if record is not None:
            current = record.to_row()
            self.values.update({k: current.get(k) for k in schema.rules if k in current})

        self.errors: list[FieldError] = []
        self.pending = False
        self.is_open = True

    @property
    def is_edit(self) -> bool:
        return self.record is not None

    def set(self, **values: Any) -> None:
        self.values.update(values)

    def error_for(self, field: str) -> str | None:
        for error in self.errors:
            if error.field == field:
                return error.message
        return None

    async def submit(self, values: Mapping[str, Any] | None = None) -> Record | None:
        """Validate and save.

        Returns the stored record, or None when validation failed, the save
        failed, or a submission is already in flight. Entered values are kept
        in every failure case.
        """
        if values:
            self.values.update(values)

        if self.pending:
            logger.debug("Ignoring %s submit while a request is pending", self.schema.name)
            return None

        try:
            cleaned = check(self.schema, self.values)
        except ValidationError as e:
            self.errors = e.errors
            return None
        self.errors = []

        self.pending = True
        try:
            if self.record is None:
                row = await self.store.insert(self.schema.table, {**cleaned, **self.context})
            else:
                row = await self.store.update(self.schema.table, self.record.id, cleaned)
            saved = self.schema.model.from_row(row)
        except Exception as e:
            if isinstance(e, StoreError):
                logger.warning("Saving %s failed: %s", self.schema.name.lower(), e.message)
            else:
                logger.exception("Unexpected error saving %s", self.schema.name.lower())
            self.notifier.notify(f"Failed to save {self.schema.name.lower()}", Severity.ERROR)
            return None
        finally:
            self.pending = False

        if self.record is None:
            self.notifier.notify(f"{self.schema.name} created successfully", Severity.SUCCESS)
            if self.on_created:
                self.on_created(saved)
        else:
            self.notifier.notify(f"{self.schema.name} updated successfully", Severity.SUCCESS)
            if self.on_updated:
                self.on_updated(saved)

        self.record = saved
        self.is_open = False
        return saved
