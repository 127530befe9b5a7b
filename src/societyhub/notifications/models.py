"""Notification models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class Severity(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity = Severity.INFO


class Notifier(Protocol):
    """Anything that can show a transient message to the user."""

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None: ...
