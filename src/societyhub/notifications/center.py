"""NotificationCenter - in-memory pub/sub for toast notifications."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import deque

from rich.console import Console

from .models import Notification, Severity

logger = logging.getLogger(__name__)


class NotificationCenter:
    """Fans notifications out to subscriber queues and keeps a short history."""

    def __init__(self, history_size: int = 50) -> None:
        self._subscribers: set[asyncio.Queue] = set()
        self.history: deque[Notification] = deque(maxlen=history_size)

    async def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=100)
        self._subscribers.add(queue)
        return queue

    async def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        notification = Notification(message=message, severity=Severity(severity))
        self.history.append(notification)
        logger.debug("notify[%s] %s", notification.severity, message)
        for queue in list(self._subscribers):
            with contextlib.suppress(asyncio.QueueFull):
                queue.put_nowait(notification)

    def messages(self, severity: Severity | None = None) -> list[str]:
        """Messages seen so far, optionally only one severity."""
        return [n.message for n in self.history if severity is None or n.severity == severity]


_STYLES = {
    Severity.SUCCESS: "[green]v[/green] {}",
    Severity.ERROR: "[red]Error:[/red] {}",
    Severity.INFO: "[dim]{}[/dim]",
}


class ConsoleNotifier:
    """Prints notifications to a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.console.print(_STYLES[Severity(severity)].format(message))
