"""Toast-style notifications."""

from .center import ConsoleNotifier, NotificationCenter
from .models import Notification, Notifier, Severity

__all__ = ["ConsoleNotifier", "Notification", "NotificationCenter", "Notifier", "Severity"]
