"""Meeting detail: minutes autosave and attendance."""

from .autosave import MinutesAutosave
from .session import MeetingSession

__all__ = ["MeetingSession", "MinutesAutosave"]
