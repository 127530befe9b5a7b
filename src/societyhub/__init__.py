"""societyhub: state core of a student society's admin dashboard.

Events, tasks, content ideas, budgets, inventory, meetings, team members and
bug reports live in a remote (or local SQLite) store. This package keeps the
client side of that data consistent:

- Status boards with optimistic drag-and-drop moves and reload-on-failure
- Pure aggregators for dashboard cards and budget totals
- Form editors with declarative validation tables
- Debounced autosave of meeting minutes

Usage:
    # CLI
    $ societyhub seed
    $ societyhub board show tasks --event EVENT_ID

    # Python API
    from societyhub.board import TASK_BOARD, MoveRecord, StatusBoard

    board = StatusBoard(store, TASK_BOARD, notifier, scope={"event_id": event_id})
    await board.load()
    board.move(MoveRecord("t1", "todo", 0, "in_progress", 0))
"""

try:
    from importlib.metadata import version as _get_version

    __version__ = _get_version("societyhub")
except Exception:
    __version__ = "0.0.0-dev"

__all__ = ["__version__"]
