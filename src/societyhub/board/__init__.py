"""Drag-and-drop status boards."""

from .columns import BOARD_KINDS, CONTENT_BOARD, TASK_BOARD, BoardKind, Column
from .controller import ColumnView, StatusBoard
from .state import (
    AddRecord,
    BoardState,
    MoveRecord,
    Reconcile,
    RemoveRecord,
    ReplaceRecord,
    SetRecords,
    reduce,
)

__all__ = [
    "AddRecord",
    "BOARD_KINDS",
    "BoardKind",
    "BoardState",
    "CONTENT_BOARD",
    "Column",
    "ColumnView",
    "MoveRecord",
    "Reconcile",
    "RemoveRecord",
    "ReplaceRecord",
    "SetRecords",
    "StatusBoard",
    "TASK_BOARD",
    "reduce",
]
