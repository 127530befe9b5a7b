"""Column layouts for the status boards."""

from __future__ import annotations

from dataclasses import dataclass

from ..records.models import ContentIdea, ContentStatus, StatusRecord, Task, TaskStatus


@dataclass(frozen=True)
class Column:
    id: str
    title: str


@dataclass(frozen=True)
class BoardKind:
    """Which table a board shows and how its statuses are laid out."""

    name: str
    label: str  # used in "Failed to load <label>"
    model: type[StatusRecord]
    columns: tuple[Column, ...]

    @property
    def table(self) -> str:
        return self.model.table

    @property
    def statuses(self) -> tuple[str, ...]:
        return tuple(c.id for c in self.columns)

    def column(self, status: str) -> Column:
        for col in self.columns:
            if col.id == status:
                return col
        raise ValueError(f"{status!r} is not a {self.name} column")


TASK_BOARD = BoardKind(
    name="tasks",
    label="tasks",
    model=Task,
    columns=(
        Column(TaskStatus.TODO, "To Do"),
        Column(TaskStatus.IN_PROGRESS, "In Progress"),
        Column(TaskStatus.COMPLETED, "Completed"),
    ),
)

CONTENT_BOARD = BoardKind(
    name="content",
    label="content",
    model=ContentIdea,
    columns=(
        Column(ContentStatus.IDEA, "Idea"),
        Column(ContentStatus.PLANNED, "Planned"),
        Column(ContentStatus.IN_PRODUCTION, "In Production"),
        Column(ContentStatus.POSTED, "Posted"),
    ),
)

BOARD_KINDS: dict[str, BoardKind] = {kind.name: kind for kind in (TASK_BOARD, CONTENT_BOARD)}
