"""Enums for task columns, priorities and label colors."""

from enum import Enum


class ColumnId(str, Enum):
    """Workflow columns a task can live in."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    ARCHIVE = "archive"

    @property
    def is_visible(self) -> bool:
        """True for the three board columns (archive is shown separately)."""
        return self is not ColumnId.ARCHIVE


# Columns a task can be moved into directly
BOARD_COLUMNS: tuple[ColumnId, ...] = (
    ColumnId.TODO,
    ColumnId.IN_PROGRESS,
    ColumnId.COMPLETE,
)


class Priority(str, Enum):
    """Priority levels for tasks."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort rank: high sorts first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class LabelColor(str, Enum):
    """Fixed palette for labels."""

    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"


class ArchivePolicy(str, Enum):
    """Which columns the Archive transition accepts tasks from."""

    COMPLETE_ONLY = "complete_only"
    ANY = "any"
