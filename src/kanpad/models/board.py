"""Board state model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .enums import ColumnId
from .kanpad_config import BoardConfig
from .task import Task


class Board(BaseModel):
    """Tasks grouped by column, each column already in display order."""

    columns: dict[ColumnId, list[Task]] = Field(default_factory=dict)

    @classmethod
    def from_tasks(cls, tasks: list[Task]) -> Board:
        """Group tasks by column, keeping their relative order."""
        board = cls(columns={column_id: [] for column_id in ColumnId})
        for task in tasks:
            board.columns[task.column_id].append(task)
        return board

    def get_column(self, column_id: ColumnId) -> list[Task]:
        """Get tasks for a specific column."""
        return self.columns.get(column_id, [])

    def get_visible_columns(
        self, config: BoardConfig | None = None
    ) -> list[tuple[ColumnId, str, list[Task]]]:
        """
        Get visible columns (excludes archive) with their titles.

        Returns:
            List of (column_id, title, tasks) tuples in display order.
        """
        config = config or BoardConfig.default()
        return [(col.id, col.title, self.get_column(col.id)) for col in config.visible_columns]

    @property
    def archived(self) -> list[Task]:
        """Tasks in the archive column."""
        return self.get_column(ColumnId.ARCHIVE)

    @property
    def task_count(self) -> int:
        return sum(len(tasks) for tasks in self.columns.values())
