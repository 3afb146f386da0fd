"""Service for board state and the task lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from ..errors import IllegalTransitionError
from ..models import BOARD_COLUMNS, ArchivePolicy, Board, BoardConfig, ColumnId, Task
from .filter_service import FilterService, FilterSpec
from .ordering_service import OrderingService
from .task_service import TaskService

if TYPE_CHECKING:
    from .config_service import ConfigService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    """Put a task into one of the board columns."""

    target: ColumnId


@dataclass(frozen=True)
class Archive:
    """Send a task to the archive."""


@dataclass(frozen=True)
class Restore:
    """Bring an archived task back to the complete column."""


@dataclass(frozen=True)
class Delete:
    """Remove a task entirely."""


Transition = Move | Archive | Restore | Delete


class BoardService:
    """
    Service for board state management.

    Column changes only happen through `apply`, which checks the
    transition's precondition before anything reaches the store:

        todo / in-progress / complete --Move--> todo / in-progress / complete
        complete (or any board column, policy "any") --Archive--> archive
        archive --Restore--> complete
        any --Delete--> (gone)
    """

    def __init__(
        self,
        task_service: TaskService,
        config_service: ConfigService | None = None,
        filter_service: FilterService | None = None,
        ordering_service: OrderingService | None = None,
    ) -> None:
        self.task_service = task_service
        self._config_service = config_service
        self.filter_service = filter_service or FilterService()
        self.ordering_service = ordering_service or OrderingService()

    def _get_board_config(self) -> BoardConfig:
        """Get board config, using default if no config service."""
        if self._config_service:
            return self._config_service.get_board_config()
        return BoardConfig.default()

    # --- Reads ---

    def load_board(self, spec: FilterSpec | None = None, today: date | None = None) -> Board:
        """Filter the current task set, group it by column and order each column."""
        tasks = self.task_service.get_all_tasks()
        if spec is not None and not spec.is_empty:
            tasks = self.filter_service.apply(tasks, spec)

        board = Board.from_tasks(tasks)
        for column_id, column_tasks in board.columns.items():
            board.columns[column_id] = self.ordering_service.order(column_tasks, today)
        return board

    def get_column(
        self, column_id: ColumnId, spec: FilterSpec | None = None, today: date | None = None
    ) -> list[Task]:
        """Ordered tasks of a single column."""
        return self.load_board(spec, today).get_column(column_id)

    def reload(self) -> None:
        """Re-fetch the task set from the store."""
        self.task_service.refresh()

    # --- Lifecycle ---

    def check(self, task: Task, transition: Transition) -> ColumnId | None:
        """
        Validate a transition for a task.

        Returns the column the task ends up in (None for Delete).
        Raises IllegalTransitionError when the precondition does not hold.
        """
        if isinstance(transition, Delete):
            return None

        if isinstance(transition, Move):
            if transition.target not in BOARD_COLUMNS:
                raise IllegalTransitionError(
                    task.id, f"cannot move into '{transition.target.value}'"
                )
            if task.is_archived:
                raise IllegalTransitionError(task.id, "archived tasks must be restored first")
            return transition.target

        if isinstance(transition, Archive):
            if task.is_archived:
                raise IllegalTransitionError(task.id, "task is already archived")
            policy = self._get_board_config().archive_policy
            if policy is ArchivePolicy.COMPLETE_ONLY and task.column_id is not ColumnId.COMPLETE:
                raise IllegalTransitionError(
                    task.id, f"only complete tasks can be archived (is '{task.column_id.value}')"
                )
            return ColumnId.ARCHIVE

        if isinstance(transition, Restore):
            if not task.is_archived:
                raise IllegalTransitionError(task.id, "only archived tasks can be restored")
            return ColumnId.COMPLETE

        raise TypeError(f"Unknown transition: {transition!r}")

    def apply(self, task_id: str, transition: Transition) -> Task | None:
        """
        Apply a transition to a task.

        Returns the updated task, or None when the task was deleted.
        """
        task = self.task_service.require_task(task_id)
        target = self.check(task, transition)

        if target is None:
            self.task_service.delete_task(task_id)
            return None

        if target == task.column_id:
            logger.debug("Task already in %s: %s", target.value, task_id)
            return task

        updated = self.task_service.update_task(task_id, column_id=target)
        logger.info("Task moved: %s (%s -> %s)", task_id, task.column_id.value, target.value)
        return updated

    def move(self, task_id: str, target: ColumnId) -> Task | None:
        """Move a task to one of the board columns (drag-and-drop target)."""
        return self.apply(task_id, Move(target))

    def archive(self, task_id: str) -> Task | None:
        """Archive a task."""
        logger.info("Archiving task: %s", task_id)
        return self.apply(task_id, Archive())

    def restore(self, task_id: str) -> Task | None:
        """Restore an archived task to the complete column."""
        logger.info("Restoring task: %s", task_id)
        return self.apply(task_id, Restore())

    def delete(self, task_id: str) -> None:
        """Delete a task from whatever column it is in."""
        self.apply(task_id, Delete())

    def move_left(self, task_id: str) -> Task | None:
        """Move task to the previous board column (e.g., in-progress -> todo)."""
        return self._step(task_id, -1)

    def move_right(self, task_id: str) -> Task | None:
        """Move task to the next board column (e.g., todo -> in-progress)."""
        return self._step(task_id, 1)

    def _step(self, task_id: str, delta: int) -> Task | None:
        task = self.task_service.require_task(task_id)
        if task.is_archived:
            raise IllegalTransitionError(task_id, "archived tasks must be restored first")

        idx = BOARD_COLUMNS.index(task.column_id) + delta
        if idx < 0 or idx >= len(BOARD_COLUMNS):
            return task  # Already at the edge of the board

        return self.move(task_id, BOARD_COLUMNS[idx])
