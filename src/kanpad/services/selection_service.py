"""Service for multi-select and bulk actions on tasks."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..errors import KanpadError
from ..models import ColumnId
from .board_service import Archive, BoardService, Delete, Move, Transition

logger = logging.getLogger(__name__)


@dataclass
class BulkResult:
    """Outcome of a bulk action: every selected id ends up in exactly one bucket."""

    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, KanpadError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def attempted(self) -> int:
        return len(self.succeeded) + len(self.failed)


class SelectionService:
    """
    Tracks the selected task ids and runs bulk actions over them.

    Tasks that are deleted or archived anywhere drop out of the
    selection automatically.
    """

    def __init__(self, board_service: BoardService) -> None:
        self.board_service = board_service
        self._selected: set[str] = set()
        board_service.task_service.on_removed(self._discard)

    @property
    def selected(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def count(self) -> int:
        return len(self._selected)

    def is_selected(self, task_id: str) -> bool:
        return task_id in self._selected

    def toggle(self, task_id: str) -> bool:
        """Flip membership of a task; returns True if it is now selected."""
        if task_id in self._selected:
            self._selected.discard(task_id)
            return False
        self._selected.add(task_id)
        return True

    def select_all(self, task_ids: Iterable[str]) -> None:
        """Add several tasks to the selection (e.g. a whole column)."""
        self._selected.update(task_ids)

    def clear(self) -> None:
        self._selected.clear()

    def bulk_move(self, target: ColumnId) -> BulkResult:
        """Move every selected task to a board column."""
        return self._apply_all(Move(target), f"move to {target.value}")

    def bulk_archive(self) -> BulkResult:
        """Archive every selected task."""
        return self._apply_all(Archive(), "archive")

    def bulk_delete(self) -> BulkResult:
        """Delete every selected task."""
        return self._apply_all(Delete(), "delete")

    def _apply_all(self, transition: Transition, action: str) -> BulkResult:
        """
        Attempt the transition on each selected id, then clear the selection.

        Failures are recorded and logged; they never stop the remaining ids.
        """
        result = BulkResult()
        # Removal listeners shrink the live set while we iterate
        task_ids = sorted(self._selected)
        logger.info("Bulk %s: %d tasks", action, len(task_ids))

        for task_id in task_ids:
            try:
                self.board_service.apply(task_id, transition)
            except KanpadError as e:
                logger.warning("Bulk %s failed for %s: %s", action, task_id, e)
                result.failed[task_id] = e
            else:
                result.succeeded.append(task_id)

        self.clear()
        return result

    def _discard(self, task_id: str) -> None:
        if task_id in self._selected:
            logger.debug("Dropping removed task from selection: %s", task_id)
            self._selected.discard(task_id)
