"""Service for task CRUD operations on top of a local snapshot."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date
from typing import Any

from ..errors import KanpadError, NotFoundError, ValidationFailure
from ..models import (
    ColumnId,
    Priority,
    Subtask,
    SubtaskDraft,
    Task,
    TaskDraft,
)
from ..repositories import StoreProtocol

logger = logging.getLogger(__name__)

RemovalListener = Callable[[str], None]


def _require_text(value: str, field: str) -> str:
    text = value.strip()
    if not text:
        raise ValidationFailure(f"{field} cannot be empty")
    return text


def _pending_subtask(index: int, value: Any) -> dict[str, Any]:
    """Subtask data for the optimistic copy; new entries get placeholder ids."""
    if isinstance(value, Subtask):
        return value.model_dump()
    if isinstance(value, SubtaskDraft):
        value = value.model_dump()
    draft = SubtaskDraft.model_validate(value)
    return {"id": f"pending-{index}", **draft.model_dump()}


class TaskService:
    """
    Service for task CRUD operations.

    Keeps the latest fetched task set in memory. Updates are applied to
    the snapshot before the store call and reverted if the store fails;
    creates and deletes only touch the snapshot after the store succeeds.
    """

    def __init__(self, store: StoreProtocol) -> None:
        self.store = store
        self._tasks: dict[str, Task] = {}
        self._loaded = False
        self._removal_listeners: list[RemovalListener] = []

    def on_removed(self, listener: RemovalListener) -> None:
        """Register a callback fired with the id of a task that was deleted or archived."""
        self._removal_listeners.append(listener)

    # --- Reads ---

    def refresh(self) -> list[Task]:
        """
        Re-fetch all tasks from the store.

        Tasks that disappeared or became archived since the last fetch
        are reported to the removal listeners.
        """
        tasks = self.store.list_tasks()
        previous = self._tasks
        self._tasks = {task.id: task for task in tasks}
        self._loaded = True
        logger.debug("Task snapshot refreshed: %d tasks", len(tasks))

        for task_id, old in previous.items():
            new = self._tasks.get(task_id)
            if new is None or (new.is_archived and not old.is_archived):
                logger.debug("Task removed outside kanpad: %s", task_id)
                self._notify_removed(task_id)
        return list(tasks)

    def get_all_tasks(self) -> list[Task]:
        """Get all tasks from the snapshot, loading it on first use."""
        if not self._loaded:
            return self.refresh()
        return list(self._tasks.values())

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        if not self._loaded:
            self.refresh()
        return self._tasks.get(task_id)

    def require_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    # --- Writes ---

    def create_task(
        self,
        title: str,
        column_id: ColumnId = ColumnId.TODO,
        priority: Priority = Priority.MEDIUM,
        description: str | None = None,
        labels: Iterable[str] | None = None,
        due_date: date | None = None,
        subtasks: Iterable[str] | None = None,
    ) -> Task:
        """
        Create a new task.

        Raises ValidationFailure for a blank title without calling the store.
        """
        draft = TaskDraft(
            title=_require_text(title, "Task title"),
            description=(description or "").strip() or None,
            column_id=column_id,
            priority=priority,
            labels=list(labels or []),
            due_date=due_date,
            subtasks=[SubtaskDraft(text=text.strip()) for text in subtasks or [] if text.strip()],
        )

        task = self.store.create_task(draft)
        if self._loaded:
            self._tasks[task.id] = task
        logger.info("Task created: %s (column=%s)", task.id, task.column_id.value)
        return task

    def update_task(self, task_id: str, **changes: Any) -> Task:
        """
        Replace the given fields of a task.

        `labels` and `subtasks` are always sent as complete lists.
        """
        if "title" in changes:
            changes["title"] = _require_text(changes["title"], "Task title")
        if "description" in changes:
            changes["description"] = (changes["description"] or "").strip() or None

        current = self.require_task(task_id)
        self._tasks[task_id] = self._preview(current, changes)

        try:
            stored = self.store.update_task(task_id, changes)
        except NotFoundError:
            logger.warning("Task vanished from store during update: %s", task_id)
            self._drop(task_id)
            raise
        except KanpadError as e:
            logger.warning("Update failed for %s, reverting: %s", task_id, e)
            self._tasks[task_id] = current
            raise

        self._tasks[task_id] = stored
        if stored.is_archived and not current.is_archived:
            self._notify_removed(task_id)
        return stored

    def edit_task(
        self,
        task_id: str,
        title: str,
        description: str | None,
        priority: Priority,
        labels: Iterable[str],
        due_date: date | None,
        subtasks: Iterable[SubtaskDraft] | None = None,
    ) -> Task:
        """
        Save the card edit form.

        Every editable field is sent; subtasks only when the form changed them.
        """
        changes: dict[str, Any] = {
            "title": title,
            "description": description,
            "priority": priority,
            "labels": list(labels),
            "due_date": due_date,
        }
        if subtasks is not None:
            changes["subtasks"] = list(subtasks)
        return self.update_task(task_id, **changes)

    def delete_task(self, task_id: str) -> None:
        """Delete a task by ID."""
        logger.info("Deleting task: %s", task_id)
        try:
            self.store.delete_task(task_id)
        except NotFoundError:
            self._drop(task_id)
            raise
        self._drop(task_id)

    # --- Child collections ---

    def toggle_label(self, task_id: str, label_id: str) -> Task:
        """Add or remove one label, sending the full resulting label list."""
        task = self.require_task(task_id)
        if label_id in task.labels:
            labels = [existing for existing in task.labels if existing != label_id]
        else:
            labels = [*task.labels, label_id]
        return self.update_task(task_id, labels=labels)

    def add_subtask(self, task_id: str, text: str) -> Task:
        task = self.require_task(task_id)
        subtasks = [*self._drafts(task.subtasks), SubtaskDraft(text=_require_text(text, "Subtask"))]
        return self.update_task(task_id, subtasks=subtasks)

    def toggle_subtask(self, task_id: str, subtask_id: str) -> Task:
        task = self.require_task(task_id)
        if not any(s.id == subtask_id for s in task.subtasks):
            raise NotFoundError("Subtask", subtask_id)
        subtasks = [
            SubtaskDraft(text=s.text, completed=not s.completed if s.id == subtask_id else s.completed)
            for s in task.subtasks
        ]
        return self.update_task(task_id, subtasks=subtasks)

    def remove_subtask(self, task_id: str, subtask_id: str) -> Task:
        task = self.require_task(task_id)
        remaining = [s for s in task.subtasks if s.id != subtask_id]
        if len(remaining) == len(task.subtasks):
            raise NotFoundError("Subtask", subtask_id)
        return self.update_task(task_id, subtasks=self._drafts(remaining))

    # --- Private Methods ---

    def _drafts(self, subtasks: Iterable[Subtask]) -> list[SubtaskDraft]:
        return [SubtaskDraft(text=s.text, completed=s.completed) for s in subtasks]

    def _preview(self, task: Task, changes: dict[str, Any]) -> Task:
        """Local copy of the task with the changes applied, shown until the store answers."""
        data = task.model_dump()
        try:
            for field, value in changes.items():
                if field == "subtasks":
                    value = [_pending_subtask(i, s) for i, s in enumerate(value or [])]
                data[field] = value
            return Task.model_validate(data)
        except ValueError as e:
            raise ValidationFailure(f"Invalid task update for {task.id}: {e}") from e

    def _drop(self, task_id: str) -> None:
        self._tasks.pop(task_id, None)
        self._notify_removed(task_id)

    def _notify_removed(self, task_id: str) -> None:
        for listener in self._removal_listeners:
            listener(task_id)
