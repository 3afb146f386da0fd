"""Store protocol for entity persistence backends."""

from collections.abc import Mapping
from typing import Any, Protocol

from ..models import Label, LabelColor, Note, Task, TaskDraft, Todo


class StoreProtocol(Protocol):
    """Interface for entity storage backends.

    Every entity kind is keyed by a store-assigned id. Update and delete
    calls that reference a missing id raise NotFoundError; I/O failures
    raise StoreUnavailableError.
    """

    # --- Tasks ---

    def list_tasks(self) -> list[Task]:
        """Load all tasks.

        Returns:
            Tasks in creation order, with label ids and subtasks inlined.
        """
        ...

    def get_task(self, task_id: str) -> Task | None:
        """Get a single task by ID, or None if it does not exist."""
        ...

    def create_task(self, draft: TaskDraft) -> Task:
        """Create a task, assigning its id and creation timestamp."""
        ...

    def update_task(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        """Replace the provided fields of a task.

        Args:
            task_id: The task identifier.
            changes: Field name -> new value. A `labels` or `subtasks`
                entry replaces the whole collection; subtasks get new ids.

        Returns:
            The task as stored after the update.
        """
        ...

    def delete_task(self, task_id: str) -> None:
        """Delete a task and the subtasks it owns."""
        ...

    # --- Todos ---

    def list_todos(self) -> list[Todo]:
        """Load all todos in creation order."""
        ...

    def create_todo(self, text: str) -> Todo:
        ...

    def update_todo(self, todo_id: str, changes: Mapping[str, Any]) -> Todo:
        ...

    def delete_todo(self, todo_id: str) -> None:
        ...

    # --- Labels ---

    def list_labels(self) -> list[Label]:
        """Load all labels ordered by name."""
        ...

    def create_label(self, name: str, color: LabelColor, label_id: str | None = None) -> Label:
        """Create a label. The id is derived from the name unless given."""
        ...

    def delete_label(self, label_id: str) -> None:
        """Delete a label. Tasks referencing it are left untouched."""
        ...

    # --- Note ---

    def get_note(self) -> Note:
        """Return the note, creating an empty one on first access."""
        ...

    def update_note(self, content: str) -> Note:
        """Replace the note content, creating the note if needed."""
        ...
