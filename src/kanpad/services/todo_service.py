"""Service for the quick-todo list."""

import logging

from ..errors import NotFoundError, ValidationFailure
from ..models import Todo
from ..repositories import StoreProtocol

logger = logging.getLogger(__name__)


class TodoService:
    """Service for todo CRUD operations."""

    def __init__(self, store: StoreProtocol) -> None:
        self.store = store

    def list_todos(self) -> list[Todo]:
        """Todos for display: open items first, each group oldest first."""
        todos = self.store.list_todos()
        return sorted(todos, key=lambda t: (t.completed, t.created_at, t.id))

    def create_todo(self, text: str) -> Todo:
        text = text.strip()
        if not text:
            raise ValidationFailure("Todo text cannot be empty")
        todo = self.store.create_todo(text)
        logger.info("Todo created: %s", todo.id)
        return todo

    def toggle_todo(self, todo_id: str) -> Todo:
        """Flip the completed flag."""
        todo = self._require(todo_id)
        return self.store.update_todo(todo_id, {"completed": not todo.completed})

    def rename_todo(self, todo_id: str, text: str) -> Todo:
        text = text.strip()
        if not text:
            raise ValidationFailure("Todo text cannot be empty")
        return self.store.update_todo(todo_id, {"text": text})

    def delete_todo(self, todo_id: str) -> None:
        logger.info("Deleting todo: %s", todo_id)
        self.store.delete_todo(todo_id)

    def _require(self, todo_id: str) -> Todo:
        for todo in self.store.list_todos():
            if todo.id == todo_id:
                return todo
        raise NotFoundError("Todo", todo_id)
