"""Tests for TodoService and NoteService."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from kanpad.errors import NotFoundError, ValidationFailure
from kanpad.repositories import FilesystemStore
from kanpad.services import NoteService, TodoService


@pytest.fixture
def store(tmp_path: Path) -> FilesystemStore:
    return FilesystemStore(tmp_path / ".kanpad")


@pytest.fixture
def todo_service(store: FilesystemStore) -> TodoService:
    return TodoService(store)


@pytest.fixture
def note_service(store: FilesystemStore) -> NoteService:
    return NoteService(store)


class TestTodoService:
    """Tests for the quick todo list."""

    def test_create_strips_text(self, todo_service: TodoService):
        todo = todo_service.create_todo("  Buy milk  ")
        assert todo.text == "Buy milk"
        assert not todo.completed

    def test_blank_text_rejected(self, todo_service: TodoService):
        with pytest.raises(ValidationFailure):
            todo_service.create_todo("   ")

    def test_open_items_listed_first(self, todo_service: TodoService):
        """Completed todos sink below open ones; each group stays oldest first."""
        first = todo_service.create_todo("first")
        second = todo_service.create_todo("second")
        third = todo_service.create_todo("third")

        todo_service.toggle_todo(first.id)

        assert [t.id for t in todo_service.list_todos()] == [second.id, third.id, first.id]

    def test_toggle_twice(self, todo_service: TodoService):
        todo = todo_service.create_todo("x")
        assert todo_service.toggle_todo(todo.id).completed
        assert not todo_service.toggle_todo(todo.id).completed

    def test_rename(self, todo_service: TodoService):
        todo = todo_service.create_todo("x")
        assert todo_service.rename_todo(todo.id, " y ").text == "y"
        with pytest.raises(ValidationFailure):
            todo_service.rename_todo(todo.id, "")

    def test_missing_todo(self, todo_service: TodoService):
        with pytest.raises(NotFoundError):
            todo_service.toggle_todo("ghost")
        with pytest.raises(NotFoundError):
            todo_service.delete_todo("ghost")

    def test_delete(self, todo_service: TodoService):
        todo = todo_service.create_todo("x")
        todo_service.delete_todo(todo.id)
        assert todo_service.list_todos() == []


class TestNoteService:
    """Tests for the notes pad."""

    def test_empty_note_on_first_access(self, note_service: NoteService):
        assert note_service.get_content() == ""

    def test_get_or_create_idempotent(self, note_service: NoteService):
        """Accessing the note twice yields the same single note."""
        assert note_service.get_note() == note_service.get_note()

    def test_save(self, note_service: NoteService):
        note_service.save("hello")
        assert note_service.get_content() == "hello"

    def test_unchanged_content_not_written(self):
        store = MagicMock()
        store.get_note.return_value.content = "same"
        service = NoteService(store)

        service.save("same")

        store.update_note.assert_not_called()
