"""Filesystem-based store for tasks, todos, labels and the note."""

from __future__ import annotations

import contextlib
import logging
import uuid
from collections.abc import Iterator, Mapping
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import frontmatter
import yaml
from pydantic import ValidationError

from ..errors import NotFoundError, StoreUnavailableError, ValidationFailure
from ..models import (
    MUTABLE_TASK_FIELDS,
    NOTE_ID,
    Label,
    LabelColor,
    Note,
    Subtask,
    SubtaskDraft,
    Task,
    TaskDraft,
    Todo,
)
from ..utils import generate_id, now_utc

logger = logging.getLogger(__name__)

TODO_FIELDS = frozenset({"text", "completed"})


@contextlib.contextmanager
def _store_errors(action: str) -> Iterator[None]:
    """Translate I/O and parse failures into StoreUnavailableError."""
    try:
        yield
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.warning("Store failure while trying to %s: %s", action, e)
        raise StoreUnavailableError(f"Failed to {action}: {e}") from e


def _new_child_id() -> str:
    return uuid.uuid4().hex[:8]


class FilesystemStore:
    """
    Store backed by plain files under a data root.

    Layout:
        tasks/<id>.md   one task per file, YAML front matter + description
        todos.yaml      list of todos
        labels.yaml     list of labels
        note.md         the notes pad
    """

    TASKS_DIR = "tasks"
    TODOS_YAML = "todos.yaml"
    LABELS_YAML = "labels.yaml"
    NOTE_FILE = "note.md"

    def __init__(self, data_root: Path) -> None:
        """
        Initialize store.

        Args:
            data_root: Directory holding all kanpad data (e.g., .kanpad/)
        """
        self.data_root = data_root

    @property
    def tasks_dir(self) -> Path:
        return self.data_root / self.TASKS_DIR

    def ensure_directory(self) -> None:
        """Create the data directories if they don't exist."""
        with _store_errors("create data directory"):
            self.tasks_dir.mkdir(parents=True, exist_ok=True)

    # --- Task Operations ---

    def list_tasks(self) -> list[Task]:
        """Load all tasks, oldest first."""
        if not self.tasks_dir.exists():
            return []

        tasks: list[Task] = []
        with _store_errors("list tasks"):
            for filepath in self._iter_task_files():
                task = self._parse_task_file(filepath)
                if task:
                    tasks.append(task)

        return sorted(tasks, key=lambda t: (t.created_at, t.id))

    def get_task(self, task_id: str) -> Task | None:
        """Load a single task by ID."""
        filepath = self._task_path(task_id)
        if not filepath.exists():
            return None
        with _store_errors(f"read task {task_id}"):
            return self._parse_task_file(filepath)

    def create_task(self, draft: TaskDraft) -> Task:
        """Create a task file; id comes from the title, made unique."""
        self.ensure_directory()

        task_id = generate_id(
            draft.title,
            exists=lambda candidate: self._task_path(candidate).exists(),
            fallback="task",
        )
        created = self._next_created_at()

        task = Task(
            id=task_id,
            title=draft.title,
            description=draft.description,
            column_id=draft.column_id,
            priority=draft.priority,
            labels=draft.labels,
            due_date=draft.due_date,
            subtasks=[self._materialize_subtask(s) for s in draft.subtasks],
            created_at=created,
            updated_at=created,
        )
        self._write_task(task)
        logger.debug("Task file written: %s", task_id)
        return task

    def update_task(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        """Replace the provided fields; labels and subtasks are replaced wholesale."""
        unknown = set(changes) - MUTABLE_TASK_FIELDS
        if unknown:
            raise ValidationFailure(f"Cannot update task fields: {', '.join(sorted(unknown))}")

        existing = self.get_task(task_id)
        if existing is None:
            raise NotFoundError("Task", task_id)

        data = existing.model_dump()
        data["updated_at"] = now_utc()
        try:
            for field, value in changes.items():
                if field == "subtasks":
                    value = [self._materialize_subtask(s) for s in value or []]
                elif field == "labels":
                    value = list(value or [])
                data[field] = value
            task = Task.model_validate(data)
        except ValidationError as e:
            raise ValidationFailure(f"Invalid task update for {task_id}: {e}") from e

        self._write_task(task)
        return task

    def delete_task(self, task_id: str) -> None:
        """Delete a task file."""
        filepath = self._task_path(task_id)
        if not filepath.exists():
            raise NotFoundError("Task", task_id)
        with _store_errors(f"delete task {task_id}"):
            filepath.unlink()

    # --- Todo Operations ---

    def list_todos(self) -> list[Todo]:
        """Load all todos, oldest first."""
        items = self._load_list(self.TODOS_YAML)
        with _store_errors("parse todos"):
            todos = [Todo.model_validate(item) for item in items]
        return sorted(todos, key=lambda t: (t.created_at, t.id))

    def create_todo(self, text: str) -> Todo:
        todos = self.list_todos()
        todo = Todo(id=_new_child_id(), text=text, completed=False, created_at=now_utc())
        todos.append(todo)
        self._save_list(self.TODOS_YAML, todos)
        return todo

    def update_todo(self, todo_id: str, changes: Mapping[str, Any]) -> Todo:
        unknown = set(changes) - TODO_FIELDS
        if unknown:
            raise ValidationFailure(f"Cannot update todo fields: {', '.join(sorted(unknown))}")

        todos = self.list_todos()
        for index, todo in enumerate(todos):
            if todo.id == todo_id:
                try:
                    updated = Todo.model_validate({**todo.model_dump(), **changes})
                except ValidationError as e:
                    raise ValidationFailure(f"Invalid todo update for {todo_id}: {e}") from e
                todos[index] = updated
                self._save_list(self.TODOS_YAML, todos)
                return updated
        raise NotFoundError("Todo", todo_id)

    def delete_todo(self, todo_id: str) -> None:
        todos = self.list_todos()
        remaining = [t for t in todos if t.id != todo_id]
        if len(remaining) == len(todos):
            raise NotFoundError("Todo", todo_id)
        self._save_list(self.TODOS_YAML, remaining)

    # --- Label Operations ---

    def list_labels(self) -> list[Label]:
        """Load all labels ordered by name."""
        items = self._load_list(self.LABELS_YAML)
        with _store_errors("parse labels"):
            labels = [Label.model_validate(item) for item in items]
        return sorted(labels, key=lambda label: (label.name.lower(), label.id))

    def create_label(self, name: str, color: LabelColor, label_id: str | None = None) -> Label:
        labels = self.list_labels()
        existing_ids = {label.id for label in labels}

        if label_id is None:
            label_id = generate_id(name, exists=existing_ids.__contains__, fallback="label")
        elif label_id in existing_ids:
            raise ValidationFailure(f"Label already exists: {label_id}")

        label = Label(id=label_id, name=name, color=color)
        labels.append(label)
        self._save_list(self.LABELS_YAML, labels)
        return label

    def delete_label(self, label_id: str) -> None:
        labels = self.list_labels()
        remaining = [label for label in labels if label.id != label_id]
        if len(remaining) == len(labels):
            raise NotFoundError("Label", label_id)
        # Tasks keep their reference to the deleted id
        self._save_list(self.LABELS_YAML, remaining)

    # --- Note Operations ---

    def get_note(self) -> Note:
        """Return the note, creating the empty singleton on first access."""
        note = self._read_note()
        if note is None:
            note = Note(id=NOTE_ID, content="", updated_at=now_utc())
            self._write_note(note)
            logger.debug("Created empty note")
        return note

    def update_note(self, content: str) -> Note:
        note = Note(id=NOTE_ID, content=content, updated_at=now_utc())
        self._write_note(note)
        return note

    # --- Private Methods ---

    def _task_path(self, task_id: str) -> Path:
        return self.tasks_dir / f"{task_id}.md"

    def _iter_task_files(self) -> Iterator[Path]:
        """Iterate over all .md files in the tasks directory."""
        yield from self.tasks_dir.glob("*.md")

    def _parse_task_file(self, filepath: Path) -> Task | None:
        """Parse a single task file, skipping files that are not valid tasks."""
        try:
            post = frontmatter.load(filepath)
            mtime = datetime.fromtimestamp(filepath.stat().st_mtime, UTC)
            return Task.from_frontmatter(
                task_id=filepath.stem,
                metadata=post.metadata,
                body=post.content,
                created_fallback=mtime,
            )
        except (ValueError, TypeError, yaml.YAMLError) as e:
            logger.warning("Skipping unreadable task file %s: %s", filepath.name, e)
            return None

    def _write_task(self, task: Task) -> None:
        post = frontmatter.Post(task.description or "")
        post.metadata = task.to_frontmatter()

        with _store_errors(f"write task {task.id}"):
            self.tasks_dir.mkdir(parents=True, exist_ok=True)
            with self._task_path(task.id).open("w") as f:
                # sort_keys=False preserves field order
                f.write(frontmatter.dumps(post, sort_keys=False))

    def _materialize_subtask(self, value: Subtask | SubtaskDraft | Mapping[str, Any]) -> Subtask:
        """Turn subtask content into a stored subtask with a fresh id."""
        if isinstance(value, (Subtask, SubtaskDraft)):
            value = value.model_dump()
        draft = SubtaskDraft.model_validate(value)
        return Subtask(id=_new_child_id(), text=draft.text, completed=draft.completed)

    def _next_created_at(self) -> datetime:
        """Creation time that sorts strictly after every existing task."""
        created = now_utc()
        existing = self.list_tasks()
        if existing and existing[-1].created_at >= created:
            created = existing[-1].created_at + timedelta(microseconds=1)
        return created

    def _load_list(self, filename: str) -> list[dict]:
        path = self.data_root / filename
        if not path.exists():
            return []
        with _store_errors(f"read {filename}"), path.open() as f:
            data = yaml.safe_load(f)
        if data is None:
            return []
        if not isinstance(data, list):
            raise StoreUnavailableError(f"{filename} must contain a list")
        return data

    def _save_list(self, filename: str, items: list[Todo] | list[Label]) -> None:
        path = self.data_root / filename
        data = [item.model_dump(mode="json") for item in items]
        with _store_errors(f"write {filename}"):
            self.data_root.mkdir(parents=True, exist_ok=True)
            with path.open("w") as f:
                f.write("# Auto-generated - edit with care\n")
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    def _read_note(self) -> Note | None:
        path = self.data_root / self.NOTE_FILE
        if not path.exists():
            return None
        with _store_errors("read note"):
            post = frontmatter.load(path)
        updated = post.metadata.get("updated")
        return Note(
            id=NOTE_ID,
            content=post.content,
            updated_at=datetime.fromisoformat(updated) if isinstance(updated, str) else updated,
        )

    def _write_note(self, note: Note) -> None:
        post = frontmatter.Post(note.content)
        post.metadata = {"id": note.id}
        if note.updated_at:
            post.metadata["updated"] = note.updated_at.isoformat()
        with _store_errors("write note"):
            self.data_root.mkdir(parents=True, exist_ok=True)
            with (self.data_root / self.NOTE_FILE).open("w") as f:
                f.write(frontmatter.dumps(post, sort_keys=False))
