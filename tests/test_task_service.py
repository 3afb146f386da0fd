"""Tests for TaskService."""

from datetime import UTC, date, datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from kanpad.errors import NotFoundError, StoreUnavailableError, ValidationFailure
from kanpad.models import ColumnId, Priority, Subtask, SubtaskDraft, Task
from kanpad.repositories import FilesystemStore
from kanpad.services import TaskService

CREATED = datetime(2025, 1, 1, tzinfo=UTC)


@pytest.fixture
def store(tmp_path: Path) -> FilesystemStore:
    return FilesystemStore(tmp_path / ".kanpad")


@pytest.fixture
def task_service(store: FilesystemStore) -> TaskService:
    return TaskService(store)


@pytest.fixture
def failing_store() -> MagicMock:
    """Store whose writes fail; one task is available for reading."""
    store = MagicMock()
    store.list_tasks.return_value = [
        Task(id="t", title="Original", priority=Priority.LOW, labels=["bug"], created_at=CREATED)
    ]
    store.update_task.side_effect = StoreUnavailableError("disk full")
    store.create_task.side_effect = StoreUnavailableError("disk full")
    store.delete_task.side_effect = StoreUnavailableError("disk full")
    return store


class TestTaskServiceCreate:
    """Tests for task creation."""

    def test_create_basic(self, task_service: TaskService):
        """create_task stores a medium-priority todo by default."""
        task = task_service.create_task("My New Task")

        assert task.id == "my-new-task"
        assert task.column_id == ColumnId.TODO
        assert task.priority == Priority.MEDIUM
        assert task.created_at is not None

    def test_create_with_all_fields(self, task_service: TaskService):
        task = task_service.create_task(
            "  Full task  ",
            column_id=ColumnId.IN_PROGRESS,
            priority=Priority.HIGH,
            description="  details  ",
            labels=["bug", "bug", "docs"],
            due_date=date(2025, 2, 1),
            subtasks=["one", "  ", "two"],
        )

        assert task.title == "Full task"
        assert task.description == "details"
        assert task.labels == ["bug", "docs"]
        assert task.due_date == date(2025, 2, 1)
        assert [s.text for s in task.subtasks] == ["one", "two"]

    def test_blank_title_rejected_before_store(self):
        """A blank title never reaches the store."""
        store = MagicMock()
        service = TaskService(store)

        with pytest.raises(ValidationFailure):
            service.create_task("   ")
        store.create_task.assert_not_called()

    def test_created_task_in_snapshot(self, task_service: TaskService):
        task_service.get_all_tasks()
        task = task_service.create_task("New")
        assert task_service.get_task(task.id) == task

    def test_failed_create_leaves_snapshot(self, failing_store: MagicMock):
        service = TaskService(failing_store)
        before = service.get_all_tasks()

        with pytest.raises(StoreUnavailableError):
            service.create_task("New")
        assert service.get_all_tasks() == before


class TestTaskServiceUpdate:
    """Tests for updates and the optimistic snapshot."""

    def test_update_fields(self, task_service: TaskService):
        task = task_service.create_task("T")

        updated = task_service.update_task(task.id, priority=Priority.HIGH, title=" Renamed ")

        assert updated.title == "Renamed"
        assert updated.priority == Priority.HIGH
        assert task_service.get_task(task.id) == updated

    def test_blank_title_rejected(self, task_service: TaskService):
        task = task_service.create_task("T")
        with pytest.raises(ValidationFailure):
            task_service.update_task(task.id, title="")

    def test_store_failure_reverts_snapshot(self, failing_store: MagicMock):
        """A failed update restores the task as it was before the call."""
        service = TaskService(failing_store)
        original = service.get_task("t")

        with pytest.raises(StoreUnavailableError):
            service.update_task("t", title="Changed", labels=["docs"])

        assert service.get_task("t") == original

    def test_malformed_subtask_is_validation_failure(self, task_service: TaskService):
        """Bad subtask data is rejected before the store and the snapshot is untouched."""
        task = task_service.create_task("T", subtasks=["keep"])
        task_service.get_all_tasks()
        before = task_service.get_task(task.id)

        with pytest.raises(ValidationFailure):
            task_service.update_task(task.id, subtasks=[{"completed": True}])

        assert task_service.get_task(task.id) == before

    def test_snapshot_shows_change_during_store_call(self):
        """The optimistic value is visible while the store call is in flight."""
        store = MagicMock()
        store.list_tasks.return_value = [Task(id="t", title="Old", created_at=CREATED)]
        service = TaskService(store)
        seen: list[str] = []

        def record(task_id, changes):
            seen.append(service.get_task(task_id).title)
            raise StoreUnavailableError("offline")

        store.update_task.side_effect = record

        with pytest.raises(StoreUnavailableError):
            service.update_task("t", title="New")

        assert seen == ["New"]
        assert service.get_task("t").title == "Old"

    def test_vanished_task_dropped(self):
        """A task deleted elsewhere is dropped locally when an update finds it gone."""
        store = MagicMock()
        store.list_tasks.return_value = [Task(id="t", title="T", created_at=CREATED)]
        store.update_task.side_effect = NotFoundError("Task", "t")
        service = TaskService(store)
        removed: list[str] = []
        service.on_removed(removed.append)

        with pytest.raises(NotFoundError):
            service.update_task("t", title="X")

        assert service.get_task("t") is None
        assert removed == ["t"]

    def test_update_missing(self, task_service: TaskService):
        with pytest.raises(NotFoundError):
            task_service.update_task("ghost", title="x")

    def test_archive_notifies_listeners(self, task_service: TaskService):
        task = task_service.create_task("T", column_id=ColumnId.COMPLETE)
        removed: list[str] = []
        task_service.on_removed(removed.append)

        task_service.update_task(task.id, column_id=ColumnId.ARCHIVE)

        assert removed == [task.id]

    def test_edit_task_keeps_subtasks_by_default(self, task_service: TaskService):
        """The edit form only sends subtasks when they changed."""
        task = task_service.create_task("T", subtasks=["a"])

        edited = task_service.edit_task(
            task.id,
            title="T2",
            description=None,
            priority=Priority.LOW,
            labels=[],
            due_date=None,
        )

        assert edited.subtasks == task.subtasks

    def test_edit_task_with_subtasks(self, task_service: TaskService):
        task = task_service.create_task("T", subtasks=["a"])

        edited = task_service.edit_task(
            task.id,
            title="T",
            description=None,
            priority=Priority.MEDIUM,
            labels=[],
            due_date=None,
            subtasks=[SubtaskDraft(text="a", completed=True), SubtaskDraft(text="b")],
        )

        assert [(s.text, s.completed) for s in edited.subtasks] == [("a", True), ("b", False)]


class TestTaskServiceDelete:
    """Tests for deletion."""

    def test_delete(self, task_service: TaskService):
        task = task_service.create_task("T")
        removed: list[str] = []
        task_service.on_removed(removed.append)

        task_service.delete_task(task.id)

        assert task_service.get_task(task.id) is None
        assert removed == [task.id]

    def test_failed_delete_keeps_task(self, failing_store: MagicMock):
        service = TaskService(failing_store)

        with pytest.raises(StoreUnavailableError):
            service.delete_task("t")
        assert service.get_task("t") is not None

    def test_delete_missing(self, task_service: TaskService):
        with pytest.raises(NotFoundError):
            task_service.delete_task("ghost")


class TestChildCollections:
    """Tests for label and subtask helpers, which send full lists."""

    def test_toggle_label(self, task_service: TaskService):
        task = task_service.create_task("T", labels=["bug"])

        added = task_service.toggle_label(task.id, "docs")
        assert added.labels == ["bug", "docs"]

        removed = task_service.toggle_label(task.id, "bug")
        assert removed.labels == ["docs"]

    def test_add_and_toggle_subtask(self, task_service: TaskService):
        task = task_service.create_task("T")

        with_sub = task_service.add_subtask(task.id, "step one")
        subtask = with_sub.subtasks[0]
        toggled = task_service.toggle_subtask(task.id, subtask.id)

        assert toggled.subtasks[0].text == "step one"
        assert toggled.subtasks[0].completed
        assert toggled.subtask_progress == (1, 1)

    def test_blank_subtask_rejected(self, task_service: TaskService):
        task = task_service.create_task("T")
        with pytest.raises(ValidationFailure):
            task_service.add_subtask(task.id, " ")

    def test_remove_subtask(self, task_service: TaskService):
        task = task_service.create_task("T", subtasks=["a", "b"])
        first = task.subtasks[0]

        updated = task_service.remove_subtask(task.id, first.id)

        assert [s.text for s in updated.subtasks] == ["b"]

    def test_unknown_subtask(self, task_service: TaskService):
        task = task_service.create_task("T")
        with pytest.raises(NotFoundError):
            task_service.toggle_subtask(task.id, "nope")
        with pytest.raises(NotFoundError):
            task_service.remove_subtask(task.id, "nope")

    def test_subtask_ids_reissued(self, task_service: TaskService):
        """Subtasks are replaced wholesale, so ids change on every update."""
        task = task_service.create_task("T", subtasks=["a"])
        updated = task_service.add_subtask(task.id, "b")

        assert task.subtasks[0].id not in {s.id for s in updated.subtasks}
        assert isinstance(updated.subtasks[0], Subtask)
