"""Tests for data models."""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from kanpad.models import (
    BOARD_COLUMNS,
    Board,
    BoardConfig,
    ColumnId,
    KanpadConfig,
    Priority,
    Subtask,
    Task,
    TaskDraft,
)

CREATED = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


def make_task(task_id: str, column_id: ColumnId = ColumnId.TODO, **kwargs) -> Task:
    return Task(id=task_id, title=task_id.title(), column_id=column_id, created_at=CREATED, **kwargs)


class TestEnums:
    """Tests for column and priority enums."""

    def test_board_columns_exclude_archive(self):
        """Only the three workflow columns are move targets."""
        assert BOARD_COLUMNS == (ColumnId.TODO, ColumnId.IN_PROGRESS, ColumnId.COMPLETE)
        assert not ColumnId.ARCHIVE.is_visible
        assert ColumnId.IN_PROGRESS.is_visible

    def test_column_values(self):
        """Column ids use their wire names."""
        assert ColumnId("in-progress") is ColumnId.IN_PROGRESS

    def test_priority_rank(self):
        """High sorts before medium before low."""
        assert Priority.HIGH.rank < Priority.MEDIUM.rank < Priority.LOW.rank


class TestTaskModel:
    """Tests for the Task model."""

    def test_defaults(self):
        """A minimal task is a medium-priority todo."""
        task = Task(id="t", title="T", created_at=CREATED)

        assert task.column_id == ColumnId.TODO
        assert task.priority == Priority.MEDIUM
        assert task.labels == []
        assert task.subtasks == []
        assert task.due_date is None
        assert not task.is_archived

    def test_labels_are_deduplicated(self):
        """Repeated label ids collapse, first occurrence wins."""
        task = Task(id="t", title="T", labels=["bug", "docs", "bug"], created_at=CREATED)
        assert task.labels == ["bug", "docs"]

    def test_draft_labels_are_deduplicated(self):
        draft = TaskDraft(title="T", labels=["a", "a", "b"])
        assert draft.labels == ["a", "b"]

    def test_subtask_progress(self):
        """Progress counts completed subtasks out of all."""
        task = Task(
            id="t",
            title="T",
            created_at=CREATED,
            subtasks=[
                Subtask(id="1", text="one", completed=True),
                Subtask(id="2", text="two"),
                Subtask(id="3", text="three", completed=True),
            ],
        )
        assert task.subtask_progress == (2, 3)

    def test_archived(self):
        assert make_task("t", ColumnId.ARCHIVE).is_archived

    def test_invalid_column_rejected(self):
        """Unknown column names fail validation."""
        with pytest.raises(ValidationError):
            Task(id="t", title="T", column_id="backlog", created_at=CREATED)


class TestTaskFrontmatter:
    """Tests for front matter conversion."""

    def test_round_trip_fields(self):
        """All stored fields survive to_frontmatter/from_frontmatter."""
        task = Task(
            id="fix-bug",
            title="Fix bug",
            description="Steps to reproduce",
            column_id=ColumnId.IN_PROGRESS,
            priority=Priority.HIGH,
            labels=["bug"],
            due_date=date(2025, 3, 1),
            subtasks=[Subtask(id="abc", text="write test", completed=True)],
            created_at=CREATED,
            updated_at=CREATED,
        )

        restored = Task.from_frontmatter("fix-bug", task.to_frontmatter(), task.description or "")

        assert restored == task

    def test_frontmatter_keys(self):
        """Empty optional fields are left out of the file."""
        data = make_task("t").to_frontmatter()

        assert data["column"] == "todo"
        assert data["priority"] == "medium"
        assert "labels" not in data
        assert "due" not in data
        assert "subtasks" not in data

    def test_missing_created_uses_fallback(self):
        """Files without 'created' fall back to the supplied time."""
        task = Task.from_frontmatter("t", {"title": "T"}, "", created_fallback=CREATED)
        assert task.created_at == CREATED

    def test_naive_datetime_is_utc(self):
        """YAML timestamps without a zone are read as UTC."""
        task = Task.from_frontmatter("t", {"title": "T", "created": datetime(2025, 1, 1, 12, 0)}, "")
        assert task.created_at == CREATED

    def test_date_only_created_is_midnight_utc(self):
        task = Task.from_frontmatter("t", {"title": "T", "created": date(2025, 1, 1)}, "")
        assert task.created_at == datetime(2025, 1, 1, tzinfo=UTC)

    def test_blank_body_means_no_description(self):
        task = Task.from_frontmatter("t", {"title": "T", "created": CREATED}, "  \n")
        assert task.description is None

    def test_title_defaults_to_id(self):
        task = Task.from_frontmatter("my-task", {"created": CREATED}, "")
        assert task.title == "my-task"


class TestBoard:
    """Tests for the Board model."""

    def test_from_tasks_groups_by_column(self):
        """Tasks are grouped into their columns, keeping input order."""
        tasks = [
            make_task("a"),
            make_task("b", ColumnId.COMPLETE),
            make_task("c"),
            make_task("d", ColumnId.ARCHIVE),
        ]
        board = Board.from_tasks(tasks)

        assert [t.id for t in board.get_column(ColumnId.TODO)] == ["a", "c"]
        assert [t.id for t in board.get_column(ColumnId.COMPLETE)] == ["b"]
        assert [t.id for t in board.archived] == ["d"]
        assert board.get_column(ColumnId.IN_PROGRESS) == []
        assert board.task_count == 4

    def test_visible_columns_use_config_titles(self):
        """Visible columns skip the archive and use configured titles."""
        config = BoardConfig(columns=[{"id": "todo", "title": "Backlog"}])
        board = Board.from_tasks([make_task("a")])

        visible = board.get_visible_columns(config)

        assert [(cid, title) for cid, title, _ in visible] == [
            (ColumnId.TODO, "Backlog"),
            (ColumnId.IN_PROGRESS, "In Progress"),
            (ColumnId.COMPLETE, "Complete"),
        ]
        assert [t.id for t in visible[0][2]] == ["a"]


class TestKanpadConfig:
    """Tests for configuration models."""

    def test_default_config(self):
        config = KanpadConfig.default()

        assert config.version == 1
        assert config.board.archive_policy.value == "complete_only"
        assert [label.id for label in config.default_labels] == [
            "bug",
            "feature",
            "design",
            "docs",
            "urgent",
        ]

    def test_partial_columns_filled_in(self):
        """Columns missing from config get their default titles."""
        config = BoardConfig(columns=[{"id": "complete", "title": "Done"}])

        assert [col.id for col in config.columns] == list(ColumnId)
        assert config.get_title(ColumnId.COMPLETE) == "Done"
        assert config.get_title(ColumnId.TODO) == "Todo"

    def test_duplicate_columns_rejected(self):
        with pytest.raises(ValidationError, match="unique"):
            BoardConfig(columns=[{"id": "todo", "title": "A"}, {"id": "todo", "title": "B"}])

    def test_duplicate_default_labels_rejected(self):
        with pytest.raises(ValidationError, match="unique"):
            KanpadConfig(
                default_labels=[
                    {"id": "bug", "name": "Bug", "color": "red"},
                    {"id": "bug", "name": "Bug 2", "color": "blue"},
                ]
            )

    def test_label_seed_id_must_be_lowercase(self):
        with pytest.raises(ValidationError, match="lowercase"):
            KanpadConfig(default_labels=[{"id": "Bug", "name": "Bug", "color": "red"}])

    def test_unknown_label_color_rejected(self):
        with pytest.raises(ValidationError):
            KanpadConfig(default_labels=[{"id": "bug", "name": "Bug", "color": "teal"}])
