"""Task domain model."""

from datetime import UTC, date, datetime, time
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..utils.datetime import from_iso, parse_date
from .enums import ColumnId, Priority

# Fields a caller may change through an update; everything else is store-owned
MUTABLE_TASK_FIELDS = frozenset(
    {"title", "description", "column_id", "priority", "labels", "due_date", "subtasks"}
)


class Subtask(BaseModel):
    """A checklist item owned by a task."""

    id: str
    text: str
    completed: bool = False


class SubtaskDraft(BaseModel):
    """Subtask content without an id; the store assigns ids on write."""

    text: str
    completed: bool = False


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


class TaskDraft(BaseModel):
    """Mutable task fields accepted when creating a task."""

    title: str
    description: str | None = None
    column_id: ColumnId = ColumnId.TODO
    priority: Priority = Priority.MEDIUM
    labels: list[str] = Field(default_factory=list)
    due_date: date | None = None
    subtasks: list[SubtaskDraft] = Field(default_factory=list)

    @field_validator("labels")
    @classmethod
    def dedupe_labels(cls, v: list[str]) -> list[str]:
        """Keep the first occurrence of each label id."""
        return _dedupe(v)


class Task(BaseModel):
    """A card on the board."""

    id: str
    title: str
    description: str | None = None
    column_id: ColumnId = ColumnId.TODO
    priority: Priority = Priority.MEDIUM
    labels: list[str] = Field(default_factory=list)  # label ids, may dangle
    due_date: date | None = None
    subtasks: list[Subtask] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime | None = None

    @field_validator("labels")
    @classmethod
    def dedupe_labels(cls, v: list[str]) -> list[str]:
        """Keep the first occurrence of each label id."""
        return _dedupe(v)

    @property
    def is_archived(self) -> bool:
        return self.column_id is ColumnId.ARCHIVE

    @property
    def subtask_progress(self) -> tuple[int, int]:
        """(completed, total) subtask counts."""
        done = sum(1 for s in self.subtasks if s.completed)
        return done, len(self.subtasks)

    def to_frontmatter(self) -> dict:
        """Convert to dict suitable for YAML front matter."""
        data: dict[str, Any] = {
            "title": self.title,
            "column": self.column_id.value,
            "priority": self.priority.value,
        }
        if self.labels:
            data["labels"] = list(self.labels)
        if self.due_date:
            data["due"] = self.due_date.isoformat()
        if self.subtasks:
            data["subtasks"] = [
                {"id": s.id, "text": s.text, "completed": s.completed} for s in self.subtasks
            ]
        data["created"] = self.created_at.isoformat()
        if self.updated_at:
            data["updated"] = self.updated_at.isoformat()
        return data

    @classmethod
    def from_frontmatter(
        cls,
        task_id: str,
        metadata: dict,
        body: str,
        created_fallback: datetime | None = None,
    ) -> "Task":
        """Create Task from parsed front matter; the body is the description."""
        description = body.strip() or None
        return cls(
            id=task_id,
            title=str(metadata.get("title") or task_id),
            description=description,
            column_id=ColumnId(metadata.get("column", ColumnId.TODO.value)),
            priority=Priority(metadata.get("priority", Priority.MEDIUM.value)),
            labels=[str(label) for label in metadata.get("labels") or []],
            due_date=parse_date(metadata.get("due")),
            subtasks=[Subtask(**s) for s in metadata.get("subtasks") or []],
            created_at=_parse_datetime(metadata.get("created")) or created_fallback,
            updated_at=_parse_datetime(metadata.get("updated")),
        )


def _parse_datetime(value: str | date | datetime | None) -> datetime | None:
    """Parse datetime from string or pass through; naive values are taken as UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        # Hand-written `created: 2025-01-01` loads as a plain date
        parsed = datetime.combine(value, time.min)
    else:
        parsed = from_iso(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
