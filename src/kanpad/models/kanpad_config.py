"""Configuration models for kanpad.yml."""

from pydantic import BaseModel, Field, field_validator

from .enums import BOARD_COLUMNS, ArchivePolicy, ColumnId, LabelColor
from .label import DEFAULT_LABELS


class ColumnConfig(BaseModel):
    """Display settings for a single column."""

    id: ColumnId
    title: str = Field(..., min_length=1)


class LabelSeedConfig(BaseModel):
    """A label created by the first-run bootstrap."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    color: LabelColor

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate label ID is lowercase alphanumeric with hyphens."""
        if not all(c.isalnum() or c == "-" for c in v):
            raise ValueError("Label ID must be alphanumeric with hyphens only")
        if v != v.lower():
            raise ValueError("Label ID must be lowercase")
        return v


class BoardConfig(BaseModel):
    """Configuration for board columns and lifecycle policy."""

    columns: list[ColumnConfig] = Field(default_factory=lambda: _default_columns())
    archive_policy: ArchivePolicy = ArchivePolicy.COMPLETE_ONLY

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: list[ColumnConfig]) -> list[ColumnConfig]:
        """Fill in titles for columns not listed; reject duplicates."""
        ids = [col.id for col in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Column IDs must be unique")

        by_id = {col.id: col for col in v}
        defaults = {col.id: col for col in _default_columns()}
        return [by_id.get(column_id, defaults[column_id]) for column_id in ColumnId]

    def get_title(self, column_id: ColumnId) -> str:
        """Get display title for a column."""
        for col in self.columns:
            if col.id == column_id:
                return col.title
        return column_id.value.replace("-", " ").title()

    @property
    def visible_columns(self) -> list[ColumnConfig]:
        """Columns shown on the board, in workflow order (archive excluded)."""
        return [col for col in self.columns if col.id in BOARD_COLUMNS]

    @classmethod
    def default(cls) -> "BoardConfig":
        return cls()


def _default_columns() -> list[ColumnConfig]:
    return [
        ColumnConfig(id=ColumnId.TODO, title="Todo"),
        ColumnConfig(id=ColumnId.IN_PROGRESS, title="In Progress"),
        ColumnConfig(id=ColumnId.COMPLETE, title="Complete"),
        ColumnConfig(id=ColumnId.ARCHIVE, title="Archive"),
    ]


class KanpadConfig(BaseModel):
    """Root configuration model for kanpad.yml."""

    version: int = 1
    board: BoardConfig = Field(default_factory=BoardConfig.default)
    default_labels: list[LabelSeedConfig] = Field(
        default_factory=lambda: [
            LabelSeedConfig(id=label.id, name=label.name, color=label.color)
            for label in DEFAULT_LABELS
        ]
    )

    @field_validator("default_labels")
    @classmethod
    def validate_default_labels(cls, v: list[LabelSeedConfig]) -> list[LabelSeedConfig]:
        """Label IDs must be unique."""
        ids = [label.id for label in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Default label IDs must be unique")
        return v

    @classmethod
    def default(cls) -> "KanpadConfig":
        """Create default configuration."""
        return cls()
