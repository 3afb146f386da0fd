"""Data models."""

from .board import Board
from .enums import BOARD_COLUMNS, ArchivePolicy, ColumnId, LabelColor, Priority
from .kanpad_config import BoardConfig, ColumnConfig, KanpadConfig, LabelSeedConfig
from .label import DEFAULT_LABELS, Label
from .note import NOTE_ID, Note
from .task import MUTABLE_TASK_FIELDS, Subtask, SubtaskDraft, Task, TaskDraft
from .todo import Todo

__all__ = [
    "BOARD_COLUMNS",
    "DEFAULT_LABELS",
    "MUTABLE_TASK_FIELDS",
    "NOTE_ID",
    "ArchivePolicy",
    "Board",
    "BoardConfig",
    "ColumnConfig",
    "ColumnId",
    "KanpadConfig",
    "Label",
    "LabelColor",
    "LabelSeedConfig",
    "Note",
    "Priority",
    "Subtask",
    "SubtaskDraft",
    "Task",
    "TaskDraft",
    "Todo",
]
