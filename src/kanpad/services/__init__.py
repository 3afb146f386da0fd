"""Service layer for business logic."""

from .board_service import Archive, BoardService, Delete, Move, Restore, Transition
from .config_service import ConfigService
from .filter_service import PRIORITY_ALL, FilterService, FilterSpec
from .label_service import LabelService, resolve_labels
from .note_service import NoteService
from .ordering_service import NO_DUE_DATE, OrderingService, describe_due, is_overdue, urgency
from .seed_service import SeedResult, SeedService
from .selection_service import BulkResult, SelectionService
from .task_service import TaskService
from .todo_service import TodoService

__all__ = [
    "NO_DUE_DATE",
    "PRIORITY_ALL",
    "Archive",
    "BoardService",
    "BulkResult",
    "ConfigService",
    "Delete",
    "FilterService",
    "FilterSpec",
    "LabelService",
    "Move",
    "NoteService",
    "OrderingService",
    "Restore",
    "SeedResult",
    "SeedService",
    "SelectionService",
    "TaskService",
    "TodoService",
    "Transition",
    "describe_due",
    "is_overdue",
    "resolve_labels",
    "urgency",
]
