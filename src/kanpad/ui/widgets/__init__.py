"""Widget components."""

from .column import EmptyColumnMessage, KanbanColumn
from .command_bar import CommandBar
from .confirm_modal import ConfirmModal
from .task_card import TaskCard
from .task_form import TaskFormModal, TaskFormResult
from .task_preview_modal import TaskPreviewModal

__all__ = [
    "CommandBar",
    "ConfirmModal",
    "EmptyColumnMessage",
    "KanbanColumn",
    "TaskCard",
    "TaskFormModal",
    "TaskFormResult",
    "TaskPreviewModal",
]
