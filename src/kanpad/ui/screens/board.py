"""Main kanban board screen."""

import logging

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ...errors import KanpadError
from ...models import BoardConfig, ColumnId, Task
from ...services import FilterSpec
from ...utils import today_local
from ..widgets.column import KanbanColumn
from ..widgets.command_bar import CommandBar

logger = logging.getLogger(__name__)


def _column_widget_id(column_id: ColumnId) -> str:
    return f"column-{column_id.value}"


class BoardScreen(Screen):
    """Main kanban board screen with navigation."""

    # Layers for z-ordering (later = higher)
    LAYERS = ["base", "command"]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_column = 0
        self._current_task = 0
        self._filter: FilterSpec | None = None
        self._filter_expression = ""
        self._show_archive = False
        # Pending focus state for deferred focus after refresh
        self._pending_focus_id: str | None = None
        self._pending_column = 0
        self._pending_task = 0

    @property
    def board_config(self) -> BoardConfig:
        return self.app.config_service.get_board_config()  # pyrefly: ignore[missing-attribute]

    @property
    def column_ids(self) -> list[ColumnId]:
        """Column ids currently shown, in order."""
        ids = [col.id for col in self.board_config.visible_columns]
        if self._show_archive:
            ids.append(ColumnId.ARCHIVE)
        return ids

    @property
    def column_count(self) -> int:
        return len(self.column_ids)

    @property
    def show_archive(self) -> bool:
        return self._show_archive

    def compose(self) -> ComposeResult:
        """Create the board layout; the archive column starts hidden."""
        yield Header()

        config = self.board_config
        with Container(id="board-container"), Horizontal(id="columns"):
            for col in config.visible_columns:
                yield KanbanColumn(title=col.title, column_id=col.id, id=_column_widget_id(col.id))
            archive = KanbanColumn(
                title=config.get_title(ColumnId.ARCHIVE),
                column_id=ColumnId.ARCHIVE,
                id=_column_widget_id(ColumnId.ARCHIVE),
                classes="archive-column",
            )
            archive.display = False
            yield archive

        yield Static("", id="status-bar", classes="status-bar")
        yield CommandBar()
        yield Footer()

    def on_mount(self) -> None:
        self.load_tasks()
        self.call_after_refresh(self._update_focus)

    def set_filter(self, spec: FilterSpec | None, expression: str = "") -> None:
        """Set the active filter."""
        self._filter = spec
        self._filter_expression = expression.strip()
        self.update_status()

    def toggle_archive(self) -> bool:
        """Show or hide the archive column; returns the new visibility."""
        self._show_archive = not self._show_archive
        column = self._get_column_by_id(ColumnId.ARCHIVE)
        if column is not None:
            column.display = self._show_archive
        if not self._show_archive and self._current_column >= self.column_count:
            self._current_column = self.column_count - 1
        self.load_tasks()
        self.call_after_refresh(self._update_focus)
        return self._show_archive

    def load_tasks(self) -> None:
        """Load the filtered, ordered board and populate the columns."""
        app = self.app
        today = today_local()
        try:
            board = app.board_service.load_board(self._filter, today)  # pyrefly: ignore[missing-attribute]
            labels = app.label_service.list_labels()  # pyrefly: ignore[missing-attribute]
        except KanpadError as e:
            logger.warning("Failed to load board: %s", e)
            app.notify(f"Failed to load board: {e}", severity="error")
            return
        selected = app.selection_service.selected  # pyrefly: ignore[missing-attribute]

        for column_id in ColumnId:
            column = self._get_column_by_id(column_id)
            if column is None:
                continue
            column.set_tasks(board.get_column(column_id), labels, selected, today)

        self.update_status()

    def refresh_board(self, focus_task_id: str | None = None, reload: bool = False) -> None:
        """
        Refresh the board display.

        Args:
            focus_task_id: If provided, focus this task after refresh.
                           If None, preserves current position.
            reload: Re-fetch tasks from the store first
        """
        saved_column = self._current_column
        saved_task = self._current_task

        if reload:
            self.app.board_service.reload()  # pyrefly: ignore[missing-attribute]
        self.load_tasks()

        self._pending_focus_id = focus_task_id
        self._pending_column = saved_column
        self._pending_task = saved_task

        # Double-defer so the columns finish rebuilding their cards first
        self.call_after_refresh(self._schedule_pending_focus)

    def _schedule_pending_focus(self) -> None:
        self.call_after_refresh(self._apply_pending_focus)

    def _find_task_position(self, task_id: str) -> tuple[int, int] | None:
        """(column_index, task_index) of a task, or None if not shown."""
        for col_idx in range(self.column_count):
            column = self._get_column(col_idx)
            if column is None:
                continue
            for task_idx, task in enumerate(column.tasks):
                if task.id == task_id:
                    return (col_idx, task_idx)
        return None

    def _apply_pending_focus(self) -> None:
        if self._pending_focus_id:
            position = self._find_task_position(self._pending_focus_id)
            if position:
                self._current_column, self._current_task = position
                self._update_focus()
                return

        # Fallback: restore previous position (clamped to valid range)
        self._current_column = min(self._pending_column, self.column_count - 1)
        column = self._get_column(self._current_column)
        if column and column.task_count > 0:
            self._current_task = min(self._pending_task, column.task_count - 1)
        else:
            self._current_task = 0

        self._update_focus()

    def navigate_column(self, delta: int) -> None:
        new_column = max(0, min(self._current_column + delta, self.column_count - 1))

        if new_column != self._current_column:
            self._current_column = new_column
            column = self._get_column(new_column)
            if column and column.task_count > 0:
                self._current_task = min(self._current_task, column.task_count - 1)
            else:
                self._current_task = 0
            self._update_focus()

    def navigate_task(self, delta: int) -> None:
        column = self._get_column(self._current_column)
        if column is None or column.task_count == 0:
            return

        new_task = max(0, min(self._current_task + delta, column.task_count - 1))
        if new_task != self._current_task:
            self._current_task = new_task
            self._update_focus()

    def navigate_to_task(self, index: int) -> None:
        """Navigate to specific task index (-1 for last)."""
        column = self._get_column(self._current_column)
        if column is None or column.task_count == 0:
            return

        index = column.task_count - 1 if index < 0 else min(index, column.task_count - 1)
        self._current_task = index
        self._update_focus()

    def _get_column(self, index: int) -> KanbanColumn | None:
        if index < 0 or index >= self.column_count:
            return None
        return self._get_column_by_id(self.column_ids[index])

    def _get_column_by_id(self, column_id: ColumnId) -> KanbanColumn | None:
        try:
            return self.query_one(f"#{_column_widget_id(column_id)}", KanbanColumn)
        except Exception:
            return None

    def _update_focus(self) -> None:
        column = self._get_column(self._current_column)
        if column:
            column.focus_task(self._current_task)

    def get_current_task(self) -> Task | None:
        """Get the currently focused task."""
        column = self._get_column(self._current_column)
        if column:
            return column.get_task(self._current_task)
        return None

    def get_column_tasks(self) -> list[Task]:
        """Tasks shown in the current column."""
        column = self._get_column(self._current_column)
        return list(column.tasks) if column else []

    @property
    def current_column_id(self) -> ColumnId:
        """Column new tasks are created in; falls back to todo for the archive."""
        ids = self.column_ids
        if 0 <= self._current_column < len(ids) and ids[self._current_column].is_visible:
            return ids[self._current_column]
        return ColumnId.TODO

    def update_status(self) -> None:
        """Show the active filter and selection size in the status bar."""
        try:
            status = self.query_one("#status-bar", Static)
        except Exception:
            return

        parts: list[str] = []
        if self._filter_expression:
            parts.append(f"[dim]Filter:[/] {self._filter_expression} [dim](Esc to clear)[/]")
        count = self.app.selection_service.count  # pyrefly: ignore[missing-attribute]
        if count:
            parts.append(f"[b]{count} selected[/] [dim](X to clear)[/]")

        status.update("   ".join(parts))
        status.display = bool(parts)
