"""kanpad TUI Application."""

import logging

from textual.actions import SkipAction
from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen

from .config import Settings
from .errors import KanpadError
from .models import ColumnId, Label, Task
from .repositories import FilesystemStore
from .services import (
    BoardService,
    BulkResult,
    ConfigService,
    LabelService,
    NoteService,
    SeedService,
    SelectionService,
    TaskService,
    TodoService,
    resolve_labels,
)
from .ui.screens import BoardScreen, HelpScreen, NotesScreen, TodoScreen
from .ui.widgets import CommandBar, ConfirmModal, TaskFormModal, TaskFormResult, TaskPreviewModal
from .utils import today_local

logger = logging.getLogger(__name__)


class KanpadApp(App):
    """kanpad - personal kanban board, todos and notes."""

    TITLE = "kanpad"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("?", "help", "Help", show=True),
        Binding("r", "refresh", "Refresh", show=False),
        # Navigation - vim style
        Binding("h", "nav_left", "← Column", show=False),
        Binding("j", "nav_down", "↓ Task", show=False),
        Binding("k", "nav_up", "↑ Task", show=False),
        Binding("l", "nav_right", "→ Column", show=False),
        # Navigation - arrow keys
        Binding("left", "nav_left", "← Column", show=False),
        Binding("down", "nav_down", "↓ Task", show=False),
        Binding("up", "nav_up", "↑ Task", show=False),
        Binding("right", "nav_right", "→ Column", show=False),
        # Jump navigation
        Binding("g", "nav_first", "First", show=False),
        Binding("G", "nav_last", "Last", show=False),
        Binding("home", "nav_first", "First", show=False),
        Binding("end", "nav_last", "Last", show=False),
        # Task actions
        Binding("n", "new_task", "New", show=True),
        Binding("e", "edit_task", "Edit", show=True),
        Binding("enter", "preview_task", "Preview", show=False),
        Binding("H", "move_task_left", "Move ←", show=False),
        Binding("L", "move_task_right", "Move →", show=False),
        Binding("shift+left", "move_task_left", "Move ←", show=False),
        Binding("shift+right", "move_task_right", "Move →", show=False),
        Binding("a", "archive_task", "Archive", show=True),
        Binding("R", "restore_task", "Restore", show=False),
        Binding("d", "delete_task", "Delete", show=False),
        # Selection and bulk actions
        Binding("x", "toggle_select", "Select", show=True),
        Binding("space", "toggle_select", "Select", show=False),
        Binding("X", "clear_selection", "Clear selection", show=False),
        Binding("ctrl+a", "select_column", "Select column", show=False),
        Binding("1", "bulk_move('todo')", "Selected → Todo", show=False),
        Binding("2", "bulk_move('in-progress')", "Selected → In Progress", show=False),
        Binding("3", "bulk_move('complete')", "Selected → Complete", show=False),
        Binding("A", "bulk_archive", "Archive selected", show=False),
        Binding("D", "bulk_delete", "Delete selected", show=False),
        # Other views
        Binding("v", "toggle_archive", "Archive", show=True),
        Binding("t", "todos", "Todos", show=True),
        Binding("o", "notes", "Notes", show=True),
        # Filter mode
        Binding("/", "enter_filter", "Filter", show=True),
        Binding("escape", "escape", "Back", show=False, priority=True),
    ]

    SCREENS = {
        "board": BoardScreen,
    }

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services()

    def _init_services(self) -> None:
        """Initialize store and services."""
        self.config_service = ConfigService(self.settings.data_root)
        # Load once up front so a broken kanpad.yml is reported on mount
        self.config_service.get_config()

        self.store = FilesystemStore(self.settings.data_root)
        self.task_service = TaskService(self.store)
        self.board_service = BoardService(self.task_service, self.config_service)
        self.filter_service = self.board_service.filter_service
        self.selection_service = SelectionService(self.board_service)
        self.label_service = LabelService(self.store)
        self.todo_service = TodoService(self.store)
        self.note_service = NoteService(self.store)
        self.seed_service = SeedService(self.store, self.config_service)

    def on_mount(self) -> None:
        """Bootstrap the data directory, then show the board."""
        if self.config_service.has_config_error:
            self.notify(
                f"Using default config: {self.config_service.config_error}",
                severity="warning",
            )

        try:
            self.store.ensure_directory()
            self.seed_service.seed()
        except KanpadError as e:
            self._report_error("Startup", e)

        self.push_screen("board")

    def _report_error(self, action: str, error: KanpadError) -> None:
        """Log a failed operation and show it as a non-blocking notification."""
        logger.warning("%s failed: %s", action, error)
        self.notify(f"{action} failed: {error}", severity="error")

    def _form_labels(self) -> list[Label]:
        """Labels offered in the task form; the form still opens if they fail to load."""
        try:
            return self.label_service.list_labels()
        except KanpadError as e:
            self._report_error("Loading labels", e)
            return []

    def _board(self) -> BoardScreen | None:
        screen = self.screen
        if isinstance(screen, BoardScreen):
            return screen
        return None

    def action_refresh(self) -> None:
        """Re-fetch tasks from disk and redraw."""
        screen = self._board()
        if screen is None:
            return
        try:
            screen.refresh_board(reload=True)
        except KanpadError as e:
            self._report_error("Refresh", e)

    def action_help(self) -> None:
        self.push_screen(HelpScreen())

    def action_todos(self) -> None:
        if self._board() is not None:
            self.push_screen(TodoScreen(self.todo_service))

    def action_notes(self) -> None:
        if self._board() is not None:
            self.push_screen(NotesScreen(self.note_service))

    def action_toggle_archive(self) -> None:
        screen = self._board()
        if screen is None:
            return
        shown = screen.toggle_archive()
        self.notify("Archive shown" if shown else "Archive hidden", timeout=2)

    # Navigation actions
    def action_nav_left(self) -> None:
        screen = self._board()
        if screen:
            screen.navigate_column(-1)

    def action_nav_right(self) -> None:
        screen = self._board()
        if screen:
            screen.navigate_column(1)

    def action_nav_up(self) -> None:
        screen = self._board()
        if screen:
            screen.navigate_task(-1)

    def action_nav_down(self) -> None:
        screen = self._board()
        if screen:
            screen.navigate_task(1)

    def action_nav_first(self) -> None:
        screen = self._board()
        if screen:
            screen.navigate_to_task(0)

    def action_nav_last(self) -> None:
        screen = self._board()
        if screen:
            screen.navigate_to_task(-1)

    # Task actions
    def action_new_task(self) -> None:
        """Open the task form to create a task in the current column."""
        screen = self._board()
        if screen is None:
            return

        column_id = screen.current_column_id
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            TaskFormModal(self._form_labels()),
            callback=lambda result: self._handle_new_task(column_id, result),
        )

    def _handle_new_task(self, column_id: ColumnId, result: TaskFormResult | None) -> None:
        if result is None:
            return
        screen = self._board()
        if screen is None:
            return

        try:
            task = self.task_service.create_task(
                title=result.title,
                column_id=column_id,
                priority=result.priority,
                description=result.description,
                labels=result.labels,
                due_date=result.due_date,
                subtasks=[s.text for s in result.subtasks or []],
            )
        except KanpadError as e:
            self._report_error("Create", e)
            return

        screen.refresh_board(focus_task_id=task.id)
        self.notify("Task created", timeout=2)

    def action_preview_task(self) -> None:
        """Show the focused task in full."""
        screen = self._board()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return

        labels = resolve_labels(task.labels, self._form_labels())
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            TaskPreviewModal(task, labels, today_local()),
            callback=lambda edit: self._handle_preview_result(task, edit),
        )

    def _handle_preview_result(self, task: Task, edit_requested: bool) -> None:
        if edit_requested:
            self._open_edit_form(task)

    def action_edit_task(self) -> None:
        """Open the task form for the focused task."""
        screen = self._board()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return
        self._open_edit_form(task)

    def _open_edit_form(self, task: Task) -> None:
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            TaskFormModal(self._form_labels(), task),
            callback=lambda result: self._handle_edit_task(task.id, result),
        )

    def _handle_edit_task(self, task_id: str, result: TaskFormResult | None) -> None:
        if result is None:
            return
        screen = self._board()
        if screen is None:
            return

        try:
            self.task_service.edit_task(
                task_id,
                title=result.title,
                description=result.description,
                priority=result.priority,
                labels=result.labels,
                due_date=result.due_date,
                subtasks=result.subtasks,
            )
        except KanpadError as e:
            self._report_error("Save", e)
            screen.refresh_board()
            return

        screen.refresh_board(focus_task_id=task_id)
        self.notify("Task updated", timeout=2)

    def action_move_task_left(self) -> None:
        self._move_current(-1)

    def action_move_task_right(self) -> None:
        self._move_current(1)

    def _move_current(self, delta: int) -> None:
        screen = self._board()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return

        try:
            if delta < 0:
                result = self.board_service.move_left(task.id)
            else:
                result = self.board_service.move_right(task.id)
        except KanpadError as e:
            self._report_error("Move", e)
            screen.refresh_board()
            return

        if result and result.column_id != task.column_id:
            screen.refresh_board(focus_task_id=task.id)
            title = self.config_service.get_board_config().get_title(result.column_id)
            self.notify(f"Moved to {title}", timeout=2)

    def action_archive_task(self) -> None:
        screen = self._board()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return

        try:
            self.board_service.archive(task.id)
        except KanpadError as e:
            self._report_error("Archive", e)
            return

        screen.refresh_board()
        self.notify("Task archived", timeout=2)

    def action_restore_task(self) -> None:
        screen = self._board()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return

        try:
            self.board_service.restore(task.id)
        except KanpadError as e:
            self._report_error("Restore", e)
            return

        screen.refresh_board(focus_task_id=task.id)
        self.notify("Task restored", timeout=2)

    def action_delete_task(self) -> None:
        """Delete the current task (with confirmation)."""
        screen = self._board()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return

        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            ConfirmModal(f"Delete '{task.title}'?"),
            callback=lambda confirmed: self._handle_delete_confirm(task.id, confirmed),
        )

    def _handle_delete_confirm(self, task_id: str, confirmed: bool) -> None:
        if not confirmed:
            return
        screen = self._board()
        if screen is None:
            return

        try:
            self.board_service.delete(task_id)
        except KanpadError as e:
            self._report_error("Delete", e)
            screen.refresh_board()
            return

        screen.refresh_board()
        self.notify("Task deleted", timeout=2)

    # Selection actions
    def action_toggle_select(self) -> None:
        screen = self._board()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return

        self.selection_service.toggle(task.id)
        screen.refresh_board(focus_task_id=task.id)

    def action_select_column(self) -> None:
        """Add every task of the current column to the selection."""
        screen = self._board()
        if screen is None:
            return
        self.selection_service.select_all(task.id for task in screen.get_column_tasks())
        screen.refresh_board()

    def action_clear_selection(self) -> None:
        screen = self._board()
        if screen is None or not self.selection_service.count:
            return
        self.selection_service.clear()
        screen.refresh_board()

    def action_bulk_move(self, column: str) -> None:
        target = ColumnId(column)
        if self._board() is None or not self.selection_service.count:
            return
        title = self.config_service.get_board_config().get_title(target)
        self._finish_bulk(self.selection_service.bulk_move(target), f"Moved to {title}")

    def action_bulk_archive(self) -> None:
        if self._board() is None or not self.selection_service.count:
            return
        self._finish_bulk(self.selection_service.bulk_archive(), "Archived")

    def action_bulk_delete(self) -> None:
        """Delete every selected task (with confirmation)."""
        if self._board() is None:
            return
        count = self.selection_service.count
        if not count:
            return

        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            ConfirmModal(f"Delete {count} selected task(s)?", "This cannot be undone."),
            callback=self._handle_bulk_delete_confirm,
        )

    def _handle_bulk_delete_confirm(self, confirmed: bool) -> None:
        if not confirmed:
            return
        self._finish_bulk(self.selection_service.bulk_delete(), "Deleted")

    def _finish_bulk(self, result: BulkResult, verb: str) -> None:
        """Redraw after a bulk action and summarize the outcome."""
        screen = self._board()
        if screen is not None:
            screen.refresh_board()

        if result.ok:
            self.notify(f"{verb} {len(result.succeeded)} task(s)", timeout=2)
            return

        failures = "; ".join(f"{task_id}: {error}" for task_id, error in result.failed.items())
        self.notify(
            f"{verb} {len(result.succeeded)} of {result.attempted} task(s). Failed: {failures}",
            severity="error",
        )

    # Filter actions
    def action_enter_filter(self) -> None:
        screen = self._board()
        if screen is None:
            return
        screen.query_one(CommandBar).open()

    def action_escape(self) -> None:
        """Handle escape: leave modals to their own binding, exit filter mode, or clear filter."""
        screen = self.screen

        # Modal screens close themselves (notes save first)
        if isinstance(screen, ModalScreen):
            raise SkipAction()

        if not isinstance(screen, BoardScreen):
            return

        if screen.query_one(CommandBar).cancel():
            # Hand focus back to the board
            screen.refresh_board()

    def on_command_bar_filter_changed(self, message: CommandBar.FilterChanged) -> None:
        self._apply_filter(message.expression)

    def _apply_filter(self, expression: str) -> None:
        screen = self._board()
        if screen is None:
            return

        if expression.strip():
            screen.set_filter(self.filter_service.parse(expression), expression)
        else:
            screen.set_filter(None, "")

        screen.refresh_board()


def run(settings: Settings | None = None) -> None:
    """Run the kanpad application."""
    app = KanpadApp(settings)
    app.run()
