"""Quick todo list screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from ...errors import KanpadError
from ...models import Todo
from ...services import TodoService


class TodoScreen(ModalScreen):
    """Flat checklist of quick todos, independent of the board."""

    DEFAULT_CSS = """
    TodoScreen {
        align: center middle;
    }

    TodoScreen > Vertical {
        width: 60;
        height: 80%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    TodoScreen .todo-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    TodoScreen OptionList {
        height: 1fr;
    }

    TodoScreen .todo-footer {
        color: $text-muted;
        text-align: center;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("space", "toggle_todo", "Toggle", show=False),
        Binding("d", "delete_todo", "Delete", show=False),
        Binding("n", "focus_input", "New", show=False),
    ]

    def __init__(self, todo_service: TodoService) -> None:
        super().__init__()
        self.todo_service = todo_service
        self._todos: list[Todo] = []

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Quick Todos", classes="todo-title")
            yield Input(placeholder="Add a todo and press Enter", id="todo-input")
            yield OptionList(id="todo-list")
            yield Static("[Space] Toggle  [d] Delete  [n] New  [Esc] Close", classes="todo-footer")

    def on_mount(self) -> None:
        self.refresh_todos()
        self.query_one(OptionList).focus()

    def refresh_todos(self, highlight: int | None = None) -> None:
        """Reload todos from the service and rebuild the list."""
        option_list = self.query_one(OptionList)
        try:
            self._todos = self.todo_service.list_todos()
        except KanpadError as e:
            self.app.notify(f"Failed to load todos: {e}", severity="error")
            return

        option_list.clear_options()
        for todo in self._todos:
            mark = "[green]✓[/]" if todo.completed else "☐"
            text = f"[dim strike]{todo.text}[/]" if todo.completed else todo.text
            option_list.add_option(Option(f"{mark} {text}", id=todo.id))

        if self._todos:
            index = highlight if highlight is not None else 0
            option_list.highlighted = min(index, len(self._todos) - 1)

    def _current_todo(self) -> Todo | None:
        highlighted = self.query_one(OptionList).highlighted
        if highlighted is None or highlighted >= len(self._todos):
            return None
        return self._todos[highlighted]

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        try:
            self.todo_service.create_todo(event.value)
        except KanpadError as e:
            self.app.notify(str(e), severity="error")
            return
        event.input.value = ""
        self.refresh_todos()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.action_toggle_todo()

    def action_toggle_todo(self) -> None:
        todo = self._current_todo()
        if todo is None:
            return
        index = self.query_one(OptionList).highlighted
        try:
            self.todo_service.toggle_todo(todo.id)
        except KanpadError as e:
            self.app.notify(str(e), severity="error")
        self.refresh_todos(highlight=index)

    def action_delete_todo(self) -> None:
        todo = self._current_todo()
        if todo is None:
            return
        index = self.query_one(OptionList).highlighted
        try:
            self.todo_service.delete_todo(todo.id)
        except KanpadError as e:
            self.app.notify(str(e), severity="error")
        self.refresh_todos(highlight=index)

    def action_focus_input(self) -> None:
        self.query_one("#todo-input", Input).focus()

    def action_close(self) -> None:
        todo_input = self.query_one("#todo-input", Input)
        if todo_input.has_focus:
            self.query_one(OptionList).focus()
            return
        self.dismiss()
