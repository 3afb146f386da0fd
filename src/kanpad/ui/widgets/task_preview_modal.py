"""Read-only task view with the description rendered as markdown."""

from datetime import date

from rich.markdown import Markdown
from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from ...models import Label, Task
from ...services.ordering_service import describe_due, is_overdue
from .task_card import LABEL_STYLES, PRIORITY_DISPLAY


class TaskPreviewModal(ModalScreen[bool]):
    """Show one task in full.

    Dismisses with True when the user asks to edit the task.
    """

    DEFAULT_CSS = """
    TaskPreviewModal {
        align: center middle;
    }

    TaskPreviewModal > VerticalScroll {
        width: 80%;
        height: 80%;
        border: solid $primary;
        background: $surface;
    }

    TaskPreviewModal #title-bar {
        height: 1;
        width: 100%;
        background: $primary-darken-2;
        text-align: center;
        text-style: bold;
    }

    TaskPreviewModal #meta {
        padding: 0 1;
        color: $text-muted;
    }

    TaskPreviewModal #body {
        padding: 1 1 0 1;
    }

    TaskPreviewModal #footer-bar {
        dock: bottom;
        height: 1;
        width: 100%;
        background: $surface-lighten-1;
        color: $text-muted;
        text-align: center;
    }
    """

    BINDINGS = [
        Binding("e", "edit", "Edit", show=False),
    ]

    # Keys that scroll the body instead of closing
    SCROLL_KEYS = {"up", "down", "pageup", "pagedown", "home", "end"}

    def __init__(self, task_data: Task, labels: list[Label], today: date) -> None:
        super().__init__()
        self._task_data = task_data
        self._labels = labels
        self._today = today

    def compose(self) -> ComposeResult:
        task = self._task_data
        body = Markdown(task.description) if task.description else "[dim](no description)[/]"

        with VerticalScroll():
            yield Static(escape(task.title), id="title-bar")
            yield Static(self._format_meta(), id="meta")
            yield Static(body, id="body")
            yield Static("[e] Edit  [any key] Close", id="footer-bar")

    def _format_meta(self) -> str:
        task = self._task_data
        symbol, color = PRIORITY_DISPLAY[task.priority]
        lines = [f"[{color}]{symbol}[/] {task.priority.value}   id: {escape(task.id)}"]

        if task.due_date is not None:
            due = describe_due(task.due_date, self._today)
            lines.append(f"[red]Overdue: {due}[/]" if is_overdue(task, self._today) else f"Due: {due}")
        if self._labels:
            lines.append(
                " ".join(f"[{LABEL_STYLES[label.color]}]#{escape(label.name)}[/]" for label in self._labels)
            )
        for subtask in task.subtasks:
            mark = "☑" if subtask.completed else "☐"
            lines.append(f"{mark} {escape(subtask.text)}")
        return "\n".join(lines)

    def on_key(self, event) -> None:
        """Scroll keys scroll, `e` edits, anything else closes."""
        if event.key in self.SCROLL_KEYS or event.key == "e":
            return
        event.stop()
        self.dismiss(False)

    def action_edit(self) -> None:
        self.dismiss(True)
