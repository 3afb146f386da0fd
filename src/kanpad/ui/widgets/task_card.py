"""Task card widget."""

from __future__ import annotations

from datetime import date

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Static

from ...models import Label, LabelColor, Priority, Task
from ...services.ordering_service import describe_due, is_overdue
from ...utils import today_local

# Priority display mapping: (symbol, color)
PRIORITY_DISPLAY: dict[Priority, tuple[str, str]] = {
    Priority.HIGH: ("▲", "red"),
    Priority.MEDIUM: ("●", "yellow"),
    Priority.LOW: ("▼", "green"),
}

# Label colors mapped onto Rich color names
LABEL_STYLES: dict[LabelColor, str] = {
    LabelColor.RED: "red",
    LabelColor.ORANGE: "dark_orange",
    LabelColor.YELLOW: "yellow",
    LabelColor.GREEN: "green",
    LabelColor.BLUE: "blue",
    LabelColor.PURPLE: "magenta",
    LabelColor.PINK: "hot_pink",
}


class TaskCard(Widget, can_focus=True):
    """A task card displayed in a column."""

    def __init__(
        self,
        task_data: Task,
        labels: list[Label] | None = None,
        selected: bool = False,
        today: date | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._task_data = task_data
        self._labels = labels or []
        self._selected = selected
        self._today = today or today_local()
        if selected:
            self.add_class("-selected")
        if is_overdue(task_data, self._today):
            self.add_class("-overdue")

    @property
    def task(self) -> Task:  # pyrefly: ignore[bad-override]
        """Get the task for this card."""
        return self._task_data

    def compose(self) -> ComposeResult:
        """Create card layout."""
        marker = "[b]■[/] " if self._selected else ""
        yield Static(marker + escape(self._truncate(self._task_data.title, 40)), classes="task-title")

        with Horizontal(classes="task-meta"):
            yield Static(self._format_priority(), classes="task-priority")
            due_text = self._format_due()
            if due_text:
                yield Static(due_text, classes="task-due")
            progress_text = self._format_progress()
            if progress_text:
                yield Static(progress_text, classes="task-progress")

        if self._labels:
            yield Static(self._format_labels(), classes="task-labels")

        preview = self._get_description_preview()
        if preview:
            yield Static(escape(preview), classes="task-preview")

    def _format_priority(self) -> str:
        symbol, color = PRIORITY_DISPLAY[self._task_data.priority]
        return f"[{color}]{symbol}[/] {self._task_data.priority.value}"

    def _format_due(self) -> str:
        """Due date text; overdue dates are shown in red with a marker."""
        due = self._task_data.due_date
        if due is None:
            return ""
        text = describe_due(due, self._today)
        if is_overdue(self._task_data, self._today):
            return f"[red]! {text}[/]"
        return f"[dim]{text}[/]"

    def _format_progress(self) -> str:
        done, total = self._task_data.subtask_progress
        if total == 0:
            return ""
        color = "green" if done == total else "dim"
        return f"[{color}]☐ {done}/{total}[/]"

    def _format_labels(self) -> str:
        """Format labels as colored chips, at most three."""
        max_labels = 3
        shown = self._labels[:max_labels]
        formatted = " ".join(
            f"[{LABEL_STYLES[label.color]}]#{escape(label.name)}[/]" for label in shown
        )
        if len(self._labels) > max_labels:
            formatted += f" [dim]+{len(self._labels) - max_labels}[/]"
        return formatted

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"

    def _get_description_preview(self) -> str:
        """First non-empty line of the description."""
        for line in (self._task_data.description or "").split("\n"):
            line = line.strip()
            if line:
                return self._truncate(line, 50)
        return ""
