"""Modal form for creating and editing tasks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, SelectionList, Static, TextArea

from ...models import Label as TaskLabel
from ...models import Priority, SubtaskDraft, Task
from ...utils import parse_date


@dataclass
class TaskFormResult:
    """Values entered in the task form."""

    title: str
    description: str | None
    priority: Priority
    due_date: date | None
    labels: list[str] = field(default_factory=list)
    # None when the subtasks were left untouched
    subtasks: list[SubtaskDraft] | None = None


class TaskFormModal(ModalScreen[TaskFormResult | None]):
    """Create or edit a task. Dismisses with the entered values, or None on cancel."""

    DEFAULT_CSS = """
    TaskFormModal {
        align: center middle;
    }

    TaskFormModal > VerticalScroll {
        width: 70;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    TaskFormModal .form-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    TaskFormModal .field-label {
        color: $text-muted;
        margin-top: 1;
    }

    TaskFormModal TextArea {
        height: 6;
    }

    TaskFormModal #new-subtasks {
        height: 4;
    }

    TaskFormModal SelectionList {
        height: auto;
        max-height: 8;
    }

    TaskFormModal .form-error {
        color: $error;
        height: auto;
    }

    TaskFormModal .buttons {
        width: 100%;
        height: auto;
        align: center middle;
        margin-top: 1;
    }

    TaskFormModal Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(self, labels: list[TaskLabel], task_data: Task | None = None) -> None:
        """Initialize the form.

        Args:
            labels: All labels the task can be tagged with
            task_data: Task being edited, or None to create a new one
        """
        super().__init__()
        self._labels = labels
        self._task_data = task_data

    def compose(self) -> ComposeResult:
        task = self._task_data
        heading = "Edit Task" if task else "New Task"
        selected_labels = set(task.labels) if task else set()

        with VerticalScroll():
            yield Static(heading, classes="form-title")

            yield Label("Title", classes="field-label")
            yield Input(value=task.title if task else "", id="title-input")

            yield Label("Description", classes="field-label")
            yield TextArea(task.description or "" if task else "", id="description-input")

            yield Label("Priority", classes="field-label")
            yield Select(
                [(priority.value.title(), priority) for priority in Priority],
                value=task.priority if task else Priority.MEDIUM,
                allow_blank=False,
                id="priority-select",
            )

            yield Label("Due date (YYYY-MM-DD)", classes="field-label")
            yield Input(
                value=task.due_date.isoformat() if task and task.due_date else "",
                placeholder="none",
                id="due-input",
            )

            if self._labels:
                yield Label("Labels", classes="field-label")
                yield SelectionList[str](
                    *[
                        (label.name, label.id, label.id in selected_labels)
                        for label in self._labels
                    ],
                    id="labels-select",
                )

            yield Label("Subtasks", classes="field-label")
            if task and task.subtasks:
                yield SelectionList[str](
                    *[(s.text, s.id, s.completed) for s in task.subtasks],
                    id="subtasks-select",
                )
            yield TextArea("", id="new-subtasks")

            yield Static("", id="form-error", classes="form-error")

            with Horizontal(classes="buttons"):
                yield Button("Save", id="save", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#title-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self.action_save()
        else:
            self.action_cancel()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_save()

    def action_save(self) -> None:
        result = self._collect()
        if result is not None:
            self.dismiss(result)

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _collect(self) -> TaskFormResult | None:
        """Read the form; shows an inline error and returns None on bad input."""
        title = self.query_one("#title-input", Input).value.strip()
        if not title:
            self._show_error("Title is required")
            return None

        due_text = self.query_one("#due-input", Input).value.strip()
        try:
            due_date = parse_date(due_text)
        except ValueError:
            self._show_error(f"Invalid date: {due_text}")
            return None

        labels: list[str] = []
        if self._labels:
            selected = set(self.query_one("#labels-select", SelectionList).selected)
            # Keep the label list order stable
            labels = [label.id for label in self._labels if label.id in selected]

        description = self.query_one("#description-input", TextArea).text.strip() or None
        priority = self.query_one("#priority-select", Select).value
        subtasks = self._collect_subtasks()

        return TaskFormResult(
            title=title,
            description=description,
            priority=Priority(priority),
            due_date=due_date,
            labels=labels,
            subtasks=subtasks,
        )

    def _collect_subtasks(self) -> list[SubtaskDraft] | None:
        """Existing subtasks with their checkbox state, then one new subtask per line."""
        text = self.query_one("#new-subtasks", TextArea).text
        added = [SubtaskDraft(text=line.strip()) for line in text.splitlines() if line.strip()]

        task = self._task_data
        if task is None:
            return added
        if not task.subtasks:
            return added or None

        checked = set(self.query_one("#subtasks-select", SelectionList).selected)
        toggled = any((s.id in checked) != s.completed for s in task.subtasks)
        if not toggled and not added:
            return None
        existing = [SubtaskDraft(text=s.text, completed=s.id in checked) for s in task.subtasks]
        return existing + added

    def _show_error(self, message: str) -> None:
        self.query_one("#form-error", Static).update(message)
