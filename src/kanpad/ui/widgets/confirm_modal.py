"""Confirmation dialog for destructive actions."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmModal(ModalScreen[bool]):
    """Ask before deleting. Dismisses with True only on an explicit yes."""

    DEFAULT_CSS = """
    ConfirmModal {
        align: center middle;
    }

    ConfirmModal #dialog {
        grid-size: 2;
        grid-gutter: 1 2;
        grid-rows: auto auto 3;
        width: 56;
        height: auto;
        padding: 1 2;
        border: thick $error 60%;
        background: $surface;
    }

    ConfirmModal #question {
        column-span: 2;
        content-align: center middle;
        text-style: bold;
    }

    ConfirmModal #detail {
        column-span: 2;
        content-align: center middle;
        color: $text-muted;
    }

    ConfirmModal Button {
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("y", "answer(True)", "Yes"),
        Binding("n", "answer(False)", "No"),
        Binding("escape", "answer(False)", "Cancel"),
    ]

    def __init__(self, question: str, detail: str = "", confirm_label: str = "Delete") -> None:
        super().__init__()
        self._question = question
        self._detail = detail
        self._confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Grid(id="dialog"):
            yield Static(self._question, id="question")
            yield Static(self._detail, id="detail")
            yield Button(f"{self._confirm_label} (y)", id="confirm", variant="error")
            yield Button("Cancel (n)", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#cancel", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm")

    def action_answer(self, confirmed: bool) -> None:
        self.dismiss(confirmed)
