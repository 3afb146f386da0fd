"""Filter bar for the board."""

from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Label


class CommandBar(Widget):
    """
    One-line filter prompt docked under the board.

    Submitting the prompt stores the expression and posts FilterChanged;
    the app parses it. Hidden until opened with `/`.
    """

    DEFAULT_CSS = """
    CommandBar {
        dock: bottom;
        layer: command;
        layout: horizontal;
        height: 1;
        display: none;
        background: $boost;
    }

    CommandBar.-open {
        display: block;
    }

    CommandBar #filter-prompt {
        width: auto;
        padding: 0 1;
        color: $text;
        background: $accent;
    }

    CommandBar #filter-input {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0 1;
    }
    """

    class FilterChanged(Message):
        """The filter expression was submitted or cleared."""

        def __init__(self, expression: str) -> None:
            super().__init__()
            self.expression = expression

    def __init__(self) -> None:
        super().__init__()
        self.expression = ""

    def compose(self) -> ComposeResult:
        yield Label("/", id="filter-prompt")
        yield Input(placeholder="label:bug priority:high text...", id="filter-input")

    @property
    def is_open(self) -> bool:
        return self.has_class("-open")

    def open(self) -> None:
        """Show the prompt prefilled with the current expression."""
        self.add_class("-open")
        prompt = self.query_one("#filter-input", Input)
        prompt.value = self.expression
        prompt.cursor_position = len(self.expression)
        prompt.focus()

    def close(self) -> None:
        self.remove_class("-open")

    def cancel(self) -> bool:
        """
        Back out one step: close the open prompt, else drop the active filter.

        Returns False when there was nothing to cancel.
        """
        if self.is_open:
            self.close()
            return True
        if self.expression:
            self._submit("")
            return True
        return False

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.close()
        self._submit(event.value)

    def _submit(self, expression: str) -> None:
        self.expression = expression.strip()
        self.post_message(self.FilterChanged(self.expression))
