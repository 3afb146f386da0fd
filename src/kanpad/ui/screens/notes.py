"""Free-form notes screen."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Static, TextArea

from ...errors import KanpadError
from ...services import NoteService


class NotesScreen(ModalScreen):
    """Edit the single notes pad. Saved on ctrl+s and when closing."""

    DEFAULT_CSS = """
    NotesScreen {
        align: center middle;
    }

    NotesScreen > Vertical {
        width: 90%;
        height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    NotesScreen .notes-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    NotesScreen TextArea {
        height: 1fr;
    }

    NotesScreen .notes-footer {
        color: $text-muted;
        text-align: center;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", priority=True),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(self, note_service: NoteService) -> None:
        super().__init__()
        self.note_service = note_service

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Notes", classes="notes-title")
            yield TextArea("", id="note-text")
            yield Static("[Ctrl+S] Save  [Esc] Save and close", classes="notes-footer")

    def on_mount(self) -> None:
        text_area = self.query_one(TextArea)
        try:
            text_area.text = self.note_service.get_content()
        except KanpadError as e:
            self.app.notify(f"Failed to load note: {e}", severity="error")
        text_area.focus()

    def _save(self) -> bool:
        try:
            self.note_service.save(self.query_one(TextArea).text)
        except KanpadError as e:
            self.app.notify(f"Failed to save note: {e}", severity="error")
            return False
        return True

    def action_save(self) -> None:
        if self._save():
            self.app.notify("Note saved", timeout=2)

    def action_close(self) -> None:
        # Keep the screen open so unsaved text is not lost
        if self._save():
            self.dismiss()
