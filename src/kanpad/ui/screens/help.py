"""Help screen showing keyboard shortcuts."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

# (section, [(key, description), ...]) in display order
HELP_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Navigation",
        [
            ("h / Left", "Previous column"),
            ("l / Right", "Next column"),
            ("k / Up", "Previous task"),
            ("j / Down", "Next task"),
            ("g / Home", "First task in column"),
            ("G / End", "Last task in column"),
        ],
    ),
    (
        "Tasks",
        [
            ("n", "Create new task"),
            ("Enter", "Preview current task"),
            ("e", "Edit current task"),
            ("H / Shift+Left", "Move task left"),
            ("L / Shift+Right", "Move task right"),
            ("a", "Archive task"),
            ("R", "Restore archived task"),
            ("d", "Delete task"),
        ],
    ),
    (
        "Selection",
        [
            ("x / Space", "Select / unselect task"),
            ("Ctrl+A", "Select whole column"),
            ("X", "Clear selection"),
            ("1 / 2 / 3", "Move selected to Todo / In Progress / Complete"),
            ("A", "Archive selected"),
            ("D", "Delete selected"),
        ],
    ),
    (
        "Filter",
        [
            ("/", "Enter filter mode"),
            ("Escape", "Clear filter / Cancel"),
            ("text", "Search in title/description"),
            ("label:bug", "Tasks with any of the labels"),
            ("priority:high", "Filter by priority"),
        ],
    ),
    (
        "General",
        [
            ("v", "Show / hide archive"),
            ("t", "Quick todos"),
            ("o", "Notes"),
            ("r", "Refresh board"),
            ("?", "Show this help"),
            ("q", "Quit"),
        ],
    ),
]


class HelpScreen(ModalScreen):
    """Modal help screen showing keyboard shortcuts."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > VerticalScroll {
        width: 70;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    HelpScreen .help-title {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
        border-bottom: solid $primary-darken-2;
    }

    HelpScreen .help-section {
        height: auto;
        padding: 1 0 0 0;
    }

    HelpScreen .section-title {
        text-style: bold;
        color: $primary;
    }

    HelpScreen .help-row {
        height: 1;
    }

    HelpScreen .help-key {
        width: 16;
        text-style: bold;
    }

    HelpScreen .help-desc {
        width: 1fr;
        color: $text-muted;
    }

    HelpScreen .help-footer {
        text-align: center;
        color: $text-muted;
        padding-top: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
        Binding("?", "dismiss", "Close", show=False),
    ]

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static("Keyboard Shortcuts", classes="help-title")
            for section, rows in HELP_SECTIONS:
                with Vertical(classes="help-section"):
                    yield Static(section, classes="section-title")
                    for key, description in rows:
                        yield self._help_row(key, description)
            yield Static("Press any key to close", classes="help-footer")

    def _help_row(self, key: str, description: str) -> Horizontal:
        row = Horizontal(classes="help-row")
        row.compose_add_child(Static(key, classes="help-key"))
        row.compose_add_child(Static(description, classes="help-desc"))
        return row

    def on_key(self, event) -> None:
        """Dismiss on any key press and prevent propagation."""
        event.stop()
        self.dismiss()
