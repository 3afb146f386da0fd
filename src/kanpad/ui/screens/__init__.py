"""Screen components."""

from .board import BoardScreen
from .help import HelpScreen
from .notes import NotesScreen
from .todos import TodoScreen

__all__ = [
    "BoardScreen",
    "HelpScreen",
    "NotesScreen",
    "TodoScreen",
]
