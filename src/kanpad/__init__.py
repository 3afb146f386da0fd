"""kanpad - personal kanban board, quick todos and notes."""

__version__ = "0.1.0"
