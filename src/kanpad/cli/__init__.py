"""Command-line helpers that run outside the TUI."""
