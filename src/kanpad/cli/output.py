"""Terminal output helpers for the non-TUI commands."""

import os
import sys

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"

CHECK = "✓"
BULLET = "•"
CROSS = "✗"


def _use_color() -> bool:
    """Color only on a TTY, and never when NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _mark(symbol: str, color: str) -> str:
    if _use_color():
        return f"{color}{symbol}{RESET}"
    return symbol


def success(message: str) -> None:
    """Print a line prefixed with a green check."""
    print(f"{_mark(CHECK, GREEN)} {message}")


def info(message: str) -> None:
    """Print a line prefixed with a yellow bullet."""
    print(f"{_mark(BULLET, YELLOW)} {message}")


def error(message: str) -> None:
    """Print a line prefixed with a red cross, to stderr."""
    print(f"{_mark(CROSS, RED)} {message}", file=sys.stderr)
