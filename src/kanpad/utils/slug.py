"""Utilities for generating stable, filesystem-safe record ids."""

import re
import unicodedata
from collections.abc import Callable


def slugify(text: str) -> str:
    """
    Convert text to a filesystem-safe slug.

    Example: "Fix Login Bug!" -> "fix-login-bug"
    """
    # Normalize unicode characters
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")

    text = text.lower()

    # Replace spaces and underscores with hyphens
    text = re.sub(r"[\s_]+", "-", text)

    # Remove any character that isn't alphanumeric or hyphen
    text = re.sub(r"[^a-z0-9\-]", "", text)

    # Collapse multiple hyphens and trim
    text = re.sub(r"-+", "-", text).strip("-")

    return text


def generate_id(text: str, exists: Callable[[str], bool], fallback: str = "untitled") -> str:
    """
    Generate a unique id from text.

    Appends -1, -2, ... until `exists` reports the candidate as free.
    Long titles are cut at 60 characters so ids stay usable as filenames.
    """
    base = slugify(text)[:60].strip("-") or fallback
    candidate = base
    counter = 1

    while exists(candidate):
        candidate = f"{base}-{counter}"
        counter += 1

    return candidate
