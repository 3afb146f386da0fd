"""Utility functions."""

from .datetime import from_iso, now_utc, parse_date, today_local
from .slug import generate_id, slugify

__all__ = [
    "from_iso",
    "generate_id",
    "now_utc",
    "parse_date",
    "slugify",
    "today_local",
]
