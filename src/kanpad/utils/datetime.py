"""Utilities for datetime handling."""

from datetime import UTC, date, datetime


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def today_local() -> date:
    """Get the current calendar date in the local time zone."""
    return datetime.now().astimezone().date()


def from_iso(value: str) -> datetime:
    """Parse ISO format string to datetime."""
    # Handle both 'Z' suffix and explicit timezone
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def parse_date(value: str | date | datetime | None) -> date | None:
    """Parse a calendar date from 'YYYY-MM-DD' (time part is dropped)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])
