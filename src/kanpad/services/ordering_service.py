"""Deterministic display order for the tasks of one column."""

import sys
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from ..models import Task
from ..utils import today_local

# Urgency for tasks without a due date; larger than any real day count
NO_DUE_DATE = sys.maxsize


def days_until(due: date, today: date) -> int:
    """Whole calendar days from today to the due date (negative when past)."""
    return (due - today).days


def urgency(task: Task, today: date) -> int:
    """Days until the task is due, or NO_DUE_DATE."""
    if task.due_date is None:
        return NO_DUE_DATE
    return days_until(task.due_date, today)


def is_overdue(task: Task, today: date) -> bool:
    """A task is overdue once its due date is strictly before today."""
    return urgency(task, today) < 0


def describe_due(due: date, today: date) -> str:
    """Short due-date text for cards: Today, Tomorrow, or e.g. 'Oct 3'."""
    if due == today:
        return "Today"
    if due == today + timedelta(days=1):
        return "Tomorrow"
    return f"{due:%b} {due.day}"


class OrderingService:
    """Sorts a column: overdue first, then priority, then creation order."""

    def sort_key(self, task: Task, today: date) -> tuple[int, int, datetime, str]:
        """
        Build the comparison key for a task.

        1. overdue (0) before not overdue (1); only the boundary counts
        2. priority rank (high, medium, low)
        3. created_at ascending
        4. id, so tasks created at the same instant still compare
        """
        overdue_rank = 0 if urgency(task, today) < 0 else 1
        return (overdue_rank, task.priority.rank, task.created_at, task.id)

    def order(self, tasks: Sequence[Task], today: date | None = None) -> list[Task]:
        """Return the tasks in display order."""
        today = today or today_local()
        return sorted(tasks, key=lambda task: self.sort_key(task, today))
