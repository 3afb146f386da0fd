"""Service for parsing and applying task filters."""

import contextlib
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from ..models import Priority, Task

PRIORITY_ALL = "all"


@dataclass
class FilterSpec:
    """Filter settings for the board.

    All clauses must match; within the label clause any listed label
    is enough.
    """

    search: str = ""  # free text, matches title or description
    priority: Priority | Literal["all"] = PRIORITY_ALL
    labels: set[str] = field(default_factory=set)  # label ids

    @property
    def is_empty(self) -> bool:
        """True when the spec matches every task."""
        return not self.search.strip() and self.priority == PRIORITY_ALL and not self.labels


class FilterService:
    """Service for parsing and applying filters to tasks."""

    # Pattern for key:value tokens
    TOKEN_PATTERN = re.compile(r"(?:(priority|label):)?(\S+)")

    def parse(self, expression: str) -> FilterSpec:
        """
        Parse a filter expression string.

        Syntax:
        - Free text: matches title or description
        - priority:low/medium/high/all
        - label:<id> (repeat for several labels, any may match)
        """
        spec = FilterSpec()
        text_parts: list[str] = []

        for match in self.TOKEN_PATTERN.finditer(expression):
            key = match.group(1)
            value = match.group(2)

            if key is None:
                text_parts.append(value)

            elif key == "priority":
                value = value.lower()
                if value == PRIORITY_ALL:
                    spec.priority = PRIORITY_ALL
                else:
                    with contextlib.suppress(ValueError):
                        spec.priority = Priority(value)

            elif key == "label":
                spec.labels.add(value.lower())

        spec.search = " ".join(text_parts)
        return spec

    def apply(self, tasks: Sequence[Task], spec: FilterSpec) -> list[Task]:
        """Return the matching tasks, keeping their input order."""
        return [task for task in tasks if self.matches(task, spec)]

    def matches(self, task: Task, spec: FilterSpec) -> bool:
        """Check if a task matches the filter."""
        # Text search (case-insensitive)
        search = spec.search.strip().lower()
        if search:
            in_title = search in task.title.lower()
            in_description = task.description is not None and search in task.description.lower()
            if not (in_title or in_description):
                return False

        if spec.priority != PRIORITY_ALL and task.priority != spec.priority:
            return False

        # Label filter (any match)
        if spec.labels and spec.labels.isdisjoint(task.labels):
            return False

        return True
