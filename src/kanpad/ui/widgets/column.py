"""Kanban column widget."""

import re
from datetime import date

from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import ColumnId, Label, Task
from ...services.label_service import resolve_labels
from .task_card import TaskCard


def _task_css_id(task_id: str) -> str:
    """Generate a CSS-safe widget id from a task id."""
    safe_id = re.sub(r"[^a-zA-Z0-9\-]", "-", task_id)
    safe_id = safe_id.strip("-").lower()
    return safe_id or "task"


class TaskListScroll(VerticalScroll):
    """Scroll container for task lists.

    Raises SkipAction for navigation keys so they bubble up to the App
    for task navigation instead of being handled as scroll actions.
    """

    def action_scroll_up(self) -> None:
        raise SkipAction()

    def action_scroll_down(self) -> None:
        raise SkipAction()

    def action_scroll_home(self) -> None:
        raise SkipAction()

    def action_scroll_end(self) -> None:
        raise SkipAction()

    def action_page_up(self) -> None:
        raise SkipAction()

    def action_page_down(self) -> None:
        raise SkipAction()


class EmptyColumnMessage(Static):
    """Displayed when a column has no tasks."""


class KanbanColumn(Widget):
    """A single column in the kanban board."""

    def __init__(
        self,
        title: str,
        column_id: ColumnId,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.title = title
        self.column_id = column_id
        self._tasks: list[Task] = []
        self._labels: list[Label] = []
        self._selected: frozenset[str] = frozenset()
        self._today: date | None = None

    def compose(self) -> ComposeResult:
        """Create column layout."""
        yield Static(self._header_text, classes="column-header", id=f"header-{self.column_id.value}")
        yield TaskListScroll(classes="column-content", id=f"content-{self.column_id.value}")

    def on_mount(self) -> None:
        if self._tasks:
            self.call_after_refresh(self._refresh_tasks)

    @property
    def _header_text(self) -> str:
        """Header text with styled task count."""
        return f"{self.title} [dim]({len(self._tasks)})[/]"

    def set_tasks(
        self,
        tasks: list[Task],
        labels: list[Label] | None = None,
        selected: frozenset[str] = frozenset(),
        today: date | None = None,
    ) -> None:
        """Set the tasks for this column.

        Args:
            tasks: Tasks in display order
            labels: All known labels, used to resolve task label ids
            selected: Ids of tasks currently in the selection
            today: Reference date for due/overdue display
        """
        self._tasks = tasks
        self._labels = labels or []
        self._selected = selected
        self._today = today
        # Use call_after_refresh to ensure DOM is ready
        self.call_after_refresh(self._refresh_tasks)

    async def _refresh_tasks(self) -> None:
        """Rebuild the task cards in this column."""
        content_id = f"#content-{self.column_id.value}"
        try:
            content = self.query_one(content_id, TaskListScroll)
        except Exception as e:
            self.log.error(f"Cannot find {content_id}: {e}")
            return

        await content.remove_children()

        if not self._tasks:
            await content.mount(EmptyColumnMessage(f"No {self.title.lower()} tasks"))
        else:
            for task in self._tasks:
                card = TaskCard(
                    task,
                    labels=resolve_labels(task.labels, self._labels),
                    selected=task.id in self._selected,
                    today=self._today,
                    id=f"task-{_task_css_id(task.id)}",
                )
                await content.mount(card)

        try:
            header = self.query_one(f"#header-{self.column_id.value}", Static)
            header.update(self._header_text)
        except Exception:
            pass

    @property
    def tasks(self) -> list[Task]:
        return self._tasks

    @property
    def task_count(self) -> int:
        return len(self._tasks)

    def focus_task(self, index: int) -> bool:
        """
        Focus the task at the given index.

        Returns:
            True if a task was focused, False otherwise
        """
        if not self._tasks or index < 0 or index >= len(self._tasks):
            return False

        css_id = _task_css_id(self._tasks[index].id)
        try:
            card = self.query_one(f"#task-{css_id}", TaskCard)
            card.focus()
            card.scroll_visible()
            return True
        except Exception:
            return False

    def get_task(self, index: int) -> Task | None:
        """Get task at index."""
        if 0 <= index < len(self._tasks):
            return self._tasks[index]
        return None
