"""Quick-todo model."""

from datetime import datetime

from pydantic import BaseModel


class Todo(BaseModel):
    """A flat checklist entry, independent of the board."""

    id: str
    text: str
    completed: bool = False
    created_at: datetime
