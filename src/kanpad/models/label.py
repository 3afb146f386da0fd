"""Label model and the default label set."""

from pydantic import BaseModel, Field

from .enums import LabelColor


class Label(BaseModel):
    """A colored tag shared between tasks."""

    id: str
    name: str = Field(..., min_length=1)
    color: LabelColor


DEFAULT_LABELS: list[Label] = [
    Label(id="bug", name="Bug", color=LabelColor.RED),
    Label(id="feature", name="Feature", color=LabelColor.BLUE),
    Label(id="design", name="Design", color=LabelColor.PURPLE),
    Label(id="docs", name="Docs", color=LabelColor.YELLOW),
    Label(id="urgent", name="Urgent", color=LabelColor.ORANGE),
]
