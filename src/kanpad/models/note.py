"""Notes pad model."""

from datetime import datetime

from pydantic import BaseModel

# Key of the one note record
NOTE_ID = "default-note"


class Note(BaseModel):
    """The global freeform notes pad."""

    id: str = NOTE_ID
    content: str = ""
    updated_at: datetime | None = None
