"""Service for the notes pad."""

import logging

from ..models import Note
from ..repositories import StoreProtocol

logger = logging.getLogger(__name__)


class NoteService:
    """Reads and saves the single global note."""

    def __init__(self, store: StoreProtocol) -> None:
        self.store = store

    def get_note(self) -> Note:
        return self.store.get_note()

    def get_content(self) -> str:
        return self.store.get_note().content

    def save(self, content: str) -> Note:
        """Replace the note content; skips the write when nothing changed."""
        current = self.store.get_note()
        if current.content == content:
            logger.debug("Note unchanged, not saving")
            return current
        note = self.store.update_note(content)
        logger.info("Note saved (%d chars)", len(content))
        return note
