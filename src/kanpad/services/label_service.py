"""Service for the shared label set."""

import logging
from collections.abc import Iterable

from ..errors import ValidationFailure
from ..models import Label, LabelColor
from ..repositories import StoreProtocol

logger = logging.getLogger(__name__)


def resolve_labels(label_ids: Iterable[str], labels: Iterable[Label]) -> list[Label]:
    """
    Resolve label ids to labels for display.

    Ids with no matching label (the label was deleted) are skipped.
    """
    by_id = {label.id: label for label in labels}
    return [by_id[label_id] for label_id in label_ids if label_id in by_id]


class LabelService:
    """Service for label CRUD operations."""

    def __init__(self, store: StoreProtocol) -> None:
        self.store = store

    def list_labels(self) -> list[Label]:
        """All labels ordered by name."""
        return self.store.list_labels()

    def create_label(self, name: str, color: LabelColor = LabelColor.BLUE) -> Label:
        name = name.strip()
        if not name:
            raise ValidationFailure("Label name cannot be empty")
        label = self.store.create_label(name, LabelColor(color))
        logger.info("Label created: %s (%s)", label.id, label.color.value)
        return label

    def delete_label(self, label_id: str) -> None:
        """Delete a label; tasks keep the now-dangling id."""
        logger.info("Deleting label: %s", label_id)
        self.store.delete_label(label_id)

    def resolve(self, label_ids: Iterable[str]) -> list[Label]:
        """Display labels for a task's label ids."""
        return resolve_labels(label_ids, self.list_labels())
