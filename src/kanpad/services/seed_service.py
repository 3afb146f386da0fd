"""First-run bootstrap: default labels and the empty note."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..models import KanpadConfig, Label
from ..repositories import StoreProtocol

if TYPE_CHECKING:
    from .config_service import ConfigService

logger = logging.getLogger(__name__)


@dataclass
class SeedResult:
    """What the bootstrap created on this call."""

    labels_created: list[Label] = field(default_factory=list)
    note_ready: bool = False


class SeedService:
    """Idempotent bootstrap, safe to run on every start."""

    def __init__(self, store: StoreProtocol, config_service: ConfigService | None = None) -> None:
        self.store = store
        self._config_service = config_service

    def _get_config(self) -> KanpadConfig:
        if self._config_service:
            return self._config_service.get_config()
        return KanpadConfig.default()

    def seed(self) -> SeedResult:
        """Create default labels if there are none, and make sure the note exists."""
        result = SeedResult()

        if not self.store.list_labels():
            for seed in self._get_config().default_labels:
                label = self.store.create_label(seed.name, seed.color, label_id=seed.id)
                result.labels_created.append(label)
            logger.info("Seeded %d default labels", len(result.labels_created))
        else:
            logger.debug("Labels present, skipping label seed")

        # get_note creates the empty note on first access
        self.store.get_note()
        result.note_ready = True
        return result
