"""Seed command: run the first-start bootstrap without opening the TUI."""

import logging
from pathlib import Path

from ..errors import KanpadError
from ..repositories import FilesystemStore
from ..services import ConfigService, SeedService
from .output import error, info, success

logger = logging.getLogger(__name__)


def run_seed(data_root: Path) -> int:
    """
    Create default labels and the note if missing.

    Returns:
        Exit code (0 = success, 1 = store failure)
    """
    config_service = ConfigService(data_root)
    config_service.get_config()
    if config_service.has_config_error:
        info(f"Using default config: {config_service.config_error}")

    store = FilesystemStore(data_root)
    try:
        store.ensure_directory()
        result = SeedService(store, config_service).seed()
    except KanpadError as e:
        logger.warning("Seed failed: %s", e)
        error(f"Seed failed: {e}")
        return 1

    if result.labels_created:
        names = ", ".join(label.name for label in result.labels_created)
        success(f"Created labels: {names}")
    else:
        info("Labels already present")
    success(f"Data ready: {data_root}/")
    return 0
