"""Configuration service for loading kanpad.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import BoardConfig, KanpadConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching application configuration."""

    CONFIG_FILE = "kanpad.yml"

    def __init__(self, data_root: Path) -> None:
        """Initialize the config service.

        Args:
            data_root: Path to the kanpad data directory
        """
        self.data_root = data_root
        self._config: KanpadConfig | None = None
        self._config_error: str | None = None

    @property
    def config_path(self) -> Path:
        return self.data_root / self.CONFIG_FILE

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    def get_config(self) -> KanpadConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get_board_config(self) -> BoardConfig:
        """Convenience method to get board configuration."""
        return self.get_config().board

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def _load_config(self) -> KanpadConfig:
        """Load configuration from file or return default."""
        self._config_error = None

        if not self.config_path.exists():
            logger.debug("No %s found, using defaults", self.CONFIG_FILE)
            return KanpadConfig.default()

        try:
            with self.config_path.open() as f:
                data = yaml.safe_load(f)

            if data is None:
                self._config_error = f"{self.CONFIG_FILE} is empty"
                logger.warning(self._config_error)
                return KanpadConfig.default()

            config = KanpadConfig(**data)
            logger.info(
                "Loaded %s (archive_policy=%s)",
                self.CONFIG_FILE,
                config.board.archive_policy.value,
            )
            return config

        except yaml.YAMLError as e:
            self._config_error = f"Invalid YAML in {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return KanpadConfig.default()

        except (ValidationError, TypeError, OSError) as e:
            self._config_error = f"Error loading {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return KanpadConfig.default()
