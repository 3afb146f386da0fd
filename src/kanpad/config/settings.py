"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, overridable through KANPAD_* environment variables."""

    data_root: Path = Field(
        default=Path(".kanpad"),
        description="Directory holding tasks, todos, labels, the note and kanpad.yml",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = SettingsConfigDict(env_prefix="KANPAD_")
