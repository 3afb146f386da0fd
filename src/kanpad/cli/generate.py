"""Generate command for creating default config."""

import logging
from pathlib import Path

import yaml

from ..models import KanpadConfig
from ..services.config_service import ConfigService
from .output import error, info, success

logger = logging.getLogger(__name__)

# Header comments for generated file
CONFIG_HEADER = """\
# kanpad Board Configuration
#
# board.columns:
#   Display titles for the columns. Ids are fixed:
#   todo, in-progress, complete, archive
#
# board.archive_policy:
#   complete_only - only tasks in "complete" can be archived (default)
#   any           - tasks in any board column can be archived
#
# default_labels:
#   Labels created on first start when no labels exist.
#   color: red, orange, yellow, green, blue, purple, pink

"""


def generate_config_yaml() -> str:
    """Generate YAML config from the default KanpadConfig model.

    KanpadConfig.default() is the single source of truth, so the generated
    file always matches internal defaults.
    """
    config_dict = KanpadConfig.default().model_dump(mode="json")
    yaml_content = yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(data_root: Path) -> int:
    """
    Generate default configuration.

    Args:
        data_root: kanpad data directory where kanpad.yml will be created

    Returns:
        Exit code (0 = success, 1 = nothing to do or failure)
    """
    config_path = data_root / ConfigService.CONFIG_FILE

    if config_path.exists():
        info(f"Config exists: {config_path}")
        print("Nothing to generate.")
        return 1

    try:
        data_root.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_config_yaml())
    except OSError as e:
        logger.warning("Failed to write %s: %s", config_path, e)
        error(f"Could not write config: {e}")
        return 1

    success(f"Generated config: {config_path}")
    return 0
