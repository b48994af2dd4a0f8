from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the hook settings (search root, marker name,
material gating strategy, logging) as JSON in the user data directory,
with default fallback when the file is missing or corrupt.
"""

import json
import logging
import os
from typing import Any, Dict

from cubism_assets.domain import constants as const
from cubism_assets.infra.fs import get_user_data_dir, safe_mkdir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"
CURRENT_CONFIG_VERSION = "1.0.0"


def get_config_file() -> str:
    """Absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Installation discovery
        "search_root": const.DEFAULT_SEARCH_ROOT,
        "marker_name": const.DEFAULT_MARKER_NAME,
        "working_dir": os.getcwd(),

        # Builtin resources
        "material_gating": const.GATING_DIRECTORY,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: str = "") -> Dict[str, Any]:
    """
    Load the configuration from disk, merged over the defaults.

    Args:
        path: Optional explicit file; defaults to the user data directory file.

    Returns:
        Dict[str, Any]: The merged configuration or defaults on failure.
    """
    config_file = path or get_config_file()
    defaults = get_default_config()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return defaults

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config '{config_file}': {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return defaults

    data.pop("version", None)
    defaults.update(data)
    return defaults


def save_config(config: Dict[str, Any], path: str = "") -> bool:
    """
    Persist the configuration to disk.

    Args:
        config: The configuration dictionary to save.
        path: Optional explicit file; defaults to the user data directory file.

    Returns:
        bool: True if the file was written.
    """
    config_file = path or get_config_file()
    ok, err = safe_mkdir(os.path.dirname(os.path.abspath(config_file)))
    if not ok:
        logger.error(f"Failed to create config directory: {err}")
        return False

    state = dict(config)
    state["version"] = CURRENT_CONFIG_VERSION
    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

    logger.debug(f"Configuration saved to {config_file}")
    return True
