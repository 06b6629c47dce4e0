from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the last used settings as JSON in the user
data directory, with default fallback when the file is missing or corrupt.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from repostruct.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_SCHEMA_FILENAME
from repostruct.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def get_config_file() -> str:
    """Absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILENAME)


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
        # Locations
        "repos_root": os.getcwd(),
        "schema_file": DEFAULT_SCHEMA_FILENAME,

        # Repository list source
        "list_file": "",
        "list_column": 0,
        "list_start": 0,

        # Reporting
        "report_dir": "",
        "save_reports": False,

        # Execution
        "max_workers": 1,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Args:
        path: Configuration file. Defaults to the user data location.

    Returns:
        Dict[str, Any]: The loaded configuration, or defaults on failure.
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
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return defaults

    settings = data.get("settings", {})
    if isinstance(settings, dict):
        defaults.update({k: v for k, v in settings.items() if k in defaults})
    return defaults


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Persist the configuration to disk.

    Args:
        config: The settings to save.
        path: Configuration file. Defaults to the user data location.

    Returns:
        bool: True if the file was written.
    """
    config_file = path or get_config_file()
    payload = {"version": CURRENT_CONFIG_VERSION, "settings": config}
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_file)), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

    logger.debug(f"Configuration saved to {config_file}")
    return True
