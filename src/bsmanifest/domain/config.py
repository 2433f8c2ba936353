from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the generator's settings using JSON in the
user data directory, with default fallback for missing or corrupted files.
"""

import json
import logging
import os
from typing import Any, Dict

from bsmanifest.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_APP_NAME, POLICY_ERROR
from bsmanifest.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"


def get_config_path() -> str:
    """Absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "install_dir": os.getcwd(),
        "output_path": "",

        # Topology
        "app_name": DEFAULT_APP_NAME,

        # Merge behaviour
        "conflict_policy": POLICY_ERROR,

        # Runtime
        "max_workers": 0,
        "log_level": "INFO",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the persisted configuration, merged over defaults.

    Returns:
        Dict[str, Any]: The loaded config or defaults on failure.
    """
    config = get_default_config()
    path = get_config_path()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    config.update(data.get("settings", {}))
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the provided configuration to disk.

    Args:
        config: The settings dictionary to save.
    """
    path = get_config_path()
    state = {"version": CURRENT_CONFIG_VERSION, "settings": config}
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
