from __future__ import annotations

"""
Configuration Domain Management.

Loads user preferences stored as JSON inside the user data directory.
Stored values are merged over the defaults so that new keys always exist.
"""

import json
import logging
import os
from typing import Any, Dict

from vsdeploy.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_PATTERN,
    SOLUTION_DIR_TOKEN,
    TARGET_DIR_TOKEN,
)
from vsdeploy.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Synchronization
        "default_pattern": DEFAULT_PATTERN,
        "case_sensitive": None,  # None: follow the platform

        # Copy step placeholders
        "solution_dir_token": SOLUTION_DIR_TOKEN,
        "target_dir_token": TARGET_DIR_TOKEN,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete persisted structure for config.json.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "settings": get_default_config(),
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Returns:
        Dict[str, Any]: The loaded state or a default structure on failure.
    """
    default_state = get_default_app_state()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return default_state

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return default_state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return default_state

    state = default_state
    settings = data.get("settings")
    if isinstance(settings, dict):
        state["settings"].update(settings)

    state["version"] = CURRENT_CONFIG_VERSION
    return state


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Retrieve the active settings merged over the defaults.
    """
    state = load_app_state()
    config = get_default_config()
    config.update(state.get("settings", {}))
    return config
