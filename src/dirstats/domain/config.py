from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration and its JSON persistence in
the user data directory. The CLI layers its own overrides on top.
"""

import json
import logging
import os
from typing import Any, Dict

from dirstats.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_IMAGE_PROBE_COMMAND,
    DEFAULT_MAX_OPEN_FILES,
    DEFAULT_TOP_N,
)
from dirstats.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"

# Keys that may be persisted; paths and N are per-invocation
PERSISTED_KEYS = (
    "max_open_files",
    "image_probe_command",
    "image_probe_timeout",
    "log_level",
    "log_file",
)

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
        "top_n": DEFAULT_TOP_N,

        # Runtime constraints
        "max_open_files": DEFAULT_MAX_OPEN_FILES,
        "image_probe_command": DEFAULT_IMAGE_PROBE_COMMAND,
        "image_probe_timeout": None,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


def get_config_path() -> str:
    """Return the absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config() -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Unknown keys are ignored. A missing or corrupted file yields the
    defaults.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()
    path = get_config_path()

    if not os.path.exists(path):
        logger.debug("Config file not found. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config from '{path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    for key in PERSISTED_KEYS:
        if key in data:
            config[key] = data[key]
    return config


def save_config(config: Dict[str, Any]) -> bool:
    """
    Persist the storable subset of a configuration.

    Args:
        config: Configuration dictionary to save.

    Returns:
        bool: True if the file was written.
    """
    path = get_config_path()
    payload: Dict[str, Any] = {"version": CURRENT_CONFIG_VERSION}
    payload.update({k: config[k] for k in PERSISTED_KEYS if k in config})

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
    except OSError as e:
        logger.error(f"Failed to save config to '{path}': {e}")
        return False

    logger.debug(f"Configuration saved to {path}")
    return True
