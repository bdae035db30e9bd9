"""XDG-compliant path helpers for actionbar."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir


def get_config_dir() -> Path:
    """Get the config directory (config.toml)."""
    override = os.environ.get("ACTIONBAR_CONFIG_DIR")
    if override:
        return Path(override)
    return Path(user_config_dir("actionbar"))


def get_data_dir() -> Path:
    """Get the data directory (exported debug logs)."""
    override = os.environ.get("ACTIONBAR_DATA_DIR")
    if override:
        return Path(override)
    return Path(user_data_dir("actionbar"))


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_debug_log_path() -> Path:
    return get_data_dir() / "debug.log"
