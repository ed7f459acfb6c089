"""Path helpers for locating fuzemill configuration files."""

import os
from pathlib import Path

from platformdirs import user_config_dir

FUZEMILL_APP_NAME = "fuzemill"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "FUZEMILL_CONFIG"


def fuzemill_config_dir() -> Path:
    """Return the base fuzemill configuration directory.

    Returns:
        Path to the user config directory for fuzemill.

    Example:
        >>> isinstance(fuzemill_config_dir(), Path)
        True
    """
    return Path(user_config_dir(FUZEMILL_APP_NAME))


def config_path() -> Path:
    """Return the user config file path, honoring ``FUZEMILL_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return fuzemill_config_dir() / CONFIG_FILENAME
