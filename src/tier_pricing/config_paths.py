"""Configuration path handling for the pricing visualizer.

This module implements path resolution for the saved pricing configuration,
following the XDG Base Directory Specification for user-specific files.
"""

import os
from pathlib import Path
from typing import Dict, Optional

import platformdirs

from .logging import LogEvent, log_error

# Application name used for directory paths
APP_NAME = "tier-pricing-visualizer"

# Environment variable names
ENV_CONFIG_PATH = "TPV_CONFIG_PATH"
ENV_CURRENCY = "TPV_CURRENCY"

# Default filename
CONFIG_FILENAME = "pricing.json"


def get_user_config_dir() -> Path:
    """Get the path to the user's config directory for this application."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_user_config_path() -> Path:
    """Get the path of the configuration file in the user config directory."""
    return get_user_config_dir() / CONFIG_FILENAME


def ensure_user_config_dir_exists() -> None:
    """Ensure that the user config directory exists.

    Raises:
        OSError: If the directory cannot be created due to permission errors or other IO issues
        PermissionError: If the directory exists but is not writable
    """
    user_dir = get_user_config_dir()

    # If directory already exists, check if it's writable
    if user_dir.exists():
        if not os.access(user_dir, os.W_OK):
            raise PermissionError(f"Config directory exists but is not writable: {user_dir}")
        return

    try:
        os.makedirs(user_dir, exist_ok=True)
    except OSError as e:
        log_error(LogEvent.CONFIG_SAVE, f"Failed to create user config directory: {e}", path=str(user_dir))
        raise

    if not os.access(user_dir, os.W_OK):
        raise PermissionError(f"Created config directory but it is not writable: {user_dir}")


def get_config_path() -> Optional[Path]:
    """Get the configuration file to load.

    Resolution order:
    1. TPV_CONFIG_PATH environment variable (if the file exists)
    2. pricing.json in the user config directory
    3. None: the built-in default schedule is used

    Returns:
        Path to an existing configuration file, or None
    """
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path and Path(env_path).is_file():
        return Path(env_path)

    user_path = get_user_config_path()
    if user_path.is_file():
        return user_path

    return None


def get_save_path() -> Path:
    """Get the path edits are written to.

    The TPV_CONFIG_PATH file when the variable is set (whether or not it exists
    yet), otherwise pricing.json in the user config directory, which is created
    on demand.
    """
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)

    ensure_user_config_dir_exists()
    return get_user_config_path()


def get_env_vars() -> Dict[str, Optional[str]]:
    """Get the environment variables that affect configuration."""
    return {name: os.environ.get(name) for name in (ENV_CONFIG_PATH, ENV_CURRENCY)}
