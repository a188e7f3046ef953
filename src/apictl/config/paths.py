"""Platform-specific paths for apictl configuration."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir

PACKAGE_NAME = "apictl"

ENV_KEYS_FILE_NAME = "env_keys.json"
KEYSTORE_PROPERTIES_FILE_NAME = "keystore-info.properties"


def _get_env_path(env_var: str, fallback: Path) -> Path:
    """Get path from environment variable or fallback."""
    if env_value := os.environ.get(env_var):
        return Path(env_value)
    return fallback


def config_dir() -> Path:
    """Get user config directory.

    Respects APICTL_CONFIG_DIR environment variable.
    """
    base_dir = Path(user_config_dir(PACKAGE_NAME))
    return _get_env_path("APICTL_CONFIG_DIR", base_dir)


def config_file() -> Path:
    """Get main config.toml path."""
    return config_dir() / "config.toml"


def env_keys_file() -> Path:
    """Get the per-environment credential file path."""
    return config_dir() / ENV_KEYS_FILE_NAME


def security_dir() -> Path:
    """Get the directory holding keystore settings."""
    return config_dir() / "mi-security"


def keystore_properties_file() -> Path:
    """Get keystore-info.properties path."""
    return security_dir() / KEYSTORE_PROPERTIES_FILE_NAME
