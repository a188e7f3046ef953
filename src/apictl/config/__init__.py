"""Configuration management for apictl."""

from apictl.config.credentials import (
    check_credential_permissions,
    env_exists_in_keys_file,
    get_env_keys,
    load_env_keys,
    put_env_keys,
    remove_env_keys,
    save_env_keys,
    write_credential,
)
from apictl.config.paths import (
    config_dir,
    config_file,
    env_keys_file,
    keystore_properties_file,
    security_dir,
)
from apictl.config.settings import (
    Config,
    EnvironmentConfig,
    HttpConfig,
    add_environment,
    get_config,
    load_config,
    remove_environment,
    save_config,
)

__all__ = [
    # paths
    "config_dir",
    "config_file",
    "env_keys_file",
    "security_dir",
    "keystore_properties_file",
    # settings
    "Config",
    "EnvironmentConfig",
    "HttpConfig",
    "get_config",
    "load_config",
    "save_config",
    "add_environment",
    "remove_environment",
    # credentials
    "write_credential",
    "check_credential_permissions",
    "load_env_keys",
    "save_env_keys",
    "env_exists_in_keys_file",
    "get_env_keys",
    "put_env_keys",
    "remove_env_keys",
]
