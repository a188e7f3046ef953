"""Configuration structures and loading for apictl."""

import os
import tomllib
from pathlib import Path

import msgspec

from apictl.models import Environment


# Default values
DEFAULT_TIMEOUT = 30.0


class HttpConfig(msgspec.Struct, omit_defaults=True):
    """HTTP transport settings."""

    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True


class EnvironmentConfig(msgspec.Struct, omit_defaults=True):
    """Endpoints for one environment as stored in config.toml."""

    api_manager_endpoint: str
    registration_endpoint: str
    token_endpoint: str


# Main configuration
class Config(msgspec.Struct, omit_defaults=True):
    """Main configuration structure."""

    environments: dict[str, EnvironmentConfig] = msgspec.field(default_factory=dict)
    http: HttpConfig = msgspec.field(default_factory=HttpConfig)

    def has_environment(self, name: str) -> bool:
        return bool(name) and name in self.environments

    def get_environment(self, name: str) -> Environment | None:
        """Get a resolved Environment by name, or None if unknown."""
        env_cfg = self.environments.get(name)
        if env_cfg is None:
            return None
        return Environment(
            name=name,
            api_manager_endpoint=env_cfg.api_manager_endpoint,
            registration_endpoint=env_cfg.registration_endpoint,
            token_endpoint=env_cfg.token_endpoint,
        )


def _load_from_toml(path: Path) -> dict:
    """Load configuration from TOML file."""
    if not path.exists():
        return {}

    with path.open("rb") as f:
        return tomllib.load(f)


def _save_to_toml(data: dict, path: Path) -> None:
    """Save configuration to TOML file."""
    import tomli_w

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def convert_config(data: dict) -> Config:
    """Convert raw dict to Config struct."""
    return msgspec.convert(data, type=Config)


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to config.

    APICTL_HTTP_TIMEOUT: Request timeout in seconds
    APICTL_INSECURE: Disable TLS certificate verification
    """
    http = config.http

    if timeout := os.environ.get("APICTL_HTTP_TIMEOUT"):
        try:
            http = msgspec.structs.replace(http, timeout=float(timeout))
        except ValueError:
            pass

    if "APICTL_INSECURE" in os.environ:
        http = msgspec.structs.replace(http, verify_ssl=False)

    if http is not config.http:
        config = msgspec.structs.replace(config, http=http)

    return config


# Config state storage
_config: Config | None = None


def get_config() -> Config:
    """Get the current configuration (singleton)."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def load_config(path: Path | None = None) -> Config:
    """Load configuration from file with defaults."""
    from .paths import config_file

    config_path = path or config_file()

    raw_data = _load_from_toml(config_path)
    if not raw_data:
        config = Config()
    else:
        config = convert_config(raw_data)

    return _apply_env_overrides(config)


def save_config(config: Config, path: Path | None = None) -> None:
    """Save configuration to file."""
    from .paths import config_file

    config_path = path or config_file()

    data = msgspec.to_builtins(config)
    _save_to_toml(data, config_path)

    # Update singleton
    global _config
    _config = config


def add_environment(
    config: Config,
    name: str,
    api_manager_endpoint: str,
    registration_endpoint: str,
    token_endpoint: str,
) -> Config:
    """Return a new Config with the environment added or replaced."""
    environments = dict(config.environments)
    environments[name] = EnvironmentConfig(
        api_manager_endpoint=api_manager_endpoint,
        registration_endpoint=registration_endpoint,
        token_endpoint=token_endpoint,
    )
    return msgspec.structs.replace(config, environments=environments)


def remove_environment(config: Config, name: str) -> Config:
    """Return a new Config without the named environment."""
    environments = {k: v for k, v in config.environments.items() if k != name}
    return msgspec.structs.replace(config, environments=environments)
