"""apictl: Credential and secret management for API Manager environments."""

from __future__ import annotations

__version__ = "0.1.0"

from apictl.models import EnvironmentCredentialRecord
from apictl.models import Environment
from apictl.models import InputType
from apictl.models import KeyStoreConfig
from apictl.models import OutputType
from apictl.models import ResolvedCredentials
from apictl.models import SecretConfig

__all__ = [
    "__version__",
    "Environment",
    "EnvironmentCredentialRecord",
    "KeyStoreConfig",
    "SecretConfig",
    "InputType",
    "OutputType",
    "ResolvedCredentials",
]


def main() -> None:
    """Entry point for the apictl CLI."""
    from apictl.cli.app import run_app

    run_app()
