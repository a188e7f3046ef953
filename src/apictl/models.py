"""Core data models for apictl."""

from __future__ import annotations

from enum import StrEnum

import msgspec

PKCS1_ALGORITHM = "RSA/ECB/PKCS1Padding"
OAEP_ALGORITHM = "RSA/ECB/OAEPWithSHA1AndMGF1Padding"


class OutputType(StrEnum):
    """Where encrypted secrets are written."""

    CONSOLE = "console"
    FILE = "file"
    K8 = "k8"

    @classmethod
    def from_label(cls, label: str | None) -> OutputType:
        """Match a user supplied label case-insensitively, defaulting to console."""
        normalized = (label or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.CONSOLE


class InputType(StrEnum):
    """Where plaintext secrets come from."""

    CONSOLE = "console"
    FILE = "file"


class Environment(msgspec.Struct, frozen=True):
    """A named deployment target."""

    name: str
    api_manager_endpoint: str
    registration_endpoint: str
    token_endpoint: str


class EnvironmentCredentialRecord(msgspec.Struct, frozen=True):
    """Cached credentials for one environment.

    ``client_secret`` is always the password-encrypted form, never plaintext.
    """

    client_id: str
    client_secret: str
    username: str


class KeyStoreConfig(msgspec.Struct, frozen=True):
    """Keystore location and (decoded) passwords."""

    location: str
    password: str
    key_alias: str
    key_password: str


class SecretConfig(msgspec.Struct, frozen=True):
    """Settings for a single secret encryption run."""

    output_type: OutputType = OutputType.CONSOLE
    algorithm: str = OAEP_ALGORITHM
    input_type: InputType = InputType.CONSOLE
    input_file: str | None = None
    alias: str | None = None
    secret_text: str | None = None


class ResolvedCredentials(msgspec.Struct, frozen=True):
    """Outcome of credential resolution for an environment."""

    environment: Environment
    username: str
    password: str
    cached_record: EnvironmentCredentialRecord | None = None

    @property
    def is_cached(self) -> bool:
        return self.cached_record is not None
