"""Error types and classifications."""

from __future__ import annotations

from enum import StrEnum


class ErrorCategory(StrEnum):
    """Error categories for handling decisions."""

    AUTHENTICATION = "authentication"
    NETWORK = "network"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    KEYSTORE = "keystore"
    ENCRYPTION = "encryption"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class ApictlError(Exception):
    """Base error with category and remediation."""

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(self, message: str, remediation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.remediation = remediation


class UnknownEnvironment(ApictlError):
    """Environment missing from config.toml (or not given at all)."""

    category = ErrorCategory.CONFIGURATION


class CredentialMismatch(ApictlError):
    """Flag username differs from the username cached for the environment."""

    category = ErrorCategory.AUTHENTICATION


class CredentialsNotFound(ApictlError):
    """No cached credential record for the environment."""

    category = ErrorCategory.NOT_FOUND


class CredentialsCorrupt(ApictlError):
    """The credential file exists but cannot be decoded."""

    category = ErrorCategory.CONFIGURATION


class AuthenticationFailed(ApictlError):
    """The authorization server rejected the supplied credentials (401)."""

    category = ErrorCategory.AUTHENTICATION


class RegistrationFailed(ApictlError):
    """Dynamic client registration returned an unexpected status."""

    category = ErrorCategory.AUTHENTICATION

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        remediation: str | None = None,
    ) -> None:
        super().__init__(message, remediation)
        self.status_code = status_code


class TokenRequestFailed(ApictlError):
    """The token endpoint returned an unexpected status."""

    category = ErrorCategory.AUTHENTICATION

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        remediation: str | None = None,
    ) -> None:
        super().__init__(message, remediation)
        self.status_code = status_code


class NetworkError(ApictlError):
    """Could not reach a server."""

    category = ErrorCategory.NETWORK


class KeyStoreErrorKind(StrEnum):
    """What went wrong while reading a keystore."""

    NOT_FOUND = "not_found"
    CORRUPT = "corrupt"
    BAD_PASSWORD = "bad_password"
    NO_SUCH_ALIAS = "no_such_alias"
    BAD_KEY_PASSWORD = "bad_key_password"
    UNSUPPORTED_KEY = "unsupported_key"


class KeyStoreError(ApictlError):
    """Keystore could not be opened or the key could not be extracted."""

    category = ErrorCategory.KEYSTORE

    def __init__(
        self,
        message: str,
        kind: KeyStoreErrorKind,
        remediation: str | None = None,
    ) -> None:
        super().__init__(message, remediation)
        self.kind = kind


class EncryptionFailure(ApictlError):
    """RSA encryption failed, usually because the plaintext is too long."""

    category = ErrorCategory.ENCRYPTION


class ValidationError(ApictlError):
    """User supplied input failed validation."""

    category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        invalid_keys: list[str] | None = None,
        remediation: str | None = None,
    ) -> None:
        super().__init__(message, remediation)
        self.invalid_keys = invalid_keys or []
