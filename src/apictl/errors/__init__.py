"""Error handling for apictl."""

from apictl.errors.messages import get_remediation
from apictl.errors.types import (
    ApictlError,
    AuthenticationFailed,
    CredentialMismatch,
    CredentialsCorrupt,
    CredentialsNotFound,
    EncryptionFailure,
    ErrorCategory,
    KeyStoreError,
    KeyStoreErrorKind,
    NetworkError,
    RegistrationFailed,
    TokenRequestFailed,
    UnknownEnvironment,
    ValidationError,
)

__all__ = [
    # Core types
    "ErrorCategory",
    "ApictlError",
    # Credential errors
    "UnknownEnvironment",
    "CredentialMismatch",
    "CredentialsNotFound",
    "CredentialsCorrupt",
    "AuthenticationFailed",
    "RegistrationFailed",
    "TokenRequestFailed",
    "NetworkError",
    # Secret errors
    "KeyStoreError",
    "KeyStoreErrorKind",
    "EncryptionFailure",
    "ValidationError",
    # Message templates
    "get_remediation",
]
