"""Authentication for apictl."""

from apictl.auth.keys import (
    decrypt_client_secret,
    encrypt_client_secret,
    get_base64_encoded_credentials,
)
from apictl.auth.oauth import ClientRegistration, OAuthClient, TokenResponse
from apictl.auth.resolver import basic_auth, oauth_token, resolve_credentials

__all__ = [
    "OAuthClient",
    "ClientRegistration",
    "TokenResponse",
    "resolve_credentials",
    "basic_auth",
    "oauth_token",
    "get_base64_encoded_credentials",
    "encrypt_client_secret",
    "decrypt_client_secret",
]
