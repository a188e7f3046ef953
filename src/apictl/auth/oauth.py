"""Dynamic client registration and password-grant token exchange."""

from __future__ import annotations

import json
from urllib.parse import urlencode

import httpx
import msgspec

from apictl.auth.keys import get_base64_encoded_credentials
from apictl.core.context import CommandContext
from apictl.core.http import post
from apictl.errors import AuthenticationFailed, RegistrationFailed, TokenRequestFailed


class ClientRegistration(msgspec.Struct, frozen=True, rename="camel"):
    """Client id/secret pair returned by the registration endpoint."""

    client_id: str
    client_secret: str
    client_name: str | None = None


class TokenResponse(msgspec.Struct, frozen=True):
    """Password grant response body."""

    access_token: str
    refresh_token: str | None = None
    token_type: str | None = None
    scope: str | None = None
    expires_in: int | None = None


class OAuthClient:
    """Talks to an environment's registration and token endpoints.

    Failures are never retried; repeated wrong-password submissions can lock
    the account.
    """

    # Registration descriptor
    CLIENT_NAME = "rest_api_publisher"
    CALLBACK_URL = "www.google.lk"
    GRANT_TYPES = "password refresh_token"
    OWNER = "admin"
    TOKEN_SCOPE = "Production"

    # Token request
    TOKEN_VALIDITY_PERIOD = 3600
    TOKEN_REQUEST_SCOPE = "apim:api_view"

    def __init__(self, ctx: CommandContext | None = None) -> None:
        self.ctx = ctx

    def _debug(self, message: str) -> None:
        if self.ctx is not None:
            self.ctx.debug(message)

    def registration_body(self) -> str:
        return json.dumps(
            {
                "clientName": self.CLIENT_NAME,
                "callbackUrl": self.CALLBACK_URL,
                "grantType": self.GRANT_TYPES,
                "saasApp": True,
                "owner": self.OWNER,
                "tokenScope": self.TOKEN_SCOPE,
            }
        )

    def token_body(self, username: str, password: str) -> str:
        return urlencode(
            {
                "grant_type": "password",
                "username": username,
                "password": password,
                "validity_period": self.TOKEN_VALIDITY_PERIOD,
                "scope": self.TOKEN_REQUEST_SCOPE,
            },
            safe=":",
        )

    async def register(
        self, username: str, password: str, registration_endpoint: str
    ) -> ClientRegistration:
        """Obtain a client id/secret pair using the account credentials.

        Raises:
            AuthenticationFailed: on 401
            RegistrationFailed: on any other status besides 200/201
            NetworkError: if the endpoint cannot be reached
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Basic {get_base64_encoded_credentials(username, password)}",
        }

        response = await post(registration_endpoint, headers, self.registration_body())
        self._debug(f"Getting ClientID, ClientSecret: Status - {response.status_code}")

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise AuthenticationFailed(
                "Incorrect Username/Password combination.",
                remediation="Check the username and password and try again.",
            )
        if response.status_code not in (httpx.codes.OK, httpx.codes.CREATED):
            raise RegistrationFailed(
                f"Client registration failed: {response.status_code} {response.text}",
                status_code=response.status_code,
            )

        try:
            return msgspec.json.decode(response.content, type=ClientRegistration)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise RegistrationFailed(
                f"Invalid response from registration endpoint: {e}",
                status_code=response.status_code,
            ) from e

    async def exchange(
        self,
        username: str,
        password: str,
        client_credentials_b64: str,
        token_endpoint: str,
    ) -> str:
        """Exchange account credentials for an access token.

        Raises:
            AuthenticationFailed: on 401
            TokenRequestFailed: on any other non-200 status
            NetworkError: if the endpoint cannot be reached
        """
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Authorization": f"Bearer {client_credentials_b64}",
            "Accept": "application/json",
        }

        self._debug(f"Connecting to {token_endpoint}")
        response = await post(token_endpoint, headers, self.token_body(username, password))

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise AuthenticationFailed(
                "Unable to get an access token: 401 Unauthorized",
                remediation=(
                    "Check the password. If the cached client is stale, reset "
                    "the user for this environment."
                ),
            )
        if response.status_code != httpx.codes.OK:
            raise TokenRequestFailed(
                f"Unable to get an access token: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            token = msgspec.json.decode(response.content, type=TokenResponse)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise TokenRequestFailed(
                f"Invalid response from token endpoint: {e}",
                status_code=response.status_code,
            ) from e

        return token.access_token
