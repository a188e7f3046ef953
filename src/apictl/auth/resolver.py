"""Resolve the credentials to use for an environment.

The state machine has three branches:

1. Unknown environment: fail.
2. Known environment without a cached record: take the username from the
   flag or prompt for it, and the password from the flag or a masked prompt.
   Prompting for the username always prompts for the password as well.
3. Known environment with a cached record: a flag username that differs
   from the cached one is fatal; otherwise the password comes from the flag
   or a prompt. The cache never holds a usable password.
"""

from __future__ import annotations

import typer

from apictl.auth.keys import (
    decrypt_client_secret,
    encrypt_client_secret,
    get_base64_encoded_credentials,
)
from apictl.auth.oauth import OAuthClient
from apictl.config.credentials import (
    check_credential_permissions,
    get_env_keys,
    load_env_keys,
    put_env_keys,
)
from apictl.core.context import CommandContext
from apictl.errors import CredentialMismatch, UnknownEnvironment
from apictl.errors.messages import (
    credential_mismatch_message,
    insecure_credentials_message,
    no_environment_message,
    reset_user_remediation,
    unknown_environment_message,
)
from apictl.models import EnvironmentCredentialRecord, ResolvedCredentials


def prompt_for_username() -> str:
    return typer.prompt("Enter Username").strip()


def prompt_for_password() -> str:
    return typer.prompt("Enter Password", hide_input=True)


def resolve_credentials(
    ctx: CommandContext,
    environment: str,
    flag_username: str = "",
    flag_password: str = "",
) -> ResolvedCredentials:
    """Decide which username and password to use for an environment.

    Raises:
        UnknownEnvironment: if the environment is empty or not configured
        CredentialMismatch: if flag_username differs from the cached username
    """
    env = ctx.config.get_environment(environment) if environment else None
    if env is None:
        if not environment:
            raise UnknownEnvironment(no_environment_message())
        raise UnknownEnvironment(
            unknown_environment_message(environment, str(ctx.config_path))
        )

    ctx.debug(f"Environment: '{environment}'")

    cached = load_env_keys(ctx.env_keys_path).get(environment)

    if cached is not None:
        if not check_credential_permissions(ctx.env_keys_path):
            ctx.warn(insecure_credentials_message(str(ctx.env_keys_path)))
        username = cached.username
        if flag_username and flag_username != username:
            raise CredentialMismatch(
                credential_mismatch_message(environment, str(ctx.env_keys_path)),
                remediation=reset_user_remediation(environment),
            )
        password = flag_password or _prompt_password_for(ctx, username)
    elif flag_username:
        username = flag_username
        password = flag_password or _prompt_password_for(ctx, username)
    else:
        username = prompt_for_username()
        password = prompt_for_password()

    return ResolvedCredentials(
        environment=env,
        username=username,
        password=password,
        cached_record=cached,
    )


def _prompt_password_for(ctx: CommandContext, username: str) -> str:
    ctx.info(f"For Username: {username}")
    return prompt_for_password()


def basic_auth(
    ctx: CommandContext,
    environment: str,
    flag_username: str = "",
    flag_password: str = "",
) -> tuple[str, str]:
    """Resolve credentials for endpoints that accept basic authentication.

    Returns:
        (base64 "username:password", API manager endpoint)
    """
    resolved = resolve_credentials(ctx, environment, flag_username, flag_password)
    credentials = get_base64_encoded_credentials(resolved.username, resolved.password)
    return credentials, resolved.environment.api_manager_endpoint


async def oauth_token(
    ctx: CommandContext,
    environment: str,
    flag_username: str = "",
    flag_password: str = "",
    client: OAuthClient | None = None,
) -> tuple[str, str]:
    """Resolve credentials and exchange them for an access token.

    Registers a new client (and caches it) the first time an environment is
    used; afterwards the cached client id is reused and its secret decrypted
    with the supplied password.

    Returns:
        (access token, API manager endpoint)
    """
    client = client or OAuthClient(ctx)
    resolved = resolve_credentials(ctx, environment, flag_username, flag_password)
    env = resolved.environment

    if resolved.cached_record is not None:
        client_id = resolved.cached_record.client_id
        client_secret = decrypt_client_secret(
            resolved.password, resolved.cached_record.client_secret
        )
        ctx.debug(f"Username: {resolved.username}")
        ctx.debug(f"ClientID: {client_id}")
    else:
        ctx.info(f"Username: {resolved.username}")
        ctx.debug(f"Registration endpoint: {env.registration_endpoint}")
        registration = await client.register(
            resolved.username, resolved.password, env.registration_endpoint
        )
        client_id = registration.client_id
        client_secret = registration.client_secret
        ctx.debug(f"ClientID: {client_id}")

        record = EnvironmentCredentialRecord(
            client_id=client_id,
            client_secret=encrypt_client_secret(resolved.password, client_secret),
            username=resolved.username,
        )
        put_env_keys(env.name, record, ctx.env_keys_path)

    access_token = await client.exchange(
        resolved.username,
        resolved.password,
        get_base64_encoded_credentials(client_id, client_secret),
        env.token_endpoint,
    )
    return access_token, env.api_manager_endpoint


def cached_username(ctx: CommandContext, environment: str) -> str:
    """Get the username cached for an environment.

    Raises:
        CredentialsNotFound: if nothing is cached
    """
    return get_env_keys(environment, ctx.env_keys_path).username
