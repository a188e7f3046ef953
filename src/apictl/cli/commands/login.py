"""Login and user reset commands for apictl."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from apictl.auth.resolver import basic_auth, cached_username, oauth_token
from apictl.cli.app import ExitCode, app, build_context, exit_with_error
from apictl.config.credentials import remove_env_keys
from apictl.core.context import CommandContext
from apictl.core.http import cleanup
from apictl.errors import ApictlError, CredentialsNotFound


async def _fetch_token(
    command_ctx: CommandContext, environment: str, username: str, password: str
) -> tuple[str, str]:
    try:
        return await oauth_token(command_ctx, environment, username, password)
    finally:
        await cleanup()


@app.command("login")
def login_command(
    ctx: typer.Context,
    environment: str = typer.Option(
        "default", "--environment", "-e", help="Environment to log in to"
    ),
    username: str = typer.Option("", "--username", "-u", help="Username"),
    password: str = typer.Option("", "--password", "-p", help="Password"),
    basic: bool = typer.Option(
        False,
        "--basic",
        help="Print a basic auth credential instead of requesting an access token",
    ),
) -> None:
    """Resolve credentials for an environment and print an access token.

    The first login to an environment registers an OAuth client and caches
    it; later logins reuse it and only ask for the password.
    """
    console = Console()
    json_mode = ctx.meta.get("json", False)
    command_ctx = build_context(ctx, console)

    try:
        if basic:
            credential, endpoint = basic_auth(command_ctx, environment, username, password)
            kind = "basic"
        else:
            credential, endpoint = asyncio.run(
                _fetch_token(command_ctx, environment, username, password)
            )
            kind = "bearer"
    except ApictlError as e:
        raise exit_with_error(e, console, json_mode) from e

    if json_mode:
        from apictl.display.json import output_json_pretty

        output_json_pretty(
            {
                "environment": environment,
                "api_manager_endpoint": endpoint,
                "type": kind,
                "credential": credential,
            }
        )
        return

    command_ctx.debug(f"API Manager endpoint: {endpoint}")
    if not command_ctx.quiet:
        label = "Basic credential" if basic else "Access token"
        console.print(f"[green]Logged in[/green] to '{environment}'")
        console.print(f"{label}:", highlight=False)
    typer.echo(credential)


@app.command("reset-user")
def reset_user_command(
    ctx: typer.Context,
    environment: str = typer.Option(
        ..., "--environment", "-e", help="Environment to clear cached user data for"
    ),
) -> None:
    """Clear the cached client and username for an environment."""
    console = Console()
    json_mode = ctx.meta.get("json", False)
    command_ctx = build_context(ctx, console)

    try:
        username = cached_username(command_ctx, environment)
    except CredentialsNotFound:
        command_ctx.info(f"[yellow]No user data cached for '{environment}'[/yellow]")
        raise typer.Exit(ExitCode.SUCCESS) from None
    except ApictlError as e:
        raise exit_with_error(e, console, json_mode) from e

    remove_env_keys(environment, command_ctx.env_keys_path)
    command_ctx.info(
        f"[green]Successfully cleared user data[/green] for '{environment}' ({username})"
    )
