"""Environment management commands for apictl."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from apictl.cli.app import ExitCode, exit_with_error
from apictl.config.credentials import env_exists_in_keys_file, remove_env_keys
from apictl.config.paths import config_file, env_keys_file
from apictl.config.settings import (
    add_environment,
    get_config,
    remove_environment,
    save_config,
)
from apictl.errors import ApictlError

env_app = typer.Typer(help="Manage API Manager environments.")


def _json_mode(ctx: typer.Context, local: bool) -> bool:
    if local:
        return True
    parent = ctx.parent
    return bool(parent and parent.meta.get("json", False))


@env_app.command("list")
def list_command(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Output in JSON format"
    ),
) -> None:
    """List configured environments."""
    console = Console()
    config = get_config()
    json_mode = _json_mode(ctx, json_output)

    try:
        logged_in = {name: env_exists_in_keys_file(name) for name in config.environments}
    except ApictlError as e:
        raise exit_with_error(e, console, json_mode) from e

    if json_mode:
        from apictl.display.json import output_json_pretty

        output_json_pretty(
            {
                name: {
                    "api_manager_endpoint": env.api_manager_endpoint,
                    "registration_endpoint": env.registration_endpoint,
                    "token_endpoint": env.token_endpoint,
                    "logged_in": logged_in[name],
                }
                for name, env in sorted(config.environments.items())
            }
        )
        return

    if not config.environments:
        console.print("[yellow]No environments configured[/yellow]")
        console.print(
            "Add one with: [cyan]apictl env add <name> --apim <url> "
            "--registration <url> --token <url>[/cyan]"
        )
        return

    table = Table(title="Environments", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("API Manager")
    table.add_column("Registration", style="dim")
    table.add_column("Token", style="dim")
    table.add_column("User", style="bold")

    for name, env in sorted(config.environments.items()):
        table.add_row(
            name,
            env.api_manager_endpoint,
            env.registration_endpoint,
            env.token_endpoint,
            "[green]cached[/green]" if logged_in[name] else "-",
        )

    console.print(table)


@env_app.command("add")
def add_command(
    name: str = typer.Argument(..., help="Environment name"),
    apim: str = typer.Option(..., "--apim", help="API Manager endpoint"),
    registration: str = typer.Option(
        ..., "--registration", help="Client registration endpoint"
    ),
    token: str = typer.Option(..., "--token", help="OAuth token endpoint"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Replace an existing environment"
    ),
) -> None:
    """Add an environment to config.toml."""
    console = Console()
    config = get_config()

    if config.has_environment(name) and not force:
        console.print(f"[red]Environment '{name}' already exists[/red]")
        console.print("Use [cyan]--force[/cyan] to replace it.")
        raise typer.Exit(ExitCode.CONFIG_ERROR)

    save_config(add_environment(config, name, apim, registration, token))
    console.print(f"[green]Added environment[/green] '{name}' to {config_file()}")


@env_app.command("remove")
def remove_command(
    name: str = typer.Argument(..., help="Environment name"),
) -> None:
    """Remove an environment and any user data cached for it."""
    console = Console()
    config = get_config()

    if not config.has_environment(name):
        console.print(f"[red]Unknown environment:[/red] {name}")
        raise typer.Exit(ExitCode.CONFIG_ERROR)

    save_config(remove_environment(config, name))
    try:
        removed = remove_env_keys(name)
    except ApictlError as e:
        raise exit_with_error(e, console) from e
    if removed:
        console.print(f"[dim]Cleared cached user data in {env_keys_file()}[/dim]")
    console.print(f"[green]Removed environment[/green] '{name}'")
