"""Main CLI application for apictl."""

from __future__ import annotations

from enum import IntEnum

import typer
from rich.console import Console

from apictl.core.context import CommandContext
from apictl.errors import ApictlError, ErrorCategory, get_remediation

# Create the main app
app = typer.Typer(
    name="apictl",
    help="Manage environment credentials and encrypted secrets for API Manager",
    add_completion=True,
    invoke_without_command=True,
    no_args_is_help=True,
)


class ExitCode(IntEnum):
    """Exit codes for apictl."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 2
    NETWORK_ERROR = 3
    CONFIG_ERROR = 4
    VALIDATION_ERROR = 5


EXIT_CODES: dict[ErrorCategory, ExitCode] = {
    ErrorCategory.AUTHENTICATION: ExitCode.AUTH_ERROR,
    ErrorCategory.NETWORK: ExitCode.NETWORK_ERROR,
    ErrorCategory.CONFIGURATION: ExitCode.CONFIG_ERROR,
    ErrorCategory.KEYSTORE: ExitCode.CONFIG_ERROR,
    ErrorCategory.NOT_FOUND: ExitCode.CONFIG_ERROR,
    ErrorCategory.VALIDATION: ExitCode.VALIDATION_ERROR,
    ErrorCategory.ENCRYPTION: ExitCode.GENERAL_ERROR,
}


@app.callback()
def main(
    ctx: typer.Context,
    json: bool = typer.Option(False, "--json", "-j", help="Enable JSON output mode"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Enable quiet mode"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """apictl - credentials and secrets for API Manager environments."""
    if version:
        from apictl import __version__

        typer.echo(f"apictl {__version__}")
        raise typer.Exit()

    # Resolve conflicts: verbose and quiet are mutually exclusive, quiet takes precedence
    if verbose and quiet:
        verbose = False

    ctx.meta["json"] = json
    ctx.meta["verbose"] = verbose
    ctx.meta["quiet"] = quiet

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def build_context(ctx: typer.Context, console: Console | None = None) -> CommandContext:
    """Create the per-command context from global options."""
    return CommandContext(
        console=console or Console(),
        verbose=ctx.meta.get("verbose", False),
        quiet=ctx.meta.get("quiet", False),
    )


def exit_with_error(
    error: ApictlError, console: Console, json_mode: bool = False
) -> typer.Exit:
    """Report an error and build the Exit to raise for it.

    Usage:
        raise exit_with_error(e, console) from e
    """
    if json_mode:
        from apictl.display.json import output_json_error

        output_json_error(error)
    else:
        console.print(f"[red]Error:[/red] {error.message}", highlight=False)
        remediation = error.remediation or get_remediation(error.category)
        if remediation:
            console.print(remediation)

    return typer.Exit(EXIT_CODES.get(error.category, ExitCode.GENERAL_ERROR))


def run_app() -> None:
    """Run the CLI app."""
    app()


# Import command modules - they register themselves via @app.command() decorators
from apictl.cli.commands import login  # noqa: E402,F401 (registers login, reset-user)

# Import env and secret modules and register their typer groups
from apictl.cli.commands import env as env_cmd  # noqa: E402
from apictl.cli.commands import secret as secret_cmd  # noqa: E402

app.add_typer(env_cmd.env_app, name="env")
app.add_typer(secret_cmd.secret_app, name="secret")
