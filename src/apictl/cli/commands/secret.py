"""Secret encryption commands for apictl."""

from __future__ import annotations

import typer
from rich.console import Console

from apictl.cli.app import build_context, exit_with_error
from apictl.config.paths import keystore_properties_file
from apictl.errors import ApictlError, ValidationError
from apictl.models import InputType, KeyStoreConfig, OutputType, SecretConfig
from apictl.security.cipher import OAEP_ALGORITHM
from apictl.security.pipeline import encrypt_secrets, init_keystore_properties

secret_app = typer.Typer(help="Encrypt secrets with a keystore key.")


@secret_app.command("init")
def init_command(ctx: typer.Context) -> None:
    """Save the keystore used to encrypt secrets.

    Passwords are stored base64 encoded in keystore-info.properties.
    """
    console = Console()
    command_ctx = build_context(ctx, console)
    json_mode = bool(ctx.parent and ctx.parent.meta.get("json", False))

    location = typer.prompt("Enter Key Store location").strip()
    password = typer.prompt("Enter Key Store password", hide_input=True)
    key_alias = typer.prompt("Enter Key alias").strip()
    key_password = typer.prompt("Enter Key password", hide_input=True)

    keystore_config = KeyStoreConfig(
        location=location,
        password=password,
        key_alias=key_alias,
        key_password=key_password,
    )

    try:
        path = init_keystore_properties(
            command_ctx, keystore_config, keystore_properties_file()
        )
    except ApictlError as e:
        raise exit_with_error(e, console, json_mode) from e

    command_ctx.info(f"[green]Key Store initialization completed[/green] ({path})")


@secret_app.command("create")
def create_command(
    ctx: typer.Context,
    output: str = typer.Option(
        "console",
        "--output",
        "-o",
        help="Where to write encrypted secrets: console, file or k8",
    ),
    cipher: str = typer.Option(
        OAEP_ALGORITHM,
        "--cipher",
        "-c",
        help="RSA/ECB/OAEPWithSHA1AndMGF1Padding or RSA/ECB/PKCS1Padding",
    ),
    from_file: str = typer.Option(
        None,
        "--from-file",
        "-f",
        help="Properties file of alias=secret pairs to encrypt in bulk",
    ),
) -> None:
    """Encrypt secrets with the public key of the initialized keystore."""
    console = Console()
    command_ctx = build_context(ctx, console)
    json_mode = bool(ctx.parent and ctx.parent.meta.get("json", False))

    try:
        if from_file:
            secret_config = SecretConfig(
                output_type=OutputType.from_label(output),
                algorithm=cipher,
                input_type=InputType.FILE,
                input_file=from_file,
            )
        else:
            # Empty answers are accepted here and rejected by validation
            alias = typer.prompt(
                "Enter plain alias for secret", default="", show_default=False
            ).strip()
            if not alias:
                raise ValidationError("Invalid input for alias", invalid_keys=["alias"])
            secret_text = typer.prompt(
                "Enter plain text secret",
                default="",
                show_default=False,
                hide_input=True,
                confirmation_prompt=True,
            )
            secret_config = SecretConfig(
                output_type=OutputType.from_label(output),
                algorithm=cipher,
                input_type=InputType.CONSOLE,
                alias=alias,
                secret_text=secret_text,
            )

        encrypt_secrets(command_ctx, keystore_properties_file(), secret_config)
    except ApictlError as e:
        raise exit_with_error(e, console, json_mode) from e
