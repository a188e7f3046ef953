"""Writing encrypted secrets to the console, a properties file or a k8s manifest."""

from __future__ import annotations

from pathlib import Path

import msgspec

from apictl.core.context import CommandContext
from apictl.models import OutputType
from apictl.security import properties

SECRETS_DIR_NAME = "security"
PROPERTIES_FILE_NAME = "wso2mi-secrets.properties"
MANIFEST_FILE_NAME = "wso2mi-secrets.yaml"

DEFAULT_SECRET_NAME = "wso2misecret"
DEFAULT_NAMESPACE = "default"


class SecretMetadata(msgspec.Struct):
    name: str = DEFAULT_SECRET_NAME
    namespace: str = DEFAULT_NAMESPACE


class KubernetesSecret(msgspec.Struct, rename="camel", kw_only=True):
    """Opaque Kubernetes Secret carrying the encrypted values as stringData."""

    api_version: str = "v1"
    kind: str = "Secret"
    metadata: SecretMetadata = msgspec.field(default_factory=SecretMetadata)
    string_data: dict[str, str]
    type: str = "Opaque"


def secret_file_path(ctx: CommandContext, file_name: str) -> Path:
    """Path inside <working dir>/security, creating the directory."""
    secret_dir = ctx.working_dir / SECRETS_DIR_NAME
    secret_dir.mkdir(parents=True, exist_ok=True)
    return secret_dir / file_name


def print_secrets_to_console(ctx: CommandContext, secrets: dict[str, str]) -> None:
    for alias, secret in secrets.items():
        ctx.console.print(f"{alias} : {secret}", markup=False, highlight=False, soft_wrap=True)


def print_secrets_to_properties_file(ctx: CommandContext, secrets: dict[str, str]) -> Path:
    path = secret_file_path(ctx, PROPERTIES_FILE_NAME)
    properties.dump(secrets, path)
    ctx.info(f"Secret properties file created in {path}")
    return path


def print_secrets_to_yaml_file(ctx: CommandContext, secrets: dict[str, str]) -> Path:
    path = secret_file_path(ctx, MANIFEST_FILE_NAME)
    manifest = KubernetesSecret(string_data=dict(secrets))
    path.write_bytes(msgspec.yaml.encode(manifest))
    ctx.info(
        f"Kubernetes secret file created in {path} with default name and namespace"
    )
    ctx.warn("You can change the default values as required before applying.")
    return path


def emit(
    ctx: CommandContext, secrets: dict[str, str], output_type: OutputType | str
) -> Path | None:
    """Write encrypted secrets in the requested form.

    Returns:
        The file written, or None for console output
    """
    if not isinstance(output_type, OutputType):
        output_type = OutputType.from_label(output_type)

    if output_type == OutputType.K8:
        return print_secrets_to_yaml_file(ctx, secrets)
    if output_type == OutputType.FILE:
        return print_secrets_to_properties_file(ctx, secrets)
    print_secrets_to_console(ctx, secrets)
    return None
