"""End-to-end secret encryption: keystore -> cipher -> source -> sink."""

from __future__ import annotations

from pathlib import Path

from apictl.core.context import CommandContext
from apictl.models import KeyStoreConfig, SecretConfig
from apictl.security.cipher import encrypt_all, select_scheme
from apictl.security.keystore import (
    load_encryption_key,
    load_keystore,
    read_keystore_config,
    write_keystore_config,
)
from apictl.security.sink import emit
from apictl.security.source import collect, validate_secrets


def encrypt_secrets(
    ctx: CommandContext,
    keystore_properties_path: Path,
    secret_config: SecretConfig,
) -> dict[str, str]:
    """Encrypt the configured secrets and write them out.

    Secrets are validated before the keystore is opened, so an empty value
    aborts without any cryptographic work.

    Returns:
        The alias -> base64 ciphertext mapping that was written
    """
    plaintext = collect(secret_config)
    validate_secrets(plaintext)

    keystore_config = read_keystore_config(keystore_properties_path)
    ctx.debug(f"Reading keystore {keystore_config.location}")
    public_key = load_encryption_key(keystore_config)

    scheme = select_scheme(secret_config.algorithm)
    ctx.debug(f"Encrypting {len(plaintext)} secret(s) with {scheme.algorithm}")
    encrypted = encrypt_all(public_key, plaintext, scheme)

    emit(ctx, encrypted, secret_config.output_type)
    return encrypted


def init_keystore_properties(
    ctx: CommandContext, keystore_config: KeyStoreConfig, path: Path
) -> Path:
    """Check the keystore details and save them for later encryption runs."""
    keystore = load_keystore(keystore_config.location, keystore_config.password)
    keystore.get_private_key(keystore_config.key_alias, keystore_config.key_password)

    write_keystore_config(keystore_config, path)
    ctx.debug(f"Keystore details written to {path}")
    return path
