"""Per-environment credential file management for apictl.

The credential file is a JSON object keyed by environment name. Each entry
holds the OAuth client id, the password-encrypted client secret and the
username that registered the client. The file is assumed to have a single
writer.
"""

from __future__ import annotations

import stat
from pathlib import Path

import msgspec

from apictl.config.paths import env_keys_file
from apictl.errors import CredentialsCorrupt, CredentialsNotFound
from apictl.errors.messages import corrupt_credentials_remediation
from apictl.models import EnvironmentCredentialRecord

_env_keys_decoder = msgspec.json.Decoder(dict[str, EnvironmentCredentialRecord])


def write_credential(path: Path, content: bytes) -> None:
    """Securely write credential to file with 0o600 permissions."""
    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file first, then rename for atomicity
    temp_path = path.with_suffix(".tmp")
    temp_path.write_bytes(content)

    temp_path.chmod(stat.S_IRUSR | stat.S_IWUSR)  # 0o600

    temp_path.replace(path)


def check_credential_permissions(path: Path) -> bool:
    """Verify credential file has secure permissions (0o600 or stricter)."""
    if not path.exists():
        return True  # No file is secure

    mode = path.stat().st_mode
    return not (mode & (stat.S_IRGRP | stat.S_IWGRP | stat.S_IROTH | stat.S_IWOTH))


def load_env_keys(path: Path | None = None) -> dict[str, EnvironmentCredentialRecord]:
    """Load every cached credential record, keyed by environment name."""
    keys_path = path or env_keys_file()
    if not keys_path.exists():
        return {}

    content = keys_path.read_bytes()
    if not content.strip():
        return {}
    try:
        return _env_keys_decoder.decode(content)
    except msgspec.DecodeError as e:
        raise CredentialsCorrupt(
            f"Credential file {keys_path} is not valid: {e}",
            remediation=corrupt_credentials_remediation(str(keys_path)),
        ) from e


def save_env_keys(
    records: dict[str, EnvironmentCredentialRecord], path: Path | None = None
) -> None:
    """Replace the credential file with the given records."""
    keys_path = path or env_keys_file()
    write_credential(keys_path, msgspec.json.format(msgspec.json.encode(records)))


def env_exists_in_keys_file(environment: str, path: Path | None = None) -> bool:
    """Check whether a credential record is cached for the environment."""
    return environment in load_env_keys(path)


def get_env_keys(
    environment: str, path: Path | None = None
) -> EnvironmentCredentialRecord:
    """Get the cached credential record for an environment.

    Raises:
        CredentialsNotFound: if the environment has no record
    """
    records = load_env_keys(path)
    try:
        return records[environment]
    except KeyError:
        raise CredentialsNotFound(
            f"No credentials cached for environment '{environment}'"
        ) from None


def put_env_keys(
    environment: str,
    record: EnvironmentCredentialRecord,
    path: Path | None = None,
) -> None:
    """Add or fully replace the record for an environment."""
    records = load_env_keys(path)
    records[environment] = record
    save_env_keys(records, path)


def remove_env_keys(environment: str, path: Path | None = None) -> bool:
    """Remove the record for an environment.

    Returns:
        True if removed, False if there was nothing to remove
    """
    records = load_env_keys(path)
    if environment not in records:
        return False

    del records[environment]
    save_env_keys(records, path)
    return True
