"""Collecting and validating plaintext secrets."""

from __future__ import annotations

from pathlib import Path

from apictl.errors import ValidationError
from apictl.models import InputType, SecretConfig
from apictl.security import properties


def collect(secret_config: SecretConfig) -> dict[str, str]:
    """Gather alias -> plaintext pairs from a properties file or a single pair.

    Values are not validated here; see ``validate_secrets``.
    """
    if secret_config.input_type == InputType.FILE:
        if not secret_config.input_file:
            raise ValidationError("No input file given for bulk secret encryption")
        path = Path(secret_config.input_file).expanduser()
        if not path.exists():
            raise ValidationError(f"Input file {path} does not exist")
        try:
            return properties.load(path)
        except OSError as e:
            raise ValidationError(f"Cannot read input file {path}: {e.strerror}") from e
        except ValueError as e:
            raise ValidationError(
                f"Input file {path} is not a valid properties file: {e}"
            ) from e

    return {secret_config.alias or "": secret_config.secret_text or ""}


def empty_value_keys(inputs: dict[str, str]) -> list[str]:
    """Return the keys whose value is empty after trimming whitespace."""
    return [key for key, value in inputs.items() if not value.strip()]


def is_map_with_non_empty_values(inputs: dict[str, str]) -> bool:
    return not empty_value_keys(inputs)


def validate_secrets(inputs: dict[str, str]) -> None:
    """Reject a mapping that has any empty value.

    Raises:
        ValidationError: listing every offending key
    """
    invalid = empty_value_keys(inputs)
    if invalid:
        raise ValidationError(
            "\n".join(f"Invalid input for {key}" for key in invalid),
            invalid_keys=invalid,
        )
