"""User-facing error message templates with remediation."""

from __future__ import annotations

from apictl.errors.types import ErrorCategory

PROJECT_NAME = "apictl"


def no_environment_message() -> str:
    return (
        "No environment specified. Either specify it using the -e flag or name "
        "one of the environments in 'config.toml' to 'default'"
    )


def unknown_environment_message(environment: str, config_path: str) -> str:
    return f"Details incorrect/unavailable for environment '{environment}' in {config_path}"


def credential_mismatch_message(environment: str, keys_path: str) -> str:
    return (
        f"Username entered with flag -u for the environment '{environment}' "
        f"is not the same as username found in file '{keys_path}'"
    )


def reset_user_remediation(environment: str) -> str:
    return (
        f"Execute '[cyan]{PROJECT_NAME} reset-user -e {environment}[/cyan]' "
        "to clear user data"
    )


def corrupt_credentials_remediation(keys_path: str) -> str:
    return (
        f"Delete '{keys_path}' and run '[cyan]{PROJECT_NAME} login[/cyan]' "
        "again to cache new credentials"
    )


def insecure_credentials_message(keys_path: str) -> str:
    return (
        f"Credential file '{keys_path}' is readable by other users; "
        f"restrict it with: [cyan]chmod 600 {keys_path}[/cyan]"
    )


def get_remediation(category: str) -> str | None:
    """Get a generic remediation hint for an error category.

    Args:
        category: Error category (e.g., "authentication", "network")

    Returns:
        Remediation message or None
    """
    general_remediation = {
        ErrorCategory.AUTHENTICATION: (
            "Check the username and password for the environment and try again."
        ),
        ErrorCategory.NETWORK: (
            "Check that the environment endpoints are reachable and try again."
        ),
        ErrorCategory.CONFIGURATION: (
            f"Run '[cyan]{PROJECT_NAME} env list[/cyan]' to check your environments."
        ),
        ErrorCategory.KEYSTORE: (
            f"Run '[cyan]{PROJECT_NAME} secret init[/cyan]' to update keystore details."
        ),
    }

    return general_remediation.get(category)
