"""CLI commands for apictl."""

# Top-level commands
from apictl.cli.commands.login import login_command, reset_user_command

# Command groups (these register themselves with the main app)
from apictl.cli.commands import (
    env,
    secret,
)

__all__ = [
    # Top-level commands
    "login_command",
    "reset_user_command",
    # Command groups
    "env",
    "secret",
]
