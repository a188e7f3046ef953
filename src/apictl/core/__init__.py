"""Core utilities for apictl."""

from apictl.core.context import CommandContext
from apictl.core.http import cleanup, get_http_client, get_timeout_config, post

__all__ = [
    "CommandContext",
    "cleanup",
    "get_http_client",
    "get_timeout_config",
    "post",
]
