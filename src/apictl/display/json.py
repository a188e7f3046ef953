"""JSON output utilities for apictl."""

from __future__ import annotations

import json
import sys

import msgspec

from apictl.errors import ApictlError

__all__ = [
    "ErrorResponse",
    "ErrorData",
    "output_json_pretty",
    "output_json_error",
    "from_apictl_error",
]


class ErrorData(msgspec.Struct, frozen=True, omit_defaults=True):
    """Error data with category and remediation."""

    message: str
    category: str
    remediation: str | None = None
    details: dict | None = None


class ErrorResponse(msgspec.Struct, frozen=True):
    """Structured error response for JSON output."""

    error: ErrorData


def output_json_pretty(data: object, indent: int = 2) -> None:
    """Output data as pretty-printed JSON to stdout.

    Args:
        data: Any msgspec-serializable object
        indent: Number of spaces for indentation
    """
    python_obj = msgspec.to_builtins(data)
    sys.stdout.write(json.dumps(python_obj, indent=indent))
    sys.stdout.write("\n")


def from_apictl_error(error: ApictlError) -> ErrorResponse:
    """Create an ErrorResponse from an ApictlError instance."""
    details = None
    if status_code := getattr(error, "status_code", None):
        details = {"status_code": status_code}
    if invalid_keys := getattr(error, "invalid_keys", None):
        details = {"invalid_keys": invalid_keys}

    return ErrorResponse(
        error=ErrorData(
            message=error.message,
            category=error.category.value,
            remediation=error.remediation,
            details=details,
        )
    )


def output_json_error(error: ApictlError, indent: int = 2) -> None:
    """Output an error in standardized JSON format."""
    output_json_pretty(from_apictl_error(error), indent=indent)
