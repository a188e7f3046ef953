"""Output formatting for apictl."""

from apictl.display.json import (
    ErrorData,
    ErrorResponse,
    from_apictl_error,
    output_json_error,
    output_json_pretty,
)

__all__ = [
    "ErrorData",
    "ErrorResponse",
    "from_apictl_error",
    "output_json_error",
    "output_json_pretty",
]
