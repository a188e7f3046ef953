"""HTTP client for talking to management and authorization servers."""

from contextlib import asynccontextmanager

import httpx

from apictl.config.settings import get_config
from apictl.errors import NetworkError

# Global HTTP client
_client: httpx.AsyncClient | None = None


def get_timeout_config() -> httpx.Timeout:
    """Get timeout configuration from settings."""
    config = get_config()
    return httpx.Timeout(config.http.timeout, connect=10.0)


@asynccontextmanager
async def get_http_client():
    """Get or create the shared HTTP client.

    Usage:
        async with get_http_client() as client:
            response = await client.post(...)
    """
    global _client

    if _client is None:
        _client = httpx.AsyncClient(
            timeout=get_timeout_config(),
            verify=get_config().http.verify_ssl,
            follow_redirects=True,
        )

    try:
        yield _client
    finally:
        # Don't close - keep for reuse
        pass


async def cleanup() -> None:
    """Close the HTTP client.

    Should be called on application shutdown.
    """
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def post(url: str, headers: dict[str, str], content: str) -> httpx.Response:
    """POST a request body and return the response whatever its status.

    Raises:
        NetworkError: if the server could not be reached
    """
    try:
        async with get_http_client() as client:
            return await client.post(url, headers=headers, content=content)
    except httpx.TransportError as e:
        raise NetworkError(
            f"Unable to connect to {url}: {e}",
            remediation="Check that the environment endpoints are reachable.",
        ) from e
