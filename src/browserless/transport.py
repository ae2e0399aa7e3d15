"""HTTP transport used by the client.

Any object with ``send(httpx.Request) -> httpx.Response`` can be attached to
a Client. ``httpx.Client`` satisfies this directly, and tests attach an
``httpx.Client(transport=httpx.MockTransport(handler))``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx

__all__ = ["DEFAULT_TIMEOUT", "USER_AGENT", "Transport", "create_transport"]

# Default timeout for HTTP requests (seconds)
DEFAULT_TIMEOUT = 30.0

USER_AGENT = "browserless-client-python/1.0"


@runtime_checkable
class Transport(Protocol):
    """Minimal contract for a pluggable HTTP client."""

    def send(self, request: httpx.Request) -> httpx.Response: ...


def create_transport(
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
    headers: dict[str, str] | None = None,
    follow_redirects: bool = True,
) -> httpx.Client:
    """Create a pooled httpx client for talking to Browserless.

    Args:
        timeout: Request timeout in seconds (None disables)
        headers: Default headers merged over the User-Agent
        follow_redirects: Follow HTTP redirects

    Returns:
        New httpx.Client instance
    """
    return httpx.Client(
        timeout=httpx.Timeout(timeout),
        follow_redirects=follow_redirects,
        headers={
            "User-Agent": USER_AGENT,
            **(headers or {}),
        },
        limits=httpx.Limits(
            max_keepalive_connections=20,
            max_connections=100,
            keepalive_expiry=30.0,
        ),
    )
