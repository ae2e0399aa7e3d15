"""Low-level Browserless client: identity, URL building and request dispatch."""

from __future__ import annotations

import json
import re
from types import TracebackType
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
from loguru import logger

from browserless.config.loader import DEFAULT_URL
from browserless.exceptions import (
    ApiError,
    BrowserlessError,
    ClientNotConfiguredError,
    InvalidConfigurationError,
    RemoteError,
)
from browserless.logging import log, log_enabled, mask_sensitive, mask_url
from browserless.options import QueryParameters
from browserless.transport import DEFAULT_TIMEOUT, USER_AGENT, Transport, create_transport

if TYPE_CHECKING:
    from browserless.config.loader import BrowserlessConfig

__all__ = ["Client"]

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


class Client:
    """Holds the API token and base URL and sends requests through a transport.

    Example:
        >>> client = Client("my-token").setup()
        >>> request = client.request("GET", "config")
        >>> client.send(request).status_code
        200
    """

    def __init__(
        self,
        token: str,
        url: str = DEFAULT_URL,
        transport: Transport | None = None,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        if not token:
            raise InvalidConfigurationError("Browserless API token must be provided")
        if not url:
            raise InvalidConfigurationError("Browserless URL must be provided")
        self._token = token
        self._url = url
        self._transport = transport
        self._owns_transport = False
        self._timeout = timeout

    @classmethod
    def from_config(
        cls, config: BrowserlessConfig | None = None, transport: Transport | None = None
    ) -> Client:
        """Build a client from configuration, attaching the default transport.

        Raises:
            InvalidConfigurationError: If no token is configured
        """
        from browserless.config.loader import get_config

        config = config or get_config()
        if not config.token:
            raise InvalidConfigurationError(
                "No Browserless token configured. Set BROWSERLESS_TOKEN or add "
                "`token` to browserless.yaml."
            )
        client = cls(config.token, config.url, transport)
        return client if transport is not None else client.setup()

    def url(self) -> str:
        """Return the validated base URL without a trailing slash.

        Raises:
            InvalidConfigurationError: If the URL has no http(s) scheme
        """
        url = self._url.rstrip("/")
        if not _SCHEME.match(url):
            raise InvalidConfigurationError(
                "Invalid URL format. Must include http:// or https://"
            )
        return url

    def token(self) -> str:
        return self._token

    def timeout(self) -> float | None:
        """Transport timeout in seconds applied to every request."""
        return self._timeout

    def setup(self, **transport_kwargs: Any) -> Client:
        """Attach a default pooled httpx transport owned by this client."""
        transport_kwargs.setdefault("timeout", self._timeout)
        self.close()
        self._transport = create_transport(**transport_kwargs)
        self._owns_transport = True
        return self

    def use_transport(self, transport: Transport) -> Client:
        """Attach a caller-owned transport."""
        self.close()
        self._transport = transport
        self._owns_transport = False
        return self

    def transport(self) -> Transport | None:
        return self._transport

    def endpoint_url(self, endpoint: str, query: QueryParameters | None = None) -> str:
        """Build ``{url}/{endpoint}?token=...`` plus extra query parameters."""
        base = f"{self.url()}/{endpoint.lstrip('/')}?token={quote(self._token, safe='')}"
        return query.build_query_string(base) if query else base

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Any = None,
        query: QueryParameters | None = None,
    ) -> httpx.Request:
        """Build a request for an API endpoint.

        Args:
            method: HTTP method (POST for features, GET for introspection)
            endpoint: Path below the base URL, e.g. "pdf" or "chrome/bql"
            json_body: Body serialized as JSON (omitted if None)
            query: Extra query parameters

        Raises:
            TypeError: If the body is not JSON serializable
            ValueError: If the body contains NaN or Infinity
        """
        headers = {"Content-Type": "application/json", "User-Agent": USER_AGENT}
        if method.upper() == "GET":
            headers["Cache-Control"] = "no-cache"
        content = None
        if json_body is not None:
            content = json.dumps(json_body, allow_nan=False).encode("utf-8")
        return httpx.Request(
            method.upper(),
            self.endpoint_url(endpoint, query),
            headers=headers,
            content=content,
            extensions={"timeout": httpx.Timeout(self._timeout).as_dict()},
        )

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send a request through the attached transport.

        Raises:
            ClientNotConfiguredError: If no transport is attached
            RemoteError: If the transport fails
            ApiError: If the response status is 400 or higher
        """
        if self._transport is None:
            raise ClientNotConfiguredError(
                "You have not setup the client correctly, you need to set the "
                "HTTP client using `setup()` or `use_transport()`."
            )

        url = mask_url(str(request.url))
        if log_enabled("requests"):
            body = _decode_body(request.content)
            logger.debug(f"Request {request.method} {url} {mask_sensitive(body)}")

        with log("browserless.request", method=request.method, url=url) as span:
            try:
                response = self._transport.send(request)
            except BrowserlessError:
                raise
            except Exception as e:
                raise RemoteError(f"Failed to send request: {e}") from e

            span.add(status=response.status_code, bytes=len(response.content))
            if log_enabled("responses"):
                logger.debug(f"Response {response.status_code} from {url}")

            if response.status_code >= 400:
                raise ApiError(response.status_code, response.text)

        return response

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, httpx.Client):
            self._transport.close()
        if self._owns_transport:
            self._transport = None
            self._owns_transport = False

    def __enter__(self) -> Client:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self._url!r})"


def _decode_body(content: bytes) -> Any:
    if not content:
        return None
    try:
        return json.loads(content)
    except ValueError:
        return f"<{len(content)} bytes>"
