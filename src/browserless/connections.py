"""WebSocket connections to a remote browser (Puppeteer / Playwright).

The helpers only build the endpoint URL and relay raw messages; driving the
browser protocol is left to the caller or to a library such as Playwright:

    >>> endpoint = browserless.playwright().ws_endpoint()
    >>> browser = playwright.chromium.connect(endpoint)
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from types import TracebackType
from typing import TYPE_CHECKING, Any, ClassVar

import websocket
from loguru import logger

from browserless.exceptions import WebSocketError
from browserless.logging import mask_url
from browserless.options import QueryParameters

if TYPE_CHECKING:
    from browserless.client import Client

__all__ = ["Connection", "PlaywrightConnection", "PuppeteerConnection"]

_HTTP_SCHEME = re.compile(r"^http", re.IGNORECASE)

# Default connect/receive timeout (seconds)
DEFAULT_TIMEOUT = 30.0


class Connection:
    """A single WebSocket session against a Browserless endpoint."""

    endpoint: ClassVar[str] = "chromium"

    def __init__(
        self,
        client: Client,
        endpoint: str | None = None,
        launch: Mapping[str, Any] | None = None,
    ) -> None:
        self.client = client
        self.endpoint = endpoint or type(self).endpoint
        self.launch = dict(launch or {})
        self._socket: websocket.WebSocket | None = None

    def ws_endpoint(self) -> str:
        """``ws(s)://host/<endpoint>?token=...[&launch=...]``."""
        base = _HTTP_SCHEME.sub("ws", self.client.url(), count=1)
        query = QueryParameters().add("token", self.client.token())
        if self.launch:
            query.add("launch", self.launch)
        return query.build_query_string(f"{base}/{self.endpoint}")

    def connect(self, timeout: float = DEFAULT_TIMEOUT) -> Connection:
        url = self.ws_endpoint()
        logger.debug(f"Connecting to {mask_url(url)}")
        try:
            self._socket = websocket.create_connection(url, timeout=timeout)
        except (websocket.WebSocketException, OSError) as e:
            raise WebSocketError(f"Failed to connect to WebSocket: {e}") from e
        return self

    def is_connected(self) -> bool:
        return self._socket is not None and self._socket.connected

    def send(self, message: str | Mapping[str, Any]) -> str:
        """Send a message and wait for the next reply.

        Raises:
            WebSocketError: If not connected or the exchange fails
        """
        if self._socket is None:
            raise WebSocketError("WebSocket connection not established. Call connect() first.")
        payload = message if isinstance(message, str) else json.dumps(message)
        try:
            self._socket.send(payload)
            reply = self._socket.recv()
        except (websocket.WebSocketException, OSError) as e:
            raise WebSocketError(f"Failed to send WebSocket message: {e}") from e
        return reply.decode("utf-8") if isinstance(reply, bytes) else reply

    def close(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def __enter__(self) -> Connection:
        if self._socket is None:
            self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class PuppeteerConnection(Connection):
    endpoint = "chromium"


class PlaywrightConnection(Connection):
    endpoint = "chromium/playwright"
