"""Bot-detection bypass via ``POST /unblock``."""

from __future__ import annotations

from typing import Self

from browserless.exceptions import UnblockError
from browserless.features.base import FeatureBuilder
from browserless.features.concerns import (
    AuthenticationMixin,
    NavigationMixin,
    PageOptionsMixin,
    QueryParameterMixin,
)
from browserless.responses.pages import UnblockResponse

__all__ = ["Unblock"]


class Unblock(
    AuthenticationMixin,
    NavigationMixin,
    PageOptionsMixin,
    QueryParameterMixin,
    FeatureBuilder[UnblockResponse],
):
    """Load a protected page and return the requested artifacts.

    Each artifact (WebSocket endpoint, cookies, content, screenshot) is off
    until asked for.
    """

    endpoint = "unblock"
    error = UnblockError
    response_class = UnblockResponse
    defaults = {
        "gotoOptions": {},
        "browserWSEndpoint": False,
        "cookies": False,
        "content": False,
        "screenshot": False,
    }

    def url(self, url: str) -> Self:
        return self.set_option("url", url)

    def browser_ws_endpoint(self, enabled: bool = True) -> Self:
        return self.set_option("browserWSEndpoint", enabled)

    def cookies(self, enabled: bool = True) -> Self:
        return self.set_option("cookies", enabled)

    def content(self, enabled: bool = True) -> Self:
        return self.set_option("content", enabled)

    def screenshot(self, enabled: bool = True) -> Self:
        return self.set_option("screenshot", enabled)

    def ttl(self, milliseconds: int) -> Self:
        """Keep the unblocked browser alive for reconnection."""
        return self.set_option("ttl", milliseconds)

    def validate(self) -> None:
        if not self.options.get("url"):
            raise self.error.invalid_options("URL must be provided")
