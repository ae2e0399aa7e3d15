"""Element extraction via ``POST /scrape``."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Self

from browserless.exceptions import ScrapeError
from browserless.features.base import FeatureBuilder
from browserless.features.concerns import (
    AuthenticationMixin,
    CookieMixin,
    NavigationMixin,
    PageOptionsMixin,
    QueryParameterMixin,
)
from browserless.responses.pages import ScrapeResponse

__all__ = ["Scrape"]


class Scrape(
    AuthenticationMixin,
    CookieMixin,
    NavigationMixin,
    PageOptionsMixin,
    QueryParameterMixin,
    FeatureBuilder[ScrapeResponse],
):
    """Extract elements from a page by CSS selector.

    Unlike the rendering builders, a scrape accepts exactly one source: once
    a URL is set, HTML cannot be set (and the other way round).

    Example:
        >>> response = browserless.scrape().url("https://example.com").element("h1").send()
        >>> response.results("h1")
        [{'text': 'Example Domain', ...}]
    """

    endpoint = "scrape"
    error = ScrapeError
    response_class = ScrapeResponse
    defaults = {"elements": [], "gotoOptions": {}}
    recognized_options = {"debug": "debug"}

    def url(self, url: str) -> Self:
        if self.options.get("html"):
            raise self.error.invalid_options("Cannot set both URL and HTML content")
        return self.set_option("url", url)

    def html(self, html: str) -> Self:
        if self.options.get("url"):
            raise self.error.invalid_options("Cannot set both URL and HTML content")
        return self.set_option("html", html)

    def element(self, selector: str, timeout: int | None = None, **extra: Any) -> Self:
        entry: dict[str, Any] = {"selector": selector, **extra}
        if timeout is not None:
            entry["timeout"] = timeout
        self.options.append("elements", entry)
        return self

    def elements(self, selectors: Iterable[str | Mapping[str, Any]]) -> Self:
        for selector in selectors:
            if isinstance(selector, Mapping):
                self.element(**selector)
            else:
                self.element(selector)
        return self

    def debug(self, **flags: bool) -> Self:
        """Request debug artifacts (``screenshot``, ``console``, ``network``, ``cookies``, ``html``)."""
        return self.with_options({"debug": flags})

    def validate(self) -> None:
        if not self.options.get("url") and not self.options.get("html"):
            raise self.error.invalid_options("Either URL or HTML content must be provided")
        if not self.options.get("elements"):
            raise self.error.invalid_options("At least one element selector must be provided")
