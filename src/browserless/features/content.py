"""Rendered HTML via ``POST /content``."""

from __future__ import annotations

from typing import Self

from browserless.exceptions import ContentError
from browserless.features.base import FeatureBuilder
from browserless.features.concerns import (
    AuthenticationMixin,
    CookieMixin,
    NavigationMixin,
    PageOptionsMixin,
    PageSourceMixin,
    QueryParameterMixin,
    ResourceInjectionMixin,
    ViewportMixin,
)
from browserless.responses.content import ContentResponse

__all__ = ["Content"]


class Content(
    PageSourceMixin,
    AuthenticationMixin,
    CookieMixin,
    NavigationMixin,
    ViewportMixin,
    ResourceInjectionMixin,
    PageOptionsMixin,
    QueryParameterMixin,
    FeatureBuilder[ContentResponse],
):
    """Fetch the HTML of a page after JavaScript has run."""

    endpoint = "content"
    error = ContentError
    response_class = ContentResponse
    defaults = {"gotoOptions": {}}
    recognized_options = {
        "content_options": "contentOptions",
        "dom_snapshot": "domSnapshot",
        "remove_attributes": "removeAttributes",
        "response_format": "responseFormat",
        "sanitize_html": "sanitizeHtml",
        "wait_for_dom_event": "waitForDOMEvent",
    }

    def reject_request_patterns(self, patterns: list[str]) -> Self:
        return self.reject_request_pattern(patterns)

    def extract_elements(self, selectors: list[str]) -> Self:
        return self.set_option("extractElements", list(selectors))

    def evaluate_selector(self, selector: str) -> Self:
        return self.set_option("evaluateSelector", selector)

    def domain_blocklist(self, domains: list[str]) -> Self:
        return self.set_option("domainBlocklist", list(domains))

    def transform_response(self, transform: dict) -> Self:
        return self.set_option("transformResponse", dict(transform))

    def validate(self) -> None:
        self.validate_source()
