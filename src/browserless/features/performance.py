"""Lighthouse audits via ``POST /performance``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from browserless.exceptions import PerformanceError
from browserless.features.base import FeatureBuilder
from browserless.features.concerns import QueryParameterMixin
from browserless.responses.performance import PerformanceResponse

__all__ = ["Performance"]

LIGHTHOUSE_PRESET = "lighthouse:default"


class Performance(QueryParameterMixin, FeatureBuilder[PerformanceResponse]):
    """Run a Lighthouse audit against a URL.

    Example:
        >>> response = (
        ...     browserless.performance()
        ...     .url("https://example.com")
        ...     .categories(["performance", "seo"])
        ...     .send()
        ... )
        >>> response.performance_score()
        0.92
    """

    endpoint = "performance"
    error = PerformanceError
    response_class = PerformanceResponse

    def url(self, url: str) -> Self:
        return self.set_option("url", url)

    def categories(self, categories: list[str]) -> Self:
        """Limit the audit to these Lighthouse categories."""
        return self._settings(onlyCategories=list(categories))

    def audits(self, audits: list[str]) -> Self:
        """Limit the audit to these Lighthouse audit ids."""
        return self._settings(onlyAudits=list(audits))

    def throttling(self, throttling: Mapping[str, Any]) -> Self:
        return self._settings(throttling=dict(throttling))

    def device(self, form_factor: str) -> Self:
        """``mobile`` or ``desktop``."""
        return self._settings(formFactor=form_factor)

    def budgets(self, budgets: list[Mapping[str, Any]]) -> Self:
        return self.set_option("budgets", [dict(budget) for budget in budgets])

    def _settings(self, **settings: Any) -> Self:
        config = self.options.get("config") or {"extends": LIGHTHOUSE_PRESET}
        config.setdefault("settings", {}).update(settings)
        return self.set_option("config", config)

    def validate(self) -> None:
        if not self.options.get("url"):
            raise self.error.invalid_options("URL must be provided")
