"""Lighthouse results returned by ``/performance``.

The service has nested the report in three ways across versions; every
lookup checks them in this order:

    {"categories": ..., "audits": ...}
    {"data": {"categories": ..., "audits": ...}}
    {"lighthouseResult": {"categories": ..., "audits": ...}}
"""

from __future__ import annotations

from typing import Any

from browserless.responses.base import JsonResponse

__all__ = ["CORE_METRICS", "PerformanceResponse"]

CORE_METRICS = (
    "first-contentful-paint",
    "largest-contentful-paint",
    "total-blocking-time",
    "cumulative-layout-shift",
    "speed-index",
    "interactive",
)


class PerformanceResponse(JsonResponse):
    def _section(self, name: str) -> dict[str, Any]:
        data = self.data()
        if not isinstance(data, dict):
            return {}
        for candidate in (data, data.get("data"), data.get("lighthouseResult")):
            if isinstance(candidate, dict) and isinstance(candidate.get(name), dict):
                return candidate[name]
        return {}

    def category_scores(self) -> dict[str, float | None]:
        return {
            name: category.get("score") if isinstance(category, dict) else None
            for name, category in self._section("categories").items()
        }

    def category_score(self, name: str) -> float | None:
        category = self._section("categories").get(name)
        return category.get("score") if isinstance(category, dict) else None

    def audits(self) -> dict[str, Any]:
        return self._section("audits")

    def audit(self, audit_id: str) -> dict[str, Any] | None:
        return self._section("audits").get(audit_id)

    def metrics(self) -> dict[str, dict[str, Any]]:
        """Core web vitals keyed by audit id."""
        audits = self.audits()
        metrics: dict[str, dict[str, Any]] = {}
        for audit_id in CORE_METRICS:
            audit = audits.get(audit_id)
            if not isinstance(audit, dict):
                continue
            metrics[audit_id] = {
                "score": audit.get("score"),
                "value": audit.get("numericValue"),
                "unit": audit.get("numericUnit"),
                "displayValue": audit.get("displayValue"),
            }
        return metrics

    def performance_score(self) -> float | None:
        return self.category_score("performance")

    def accessibility_score(self) -> float | None:
        return self.category_score("accessibility")

    def best_practices_score(self) -> float | None:
        return self.category_score("best-practices")

    def seo_score(self) -> float | None:
        return self.category_score("seo")
