"""Service introspection: configuration, metrics and sessions."""

from __future__ import annotations

from typing import Any

from browserless.responses.base import JsonResponse

__all__ = ["ConfigResponse", "MetricsResponse", "SessionsResponse"]


class ConfigResponse(JsonResponse):
    """Server configuration from ``GET /config``.

    ``get("concurrent")`` and other dot-path lookups come from JsonResponse.
    """


class MetricsResponse(JsonResponse):
    def latest(self) -> dict[str, Any] | None:
        """Most recent metrics window (the totals object for ``/metrics/total``)."""
        data = self.data()
        if isinstance(data, list):
            return data[0] if data else None
        return data if isinstance(data, dict) else None


class SessionsResponse(JsonResponse):
    def sessions(self) -> list[dict[str, Any]]:
        data = self.data()
        return [s for s in data if isinstance(s, dict)] if isinstance(data, list) else []

    def running(self) -> list[dict[str, Any]]:
        return [session for session in self.sessions() if session.get("running")]

    def find_by_id(self, browser_id: str) -> dict[str, Any] | None:
        for session in self.sessions():
            if browser_id in (session.get("browserId"), session.get("id")):
                return session
        return None

    def __len__(self) -> int:
        return len(self.sessions())
