"""JSON results of page-driving endpoints: scrape, function and unblock."""

from __future__ import annotations

from typing import Any

from browserless.responses.base import JsonResponse

__all__ = ["ExecuteFunctionResponse", "ScrapeResponse", "UnblockResponse"]


class ScrapeResponse(JsonResponse):
    """Elements extracted by ``/scrape``.

    The body is ``{"data": [{"selector": ..., "results": [...]}, ...]}``;
    older services used ``results`` instead of ``data``.
    """

    def all_results(self) -> Any:
        data = self.data()
        if not isinstance(data, dict):
            return data
        if data.get("data") is not None:
            return data["data"]
        results = data.get("results")
        return results if results is not None else []

    def results(self, selector: str | None = None) -> Any:
        """Results for one selector, or everything when no selector is given.

        An unknown selector yields an empty list.
        """
        entries = self.all_results()
        if selector is None:
            return entries
        if isinstance(entries, list):
            for entry in entries:
                if isinstance(entry, dict) and entry.get("selector") == selector:
                    return entry.get("results", [])
        return []

    def selectors(self) -> list[str]:
        entries = self.all_results()
        if not isinstance(entries, list):
            return []
        return [entry["selector"] for entry in entries if isinstance(entry, dict) and "selector" in entry]


class ExecuteFunctionResponse(JsonResponse):
    """Value returned by code run through ``/function``."""

    def result(self) -> Any:
        data = self.data()
        if isinstance(data, dict) and "data" in data:
            return data["data"]
        return data

    def type(self) -> str | None:
        data = self.data()
        if isinstance(data, dict) and "type" in data:
            return data["type"]
        return self.header("Content-Type")


class UnblockResponse(JsonResponse):
    """Artifacts returned by ``/unblock``; missing keys read as None."""

    def _field(self, key: str) -> Any:
        data = self.data()
        return data.get(key) if isinstance(data, dict) else None

    def browser_ws_endpoint(self) -> str | None:
        return self._field("browserWSEndpoint")

    def content(self) -> str | None:
        return self._field("content")

    def cookies(self) -> list[dict[str, Any]] | None:
        return self._field("cookies")

    def screenshot(self) -> str | None:
        """Base64-encoded screenshot."""
        return self._field("screenshot")

    def ttl(self) -> int | None:
        return self._field("ttl")
