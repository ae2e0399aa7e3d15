"""BQL (GraphQL-style) query results."""

from __future__ import annotations

from typing import Any

from browserless.options import get_path
from browserless.responses.base import JsonResponse

__all__ = ["BQLResponse"]


class BQLResponse(JsonResponse):
    """Result of a ``/chrome/bql`` query.

    The body has the GraphQL shape ``{"data": {...}, "errors": [...]}``.

    Example:
        >>> response.get("data.goto.status")
        200
    """

    def errors(self) -> list[dict[str, Any]]:
        data = self.data()
        errors = data.get("errors") if isinstance(data, dict) else None
        return list(errors) if isinstance(errors, list) else []

    def has_errors(self) -> bool:
        return bool(self.errors())

    def first_error(self) -> dict[str, Any] | None:
        errors = self.errors()
        return errors[0] if errors else None

    def has_data(self) -> bool:
        data = self.data()
        return isinstance(data, dict) and bool(data.get("data"))

    def get_data(self, key: str | None = None, default: Any = None) -> Any:
        """Return ``data`` or a dot path inside it."""
        data = self.data()
        payload = data.get("data") if isinstance(data, dict) else None
        if key is None:
            return payload if payload is not None else default
        return get_path(payload, key, default)

    def successful(self) -> bool:
        return not self.has_errors() and self.has_data()
