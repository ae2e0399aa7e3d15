"""Browser query language via ``POST /chrome/bql``."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Self

from browserless.exceptions import BQLError
from browserless.features.base import FeatureBuilder
from browserless.features.concerns import QueryParameterMixin
from browserless.responses.bql import BQLResponse

__all__ = ["BQL"]

_OPERATION = re.compile(r"^(mutation|query)\s+", re.IGNORECASE)
_BLANK_LINES = re.compile(r"\n\s*\n")


class BQL(QueryParameterMixin, FeatureBuilder[BQLResponse]):
    """Run a BQL mutation.

    Everything except the query, variables and operation name travels as a
    URL parameter.

    Example:
        >>> response = (
        ...     browserless.bql()
        ...     .query('{ goto(url: "https://example.com") { status } }')
        ...     .human_like()
        ...     .send()
        ... )
        >>> response.get("data.goto.status")
        200
    """

    endpoint = "chrome/bql"
    error = BQLError
    response_class = BQLResponse
    defaults = {"query": "", "variables": {}, "operationName": None}

    def query(self, query: str) -> Self:
        """Set the query text.

        Text not starting with ``mutation``/``query`` is prefixed with
        ``mutation``; line endings become ``\\n``, blank lines are removed and
        the result is trimmed.
        """
        if not _OPERATION.match(query):
            query = "mutation " + query
        query = query.replace("\r\n", "\n").replace("\r", "\n")
        query = _BLANK_LINES.sub("\n", query)
        return self.set_option("query", query.strip())

    def variables(self, variables: Mapping[str, Any]) -> Self:
        return self.set_option("variables", dict(variables))

    def operation_name(self, name: str | None) -> Self:
        """Set the operation name, splicing it into an anonymous query."""
        self.options.set("operationName", name)
        query = self.options.get("query") or ""
        if name and name not in query:
            spliced = _OPERATION.sub(lambda m: f"{m.group(1)} {name} ", query, count=1)
            self.options.set("query", spliced)
        return self

    def human_like(self, enabled: bool = True) -> Self:
        self.parameters.add("humanlike", enabled)
        return self

    def reconnect(self, value: bool | int = True) -> Self:
        """Keep the browser for reconnection (True or a TTL in ms)."""
        self.parameters.add("reconnect", value)
        return self

    def timeout(self, milliseconds: int) -> Self:
        self.parameters.add("timeout", milliseconds)
        return self

    def block_consent_modals(self, enabled: bool = True) -> Self:
        self.parameters.add("blockConsentModals", enabled)
        return self

    def wait_until(self, event: str) -> Self:
        self.parameters.add("waitUntil", event)
        return self

    def validate(self) -> None:
        if not (self.options.get("query") or "").strip():
            raise self.error.invalid_options("Query must be provided")
