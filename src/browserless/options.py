"""Option containers shared by every request builder.

OptionBag holds the JSON body of a request, QueryParameters the URL-level
toggles appended after ``?token=...``.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import quote, urlencode

__all__ = ["OptionBag", "QueryParameters", "deep_merge", "get_path"]

_MISSING = object()


def deep_merge(base: dict[str, Any], partial: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``partial`` into ``base`` in place and return ``base``.

    Nested mappings merge key by key, lists are concatenated and any other
    value overwrites.

    Example:
        >>> deep_merge({"a": {"y": 2}}, {"a": {"x": 1}})
        {'a': {'y': 2, 'x': 1}}
    """
    for key, value in partial.items():
        current = base.get(key, _MISSING)
        if isinstance(current, dict) and isinstance(value, Mapping):
            deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            base[key] = current + copy.deepcopy(value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def get_path(data: Any, path: str, default: Any = None) -> Any:
    """Walk ``data`` along a dot-separated path.

    Returns ``default`` as soon as a segment is missing or the current value
    is not a mapping.
    """
    current = data
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return default
        current = current[segment]
    return current


class OptionBag:
    """Mutable JSON option tree with dot-path access.

    Example:
        >>> bag = OptionBag({"options": {}})
        >>> bag.set("options.scale", 1.0).get("options.scale")
        1.0
    """

    def __init__(self, defaults: Mapping[str, Any] | None = None) -> None:
        self._options: dict[str, Any] = copy.deepcopy(dict(defaults or {}))

    def set(self, path: str, value: Any) -> OptionBag:
        """Set a value, creating intermediate mappings as needed."""
        *parents, leaf = path.split(".")
        node = self._options
        for segment in parents:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[leaf] = value
        return self

    def get(self, path: str, default: Any = None) -> Any:
        return get_path(self._options, path, default)

    def has(self, path: str) -> bool:
        return get_path(self._options, path, _MISSING) is not _MISSING

    def remove(self, path: str) -> OptionBag:
        *parents, leaf = path.split(".")
        node = get_path(self._options, ".".join(parents)) if parents else self._options
        if isinstance(node, dict):
            node.pop(leaf, None)
        return self

    def append(self, path: str, value: Any) -> OptionBag:
        """Append to the list at ``path``, starting a new list if absent."""
        current = self.get(path)
        items = list(current) if isinstance(current, list) else []
        items.append(value)
        return self.set(path, items)

    def merge(self, partial: Mapping[str, Any]) -> OptionBag:
        deep_merge(self._options, partial)
        return self

    def all(self) -> dict[str, Any]:
        """Return a deep copy of the whole option tree."""
        return copy.deepcopy(self._options)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.has(path)

    def __repr__(self) -> str:
        return f"OptionBag({self._options!r})"


class QueryParameters:
    """Ordered URL query parameters rendered as ``key=value`` pairs."""

    def __init__(self) -> None:
        self._params: dict[str, str] = {}

    def add(self, key: str, value: Any) -> QueryParameters:
        """Add or replace a parameter.

        Booleans become ``"true"``/``"false"``, mappings and lists are
        JSON-encoded and ``None`` removes the parameter.
        """
        if value is None:
            self._params.pop(key, None)
        elif isinstance(value, bool):
            self._params[key] = "true" if value else "false"
        elif isinstance(value, (Mapping, list)):
            self._params[key] = json.dumps(value, separators=(",", ":"))
        else:
            self._params[key] = str(value)
        return self

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._params.get(key, default)

    def remove(self, key: str) -> QueryParameters:
        self._params.pop(key, None)
        return self

    def all(self) -> dict[str, str]:
        return dict(self._params)

    def build_query_string(self, base_url: str) -> str:
        """Append the parameters to ``base_url``.

        Uses ``&`` as the separator when ``base_url`` already carries a query.

        Example:
            >>> q = QueryParameters().add("a", "1").add("b", "2")
            >>> q.build_query_string("https://x/y")
            'https://x/y?a=1&b=2'
        """
        if not self._params:
            return base_url
        separator = "&" if "?" in base_url else "?"
        return f"{base_url}{separator}{urlencode(self._params, quote_via=quote)}"

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)
