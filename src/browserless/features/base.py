"""Shared shape of every feature request builder.

A builder owns an OptionBag seeded with feature defaults, exposes fluent
setters, validates before any I/O and wraps the raw response in a typed
Response. Every failure past validation surfaces as the feature's error
with the original exception as ``__cause__``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Self, TypeVar

import httpx
from loguru import logger

from browserless.exceptions import BrowserlessError, FeatureError
from browserless.logging import log
from browserless.options import OptionBag, QueryParameters
from browserless.responses.base import Response

if TYPE_CHECKING:
    from browserless.client import Client

__all__ = ["FeatureBuilder", "camelize"]

R = TypeVar("R", bound=Response)

_UNDERSCORE = re.compile(r"_([a-z0-9])")


def camelize(name: str) -> str:
    """Convert a python keyword name to the wire's camelCase."""
    return _UNDERSCORE.sub(lambda m: m.group(1).upper(), name)


class FeatureBuilder(Generic[R]):
    """Base class for builders of one remote endpoint.

    Subclasses declare:
        endpoint: path below the base URL
        method: HTTP method
        error: feature error class
        response_class: typed response wrapper
        defaults: initial option tree
        recognized_options: python name -> wire path accepted by configure()
    """

    endpoint: ClassVar[str]
    method: ClassVar[str] = "POST"
    error: ClassVar[type[FeatureError]] = FeatureError
    response_class: ClassVar[type[Response]] = Response
    defaults: ClassVar[Mapping[str, Any]] = {}
    recognized_options: ClassVar[Mapping[str, str]] = {}

    def __init__(self, client: Client) -> None:
        self.client = client
        self.options = OptionBag(self.defaults)
        self.parameters = QueryParameters()

    def set_option(self, path: str, value: Any) -> Self:
        """Write one option at a dot path (e.g. ``"options.watermark"``)."""
        self.options.set(path, value)
        return self

    def with_options(self, options: Mapping[str, Any]) -> Self:
        """Deep-merge raw wire options into the request body."""
        self.options.merge(options)
        return self

    def configure(self, **kwargs: Any) -> Self:
        """Set documented options by python name.

        Names missing from ``recognized_options`` are camelCased and passed
        through at the top level.

        Example:
            >>> browserless.pdf().configure(watermark={"text": "DRAFT"})
        """
        for name, value in kwargs.items():
            path = self.recognized_options.get(name)
            if path is None:
                path = camelize(name)
                logger.debug(f"Passing through unrecognized {self.endpoint} option {path!r}")
            self.options.set(path, value)
        return self

    def validate(self) -> None:
        """Raise ``self.error.InvalidOptions`` if the request cannot be sent."""

    def payload(self) -> dict[str, Any] | None:
        return self.options.all() if self.method == "POST" else None

    def build_request(self) -> httpx.Request:
        return self.client.request(
            self.method, self.endpoint, json_body=self.payload(), query=self.parameters
        )

    def send(self) -> R:
        """Validate, send the request and wrap the response.

        Raises:
            FeatureError: The feature's ``InvalidOptions`` before any I/O, or
                the feature error wrapping transport/API failures
        """
        self.validate()
        name = f"browserless.{self.endpoint.replace('/', '.')}"
        with log(name, method=self.method) as span:
            try:
                request = self.build_request()
                response = self.client.send(request)
            except (BrowserlessError, TypeError, ValueError) as e:
                raise self.error.from_error(e) from e
            span.add(status=response.status_code)
        return self.response_class(response, self.error)  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options.all()!r})"
