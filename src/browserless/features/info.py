"""Service introspection: ``GET /config``, ``/metrics`` and ``/sessions``."""

from __future__ import annotations

from browserless.exceptions import ConfigError, MetricsError, SessionsError
from browserless.features.base import FeatureBuilder
from browserless.responses.info import ConfigResponse, MetricsResponse, SessionsResponse

__all__ = ["Config", "Metrics", "MetricsTotal", "Sessions"]


class Config(FeatureBuilder[ConfigResponse]):
    """Server configuration (concurrency, timeouts, queue size)."""

    endpoint = "config"
    method = "GET"
    error = ConfigError
    response_class = ConfigResponse

    def get(self) -> ConfigResponse:
        return self.send()


class Metrics(FeatureBuilder[MetricsResponse]):
    """Usage metrics, per five-minute window or in total."""

    endpoint = "metrics"
    method = "GET"
    error = MetricsError
    response_class = MetricsResponse

    def get(self) -> MetricsResponse:
        return self.send()

    def total(self) -> MetricsResponse:
        """Totals since the service started."""
        return MetricsTotal(self.client).send()


class MetricsTotal(Metrics):
    endpoint = "metrics/total"


class Sessions(FeatureBuilder[SessionsResponse]):
    """Browser sessions currently running on the service."""

    endpoint = "sessions"
    method = "GET"
    error = SessionsError
    response_class = SessionsResponse

    def get(self) -> SessionsResponse:
        return self.send()
