"""Tests for JSON-bodied responses."""

from __future__ import annotations

import httpx
import pytest

from browserless.exceptions import BQLError, InvalidResponseError, ScrapeError
from browserless.responses import (
    BQLResponse,
    ConfigResponse,
    ExecuteFunctionResponse,
    MetricsResponse,
    PerformanceResponse,
    ScrapeResponse,
    SessionsResponse,
    UnblockResponse,
)


def _json(response_class, body, error=None, **kwargs):
    response = httpx.Response(200, json=body, **kwargs)
    return response_class(response, error) if error else response_class(response)


@pytest.mark.unit
@pytest.mark.responses
class TestJsonResponse:
    def test_dot_path_lookup(self):
        response = _json(ConfigResponse, {"limits": {"concurrent": 5}})

        assert response.get("limits.concurrent") == 5
        assert response.get("limits.queued", 0) == 0

    def test_invalid_json_raises_feature_error(self):
        response = ScrapeResponse(httpx.Response(200, content=b"<html>"), ScrapeError)

        with pytest.raises(ScrapeError.InvalidResponse, match="Invalid scrape response: Response is not valid JSON"):
            response.data()

    def test_invalid_json_is_invalid_response_error(self):
        response = BQLResponse(httpx.Response(200, content=b"nope"), BQLError)

        with pytest.raises(InvalidResponseError):
            response.has_errors()


@pytest.mark.unit
@pytest.mark.responses
class TestBQLResponse:
    def test_data(self):
        response = _json(BQLResponse, {"data": {"goto": {"status": 200}}})

        assert response.successful() is True
        assert response.has_data() is True
        assert response.get_data("goto.status") == 200
        assert response.get_data() == {"goto": {"status": 200}}
        assert response.get_data("missing", "fallback") == "fallback"

    def test_errors(self):
        body = {"data": None, "errors": [{"message": "Timeout"}, {"message": "Other"}]}
        response = _json(BQLResponse, body)

        assert response.has_errors() is True
        assert response.first_error() == {"message": "Timeout"}
        assert len(response.errors()) == 2
        assert response.successful() is False
        assert response.get_data(default={}) == {}


@pytest.mark.unit
@pytest.mark.responses
class TestPerformanceResponse:
    REPORT = {
        "categories": {
            "performance": {"score": 0.91},
            "accessibility": {"score": 0.8},
            "best-practices": {"score": 1.0},
            "seo": {"score": 0.7},
        },
        "audits": {
            "first-contentful-paint": {
                "score": 0.95,
                "numericValue": 812.4,
                "numericUnit": "millisecond",
                "displayValue": "0.8 s",
            },
            "speed-index": {"score": 0.5},
            "unrelated": {"score": 1},
        },
    }

    @pytest.mark.parametrize(
        "body",
        [REPORT, {"data": REPORT}, {"lighthouseResult": REPORT}],
        ids=["flat", "data", "lighthouseResult"],
    )
    def test_report_shapes(self, body):
        response = _json(PerformanceResponse, body)

        assert response.performance_score() == 0.91
        assert response.accessibility_score() == 0.8
        assert response.best_practices_score() == 1.0
        assert response.seo_score() == 0.7
        assert response.audit("speed-index") == {"score": 0.5}

    def test_core_metrics(self):
        metrics = _json(PerformanceResponse, self.REPORT).metrics()

        assert set(metrics) == {"first-contentful-paint", "speed-index"}
        assert metrics["first-contentful-paint"] == {
            "score": 0.95,
            "value": 812.4,
            "unit": "millisecond",
            "displayValue": "0.8 s",
        }

    def test_missing_sections(self):
        response = _json(PerformanceResponse, {"unexpected": True})

        assert response.category_scores() == {}
        assert response.performance_score() is None
        assert response.metrics() == {}


@pytest.mark.unit
@pytest.mark.responses
class TestPageResponses:
    def test_scrape_results(self):
        body = {
            "data": [
                {"selector": "h1", "results": [{"text": "Title"}]},
                {"selector": "p", "results": []},
            ]
        }
        response = _json(ScrapeResponse, body)

        assert response.selectors() == ["h1", "p"]
        assert response.results("h1") == [{"text": "Title"}]
        assert response.results("table") == []
        assert len(response.results()) == 2

    def test_scrape_legacy_results_key(self):
        response = _json(ScrapeResponse, {"results": [{"selector": "a", "results": [1]}]})

        assert response.results("a") == [1]

    def test_scrape_null_data_falls_back_to_results(self):
        response = _json(ScrapeResponse, {"data": None, "results": [{"selector": "a", "results": [1]}]})

        assert response.selectors() == ["a"]
        assert response.results("a") == [1]

    def test_scrape_null_data_and_results(self):
        response = _json(ScrapeResponse, {"data": None, "results": None})

        assert response.all_results() == []
        assert response.results("a") == []

    def test_function_result(self):
        response = _json(ExecuteFunctionResponse, {"data": {"title": "x"}, "type": "application/json"})

        assert response.result() == {"title": "x"}
        assert response.type() == "application/json"

    def test_function_raw_result_uses_content_type(self):
        response = _json(ExecuteFunctionResponse, [1, 2])

        assert response.result() == [1, 2]
        assert response.type() == "application/json"

    def test_unblock_missing_keys_are_none(self):
        response = _json(UnblockResponse, {"browserWSEndpoint": "wss://host/abc", "ttl": 1000})

        assert response.browser_ws_endpoint() == "wss://host/abc"
        assert response.ttl() == 1000
        assert response.cookies() is None
        assert response.content() is None


@pytest.mark.unit
@pytest.mark.responses
class TestInfoResponses:
    SESSIONS = [
        {"id": "s1", "browserId": "b1", "running": True},
        {"id": "s2", "browserId": "b2", "running": False},
    ]

    def test_sessions(self):
        response = _json(SessionsResponse, self.SESSIONS)

        assert len(response) == 2
        assert [s["id"] for s in response.running()] == ["s1"]
        assert response.find_by_id("b2")["id"] == "s2"
        assert response.find_by_id("s1")["browserId"] == "b1"
        assert response.find_by_id("zz") is None

    def test_sessions_unexpected_body(self):
        assert _json(SessionsResponse, {"error": "x"}).sessions() == []

    def test_metrics_latest(self):
        assert _json(MetricsResponse, [{"successful": 1}, {"successful": 2}]).latest() == {"successful": 1}
        assert _json(MetricsResponse, {"successful": 9}).latest() == {"successful": 9}
        assert _json(MetricsResponse, []).latest() is None
