"""Tests for Screenshot, Content, Scrape and Unblock builders."""

from __future__ import annotations

import pytest

from browserless.exceptions import (
    ContentError,
    InvalidOptionsError,
    ScrapeError,
    ScreenshotError,
    UnblockError,
)
from browserless.responses import ContentResponse, ScrapeResponse, ScreenshotResponse, UnblockResponse

# -----------------------------------------------------------------------------
# Screenshot
# -----------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.features
class TestScreenshot:
    def test_request_body(self, browserless, recorder):
        recorder.reply(200, content=b"\x89PNG")

        response = (
            browserless.screenshot()
            .url("https://example.com")
            .full_page()
            .type("jpeg")
            .quality(80)
            .omit_background()
            .clip(width=400, height=300)
            .send()
        )

        assert str(recorder.last.url) == "https://chrome.example.test/screenshot?token=test-token"
        body = recorder.last_body()
        assert body["options"] == {
            "fullPage": True,
            "type": "jpeg",
            "quality": 80,
            "omitBackground": True,
            "clip": {"x": 0, "y": 0, "width": 400, "height": 300},
        }
        assert body["viewport"]["width"] == 800
        assert isinstance(response, ScreenshotResponse)
        assert response.content_type() == "image/png"

    @pytest.mark.parametrize("quality", [-1, 101])
    def test_quality_range(self, browserless, quality):
        with pytest.raises(ScreenshotError.InvalidOptions, match="between 0 and 100"):
            browserless.screenshot().quality(quality)

    @pytest.mark.parametrize("quality", ["80", 80.5, None])
    def test_quality_must_be_integer(self, browserless, quality):
        with pytest.raises(ScreenshotError.InvalidOptions, match="Quality must be an integer"):
            browserless.screenshot().quality(quality)

    def test_quality_checked_before_send(self, browserless, recorder):
        builder = browserless.screenshot().url("https://example.com").with_options({"options": {"quality": 120}})

        with pytest.raises(InvalidOptionsError):
            builder.send()
        assert recorder.requests == []

    def test_type_must_be_known(self, browserless):
        with pytest.raises(InvalidOptionsError, match="jpeg, png, or webp"):
            browserless.screenshot().type("gif")

    def test_encoding(self, browserless):
        assert browserless.screenshot().encoding("base64").options.get("options.encoding") == "base64"
        with pytest.raises(InvalidOptionsError, match="binary or base64"):
            browserless.screenshot().encoding("hex")

    def test_device_and_selector(self, browserless):
        builder = browserless.screenshot().device("iPhone 13").selector("#hero")

        assert builder.options.get("options.deviceName") == "iPhone 13"
        assert builder.options.get("selector") == "#hero"


# -----------------------------------------------------------------------------
# Content
# -----------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.features
class TestContent:
    def test_request_and_response(self, browserless, recorder):
        recorder.reply(200, content="<html><body>Hi</body></html>", headers={"Content-Type": "text/html"})

        response = (
            browserless.content()
            .url("https://example.com")
            .wait_for_network_idle()
            .reject_request_patterns([r"\.png$"])
            .send()
        )

        assert recorder.last_body() == {
            "url": "https://example.com",
            "gotoOptions": {"waitUntil": "networkidle0"},
            "rejectRequestPattern": [r"\.png$"],
        }
        assert isinstance(response, ContentResponse)
        assert response.content() == "<html><body>Hi</body></html>"

    def test_extraction_options(self, browserless):
        builder = (
            browserless.content()
            .extract_elements(["h1", "p"])
            .evaluate_selector("#main")
            .domain_blocklist(["ads.example.com"])
            .configure(sanitize_html=True)
        )

        assert builder.options.get("extractElements") == ["h1", "p"]
        assert builder.options.get("evaluateSelector") == "#main"
        assert builder.options.get("domainBlocklist") == ["ads.example.com"]
        assert builder.options.get("sanitizeHtml") is True

    def test_requires_source(self, browserless, recorder):
        with pytest.raises(ContentError.InvalidOptions):
            browserless.content().send()
        assert recorder.requests == []


# -----------------------------------------------------------------------------
# Scrape
# -----------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.features
class TestScrape:
    def test_request_body(self, browserless, recorder):
        recorder.reply(200, json={"data": [{"selector": "h1", "results": [{"text": "Example"}]}]})

        response = (
            browserless.scrape()
            .url("https://example.com")
            .element("h1")
            .elements(["p", {"selector": "a", "timeout": 1000}])
            .wait_for_selector("h1")
            .send()
        )

        assert recorder.last_body() == {
            "url": "https://example.com",
            "elements": [{"selector": "h1"}, {"selector": "p"}, {"selector": "a", "timeout": 1000}],
            "gotoOptions": {},
            "waitForSelector": {"selector": "h1"},
        }
        assert isinstance(response, ScrapeResponse)
        assert response.results("h1") == [{"text": "Example"}]

    def test_html_after_url_is_rejected(self, browserless):
        with pytest.raises(ScrapeError.InvalidOptions, match="Cannot set both URL and HTML content"):
            browserless.scrape().url("https://example.com").html("<p>x</p>")

    def test_url_after_html_is_rejected(self, browserless):
        with pytest.raises(InvalidOptionsError, match="Cannot set both"):
            browserless.scrape().html("<p>x</p>").url("https://example.com")

    def test_requires_elements(self, browserless, recorder):
        with pytest.raises(ScrapeError.InvalidOptions, match="At least one element selector"):
            browserless.scrape().url("https://example.com").send()
        assert recorder.requests == []

    def test_debug_flags(self, browserless):
        builder = browserless.scrape().debug(screenshot=True).debug(console=True)

        assert builder.options.get("debug") == {"screenshot": True, "console": True}


# -----------------------------------------------------------------------------
# Unblock
# -----------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.features
class TestUnblock:
    def test_defaults_and_toggles(self, browserless, recorder):
        recorder.reply(200, json={"content": "<html></html>", "cookies": []})

        response = (
            browserless.unblock()
            .url("https://protected.example.com")
            .content()
            .cookies()
            .ttl(30000)
            .send()
        )

        assert str(recorder.last.url) == "https://chrome.example.test/unblock?token=test-token"
        assert recorder.last_body() == {
            "url": "https://protected.example.com",
            "gotoOptions": {},
            "browserWSEndpoint": False,
            "cookies": True,
            "content": True,
            "screenshot": False,
            "ttl": 30000,
        }
        assert isinstance(response, UnblockResponse)
        assert response.content() == "<html></html>"
        assert response.screenshot() is None

    def test_requires_url(self, browserless, recorder):
        with pytest.raises(UnblockError.InvalidOptions, match="URL must be provided"):
            browserless.unblock().content().send()
        assert recorder.requests == []
