"""Tests for capability mixins, exercised through real builders."""

from __future__ import annotations

import pytest

from browserless.exceptions import (
    ContentError,
    DownloadError,
    InvalidOptionsError,
    PreconditionError,
    ScreenshotError,
)

# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.features
class TestAuthentication:
    def test_authenticate_sets_credentials(self, browserless):
        builder = browserless.content().authenticate("user", "pass")

        assert builder.options.get("authentication") == {"username": "user", "password": "pass"}

    def test_authenticate_accepts_mapping(self, browserless):
        builder = browserless.download().authenticate({"username": "u", "password": "p"})

        assert builder.options.get("authentication") == {"username": "u", "password": "p"}

    def test_basic_auth_delegates(self, browserless):
        builder = browserless.scrape().basic_auth("u", "p")

        assert builder.options.get("authentication.username") == "u"

    @pytest.mark.parametrize(("username", "password"), [("", "p"), ("u", ""), ("u", None)])
    def test_missing_part_is_rejected(self, browserless, username, password):
        with pytest.raises(ContentError.InvalidOptions, match="username and password"):
            browserless.content().authenticate(username, password)


# -----------------------------------------------------------------------------
# Cookies
# -----------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.features
class TestCookies:
    def test_cookies_list(self, browserless):
        cookies = [{"name": "a", "value": "1", "sameSite": "Lax"}, {"name": "b", "value": "2"}]

        builder = browserless.screenshot().cookies(cookies)

        assert builder.options.get("cookies") == cookies

    def test_add_cookie_shorthand(self, browserless):
        builder = (
            browserless.download()
            .add_cookie("session", "abc", domain="example.com")
            .add_cookie({"name": "theme", "value": "dark"})
        )

        assert builder.options.get("cookies") == [
            {"name": "session", "value": "abc", "domain": "example.com"},
            {"name": "theme", "value": "dark"},
        ]

    def test_cookie_without_value(self, browserless):
        with pytest.raises(DownloadError.InvalidOptions, match="name and value"):
            browserless.download().cookies([{"name": "a"}])

    @pytest.mark.parametrize("entry", ["session=abc", ("a", "1"), None])
    def test_cookie_entry_must_be_mapping(self, browserless, entry):
        with pytest.raises(DownloadError.InvalidOptions, match="Cookie must be a mapping"):
            browserless.download().cookies([{"name": "a", "value": "1"}, entry])

    @pytest.mark.parametrize(
        "attribute",
        [{"sameSite": "Sometimes"}, {"priority": "Urgent"}, {"sourceScheme": "Ftp"}],
    )
    def test_invalid_enumerations(self, browserless, attribute):
        with pytest.raises(InvalidOptionsError, match=next(iter(attribute))):
            browserless.content().add_cookie("a", "1", **attribute)


# -----------------------------------------------------------------------------
# Navigation
# -----------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.features
class TestNavigation:
    def test_settings_funnel_into_goto_options(self, browserless):
        builder = (
            browserless.content()
            .referer("https://google.com")
            .referrer_policy("origin")
            .navigation_timeout(10000)
            .wait_until(["load", "networkidle2"])
        )

        assert builder.options.get("gotoOptions") == {
            "referer": "https://google.com",
            "referrerPolicy": "origin",
            "timeout": 10000,
            "waitUntil": ["load", "networkidle2"],
        }

    @pytest.mark.parametrize("events", ["idle", ["load", "idle"], []])
    def test_wait_until_rejects_unknown_events(self, browserless, events):
        with pytest.raises(InvalidOptionsError, match="waitUntil"):
            browserless.content().wait_until(events)

    def test_wait_for_network_idle(self, browserless):
        builder = browserless.pdf().wait_for_network_idle()
        assert builder.options.get("gotoOptions.waitUntil") == "networkidle0"

        builder.wait_for_network_idle(False)
        assert builder.options.get("gotoOptions.waitUntil") == "load"


# -----------------------------------------------------------------------------
# Viewport
# -----------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.features
class TestViewport:
    def test_defaults_merge_under_values(self, browserless):
        builder = browserless.content().viewport({"width": 390, "height": 844, "isMobile": True})

        assert builder.options.get("viewport") == {
            "width": 390,
            "height": 844,
            "deviceScaleFactor": 1.0,
            "hasTouch": False,
            "isLandscape": False,
            "isMobile": True,
        }

    def test_keyword_flags(self, browserless):
        builder = browserless.screenshot().viewport(390, 844, 3, has_touch=True)

        assert builder.options.get("viewport.deviceScaleFactor") == 3
        assert builder.options.get("viewport.hasTouch") is True

    def test_mapping_requires_both_dimensions(self, browserless):
        with pytest.raises(ScreenshotError.InvalidOptions, match="width and height"):
            browserless.screenshot().viewport({"width": 100})

    def test_refinement_requires_viewport(self, browserless):
        with pytest.raises(PreconditionError, match="Viewport must be set"):
            browserless.content().set_device_scale_factor(2)

    def test_refinements_after_viewport(self, browserless):
        builder = (
            browserless.content()
            .viewport(800, 600)
            .set_device_scale_factor(2)
            .set_has_touch()
            .set_is_landscape()
            .set_is_mobile()
        )

        assert builder.options.get("viewport") == {
            "width": 800,
            "height": 600,
            "deviceScaleFactor": 2,
            "hasTouch": True,
            "isLandscape": True,
            "isMobile": True,
        }

    def test_set_viewport_size_keeps_flags(self, browserless):
        builder = browserless.pdf().set_is_mobile().set_viewport_size(1200, 900)

        assert builder.options.get("viewport.width") == 1200
        assert builder.options.get("viewport.isMobile") is True


# -----------------------------------------------------------------------------
# Resource injection
# -----------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.features
class TestResourceInjection:
    def test_tags_accumulate(self, browserless):
        builder = (
            browserless.content()
            .add_script_tag(url="https://cdn.example.com/a.js")
            .add_script_tag(content="window.x = 1", type="module")
            .add_style_tag(content="body { color: red }")
        )

        assert builder.options.get("addScriptTag") == [
            {"url": "https://cdn.example.com/a.js"},
            {"content": "window.x = 1", "type": "module"},
        ]
        assert builder.options.get("addStyleTag") == [{"content": "body { color: red }"}]

    def test_script_needs_a_source(self, browserless):
        with pytest.raises(InvalidOptionsError, match="Script tag must have either url, path, or content"):
            browserless.pdf().add_script_tag()

    def test_style_needs_a_source(self, browserless):
        with pytest.raises(InvalidOptionsError, match="Style tag"):
            browserless.pdf().add_style_tag()


# -----------------------------------------------------------------------------
# Query parameters and page options
# -----------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.features
class TestQueryParameters:
    def test_toggles_render_after_token(self, browserless, recorder):
        (
            browserless.content()
            .url("https://example.com")
            .stealth()
            .proxy()
            .block_ads()
            .add_query_parameter("trackingId", "run-1")
            .send()
        )

        assert str(recorder.last.url) == (
            "https://chrome.example.test/content?token=test-token"
            "&stealth=true&proxy=residential&blockAds=true&trackingId=run-1"
        )

    def test_launch_is_json_encoded(self, browserless):
        builder = browserless.pdf().launch({"headless": False})

        assert builder.parameters.get("launch") == '{"headless":false}'


@pytest.mark.unit
@pytest.mark.features
class TestPageOptions:
    def test_waits(self, browserless):
        builder = (
            browserless.content()
            .wait_for_selector("#app", 5000, visible=True)
            .wait_for_function("() => window.ready", polling="raf")
            .wait_for_event("load")
            .wait_for_timeout(250)
        )

        assert builder.options.get("waitForSelector") == {"selector": "#app", "timeout": 5000, "visible": True}
        assert builder.options.get("waitForFunction") == {"fn": "() => window.ready", "polling": "raf"}
        assert builder.options.get("waitForEvent") == {"event": "load"}
        assert builder.options.get("waitForTimeout") == 250

    def test_request_filtering(self, browserless):
        builder = (
            browserless.content()
            .reject_resource_types(["image", "font"])
            .reject_request_pattern(r"\.css$")
            .best_attempt()
        )

        assert builder.options.get("rejectResourceTypes") == ["image", "font"]
        assert builder.options.get("rejectRequestPattern") == [r"\.css$"]
        assert builder.options.get("bestAttempt") is True

    def test_browser_settings(self, browserless):
        builder = (
            browserless.screenshot()
            .set_extra_http_headers({"X-Test": "1"})
            .user_agent("bot/1.0")
            .ignore_https_errors()
            .set_javascript_enabled(False)
            .emulate_media_type("print")
        )

        assert builder.options.get("setExtraHTTPHeaders") == {"X-Test": "1"}
        assert builder.options.get("userAgent") == "bot/1.0"
        assert builder.options.get("ignoreHTTPSErrors") is True
        assert builder.options.get("setJavaScriptEnabled") is False
        assert builder.options.get("emulateMediaType") == "print"

    def test_goto_options_merge(self, browserless):
        builder = browserless.content().referer("https://a").goto_options({"timeout": 1000})

        assert builder.options.get("gotoOptions") == {"referer": "https://a", "timeout": 1000}

    def test_add_arguments_accumulates(self, browserless):
        builder = browserless.content().add_arguments(["--a"]).add_arguments(["--b"])

        assert builder.options.get("args") == ["--a", "--b"]
