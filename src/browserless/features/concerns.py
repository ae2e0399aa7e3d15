"""Capability mixins composed into feature builders.

Each mixin writes into the builder's ``options`` (JSON body) or ``parameters``
(URL parameters) and raises through the builder's ``error`` class.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Self

from browserless.exceptions import PreconditionError

if TYPE_CHECKING:
    from browserless.exceptions import FeatureError
    from browserless.options import OptionBag, QueryParameters

__all__ = [
    "WAIT_UNTIL_EVENTS",
    "AuthenticationMixin",
    "BrowserSettingsMixin",
    "CookieMixin",
    "NavigationMixin",
    "PageOptionsMixin",
    "PageSourceMixin",
    "QueryParameterMixin",
    "ResourceInjectionMixin",
    "ViewportMixin",
]

WAIT_UNTIL_EVENTS = ("domcontentloaded", "load", "networkidle0", "networkidle2")
SAME_SITE_VALUES = ("Lax", "None", "Strict")
PRIORITY_VALUES = ("Low", "Medium", "High")
SOURCE_SCHEME_VALUES = ("Unset", "Secure", "NonSecure")

VIEWPORT_DEFAULTS: dict[str, Any] = {
    "deviceScaleFactor": 1.0,
    "hasTouch": False,
    "isLandscape": False,
    "isMobile": False,
}


class _Builder:
    options: OptionBag
    parameters: QueryParameters
    error: ClassVar[type[FeatureError]]


def _compact(**values: Any) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


class PageSourceMixin(_Builder):
    """Page source given as a URL or as inline HTML, never both."""

    def url(self, url: str) -> Self:
        self.options.remove("html")
        self.options.set("url", url)
        return self

    def html(self, html: str) -> Self:
        self.options.remove("url")
        self.options.set("html", html)
        return self

    def has_source(self) -> bool:
        return bool(self.options.get("url") or self.options.get("html"))

    def validate_source(self) -> None:
        if not self.has_source():
            raise self.error.invalid_options("Either URL or HTML content must be provided")


class AuthenticationMixin(_Builder):
    """HTTP authentication for the visited page."""

    def authenticate(
        self, username: str | Mapping[str, str], password: str | None = None
    ) -> Self:
        """Set page credentials.

        Args:
            username: Username, or a mapping with ``username`` and ``password``
            password: Password when ``username`` is a string
        """
        if isinstance(username, Mapping):
            password = username.get("password")
            username = username.get("username", "")
        if not username or not password:
            raise self.error.invalid_options(
                "Authentication requires both username and password"
            )
        self.options.set("authentication", {"username": username, "password": password})
        return self

    def basic_auth(self, username: str, password: str) -> Self:
        return self.authenticate(username, password)


class CookieMixin(_Builder):
    """Cookies set in the browser before navigation."""

    def cookies(self, cookies: Iterable[Mapping[str, Any]]) -> Self:
        self.options.set("cookies", [self._validate_cookie(c) for c in cookies])
        return self

    def add_cookie(
        self, cookie: str | Mapping[str, Any], value: str | None = None, **attributes: Any
    ) -> Self:
        """Append one cookie.

        Accepts a full cookie mapping or the ``(name, value)`` shorthand:

            builder.add_cookie("session", "abc", domain="example.com")
        """
        if isinstance(cookie, Mapping):
            entry = dict(cookie)
        else:
            entry = {"name": cookie, "value": value}
        entry.update(attributes)
        self.options.append("cookies", self._validate_cookie(entry))
        return self

    def _validate_cookie(self, cookie: Mapping[str, Any]) -> dict[str, Any]:
        if not isinstance(cookie, Mapping):
            raise self.error.invalid_options(f"Cookie must be a mapping, got {type(cookie).__name__}")
        if not cookie.get("name") or cookie.get("value") is None:
            raise self.error.invalid_options("Cookie must have name and value")
        checks = (
            ("sameSite", SAME_SITE_VALUES),
            ("priority", PRIORITY_VALUES),
            ("sourceScheme", SOURCE_SCHEME_VALUES),
        )
        for key, allowed in checks:
            if key in cookie and cookie[key] not in allowed:
                raise self.error.invalid_options(
                    f"Invalid {key} value {cookie[key]!r}, expected one of {', '.join(allowed)}"
                )
        return dict(cookie)


class NavigationMixin(_Builder):
    """Settings that funnel into ``gotoOptions``."""

    def referer(self, referer: str) -> Self:
        self.options.set("gotoOptions.referer", referer)
        return self

    def referrer_policy(self, policy: str) -> Self:
        self.options.set("gotoOptions.referrerPolicy", policy)
        return self

    def navigation_timeout(self, milliseconds: int) -> Self:
        self.options.set("gotoOptions.timeout", milliseconds)
        return self

    def wait_until(self, events: str | list[str]) -> Self:
        """Navigation lifecycle event(s) to wait for."""
        candidates = [events] if isinstance(events, str) else events
        if not isinstance(candidates, list) or not candidates or any(
            event not in WAIT_UNTIL_EVENTS for event in candidates
        ):
            raise self.error.invalid_options(
                f"waitUntil must be one of {', '.join(WAIT_UNTIL_EVENTS)} or a list of them"
            )
        self.options.set("gotoOptions.waitUntil", events)
        return self

    def wait_for_network_idle(self, enabled: bool = True) -> Self:
        self.options.set("gotoOptions.waitUntil", "networkidle0" if enabled else "load")
        return self


class ViewportMixin(_Builder):
    """Browser viewport with defaults merged under caller values."""

    def viewport(
        self,
        width: int | Mapping[str, Any],
        height: int | None = None,
        device_scale_factor: float | None = None,
        *,
        has_touch: bool | None = None,
        is_landscape: bool | None = None,
        is_mobile: bool | None = None,
    ) -> Self:
        if isinstance(width, Mapping):
            settings = dict(width)
        else:
            if height is None:
                raise self.error.invalid_options(
                    "Viewport height is required when width is given as a number"
                )
            settings = {"width": width, "height": height}
        settings.update(
            _compact(
                deviceScaleFactor=device_scale_factor,
                hasTouch=has_touch,
                isLandscape=is_landscape,
                isMobile=is_mobile,
            )
        )
        if "width" not in settings or "height" not in settings:
            raise self.error.invalid_options("Viewport must have width and height")
        self.options.set("viewport", {**VIEWPORT_DEFAULTS, **settings})
        return self

    def set_viewport_size(self, width: int, height: int) -> Self:
        current = self.options.get("viewport") or {}
        return self.viewport({**current, "width": width, "height": height})

    def set_device_scale_factor(self, factor: float) -> Self:
        return self._refine_viewport("deviceScaleFactor", factor)

    def set_has_touch(self, enabled: bool = True) -> Self:
        return self._refine_viewport("hasTouch", enabled)

    def set_is_landscape(self, enabled: bool = True) -> Self:
        return self._refine_viewport("isLandscape", enabled)

    def set_is_mobile(self, enabled: bool = True) -> Self:
        return self._refine_viewport("isMobile", enabled)

    def _refine_viewport(self, key: str, value: Any) -> Self:
        if not self.options.get("viewport"):
            raise PreconditionError(f"Viewport must be set before setting {key}")
        self.options.set(f"viewport.{key}", value)
        return self


class ResourceInjectionMixin(_Builder):
    """Script and style tags injected into the page."""

    def add_script_tag(
        self,
        url: str | None = None,
        path: str | None = None,
        content: str | None = None,
        **extra: Any,
    ) -> Self:
        return self._inject("addScriptTag", "Script", _compact(url=url, path=path, content=content), extra)

    def add_style_tag(
        self,
        url: str | None = None,
        path: str | None = None,
        content: str | None = None,
    ) -> Self:
        return self._inject("addStyleTag", "Style", _compact(url=url, path=path, content=content), {})

    def _inject(self, key: str, kind: str, source: dict[str, Any], extra: dict[str, Any]) -> Self:
        if not source:
            raise self.error.invalid_options(
                f"{kind} tag must have either url, path, or content"
            )
        self.options.append(key, {**source, **extra})
        return self


class QueryParameterMixin(_Builder):
    """URL-level toggles sent as query parameters."""

    def proxy(self, proxy: bool | str | None = "residential") -> Self:
        """Route through a proxy (``residential`` by default, None removes)."""
        self.parameters.add("proxy", proxy)
        return self

    def proxy_country(self, country: str) -> Self:
        self.parameters.add("proxyCountry", country)
        return self

    def stealth(self, enabled: bool = True) -> Self:
        self.parameters.add("stealth", enabled)
        return self

    def keepalive(self, value: bool | int = True) -> Self:
        self.parameters.add("keepalive", value)
        return self

    def block_ads(self, enabled: bool = True) -> Self:
        self.parameters.add("blockAds", enabled)
        return self

    def launch(self, options: Mapping[str, Any]) -> Self:
        """Browser launch options, JSON-encoded into the ``launch`` parameter."""
        self.parameters.add("launch", dict(options))
        return self

    def add_query_parameter(self, key: str, value: Any) -> Self:
        self.parameters.add(key, value)
        return self


class BrowserSettingsMixin(_Builder):
    """Browser-wide settings accepted by every page-driving endpoint."""

    def ignore_https_errors(self, enabled: bool = True) -> Self:
        self.options.set("ignoreHTTPSErrors", enabled)
        return self

    def set_extra_http_headers(self, headers: Mapping[str, str]) -> Self:
        self.options.set("setExtraHTTPHeaders", dict(headers))
        return self

    def user_agent(self, user_agent: str) -> Self:
        self.options.set("userAgent", user_agent)
        return self


class PageOptionsMixin(BrowserSettingsMixin):
    """Generic page options: waits, interception, emulation."""

    def best_attempt(self, enabled: bool = True) -> Self:
        self.options.set("bestAttempt", enabled)
        return self

    def reject_request_pattern(self, patterns: str | list[str]) -> Self:
        self.options.set("rejectRequestPattern", [patterns] if isinstance(patterns, str) else list(patterns))
        return self

    def reject_resource_types(self, types: list[str]) -> Self:
        self.options.set("rejectResourceTypes", list(types))
        return self

    def add_request_interceptor(self, pattern: str, response: Mapping[str, Any]) -> Self:
        self.options.append("requestInterceptors", {"pattern": pattern, "response": dict(response)})
        return self

    def set_javascript_enabled(self, enabled: bool = True) -> Self:
        self.options.set("setJavaScriptEnabled", enabled)
        return self

    def emulate_media_type(self, media_type: str) -> Self:
        self.options.set("emulateMediaType", media_type)
        return self

    def goto_options(self, options: Mapping[str, Any]) -> Self:
        self.options.merge({"gotoOptions": dict(options)})
        return self

    def wait_for_timeout(self, milliseconds: int) -> Self:
        self.options.set("waitForTimeout", milliseconds)
        return self

    def wait_for_selector(
        self,
        selector: str,
        timeout: int | None = None,
        *,
        visible: bool | None = None,
        hidden: bool | None = None,
    ) -> Self:
        self.options.set(
            "waitForSelector",
            {"selector": selector, **_compact(timeout=timeout, visible=visible, hidden=hidden)},
        )
        return self

    def wait_for_function(
        self, fn: str, timeout: int | None = None, *, polling: str | int | None = None
    ) -> Self:
        self.options.set("waitForFunction", {"fn": fn, **_compact(timeout=timeout, polling=polling)})
        return self

    def wait_for_event(self, event: str, timeout: int | None = None) -> Self:
        self.options.set("waitForEvent", {"event": event, **_compact(timeout=timeout)})
        return self

    def emulate_device(self, device: str) -> Self:
        self.options.set("device", device)
        return self

    def set_timezone(self, timezone: str) -> Self:
        self.options.set("timezone", timezone)
        return self

    def set_geolocation(
        self, latitude: float, longitude: float, accuracy: float | None = None
    ) -> Self:
        self.options.set(
            "geolocation",
            {"latitude": latitude, "longitude": longitude, **_compact(accuracy=accuracy)},
        )
        return self

    def set_language(self, language: str) -> Self:
        self.options.set("language", language)
        return self

    def set_offline_mode(self, enabled: bool = True) -> Self:
        self.options.set("offline", enabled)
        return self

    def set_permissions(self, permissions: list[str]) -> Self:
        self.options.set("permissions", list(permissions))
        return self

    def set_network_conditions(self, conditions: Mapping[str, Any]) -> Self:
        self.options.set("networkConditions", dict(conditions))
        return self

    def emulate_color_scheme(self, scheme: str) -> Self:
        self.options.set("colorScheme", scheme)
        return self

    def add_init_script(self, script: str) -> Self:
        self.options.append("initScripts", script)
        return self

    def set_bypass_csp(self, enabled: bool = True) -> Self:
        self.options.set("setBypassCSP", enabled)
        return self

    def add_arguments(self, arguments: list[str]) -> Self:
        self.options.set("args", [*(self.options.get("args") or []), *arguments])
        return self
