"""High-level entry point: a Client with connection defaults and feature factories."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal, TypeVar

from pydantic import ValidationError

from browserless.client import Client
from browserless.config.loader import DEFAULT_URL
from browserless.config.models import GlobalOptions
from browserless.connections import PlaywrightConnection, PuppeteerConnection
from browserless.exceptions import InvalidConfigurationError, InvalidOptionsError
from browserless.features import (
    BQL,
    PDF,
    Config,
    Content,
    Download,
    ExecuteFunction,
    FeatureBuilder,
    Metrics,
    Performance,
    Scrape,
    Screenshot,
    Sessions,
    Unblock,
)
from browserless.features.concerns import BrowserSettingsMixin, QueryParameterMixin
from browserless.transport import Transport

if TYPE_CHECKING:
    from browserless.config.loader import BrowserlessConfig

__all__ = ["Browserless"]

B = TypeVar("B", bound=FeatureBuilder)


class Browserless(Client):
    """Browserless API client.

    Every builder created here starts from the connection defaults: stealth
    and proxy become query parameters, extra headers and ignoreHTTPSErrors go
    into the request body, and the timeout bounds each HTTP request. Launch
    settings (args, headless, slowMo, ...) only apply to WebSocket
    connections.

    Example:
        >>> browserless = Browserless("my-token").setup()
        >>> browserless.set_stealth().pdf().url("https://example.com").send()
    """

    def __init__(
        self,
        token: str,
        url: str = DEFAULT_URL,
        transport: Transport | None = None,
        *,
        options: GlobalOptions | Mapping[str, Any] | None = None,
    ) -> None:
        if isinstance(options, GlobalOptions):
            self._options = options.model_copy(deep=True)
        else:
            self._options = _validate_options(options or {})
        super().__init__(token, url, transport, timeout=_seconds(self._options.timeout))

    @classmethod
    def from_config(
        cls, config: BrowserlessConfig | None = None, transport: Transport | None = None
    ) -> Browserless:
        from browserless.config.loader import get_config

        config = config or get_config()
        if not config.token:
            raise InvalidConfigurationError(
                "No Browserless token configured. Set BROWSERLESS_TOKEN or add "
                "`token` to browserless.yaml."
            )
        client = cls(config.token, config.url, transport, options=config.defaults)
        return client if transport is not None else client.setup()

    # -------------------------------------------------------------------------
    # Connection defaults
    # -------------------------------------------------------------------------

    def global_options(self) -> dict[str, Any]:
        """Current defaults keyed by wire name (``ignoreHTTPSErrors``, ``slowMo``, ...)."""
        return self._options.model_dump(by_alias=True)

    def set_timeout(self, milliseconds: int) -> Browserless:
        self._update(timeout=milliseconds)
        self._timeout = _seconds(milliseconds)
        return self

    def set_ignore_https_errors(self, enabled: bool = True) -> Browserless:
        return self._update(ignore_https_errors=enabled)

    def set_stealth(self, enabled: bool = True) -> Browserless:
        return self._update(stealth=enabled)

    def set_proxy(self, proxy: str | None) -> Browserless:
        return self._update(proxy=proxy)

    def set_headers(self, headers: Mapping[str, str]) -> Browserless:
        return self._update(headers=dict(headers))

    def set_launch_args(self, args: list[str]) -> Browserless:
        return self._update(args=list(args))

    def set_default_viewport(
        self,
        width: int,
        height: int,
        device_scale_factor: float = 1.0,
        *,
        has_touch: bool = False,
        is_landscape: bool = False,
        is_mobile: bool = False,
    ) -> Browserless:
        return self._update(
            default_viewport={
                "width": width,
                "height": height,
                "deviceScaleFactor": device_scale_factor,
                "hasTouch": has_touch,
                "isLandscape": is_landscape,
                "isMobile": is_mobile,
            }
        )

    def set_devtools(self, enabled: bool = True) -> Browserless:
        return self._update(devtools=enabled)

    def set_dumpio(self, enabled: bool = True) -> Browserless:
        return self._update(dumpio=enabled)

    def set_headless(self, headless: bool | Literal["shell"] = True) -> Browserless:
        return self._update(headless=headless)

    def set_ignore_default_args(self, value: bool | list[str] = True) -> Browserless:
        return self._update(ignore_default_args=value)

    def set_slow_mo(self, milliseconds: int) -> Browserless:
        return self._update(slow_mo=milliseconds)

    def set_user_data_dir(self, path: str | None) -> Browserless:
        return self._update(user_data_dir=path)

    def set_wait_for_initial_page(self, enabled: bool = True) -> Browserless:
        return self._update(wait_for_initial_page=enabled)

    def _update(self, **values: Any) -> Browserless:
        candidate = self._options.model_dump()
        candidate.update(values)
        self._options = _validate_options(candidate)
        return self

    # -------------------------------------------------------------------------
    # Feature builders
    # -------------------------------------------------------------------------

    def pdf(self) -> PDF:
        return self._prepare(PDF(self))

    def screenshot(self) -> Screenshot:
        return self._prepare(Screenshot(self))

    def content(self) -> Content:
        return self._prepare(Content(self))

    def scrape(self) -> Scrape:
        return self._prepare(Scrape(self))

    def download(self) -> Download:
        return self._prepare(Download(self))

    def execute_function(self) -> ExecuteFunction:
        return self._prepare(ExecuteFunction(self))

    def unblock(self) -> Unblock:
        return self._prepare(Unblock(self))

    def bql(self) -> BQL:
        return self._prepare(BQL(self))

    def performance(self) -> Performance:
        return self._prepare(Performance(self))

    def config(self) -> Config:
        return Config(self)

    def metrics(self) -> Metrics:
        return Metrics(self)

    def sessions(self) -> Sessions:
        return Sessions(self)

    def puppeteer(self, launch: Mapping[str, Any] | None = None) -> PuppeteerConnection:
        return PuppeteerConnection(self, launch=self._launch(launch))

    def playwright(self, launch: Mapping[str, Any] | None = None) -> PlaywrightConnection:
        return PlaywrightConnection(self, launch=self._launch(launch))

    def _prepare(self, builder: B) -> B:
        options = self._options
        if isinstance(builder, QueryParameterMixin):
            if options.stealth:
                builder.stealth()
            if options.proxy:
                builder.proxy(options.proxy)
        if isinstance(builder, BrowserSettingsMixin):
            if options.headers:
                builder.set_extra_http_headers(options.headers)
            if options.ignore_https_errors:
                builder.ignore_https_errors()
        return builder

    def _launch(self, launch: Mapping[str, Any] | None) -> dict[str, Any]:
        return {**self._options.launch_options(), **(launch or {})}


def _validate_options(values: Mapping[str, Any]) -> GlobalOptions:
    try:
        return GlobalOptions.model_validate(dict(values))
    except ValidationError as e:
        raise InvalidOptionsError(f"Invalid global options: {e}") from e


def _seconds(milliseconds: int) -> float | None:
    return milliseconds / 1000 if milliseconds else None
