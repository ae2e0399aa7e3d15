"""Browserless - client SDK for the Browserless remote browser API.

Features:
- Fluent request builders for PDF, screenshot, content, scrape, download,
  function, unblock, performance and BQL endpoints
- Typed responses with save/stream helpers and dot-path lookups
- Session, metrics and configuration introspection
- WebSocket endpoints for Puppeteer and Playwright

Usage:
    from browserless import Browserless

    browserless = Browserless("my-token").setup()
    browserless.pdf().url("https://example.com").format("A4").send().save("example.pdf")

    # Or from browserless.yaml / BROWSERLESS_TOKEN
    browserless = Browserless.from_config()
"""

from importlib.metadata import version

from loguru import logger

__version__ = version("browserless-client")

from browserless.api import Browserless  # noqa: E402
from browserless.client import Client  # noqa: E402
from browserless.config import BrowserlessConfig, GlobalOptions, get_config, load_config  # noqa: E402
from browserless.exceptions import (  # noqa: E402
    ApiError,
    BQLError,
    BrowserlessError,
    ClientNotConfiguredError,
    ConfigError,
    ContentError,
    DownloadError,
    ExecuteFunctionError,
    FeatureError,
    InvalidConfigurationError,
    InvalidOptionsError,
    InvalidResponseError,
    MetricsError,
    PDFGenerationError,
    PerformanceError,
    PreconditionError,
    RemoteError,
    ScrapeError,
    ScreenshotError,
    SessionsError,
    UnblockError,
    WebSocketError,
)
from browserless.logging import configure_logging  # noqa: E402

# Library logging stays silent until configure_logging() is called
logger.disable("browserless")

__all__ = [
    "ApiError",
    "BQLError",
    "Browserless",
    "BrowserlessConfig",
    "BrowserlessError",
    "Client",
    "ClientNotConfiguredError",
    "ConfigError",
    "ContentError",
    "DownloadError",
    "ExecuteFunctionError",
    "FeatureError",
    "GlobalOptions",
    "InvalidConfigurationError",
    "InvalidOptionsError",
    "InvalidResponseError",
    "MetricsError",
    "PDFGenerationError",
    "PerformanceError",
    "PreconditionError",
    "RemoteError",
    "ScrapeError",
    "ScreenshotError",
    "SessionsError",
    "UnblockError",
    "WebSocketError",
    "__version__",
    "configure_logging",
    "get_config",
    "load_config",
]
