"""Configuration for the Browserless client."""

from browserless.config.loader import (
    DEFAULT_URL,
    BrowserlessConfig,
    LoggingConfig,
    get_config,
    load_config,
)
from browserless.config.models import GlobalOptions, ViewportSettings
from browserless.config.secrets import expand_secrets, load_secrets

__all__ = [
    "DEFAULT_URL",
    "BrowserlessConfig",
    "GlobalOptions",
    "LoggingConfig",
    "ViewportSettings",
    "expand_secrets",
    "get_config",
    "load_config",
    "load_secrets",
]
