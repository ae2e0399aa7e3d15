"""Structured logging for the Browserless client.

All records go through loguru. The package logger is disabled on import;
call configure_logging() (or ``logger.enable("browserless")``) to see it.

Example:
    >>> from browserless.logging import log
    >>> with log("browserless.pdf", url="https://example.com") as span:
    ...     response = do_request()
    ...     span.add(status=response.status_code)
"""

from __future__ import annotations

import json
import re
import sys
import time
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TextIO

from loguru import logger

if TYPE_CHECKING:
    from browserless.config.loader import LoggingConfig

__all__ = [
    "MASK",
    "SENSITIVE_KEYS",
    "LogSpan",
    "configure_logging",
    "log",
    "log_enabled",
    "mask_sensitive",
    "mask_url",
]

MASK = "***MASKED***"
SENSITIVE_KEYS = frozenset({"api_key", "token", "password", "secret"})

_TOKEN_IN_URL = re.compile(r"([?&](?:token|api_key)=)[^&#\s]+", re.IGNORECASE)

# Toggles from LoggingConfig, keyed by record kind
_enabled: dict[str, bool] = {
    "requests": True,
    "responses": True,
    "errors": True,
    "mask": True,
}

# Sink installed by configure_logging()
_handler_id: int | None = None


def mask_url(url: str) -> str:
    """Hide token values in a request URL."""
    if not _enabled["mask"]:
        return url
    return _TOKEN_IN_URL.sub(rf"\g<1>{MASK}", url)


def mask_sensitive(data: Any) -> Any:
    """Return a copy of ``data`` with sensitive values replaced.

    Keys are matched case-insensitively against SENSITIVE_KEYS at any depth.
    """
    if not _enabled["mask"]:
        return data
    if isinstance(data, Mapping):
        return {
            key: MASK
            if isinstance(key, str) and key.lower() in SENSITIVE_KEYS
            else mask_sensitive(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item) for item in data]
    if isinstance(data, str):
        return mask_url(data)
    return data


def log_enabled(kind: str) -> bool:
    """Whether records of ``kind`` (requests, responses, errors) are wanted."""
    return _enabled.get(kind, True)


def configure_logging(
    config: LoggingConfig | None = None,
    *,
    level: str | None = None,
    sink: TextIO | None = None,
) -> None:
    """Enable package logging and install a stderr sink.

    Args:
        config: Logging section of BrowserlessConfig (defaults if None)
        level: Level override (e.g. "DEBUG" for --verbose)
        sink: Output stream, stderr by default
    """
    global _handler_id

    if config is None:
        from browserless.config.loader import LoggingConfig

        config = LoggingConfig(enabled=True)

    _enabled.update(
        requests=config.log_requests,
        responses=config.log_responses,
        errors=config.log_errors,
        mask=config.mask_sensitive_data,
    )

    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None

    if not config.enabled and level is None:
        logger.disable("browserless")
        return

    _handler_id = logger.add(
        sink or sys.stderr,
        level=level or config.level,
        filter="browserless",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    logger.enable("browserless")


class LogSpan:
    """A structured logging span with timing and attributes."""

    def __init__(self, name: str, **attrs: Any) -> None:
        """Initialize a log span.

        Args:
            name: Span name (e.g., "browserless.pdf")
            **attrs: Initial attributes to log
        """
        self.name = name
        self.attrs: dict[str, Any] = dict(attrs)
        self.start_time = time.time()
        self.error: str | None = None

    def add(self, key: str | None = None, value: Any = None, **attrs: Any) -> LogSpan:
        """Add attributes to the span.

        Args:
            key: Attribute name (optional if using kwargs)
            value: Attribute value (required if key is provided)
            **attrs: Bulk attribute additions (e.g., status=200)

        Returns:
            Self for method chaining
        """
        if key is not None:
            self.attrs[key] = value
        self.attrs.update(attrs)
        return self

    def entry(self) -> dict[str, Any]:
        elapsed_ms = (time.time() - self.start_time) * 1000
        entry: dict[str, Any] = {
            "span": self.name,
            "elapsed_ms": round(elapsed_ms, 2),
            **mask_sensitive(self.attrs),
        }
        if self.error:
            entry["error"] = self.error
        return entry

    def _emit(self) -> None:
        entry = self.entry()
        message = json.dumps(entry, default=str)
        if self.error and log_enabled("errors"):
            logger.bind(**entry).error(message)
        else:
            logger.bind(**entry).debug(message)


@contextmanager
def log(name: str, **attrs: Any) -> Generator[LogSpan, None, None]:
    """Context manager for structured logging.

    Captures timing and the error (if any) and re-raises it.

    Args:
        name: Span name (e.g., "browserless.pdf")
        **attrs: Initial attributes to log

    Yields:
        LogSpan object for adding attributes
    """
    span = LogSpan(name, **attrs)
    try:
        yield span
    except Exception as e:
        span.error = f"{type(e).__name__}: {e}"
        raise
    finally:
        span._emit()
