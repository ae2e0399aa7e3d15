"""Exception hierarchy for the Browserless client.

Every error raised by the package derives from BrowserlessError. Generic
kinds (InvalidOptionsError, ApiError, ...) describe *what* went wrong; the
feature errors (PDFGenerationError, ScrapeError, ...) describe *where*.

Each feature error carries two nested classes generated on subclassing:

    PDFGenerationError.InvalidOptions   # also an InvalidOptionsError
    PDFGenerationError.InvalidResponse  # also an InvalidResponseError

so callers can catch by feature, by kind, or both:

    try:
        browserless.pdf().send()
    except InvalidOptionsError:
        ...  # any locally detected bad option
    except PDFGenerationError as e:
        ...  # remote or transport failure, original error in e.__cause__
"""

from __future__ import annotations

from typing import ClassVar

__all__ = [
    "ApiError",
    "BQLError",
    "BrowserlessError",
    "ClientNotConfiguredError",
    "ConfigError",
    "ContentError",
    "DownloadError",
    "ExecuteFunctionError",
    "FeatureError",
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
]


class BrowserlessError(Exception):
    """Base class for all errors raised by the Browserless client."""


class InvalidOptionsError(BrowserlessError, ValueError):
    """A locally detectable invalid or missing option."""


class InvalidResponseError(BrowserlessError):
    """A response body could not be decoded as expected."""


class InvalidConfigurationError(BrowserlessError, ValueError):
    """The client was given an unusable token or base URL."""


class ClientNotConfiguredError(BrowserlessError):
    """A request was sent before any HTTP transport was attached."""


class RemoteError(BrowserlessError):
    """The HTTP transport failed (network, TLS, timeout)."""


class ApiError(BrowserlessError):
    """The Browserless service answered with an HTTP error status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Browserless API error (HTTP {status_code}): {body}")


class PreconditionError(BrowserlessError, RuntimeError):
    """A setter was called before the state it refines exists."""


class WebSocketError(BrowserlessError):
    """A WebSocket connection could not be opened or used."""


class FeatureError(BrowserlessError):
    """Base class for errors scoped to one remote feature.

    Subclasses set ``action`` (used in "Failed to <action>: ...") and
    ``label`` (used in "Invalid <label> options: ...").
    """

    action: ClassVar[str] = "complete request"
    label: ClassVar[str] = "request"

    InvalidOptions: ClassVar[type[FeatureError]]
    InvalidResponse: ClassVar[type[FeatureError]]

    _kind: ClassVar[type[BrowserlessError] | None] = None

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("_kind") is not None:
            return
        cls.InvalidOptions = _nested(cls, "InvalidOptions", InvalidOptionsError)
        cls.InvalidResponse = _nested(cls, "InvalidResponse", InvalidResponseError)

    @classmethod
    def from_error(cls, error: BaseException) -> FeatureError:
        """Wrap a lower-level failure, keeping it as ``__cause__``.

        Args:
            error: Transport, API or serialization error

        Returns:
            Feature error with message "Failed to <action>: <error>"
        """
        exc = cls(
            f"Failed to {cls.action}: {error}",
            status_code=getattr(error, "status_code", None),
        )
        exc.__cause__ = error
        return exc

    @classmethod
    def invalid_options(cls, message: str) -> FeatureError:
        return cls.InvalidOptions(f"Invalid {cls.label} options: {message}")

    @classmethod
    def invalid_response(cls, message: str) -> FeatureError:
        return cls.InvalidResponse(f"Invalid {cls.label} response: {message}")


def _nested(
    owner: type[FeatureError], name: str, kind: type[BrowserlessError]
) -> type[FeatureError]:
    return type(
        name,
        (owner, kind),
        {
            "_kind": kind,
            "__module__": owner.__module__,
            "__qualname__": f"{owner.__qualname__}.{name}",
        },
    )


class PDFGenerationError(FeatureError):
    action = "generate PDF"
    label = "PDF"


class ScreenshotError(FeatureError):
    action = "generate screenshot"
    label = "screenshot"


class ContentError(FeatureError):
    action = "capture content"
    label = "content"


class ScrapeError(FeatureError):
    action = "scrape page"
    label = "scrape"


class DownloadError(FeatureError):
    action = "download file"
    label = "download"


class ExecuteFunctionError(FeatureError):
    action = "execute function"
    label = "function"


class UnblockError(FeatureError):
    action = "unblock page"
    label = "unblock"


class BQLError(FeatureError):
    action = "run BQL query"
    label = "BQL"


class PerformanceError(FeatureError):
    action = "analyze performance"
    label = "performance"


class ConfigError(FeatureError):
    action = "get configuration"
    label = "configuration"


class MetricsError(FeatureError):
    action = "get metrics"
    label = "metrics"


class SessionsError(FeatureError):
    action = "get sessions"
    label = "sessions"
