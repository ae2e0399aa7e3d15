"""Typed response wrappers."""

from browserless.responses.base import BinaryResponse, JsonResponse, Response
from browserless.responses.binary import DownloadResponse, PDFResponse, ScreenshotResponse
from browserless.responses.bql import BQLResponse
from browserless.responses.content import ContentResponse
from browserless.responses.info import ConfigResponse, MetricsResponse, SessionsResponse
from browserless.responses.pages import (
    ExecuteFunctionResponse,
    ScrapeResponse,
    UnblockResponse,
)
from browserless.responses.performance import PerformanceResponse

__all__ = [
    "BQLResponse",
    "BinaryResponse",
    "ConfigResponse",
    "ContentResponse",
    "DownloadResponse",
    "ExecuteFunctionResponse",
    "JsonResponse",
    "MetricsResponse",
    "PDFResponse",
    "PerformanceResponse",
    "Response",
    "ScrapeResponse",
    "ScreenshotResponse",
    "SessionsResponse",
    "UnblockResponse",
]
