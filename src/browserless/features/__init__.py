"""Feature request builders, one per remote endpoint."""

from browserless.features.base import FeatureBuilder
from browserless.features.bql import BQL
from browserless.features.code import Download, ExecuteFunction
from browserless.features.content import Content
from browserless.features.info import Config, Metrics, MetricsTotal, Sessions
from browserless.features.pdf import PDF
from browserless.features.performance import Performance
from browserless.features.scrape import Scrape
from browserless.features.screenshot import Screenshot
from browserless.features.unblock import Unblock

__all__ = [
    "BQL",
    "PDF",
    "Config",
    "Content",
    "Download",
    "ExecuteFunction",
    "FeatureBuilder",
    "Metrics",
    "MetricsTotal",
    "Performance",
    "Scrape",
    "Screenshot",
    "Sessions",
    "Unblock",
]
