"""Tests for logging helpers."""

from __future__ import annotations

import io
import json

import pytest
from loguru import logger

from browserless import logging as blog
from browserless.config.loader import LoggingConfig
from browserless.logging import MASK, LogSpan, configure_logging, log, mask_sensitive, mask_url


@pytest.fixture
def records():
    """Capture package log messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    logger.enable("browserless")
    yield messages
    logger.remove(handler_id)
    logger.disable("browserless")


@pytest.fixture(autouse=True)
def restore_toggles():
    saved = dict(blog._enabled)
    yield
    blog._enabled.clear()
    blog._enabled.update(saved)


@pytest.mark.unit
@pytest.mark.core
class TestMasking:
    def test_masks_sensitive_keys_recursively(self):
        data = {
            "url": "https://example.com",
            "authentication": {"username": "u", "password": "p"},
            "items": [{"Token": "t"}],
        }

        masked = mask_sensitive(data)

        assert masked["authentication"] == {"username": "u", "password": MASK}
        assert masked["items"] == [{"Token": MASK}]
        assert masked["url"] == "https://example.com"
        assert data["authentication"]["password"] == "p"

    def test_masks_token_in_url(self):
        url = "https://x/pdf?token=abc123&stealth=true"

        assert mask_url(url) == f"https://x/pdf?token={MASK}&stealth=true"

    def test_masking_can_be_disabled(self):
        configure_logging(LoggingConfig(enabled=False, mask_sensitive_data=False))

        assert mask_sensitive({"token": "t"}) == {"token": "t"}


@pytest.mark.unit
@pytest.mark.core
class TestLogSpan:
    def test_span_emits_json_entry(self, records):
        with log("browserless.pdf", url="https://example.com") as span:
            span.add(status=200)

        entry = json.loads(records[-1])
        assert entry["span"] == "browserless.pdf"
        assert entry["status"] == 200
        assert "elapsed_ms" in entry

    def test_span_records_error_and_reraises(self, records):
        with pytest.raises(ValueError), log("browserless.pdf"):
            raise ValueError("bad scale")

        entry = json.loads(records[-1])
        assert entry["error"] == "ValueError: bad scale"

    def test_span_masks_attributes(self):
        span = LogSpan("browserless.request", url="https://x/?token=abc")

        assert span.entry()["url"] == f"https://x/?token={MASK}"

    def test_add_supports_key_value_and_kwargs(self):
        span = LogSpan("s").add("a", 1).add(b=2)

        assert span.attrs == {"a": 1, "b": 2}


@pytest.mark.unit
@pytest.mark.core
class TestConfigureLogging:
    def test_writes_to_sink_when_enabled(self):
        stream = io.StringIO()

        configure_logging(LoggingConfig(enabled=True, level="DEBUG"), sink=stream)
        try:
            with log("browserless.test"):
                pass
        finally:
            configure_logging(LoggingConfig(enabled=False))

        assert "browserless.test" in stream.getvalue()

    def test_disabled_config_installs_no_sink(self):
        configure_logging(LoggingConfig(enabled=False))

        assert blog._handler_id is None
