"""Shared fixtures: a Browserless client wired to a recording mock transport."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from browserless import Browserless

TOKEN = "test-token"
BASE_URL = "https://chrome.example.test"


class Recorder:
    """httpx.MockTransport handler that records requests and replays one reply."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._reply: dict[str, Any] = {"status_code": 200, "json": {}}

    def reply(
        self,
        status_code: int = 200,
        *,
        json: Any = None,
        content: bytes | str | None = None,
        headers: dict[str, str] | None = None,
    ) -> Recorder:
        self._reply = {"status_code": status_code, "headers": headers}
        if content is not None:
            self._reply["content"] = content
        else:
            self._reply["json"] = json
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(**self._reply)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def transport(recorder: Recorder) -> httpx.Client:
    client = httpx.Client(transport=httpx.MockTransport(recorder))
    yield client
    client.close()


@pytest.fixture
def browserless(transport: httpx.Client) -> Browserless:
    return Browserless(TOKEN, BASE_URL, transport=transport)
