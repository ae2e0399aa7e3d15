"""Typed wrappers around raw HTTP responses."""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any, ClassVar

import httpx

from browserless.exceptions import FeatureError
from browserless.options import get_path

__all__ = ["BinaryResponse", "JsonResponse", "Response"]

_UNSET = object()


class Response:
    """Common accessors for every response type."""

    def __init__(
        self, response: httpx.Response, error: type[FeatureError] = FeatureError
    ) -> None:
        self._response = response
        self.error = error

    def status(self) -> int:
        return self._response.status_code

    def successful(self) -> bool:
        return 200 <= self._response.status_code < 300

    def headers(self) -> httpx.Headers:
        return self._response.headers

    def header(self, name: str, default: str | None = None) -> str | None:
        return self._response.headers.get(name, default)

    def raw(self) -> bytes:
        return self._response.content

    def text(self) -> str:
        return self._response.text

    def underlying_response(self) -> httpx.Response:
        return self._response

    def _write(self, path: Path | str, data: bytes) -> bool:
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise self.error(f"Failed to save response to {target}: {e}") from e
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status()})"


class JsonResponse(Response):
    """Response whose body is JSON, decoded once on first access."""

    def __init__(
        self, response: httpx.Response, error: type[FeatureError] = FeatureError
    ) -> None:
        super().__init__(response, error)
        self._data: Any = _UNSET

    def data(self) -> Any:
        """Return the decoded body.

        Raises:
            FeatureError: The feature's ``InvalidResponse`` if the body is not JSON
        """
        if self._data is _UNSET:
            try:
                self._data = json.loads(self._response.content)
            except ValueError as e:
                raise self.error.invalid_response(
                    f"Response is not valid JSON: {e}"
                ) from e
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Dot-path lookup into the decoded body."""
        return get_path(self.data(), key, default)


class BinaryResponse(Response):
    """Response carrying a file (PDF, image, download)."""

    default_content_type: ClassVar[str] = "application/octet-stream"

    def content(self) -> bytes:
        return self._response.content

    def content_type(self) -> str:
        return self._response.headers.get("Content-Type", self.default_content_type)

    def size(self) -> int:
        """Body size, preferring the Content-Length header."""
        length = self._response.headers.get("Content-Length")
        if length is not None and length.isdigit():
            return int(length)
        return len(self._response.content)

    def save(self, path: Path | str) -> bool:
        """Write the raw body to ``path``.

        Raises:
            FeatureError: If the file cannot be written
        """
        return self._write(path, self.content())

    def save_as(self, path: Path | str) -> str:
        self.save(path)
        return str(path)

    def decode_base64(self) -> bytes:
        """Decode a body returned with base64 encoding."""
        try:
            return base64.b64decode(self._response.content, validate=True)
        except (binascii.Error, ValueError) as e:
            raise self.error.invalid_response(f"Response is not valid base64: {e}") from e

    def iter_bytes(self, chunk_size: int = 65536) -> Iterator[bytes]:
        data = self.content()
        for start in range(0, len(data), chunk_size):
            yield data[start : start + chunk_size]

    def download_headers(self, filename: str, inline: bool = False) -> dict[str, str]:
        """Headers for streaming this body on to an HTTP caller.

        Args:
            filename: Name offered to the caller
            inline: Display in the browser instead of prompting a download
        """
        disposition = "inline" if inline else "attachment"
        return {
            "Content-Type": self.content_type(),
            "Content-Length": str(self.size()),
            "Content-Disposition": f'{disposition}; filename="{filename}"',
        }
