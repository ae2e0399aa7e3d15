"""Rendered HTML returned by ``/content``."""

from __future__ import annotations

from pathlib import Path

from browserless.responses.base import Response

__all__ = ["ContentResponse"]


class ContentResponse(Response):
    def content(self) -> str:
        """The rendered page HTML."""
        return self.text()

    def save(self, path: Path | str) -> bool:
        return self._write(path, self.raw())
