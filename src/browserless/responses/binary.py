"""File-bearing responses: PDF, screenshot and download."""

from __future__ import annotations

import re

from browserless.responses.base import BinaryResponse

__all__ = ["DownloadResponse", "PDFResponse", "ScreenshotResponse"]

_FILENAME = re.compile(r"""filename\*?=(?:UTF-8'')?["']?([^"';]+)""", re.IGNORECASE)


class PDFResponse(BinaryResponse):
    default_content_type = "application/pdf"


class ScreenshotResponse(BinaryResponse):
    default_content_type = "image/png"


class DownloadResponse(BinaryResponse):
    def filename(self) -> str | None:
        """File name from the Content-Disposition header, if any."""
        disposition = self.header("Content-Disposition")
        if not disposition:
            return None
        match = _FILENAME.search(disposition)
        return match.group(1).strip() if match else None
