"""PDF generation via ``POST /pdf``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from browserless.exceptions import PDFGenerationError
from browserless.features.base import FeatureBuilder
from browserless.features.concerns import (
    AuthenticationMixin,
    CookieMixin,
    NavigationMixin,
    PageOptionsMixin,
    PageSourceMixin,
    QueryParameterMixin,
    ResourceInjectionMixin,
    ViewportMixin,
)
from browserless.responses.binary import PDFResponse

__all__ = ["PDF"]

MIN_SCALE = 0.1
MAX_SCALE = 2.0


class PDF(
    PageSourceMixin,
    AuthenticationMixin,
    CookieMixin,
    NavigationMixin,
    ViewportMixin,
    ResourceInjectionMixin,
    PageOptionsMixin,
    QueryParameterMixin,
    FeatureBuilder[PDFResponse],
):
    """Render a page (URL or HTML) to PDF.

    Example:
        >>> response = (
        ...     browserless.pdf()
        ...     .url("https://example.com")
        ...     .format("A4")
        ...     .landscape()
        ...     .print_background()
        ...     .send()
        ... )
        >>> response.save("example.pdf")
        True
    """

    endpoint = "pdf"
    error = PDFGenerationError
    response_class = PDFResponse
    defaults = {
        "options": {},
        "gotoOptions": {},
        "viewport": {
            "width": 800,
            "height": 600,
            "deviceScaleFactor": 1.0,
            "isMobile": False,
            "hasTouch": False,
            "isLandscape": False,
        },
    }
    # Open-ended print options accepted by configure()
    recognized_options = {
        "accessibility": "options.accessibility",
        "attachments": "options.attachments",
        "emulate_media": "options.emulateMedia",
        "font_options": "options.fontOptions",
        "margin_units": "options.marginUnits",
        "omit_background": "options.omitBackground",
        "outline": "options.outline",
        "page_labels": "options.pageLabels",
        "pdf_x": "options.pdfX",
        "print_media_type": "options.printMediaType",
        "signature": "options.signature",
        "watermark": "options.watermark",
    }

    def format(self, paper_format: str) -> Self:
        """Paper format such as ``A4`` or ``Letter``."""
        return self.set_option("options.format", paper_format)

    def width(self, width: str | int) -> Self:
        return self.set_option("options.width", width)

    def height(self, height: str | int) -> Self:
        return self.set_option("options.height", height)

    def margin(
        self,
        top: str | Mapping[str, str] | None = None,
        right: str | None = None,
        bottom: str | None = None,
        left: str | None = None,
    ) -> Self:
        """Page margins, as CSS lengths or a single mapping."""
        if isinstance(top, Mapping):
            margins = dict(top)
        else:
            margins = {"top": top, "right": right, "bottom": bottom, "left": left}
        return self.set_option(
            "options.margin", {side: value for side, value in margins.items() if value is not None}
        )

    def landscape(self, enabled: bool = True) -> Self:
        return self.set_option("options.landscape", enabled)

    def print_background(self, enabled: bool = True) -> Self:
        return self.set_option("options.printBackground", enabled)

    def display_header_footer(self, enabled: bool = True) -> Self:
        return self.set_option("options.displayHeaderFooter", enabled)

    def header_template(self, template: str) -> Self:
        return self.set_option("options.headerTemplate", template)

    def footer_template(self, template: str) -> Self:
        return self.set_option("options.footerTemplate", template)

    def prefer_css_page_size(self, enabled: bool = True) -> Self:
        return self.set_option("options.preferCSSPageSize", enabled)

    def page_ranges(self, ranges: str) -> Self:
        """Pages to print, e.g. ``"1-5, 8"``."""
        return self.set_option("options.pageRanges", ranges)

    def scale(self, scale: float) -> Self:
        self._check_scale(scale)
        return self.set_option("options.scale", scale)

    def tagged(self, enabled: bool = True) -> Self:
        """Generate a tagged (accessible) PDF."""
        return self.set_option("options.tagged", enabled)

    def outline(self, enabled: bool = True) -> Self:
        return self.set_option("options.outline", enabled)

    def encryption(
        self,
        user_password: str | None = None,
        owner_password: str | None = None,
        permissions: list[str] | None = None,
    ) -> Self:
        settings: dict[str, Any] = {
            "userPassword": user_password,
            "ownerPassword": owner_password,
            "permissions": permissions,
        }
        return self.set_option(
            "options.encryption", {key: value for key, value in settings.items() if value is not None}
        )

    def metadata(self, metadata: Mapping[str, Any]) -> Self:
        """Document info: title, author, subject, keywords."""
        return self.set_option("options.metadata", dict(metadata))

    def compression_level(self, level: int) -> Self:
        if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level <= 9:
            raise self.error.invalid_options("Compression level must be between 0 and 9")
        return self.set_option("options.compressionLevel", level)

    def pdf_a(self, conformance: str = "PDF/A-2b") -> Self:
        return self.set_option("options.pdfA", conformance)

    def timeout(self, milliseconds: int) -> Self:
        """Print timeout passed to the browser."""
        return self.set_option("options.timeout", milliseconds)

    def validate(self) -> None:
        self.validate_source()
        scale = self.options.get("options.scale")
        if scale is not None:
            self._check_scale(scale)

    def _check_scale(self, scale: float) -> None:
        if isinstance(scale, bool) or not isinstance(scale, int | float):
            raise self.error.invalid_options(f"Scale must be a number, got {type(scale).__name__}")
        if not MIN_SCALE <= scale <= MAX_SCALE:
            raise self.error.invalid_options("Scale must be between 0.1 and 2")
