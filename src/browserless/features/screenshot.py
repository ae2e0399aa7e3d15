"""Screenshots via ``POST /screenshot``."""

from __future__ import annotations

from typing import Self

from browserless.exceptions import ScreenshotError
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
from browserless.responses.binary import ScreenshotResponse

__all__ = ["IMAGE_TYPES", "Screenshot"]

IMAGE_TYPES = ("jpeg", "png", "webp")
ENCODINGS = ("binary", "base64")


class Screenshot(
    PageSourceMixin,
    AuthenticationMixin,
    CookieMixin,
    NavigationMixin,
    ViewportMixin,
    ResourceInjectionMixin,
    PageOptionsMixin,
    QueryParameterMixin,
    FeatureBuilder[ScreenshotResponse],
):
    """Capture a page (URL or HTML) as an image."""

    endpoint = "screenshot"
    error = ScreenshotError
    response_class = ScreenshotResponse
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
    recognized_options = {
        "capture_beyond_viewport": "options.captureBeyondViewport",
        "from_surface": "options.fromSurface",
        "optimize_for_speed": "options.optimizeForSpeed",
        "selector": "selector",
        "scroll_page": "scrollPage",
        "capture_options": "captureOptions",
        "element_screenshot": "elementScreenshot",
        "mask_selectors": "maskSelectors",
        "jpeg_optimization": "jpegOptimization",
        "png_optimization": "pngOptimization",
        "webp_options": "webpOptions",
        "image_processing": "imageProcessing",
        "background_color": "backgroundColor",
        "overlay": "overlay",
    }

    def full_page(self, enabled: bool = True) -> Self:
        return self.set_option("options.fullPage", enabled)

    def type(self, image_type: str) -> Self:
        if image_type not in IMAGE_TYPES:
            raise self.error.invalid_options("Type must be jpeg, png, or webp")
        return self.set_option("options.type", image_type)

    def quality(self, quality: int) -> Self:
        """JPEG/WebP quality from 0 to 100."""
        self._check_quality(quality)
        return self.set_option("options.quality", quality)

    def omit_background(self, enabled: bool = True) -> Self:
        return self.set_option("options.omitBackground", enabled)

    def clip(self, x: float = 0, y: float = 0, width: float = 800, height: float = 600) -> Self:
        return self.set_option("options.clip", {"x": x, "y": y, "width": width, "height": height})

    def encoding(self, encoding: str) -> Self:
        if encoding not in ENCODINGS:
            raise self.error.invalid_options("Encoding must be binary or base64")
        return self.set_option("options.encoding", encoding)

    def device(self, name: str) -> Self:
        """Emulate a named device (e.g. ``"iPhone 13"``)."""
        return self.set_option("options.deviceName", name)

    def selector(self, selector: str) -> Self:
        """Capture only the element matching ``selector``."""
        return self.set_option("selector", selector)

    def validate(self) -> None:
        self.validate_source()
        quality = self.options.get("options.quality")
        if quality is not None:
            self._check_quality(quality)

    def _check_quality(self, quality: int) -> None:
        if isinstance(quality, bool) or not isinstance(quality, int):
            raise self.error.invalid_options(f"Quality must be an integer, got {type(quality).__name__}")
        if not 0 <= quality <= 100:
            raise self.error.invalid_options("Quality must be between 0 and 100")
