"""Connection-level defaults shared by every request made through one client."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["LAUNCH_FIELDS", "GlobalOptions", "ViewportSettings"]

# Fields that only make sense when launching a browser over WebSocket
LAUNCH_FIELDS = (
    "args",
    "default_viewport",
    "devtools",
    "dumpio",
    "headless",
    "ignore_default_args",
    "slow_mo",
    "stealth",
    "user_data_dir",
    "wait_for_initial_page",
)


class ViewportSettings(BaseModel):
    """Default browser viewport."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    width: int = Field(default=1280, ge=1, description="Viewport width in pixels")
    height: int = Field(default=720, ge=1, description="Viewport height in pixels")
    device_scale_factor: float = Field(
        default=1.0, gt=0, alias="deviceScaleFactor", description="Device pixel ratio"
    )
    has_touch: bool = Field(default=False, alias="hasTouch")
    is_landscape: bool = Field(default=False, alias="isLandscape")
    is_mobile: bool = Field(default=False, alias="isMobile")


class GlobalOptions(BaseModel):
    """Defaults applied to requests and browser launches.

    YAML files may use either the snake_case field names or the camelCase
    wire names (``ignoreHTTPSErrors``, ``slowMo``, ...).
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    timeout: int = Field(
        default=30000, ge=0, description="Request timeout in milliseconds (0 disables)"
    )
    ignore_https_errors: bool = Field(
        default=False,
        alias="ignoreHTTPSErrors",
        description="Ignore TLS certificate errors on visited pages",
    )
    stealth: bool = Field(default=False, description="Enable stealth mode")
    proxy: str | None = Field(
        default=None, description="Proxy mode passed as the `proxy` query parameter"
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra HTTP headers sent by the browser"
    )
    args: list[str] = Field(
        default_factory=list, description="Browser launch arguments"
    )
    default_viewport: ViewportSettings = Field(
        default_factory=ViewportSettings, alias="defaultViewport"
    )
    devtools: bool = Field(default=False)
    dumpio: bool = Field(default=False)
    headless: bool | Literal["shell"] = Field(default=True)
    ignore_default_args: bool | list[str] = Field(
        default=False, alias="ignoreDefaultArgs"
    )
    slow_mo: int = Field(default=0, ge=0, alias="slowMo")
    user_data_dir: str | None = Field(default=None, alias="userDataDir")
    wait_for_initial_page: bool = Field(default=True, alias="waitForInitialPage")

    def launch_options(self) -> dict[str, Any]:
        """Return launch-only fields that differ from their defaults, camelCased."""
        fields = set(LAUNCH_FIELDS)
        current = self.model_dump(by_alias=True, include=fields)
        baseline = GlobalOptions().model_dump(by_alias=True, include=fields)
        return {key: value for key, value in current.items() if value != baseline[key]}
