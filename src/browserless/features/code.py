"""Run caller-supplied JavaScript: ``POST /download`` and ``POST /function``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from browserless.exceptions import DownloadError, ExecuteFunctionError
from browserless.features.base import FeatureBuilder
from browserless.features.concerns import (
    AuthenticationMixin,
    BrowserSettingsMixin,
    CookieMixin,
    NavigationMixin,
    QueryParameterMixin,
)
from browserless.responses.binary import DownloadResponse
from browserless.responses.pages import ExecuteFunctionResponse

__all__ = ["Download", "ExecuteFunction"]


class _CodeBuilder(
    AuthenticationMixin,
    CookieMixin,
    NavigationMixin,
    BrowserSettingsMixin,
    QueryParameterMixin,
):
    """Setters shared by endpoints that run an ``export default`` function."""

    def code(self, code: str) -> Self:
        self.options.set("code", code)
        return self

    def context(self, context: Mapping[str, Any]) -> Self:
        """Values passed to the function as ``context``."""
        self.options.set("context", dict(context))
        return self

    def timeout(self, milliseconds: int) -> Self:
        self.options.set("gotoOptions.timeout", milliseconds)
        return self

    def validate(self) -> None:
        if not self.options.get("code"):
            raise self.error.invalid_options("JavaScript code must be provided")


class Download(_CodeBuilder, FeatureBuilder[DownloadResponse]):
    """Run code that triggers a browser download and return the file.

    Example:
        >>> code = "export default async ({ page }) => { await page.click('#export'); }"
        >>> browserless.download().code(code).send().save("report.csv")
        True
    """

    endpoint = "download"
    error = DownloadError
    response_class = DownloadResponse
    defaults = {"gotoOptions": {}}


class ExecuteFunction(_CodeBuilder, FeatureBuilder[ExecuteFunctionResponse]):
    """Run code in a browser page and return what it returns."""

    endpoint = "function"
    error = ExecuteFunctionError
    response_class = ExecuteFunctionResponse
    defaults = {"gotoOptions": {}}
    recognized_options = {
        "async_behavior": "asyncBehavior",
        "automation_options": "automationOptions",
        "browser_extensions": "browserExtensions",
        "context_isolation": "contextIsolation",
        "debug_options": "debugOptions",
        "environment_variables": "environmentVariables",
        "execution_environment": "executionEnvironment",
        "lifecycle_hooks": "lifecycleHooks",
        "memory_management": "memoryManagement",
        "network_interception": "networkInterception",
        "security_policy": "securityPolicy",
        "setup_script": "setupScript",
        "teardown_script": "teardownScript",
    }

    def execution_context(self, context: Mapping[str, Any]) -> Self:
        return self.set_option("executionContext", dict(context))

    def add_modules(self, modules: list[str]) -> Self:
        """Modules to load before the function runs (accumulates)."""
        return self.set_option("modules", [*(self.options.get("modules") or []), *modules])

    def evaluation_timeout(self, milliseconds: int) -> Self:
        return self.set_option("evaluationTimeout", milliseconds)

    def browser_actions(self, actions: list[Mapping[str, Any]]) -> Self:
        return self.set_option("browserActions", [dict(action) for action in actions])

    def evaluate_before_code(self, code: str) -> Self:
        return self.set_option("evaluateBeforeCode", code)

    def evaluate_after_code(self, code: str) -> Self:
        return self.set_option("evaluateAfterCode", code)

    def retry_on_failure(self, enabled: bool = True) -> Self:
        """Ask the service to retry the function; nothing is retried locally."""
        return self.set_option("retryOnFailure", enabled)

    def failure_threshold(self, attempts: int) -> Self:
        return self.set_option("failureThreshold", attempts)
