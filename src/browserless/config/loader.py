"""YAML configuration loading for the Browserless client.

Example browserless.yaml:

    url: https://production-sfo.browserless.io
    token: ${BROWSERLESS_TOKEN}   # resolved from secrets.yaml
    secrets_file: secrets.yaml    # relative to this file

    logging:
      enabled: true
      level: DEBUG

    defaults:
      stealth: true
      timeout: 60000
      headers:
        Accept-Language: en-US

Resolution order (first found wins):
1. Explicit path passed to load_config()
2. BROWSERLESS_CONFIG env var
3. ./.browserless/browserless.yaml
4. ~/.browserless/browserless.yaml
5. Built-in defaults

BROWSERLESS_TOKEN and BROWSERLESS_URL environment variables override the
token and url from any file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from loguru import logger
from pydantic import BaseModel, Field

from browserless.config.models import GlobalOptions
from browserless.config.secrets import expand_secrets, load_secrets

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_URL",
    "BrowserlessConfig",
    "LoggingConfig",
    "get_config",
    "get_global_dir",
    "get_project_dir",
    "load_config",
]

DEFAULT_URL = "https://production-sfo.browserless.io"
CONFIG_FILENAME = "browserless.yaml"
DIR_NAME = ".browserless"


class LoggingConfig(BaseModel):
    """Logging toggles."""

    enabled: bool = Field(default=False, description="Emit package log records")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_requests: bool = Field(default=True, description="Log outgoing requests")
    log_responses: bool = Field(default=True, description="Log response status")
    log_errors: bool = Field(default=True, description="Log failures at ERROR level")
    mask_sensitive_data: bool = Field(
        default=True, description="Mask tokens, passwords and secrets in log output"
    )


class BrowserlessConfig(BaseModel):
    """Root configuration model."""

    token: str | None = Field(default=None, description="Browserless API token")
    url: str = Field(default=DEFAULT_URL, description="Browserless base URL")
    secrets_file: str = Field(
        default="secrets.yaml",
        description="Secrets file, relative to the config file",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    defaults: GlobalOptions = Field(default_factory=GlobalOptions)


def get_project_dir() -> Path:
    return Path.cwd() / DIR_NAME


def get_global_dir() -> Path:
    return Path.home() / DIR_NAME


def _resolve_config_path(config_path: Path | str | None) -> Path | None:
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path

    env_config = os.getenv("BROWSERLESS_CONFIG")
    if env_config:
        path = Path(env_config)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path

    for candidate in (
        get_project_dir() / CONFIG_FILENAME,
        get_global_dir() / CONFIG_FILENAME,
    ):
        if candidate.exists():
            return candidate
    return None


def _read_yaml(path: Path) -> dict:
    try:
        with path.open() as f:
            raw_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Error reading {path}: {e}") from e

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ValueError(f"Config file {path} must be a YAML mapping")
    return raw_data


def load_config(config_path: Path | str | None = None) -> BrowserlessConfig:
    """Load and validate configuration.

    Args:
        config_path: Path to config file (overrides resolution)

    Returns:
        Validated BrowserlessConfig

    Raises:
        FileNotFoundError: If an explicit config path doesn't exist
        ValueError: If YAML is invalid or validation fails
    """
    path = _resolve_config_path(config_path)
    raw_data: dict = {}
    secrets: dict[str, str] = {}

    if path is not None:
        logger.debug(f"Loading config from {path}")
        raw_data = _read_yaml(path)
        secrets_name = raw_data.get("secrets_file") or "secrets.yaml"
        secrets = load_secrets(path.parent / str(secrets_name))
        raw_data = expand_secrets(raw_data, secrets)

    try:
        config = BrowserlessConfig.model_validate(raw_data)
    except Exception as e:
        raise ValueError(f"Invalid configuration in {path}: {e}") from e

    overrides: dict[str, str] = {}
    if not config.token and secrets.get("BROWSERLESS_TOKEN"):
        overrides["token"] = secrets["BROWSERLESS_TOKEN"]
    if os.getenv("BROWSERLESS_TOKEN"):
        overrides["token"] = os.environ["BROWSERLESS_TOKEN"]
    if os.getenv("BROWSERLESS_URL"):
        overrides["url"] = os.environ["BROWSERLESS_URL"]

    return config.model_copy(update=overrides) if overrides else config


# Global config instance
_config: BrowserlessConfig | None = None


def get_config(
    config_path: Path | str | None = None, reload: bool = False
) -> BrowserlessConfig:
    """Get or load the global configuration.

    Args:
        config_path: Path to config file (only used on first load)
        reload: Force reload configuration

    Returns:
        BrowserlessConfig instance
    """
    global _config

    if _config is None or reload:
        _config = load_config(config_path)

    return _config
