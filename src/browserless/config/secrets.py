"""Secrets loading for the Browserless client.

Secrets live in a YAML file kept out of version control, separate from the
committed browserless.yaml:

    BROWSERLESS_TOKEN: "your-api-token"

Values are literal strings; they are referenced from the config file with
``${NAME}`` or ``${NAME:-default}``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

__all__ = ["expand_secrets", "load_secrets"]

_PLACEHOLDER = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def load_secrets(secrets_path: Path | str | None = None) -> dict[str, str]:
    """Load secrets from a YAML file.

    Args:
        secrets_path: Path to secrets file. If None or missing, no secrets.

    Returns:
        Dictionary of secret name -> value

    Raises:
        ValueError: If the file is not valid YAML or not a mapping
    """
    if secrets_path is None:
        return {}

    secrets_path = Path(secrets_path)

    if not secrets_path.exists():
        logger.debug(f"Secrets file not found: {secrets_path}")
        return {}

    try:
        with secrets_path.open() as f:
            raw_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in secrets file {secrets_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Error reading secrets file {secrets_path}: {e}") from e

    if raw_data is None:
        return {}

    if not isinstance(raw_data, dict):
        raise ValueError(
            f"Secrets file {secrets_path} must be a YAML mapping, not {type(raw_data).__name__}"
        )

    secrets: dict[str, str] = {}
    for key, value in raw_data.items():
        if not isinstance(key, str):
            logger.warning(f"Ignoring non-string secret key: {key}")
            continue
        if value is None:
            continue
        secrets[key] = str(value)

    logger.debug(f"Loaded {len(secrets)} secrets from {secrets_path}")
    return secrets


def expand_secrets(value: Any, secrets: Mapping[str, str]) -> Any:
    """Expand ``${VAR}`` placeholders in every string within ``value``.

    Raises:
        ValueError: If a variable is missing and has no default
    """
    if isinstance(value, dict):
        return {key: expand_secrets(item, secrets) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_secrets(item, secrets) for item in value]
    if not isinstance(value, str):
        return value

    missing: list[str] = []

    def replace(match: re.Match[str]) -> str:
        name, default = match.group(1), match.group(2)
        if name in secrets:
            return secrets[name]
        if default is not None:
            return default
        missing.append(name)
        return match.group(0)

    result = _PLACEHOLDER.sub(replace, value)
    if missing:
        raise ValueError(
            f"Missing variables in secrets file: {', '.join(missing)}. "
            "Add them to secrets.yaml or use ${VAR:-default} syntax."
        )
    return result
