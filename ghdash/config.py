"""Configuration resolution: environment credentials plus optional JSON overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Mapping

from ghdash.errors import ConfigurationError

TOKEN_ENV = "GITHUB_TOKEN"
CONFIG_ENV = "GHDASH_CONFIG"

GRAPHQL_URL = "https://api.github.com/graphql"
MAX_REPOSITORIES = 100


@dataclass(frozen=True)
class DashboardConfig:
    username: str
    token: str
    api_url: str = GRAPHQL_URL
    repository_limit: int = MAX_REPOSITORIES
    request_timeout: float = 30.0
    show_weekday_labels: bool = True
    poll_interval: float = 0.1
    markdown_theme: str = "monokai"


OVERRIDABLE = {f.name for f in fields(DashboardConfig)} - {"username", "token"}


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise ConfigurationError(f"config path not found: {config_path}")

    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"invalid JSON config: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"cannot read config {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"config must be a JSON object: {config_path}")
    return data


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _apply_overrides(config: DashboardConfig, user_config: dict) -> DashboardConfig:
    overrides = {key: value for key, value in user_config.items() if key in OVERRIDABLE}

    try:
        if "repository_limit" in overrides:
            overrides["repository_limit"] = int(_clamp(int(overrides["repository_limit"]), 1, MAX_REPOSITORIES))
        if "request_timeout" in overrides:
            overrides["request_timeout"] = _clamp(float(overrides["request_timeout"]), 1.0, 600.0)
        if "poll_interval" in overrides:
            overrides["poll_interval"] = _clamp(float(overrides["poll_interval"]), 0.02, 1.0)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"invalid numeric config value: {exc}") from exc

    if "show_weekday_labels" in overrides:
        if not isinstance(overrides["show_weekday_labels"], bool):
            raise ConfigurationError(
                f"show_weekday_labels must be true or false, got {overrides['show_weekday_labels']!r}"
            )
    for key in ("api_url", "markdown_theme"):
        if key in overrides:
            overrides[key] = str(overrides[key])

    return replace(config, **overrides)


def resolve_config(
    username: str | None,
    config_path: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> DashboardConfig:
    env = os.environ if environ is None else environ

    username = (username or "").strip()
    if not username:
        raise ConfigurationError("no username provided")

    token = (env.get(TOKEN_ENV) or "").strip()
    if not token:
        raise ConfigurationError(f"{TOKEN_ENV} not set")

    config = DashboardConfig(username=username, token=token)
    user_config = load_user_config(config_path or env.get(CONFIG_ENV))
    return _apply_overrides(config, user_config)
