"""Collector helpers: GitHub GraphQL transport shared by the data sources."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from ghdash.config import DashboardConfig
from ghdash.errors import RetrievalError

logger = logging.getLogger(__name__)


def auth_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


def graphql_query(
    config: DashboardConfig,
    query: str,
    variables: dict[str, Any],
    source: str,
) -> dict[str, Any]:
    """POST a GraphQL query and return its ``data`` object.

    Transport failures, non-200 responses, GraphQL ``errors`` and bodies
    without a ``data`` object all raise :class:`RetrievalError`.
    """
    started = time.monotonic()
    try:
        response = requests.post(
            config.api_url,
            json={"query": query, "variables": variables},
            headers=auth_headers(config.token),
            timeout=config.request_timeout,
        )
    except requests.RequestException as exc:
        logger.warning("%s request failed: %s", source, exc)
        raise RetrievalError(f"{source}: request failed: {exc}", source=source) from exc

    logger.info("%s query answered %s in %.2fs", source, response.status_code, time.monotonic() - started)
    if response.status_code != 200:
        raise RetrievalError(
            f"{source}: non 200; status: {response.status_code} body: {response.text.strip()[:200]}",
            source=source,
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise RetrievalError(f"{source}: invalid JSON response", source=source) from exc

    if not isinstance(payload, dict):
        raise RetrievalError(f"{source}: unexpected response shape", source=source)

    errors = payload.get("errors")
    if errors:
        messages = "; ".join(str((err or {}).get("message", err)) for err in errors)
        raise RetrievalError(f"{source}: {messages}", source=source)

    data = payload.get("data")
    if not isinstance(data, dict):
        raise RetrievalError(f"{source}: expected 'data' object, got {type(data).__name__}", source=source)
    return data


def user_node(data: dict[str, Any], username: str, source: str) -> dict[str, Any]:
    user = data.get("user")
    if not isinstance(user, dict):
        raise RetrievalError(f"{source}: user not found: {username}", source=source)
    return user
