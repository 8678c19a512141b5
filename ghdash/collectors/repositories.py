"""Repository list collector, README text included."""

from __future__ import annotations

from typing import Any

from ghdash.collectors import graphql_query, user_node
from ghdash.config import DashboardConfig
from ghdash.errors import RetrievalError
from ghdash.formatting import parse_iso_timestamp
from ghdash.models import RepositoryEntry

SOURCE = "repositories"

QUERY = """
query($username: String!, $limit: Int!) {
    user(login: $username) {
        repositories(first: $limit) {
            nodes {
                name
                description
                url
                stargazerCount
                forkCount
                updatedAt
                primaryLanguage {
                    name
                }
                object(expression: "HEAD:README.md") {
                    ... on Blob {
                        text
                    }
                }
            }
        }
    }
}
"""


def _entry_from_node(node: dict[str, Any]) -> RepositoryEntry:
    updated = parse_iso_timestamp(node.get("updatedAt"))
    if updated is None:
        raise ValueError(f"bad updatedAt for {node.get('name')!r}: {node.get('updatedAt')!r}")
    return RepositoryEntry(
        name=str(node["name"]),
        description=node.get("description") or "",
        url=node.get("url") or "",
        primary_language=(node.get("primaryLanguage") or {}).get("name") or "",
        star_count=int(node.get("stargazerCount") or 0),
        fork_count=int(node.get("forkCount") or 0),
        readme_text=(node.get("object") or {}).get("text") or "",
        last_updated=updated,
    )


def sort_repositories(entries: list[RepositoryEntry]) -> list[RepositoryEntry]:
    # sorted() is stable, so ties keep fetch order.
    return sorted(entries, key=lambda entry: entry.last_updated, reverse=True)


def parse_repositories(data: dict[str, Any], username: str = "") -> list[RepositoryEntry]:
    user = user_node(data, username, SOURCE)
    try:
        nodes = user["repositories"]["nodes"] or []
        entries = [_entry_from_node(node) for node in nodes if node]
    except (KeyError, TypeError, ValueError) as exc:
        raise RetrievalError(f"{SOURCE}: malformed repository payload: {exc!r}", source=SOURCE) from exc
    return sort_repositories(entries)


def collect(config: DashboardConfig, username: str | None = None) -> list[RepositoryEntry]:
    login = username or config.username
    variables = {"username": login, "limit": config.repository_limit}
    data = graphql_query(config, QUERY, variables, SOURCE)
    return parse_repositories(data, login)
