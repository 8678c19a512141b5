"""Repository list panel renderer."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from rich.table import Table

from ghdash.formatting import time_ago
from ghdash.models import RepositoryEntry
from ghdash.panels import pane

COLUMNS = (
    ("Name", 20),
    ("Description", 30),
    ("Language", 12),
    ("Updated", 8),
    ("Stars", 5),
)


def repository_row(entry: RepositoryEntry, now: datetime | None = None) -> tuple[str, str, str, str, str]:
    return (
        entry.name,
        entry.description,
        entry.primary_language,
        time_ago(entry.last_updated, now),
        str(entry.star_count),
    )


def build_table(
    repositories: Sequence[RepositoryEntry],
    rows: range | None = None,
    selected: int | None = None,
    now: datetime | None = None,
) -> Table:
    table = Table(box=None, expand=True, header_style="bold", pad_edge=False)
    for title, width in COLUMNS:
        justify = "right" if title == "Stars" else "left"
        table.add_column(title, max_width=width, no_wrap=True, overflow="ellipsis", justify=justify)

    if not repositories:
        table.add_row("none", "No repositories", "-", "-", "-")
        return table

    for index in rows if rows is not None else range(len(repositories)):
        style = "bold bright_white on purple4" if index == selected else None
        table.add_row(*repository_row(repositories[index], now), style=style)
    return table


def render(
    repositories: Sequence[RepositoryEntry],
    rows: range,
    selected: int,
    focused: bool,
    now: datetime | None = None,
):
    table = build_table(repositories, rows, selected, now)
    position = f"{selected + 1}/{len(repositories)}" if repositories else "0/0"
    return pane(table, f"Repositories ({len(repositories)})", focused, subtitle=position)
