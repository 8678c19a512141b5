"""Contribution calendar panel renderer."""

from __future__ import annotations

from rich.align import Align
from rich.panel import Panel
from rich.text import Text

from ghdash.panels import empty_panel


def render(calendar_text: str, username: str, total: int) -> Panel:
    title = f"{username}: {total} contributions in the last year"
    if not calendar_text:
        return empty_panel(title, "No contribution activity")

    text = Text.from_ansi(calendar_text, no_wrap=True, overflow="crop")
    return Panel(
        Align.center(text),
        title=f"[bold]{title}[/bold]",
        border_style="green",
        padding=(0, 1),
    )
