"""Panel rendering helpers."""

from __future__ import annotations

from rich import box
from rich.panel import Panel
from rich.text import Text

FOCUS_BORDER = {
    True: "bright_magenta",
    False: "blue",
}


def border_for(focused: bool) -> str:
    return FOCUS_BORDER[bool(focused)]


def box_for(focused: bool) -> box.Box:
    return box.HEAVY if focused else box.SQUARE


def empty_panel(title: str, message: str = "No data") -> Panel:
    return Panel(Text(message, style="dim"), title=f"[bold]{title}[/bold]", border_style="blue")


def pane(renderable, title: str, focused: bool, subtitle: str | None = None) -> Panel:
    return Panel(
        renderable,
        title=f"[bold]{title}[/bold]",
        subtitle=subtitle,
        border_style=border_for(focused),
        box=box_for(focused),
        padding=(0, 1),
    )
