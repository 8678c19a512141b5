"""Loading screen renderer."""

from __future__ import annotations

from rich.align import Align
from rich.panel import Panel
from rich.spinner import Spinner
from rich.text import Text


def render(username: str) -> Panel:
    spinner = Spinner("dots", text=Text(" Repositories loading ...", style="grey82"), style="slate_blue1")
    return Panel(
        Align.left(spinner),
        title=f"[bold]GitHub Dashboard: {username}[/bold]",
        border_style="blue",
    )
