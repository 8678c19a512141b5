"""Key help footer renderer."""

from __future__ import annotations

from rich.text import Text

from ghdash.models import Focus

HELP = {
    Focus.LIST: "↑/↓ select  pgup/pgdn page  ←/→ read README  q quit",
    Focus.DETAIL: "↑/↓ scroll  pgup/pgdn page  ←/→ back to list  q quit",
}


def render(focus: Focus, url: str = "") -> Text:
    text = Text.assemble(
        (f" {focus.value.upper()} ", "bold black on bright_magenta"),
        " ",
        (HELP[focus], "dim"),
        no_wrap=True,
        overflow="ellipsis",
    )
    if url:
        text.append("  ")
        text.append(url, style="underline cyan")
    return text
