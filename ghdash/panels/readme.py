"""README viewer panel renderer."""

from __future__ import annotations

from functools import lru_cache

from rich.console import Console
from rich.markdown import Markdown
from rich.text import Text

from ghdash.panels import pane
from ghdash.panes import DetailViewer


@lru_cache(maxsize=32)
def markdown_lines(source: str, width: int, code_theme: str = "monokai") -> tuple[str, ...]:
    """Render markdown at ``width`` columns into ANSI-styled lines."""
    console = Console(
        width=max(10, width),
        force_terminal=True,
        color_system="truecolor",
        legacy_windows=False,
    )
    with console.capture() as capture:
        console.print(Markdown(source, code_theme=code_theme))
    return tuple(capture.get().rstrip("\n").split("\n"))


def render(viewer: DetailViewer, focused: bool, width: int, height: int, code_theme: str = "monokai"):
    lines = markdown_lines(viewer.content, width, code_theme) if viewer.content else ()
    viewer.set_geometry(len(lines), height)

    visible = lines[viewer.offset : viewer.offset + viewer.height]
    body = Text("\n").join(Text.from_ansi(line, no_wrap=True, overflow="crop") for line in visible)

    subtitle = None
    if viewer.max_offset:
        percent = int(100 * viewer.offset / viewer.max_offset)
        subtitle = f"{percent}%"
    return pane(body, "README", focused, subtitle=subtitle)
