"""Key routing between the repository list and the README viewer."""

from __future__ import annotations

from enum import Enum

from ghdash.models import Focus

QUIT_KEYS = frozenset({"q", "ctrl+c"})
TOGGLE_KEYS = frozenset({"esc", "left", "h", "right", "l"})


class Route(Enum):
    QUIT = "quit"
    TOGGLE = "toggle"
    LIST = "list"
    DETAIL = "detail"


def toggle(focus: Focus) -> Focus:
    return Focus.DETAIL if focus is Focus.LIST else Focus.LIST


def route(focus: Focus, key: str) -> tuple[Route, Focus]:
    """Decide who handles ``key`` and which pane is focused afterwards.

    Quit wins regardless of focus, toggle keys swap focus, and every other
    key goes to exactly one pane: the one currently focused.
    """
    if key in QUIT_KEYS:
        return Route.QUIT, focus
    if key in TOGGLE_KEYS:
        return Route.TOGGLE, toggle(focus)
    if focus is Focus.LIST:
        return Route.LIST, focus
    return Route.DETAIL, focus
