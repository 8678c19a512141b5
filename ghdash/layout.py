"""Responsive layout mode selection and pane geometry by terminal size."""

from __future__ import annotations

from dataclasses import dataclass

from ghdash import calendar_grid

# Calendar lines plus panel borders.
CALENDAR_BLOCK = calendar_grid.HEIGHT + 2
FOOTER_HEIGHT = 1
MIN_BODY_HEIGHT = 6

# (list ratio, README ratio) for side-by-side modes.
SPLIT_RATIOS = {
    "medium": (1, 1),
    "wide": (2, 3),
}


@dataclass(frozen=True)
class Geometry:
    mode: str
    body_height: int
    list_rows: int
    detail_width: int
    detail_height: int


def select_layout_mode(width: int) -> str:
    if width < 100:
        return "narrow"
    if width < 160:
        return "medium"
    return "wide"


def compute_geometry(width: int, height: int) -> Geometry:
    mode = select_layout_mode(width)
    body_height = max(MIN_BODY_HEIGHT, height - CALENDAR_BLOCK - FOOTER_HEIGHT)

    if mode == "narrow":
        list_height = body_height // 2
        detail_height = body_height - list_height
        detail_width = width
    else:
        list_ratio, detail_ratio = SPLIT_RATIOS[mode]
        list_height = detail_height = body_height
        detail_width = width * detail_ratio // (list_ratio + detail_ratio)

    return Geometry(
        mode=mode,
        body_height=body_height,
        # borders and the table header row
        list_rows=max(1, list_height - 3),
        # borders and horizontal padding
        detail_width=max(10, detail_width - 4),
        detail_height=max(1, detail_height - 2),
    )
