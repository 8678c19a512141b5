"""Contribution calendar: weekday bucketing and the colored text grid."""

from __future__ import annotations

from typing import Iterable

from ghdash.models import MONTH_ABBREVIATIONS, ActivityRecord, CalendarMatrix

WEEKDAYS = 7
LABEL_WIDTH = 5
WEEKDAY_LABELS = {1: "Mon", 3: "Wed", 5: "Fri"}

EMPTY_GLYPH = "□"
FULL_GLYPH = "■"

# GitHub contribution greens, 24-bit foreground escapes indexed by tier.
TIER_COLORS = (
    "",
    "\x1b[38;2;155;233;168m",
    "\x1b[38;2;64;196;99m",
    "\x1b[38;2;47;182;125m",
    "\x1b[38;2;26;147;111m",
)
RESET = "\x1b[0m"

# Height of the rendered calendar: month header plus one line per weekday.
HEIGHT = WEEKDAYS + 1


def bucket(records: Iterable[ActivityRecord]) -> CalendarMatrix:
    rows: list[list[ActivityRecord]] = [[] for _ in range(WEEKDAYS)]
    for record in records:
        rows[record.weekday_index].append(record)
    return tuple(tuple(row) for row in rows)


def tier(count: int) -> int:
    if count <= 0:
        return 0
    if count == 1:
        return 1
    if count <= 3:
        return 2
    if count <= 5:
        return 3
    return 4


def _month_label(month_index: int, span: int) -> str:
    # Two characters per day column; a label needs at least two columns.
    if span < 2:
        return " " * (2 * span)
    return MONTH_ABBREVIATIONS[month_index] + " " * (2 * span - 3)


def format_month_header(matrix: CalendarMatrix) -> str:
    """Build the month label line from the first weekday row.

    Row 0 is the reference row for month boundaries. Each label is written
    when the month changes, naming the month that just ended and padded to
    cover the columns it spanned. The final month gets a label only when it
    spans at least two columns.
    """
    if not matrix or not matrix[0]:
        return ""

    row = matrix[0]
    last_month = row[0].month_index
    last_position = 0
    parts: list[str] = []
    for index, record in enumerate(row):
        if record.month_index == last_month:
            continue
        parts.append(_month_label(last_month, index - last_position))
        last_month = record.month_index
        last_position = index

    remaining = len(row) - last_position
    if remaining >= 2:
        parts.append(_month_label(last_month, remaining))
    return "".join(parts)


def format_weekday_label(weekday_index: int) -> str:
    return WEEKDAY_LABELS.get(weekday_index, "").ljust(LABEL_WIDTH)


def format_cell(record: ActivityRecord) -> str:
    level = tier(record.count)
    if level == 0:
        return EMPTY_GLYPH
    return f"{TIER_COLORS[level]}{FULL_GLYPH}{RESET}"


def render(matrix: CalendarMatrix, show_weekday_labels: bool = True) -> str:
    if not any(matrix):
        return ""

    header = format_month_header(matrix)
    if show_weekday_labels:
        header = format_weekday_label(0) + header

    lines = [header]
    for weekday_index, row in enumerate(matrix):
        line = "".join(format_cell(record) + " " for record in row)
        if show_weekday_labels:
            line = format_weekday_label(weekday_index) + line
        lines.append(line)
    return "\n".join(lines)


def total_contributions(matrix: CalendarMatrix) -> int:
    return sum(record.count for row in matrix for record in row)
