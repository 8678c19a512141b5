"""Shared model contracts for dashboard data flow."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Union

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class ActivityRecord:
    count: int
    month_index: int
    weekday_index: int

    def to_dict(self) -> dict[str, Any]:
        return {"count": self.count, "month": self.month_index, "weekday": self.weekday_index}


# Seven weekday rows (Sunday first), each chronological.
CalendarMatrix = tuple[tuple[ActivityRecord, ...], ...]


@dataclass(frozen=True)
class RepositoryEntry:
    name: str
    description: str
    url: str
    primary_language: str
    star_count: int
    fork_count: int
    readme_text: str
    last_updated: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "primary_language": self.primary_language,
            "star_count": self.star_count,
            "fork_count": self.fork_count,
            "has_readme": bool(self.readme_text),
            "last_updated": self.last_updated.isoformat(),
        }


@dataclass
class FetchResult:
    """Outcome of one fetch cycle, before it is folded into the dashboard.

    Each slot holds either the fetched value or the exception that the
    worker raised. ``first_error`` is the first failure observed by the join.
    """

    activity: CalendarMatrix | BaseException | None = None
    repositories: tuple[RepositoryEntry, ...] | BaseException | None = None
    first_error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return (
            self.first_error is None
            and self.activity is not None
            and self.repositories is not None
        )


class Focus(Enum):
    LIST = "list"
    DETAIL = "detail"


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Ready:
    matrix: CalendarMatrix
    repositories: tuple[RepositoryEntry, ...]
    calendar: str
    selected_index: int = 0
    focus: Focus = Focus.LIST
    rendered_detail: str = ""


DashboardState = Union[Loading, Ready]
