"""Contribution calendar collector."""

from __future__ import annotations

from datetime import date
from typing import Any

from ghdash.collectors import graphql_query, user_node
from ghdash.config import DashboardConfig
from ghdash.errors import RetrievalError
from ghdash.models import ActivityRecord

SOURCE = "contributions"

QUERY = """
query($username: String!) {
    user(login: $username) {
        contributionsCollection {
            contributionCalendar {
                totalContributions
                weeks {
                    contributionDays {
                        contributionCount
                        date
                        weekday
                    }
                }
            }
        }
    }
}
"""


def parse_contributions(data: dict[str, Any], username: str = "") -> list[ActivityRecord]:
    user = user_node(data, username, SOURCE)
    try:
        weeks = user["contributionsCollection"]["contributionCalendar"]["weeks"]
        records = []
        for week in weeks:
            for day in week["contributionDays"]:
                parsed = date.fromisoformat(day["date"])
                weekday = int(day["weekday"])
                if not 0 <= weekday <= 6:
                    raise ValueError(f"weekday out of range: {weekday}")
                records.append(
                    ActivityRecord(
                        count=max(0, int(day["contributionCount"])),
                        month_index=parsed.month - 1,
                        weekday_index=weekday,
                    )
                )
    except (KeyError, TypeError, ValueError) as exc:
        raise RetrievalError(f"{SOURCE}: malformed calendar payload: {exc!r}", source=SOURCE) from exc
    return records


def collect(config: DashboardConfig, username: str | None = None) -> list[ActivityRecord]:
    login = username or config.username
    data = graphql_query(config, QUERY, {"username": login}, SOURCE)
    return parse_contributions(data, login)
