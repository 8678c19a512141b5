"""Dashboard state machine: loading, the fetch join, and key handling once ready."""

from __future__ import annotations

import logging
from dataclasses import replace

from ghdash import calendar_grid
from ghdash.fetch import FetchCoordinator, FetchCycle, unwrap
from ghdash.focus import QUIT_KEYS, Route, route
from ghdash.models import DashboardState, FetchResult, Loading, Ready, RepositoryEntry
from ghdash.panes import DetailViewer, ListNavigator

logger = logging.getLogger(__name__)

NO_README = "# No README available\n\nThis repository doesn't have a README file."


def resolve_detail(entry: RepositoryEntry) -> str:
    if not entry.readme_text:
        return NO_README
    return entry.readme_text


class DashboardController:
    """Owns the dashboard state; every mutation happens through its methods.

    The controller is driven from a single loop: ``start`` launches the fetch
    cycle, ``poll`` folds its result once both workers have reported, and
    ``handle_key`` routes input. A failed fetch raises ``RetrievalError`` out
    of ``poll`` and leaves the state in ``Loading``.
    """

    def __init__(self, coordinator: FetchCoordinator, username: str, show_weekday_labels: bool = True):
        self.coordinator = coordinator
        self.username = username
        self.show_weekday_labels = show_weekday_labels
        self.state: DashboardState = Loading()
        self.running = True
        self.list_pane = ListNavigator(0)
        self.detail_pane = DetailViewer()
        self._cycle: FetchCycle | None = None

    @property
    def ready(self) -> bool:
        return isinstance(self.state, Ready)

    def start(self) -> None:
        if self._cycle is not None or self.ready:
            raise RuntimeError("fetch cycle already started")
        self._cycle = self.coordinator.start(self.username)

    def poll(self) -> bool:
        """Fold a finished fetch into the state; return True on transition."""
        if self._cycle is None or self.ready:
            return False
        result = self._cycle.poll()
        if result is None:
            return False
        self._cycle = None
        self.apply(result)
        return True

    def apply(self, result: FetchResult) -> Ready:
        if self.ready:
            raise RuntimeError("fetch result already applied")

        matrix, repositories = unwrap(result)
        rendered_calendar = calendar_grid.render(matrix, self.show_weekday_labels)
        detail = resolve_detail(repositories[0]) if repositories else ""

        self.list_pane = ListNavigator(len(repositories), self.list_pane.page_size)
        self.detail_pane.set_content(detail)
        self.state = Ready(
            matrix=matrix,
            repositories=repositories,
            calendar=rendered_calendar,
            rendered_detail=detail,
        )
        logger.info(
            "dashboard ready: %d repositories, %d contributions",
            len(repositories),
            calendar_grid.total_contributions(matrix),
        )
        return self.state

    def select(self, index: int) -> None:
        state = self.state
        if not isinstance(state, Ready) or not state.repositories:
            return
        index = max(0, min(len(state.repositories) - 1, index))
        detail = resolve_detail(state.repositories[index])
        self.list_pane.move_to(index)
        self.state = replace(state, selected_index=index, rendered_detail=detail)
        self.detail_pane.set_content(detail)

    def selected_repository(self) -> RepositoryEntry | None:
        state = self.state
        if not isinstance(state, Ready) or not state.repositories:
            return None
        return state.repositories[state.selected_index]

    def quit(self) -> None:
        logger.info("quit requested")
        self.running = False

    def handle_key(self, key: str) -> None:
        state = self.state
        if not isinstance(state, Ready):
            if key in QUIT_KEYS:
                self.quit()
            return

        action, focus = route(state.focus, key)
        if action is Route.QUIT:
            self.quit()
        elif action is Route.TOGGLE:
            self.state = replace(state, focus=focus)
        elif action is Route.LIST:
            if self.list_pane.handle_key(key):
                self.select(self.list_pane.cursor)
        else:
            self.detail_pane.handle_key(key)
