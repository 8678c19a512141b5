"""GitHub dashboard application entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from dataclasses import replace
from datetime import datetime, timezone
from functools import partial

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from ghdash import calendar_grid
from ghdash.collectors.contributions import collect as collect_contributions
from ghdash.collectors.repositories import collect as collect_repositories
from ghdash.config import MAX_REPOSITORIES, DashboardConfig, resolve_config
from ghdash.controller import DashboardController
from ghdash.errors import DashboardError
from ghdash.fetch import FetchCoordinator, unwrap
from ghdash.keys import poll_keys, terminal_input
from ghdash.layout import CALENDAR_BLOCK, FOOTER_HEIGHT, SPLIT_RATIOS, compute_geometry
from ghdash.models import CalendarMatrix, Focus, Loading, RepositoryEntry
from ghdash.panels.contributions import render as render_calendar
from ghdash.panels.footer import render as render_footer
from ghdash.panels.loading import render as render_loading
from ghdash.panels.readme import render as render_readme
from ghdash.panels.repositories import build_table
from ghdash.panels.repositories import render as render_repositories

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbosity: int, log_file: str | None = None, console: Console | None = None) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = RichHandler(console=console or Console(stderr=True), show_path=False)

    package_logger = logging.getLogger("ghdash")
    package_logger.setLevel(level)
    package_logger.handlers[:] = [handler]
    package_logger.propagate = False


def build_coordinator(config: DashboardConfig) -> FetchCoordinator:
    return FetchCoordinator(
        partial(collect_contributions, config),
        partial(collect_repositories, config),
    )


def render_dashboard(
    controller: DashboardController,
    config: DashboardConfig,
    width: int,
    height: int,
    now: datetime | None = None,
):
    state = controller.state
    if isinstance(state, Loading):
        return render_loading(controller.username)

    geometry = compute_geometry(width, height)
    controller.list_pane.resize(geometry.list_rows)
    list_focused = state.focus is Focus.LIST

    repositories = render_repositories(
        state.repositories,
        controller.list_pane.visible_range(),
        state.selected_index,
        list_focused,
        now,
    )
    readme = render_readme(
        controller.detail_pane,
        not list_focused,
        geometry.detail_width,
        geometry.detail_height,
        config.markdown_theme,
    )
    selected = controller.selected_repository()

    layout = Layout()
    layout.split_column(
        Layout(
            render_calendar(state.calendar, controller.username, calendar_grid.total_contributions(state.matrix)),
            name="calendar",
            size=CALENDAR_BLOCK,
        ),
        Layout(name="body"),
        Layout(render_footer(state.focus, selected.url if selected else ""), name="footer", size=FOOTER_HEIGHT),
    )

    if geometry.mode == "narrow":
        layout["body"].split_column(
            Layout(repositories, name="repositories"),
            Layout(readme, name="readme"),
        )
        return layout

    list_ratio, detail_ratio = SPLIT_RATIOS[geometry.mode]
    layout["body"].split_row(
        Layout(repositories, name="repositories", ratio=list_ratio),
        Layout(readme, name="readme", ratio=detail_ratio),
    )
    return layout


def _stdin_fd() -> int | None:
    try:
        return sys.stdin.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def run_live(controller: DashboardController, config: DashboardConfig, console: Console) -> int:
    """Drive the dashboard until quit.

    All state changes happen on this loop: fetch results are folded by
    ``controller.poll`` and keys are handled between paints. The screen is
    only rebuilt when something changed; Live's own refresh keeps the
    loading spinner moving.
    """
    fd = _stdin_fd()
    controller.start()
    with terminal_input(fd) as has_input:
        with Live(console=console, refresh_per_second=8, screen=True) as live:
            size = None
            dirty = True
            try:
                while controller.running:
                    if controller.poll():
                        dirty = True
                    if console.size != size:
                        size = console.size
                        dirty = True
                    if dirty:
                        live.update(render_dashboard(controller, config, size.width, size.height), refresh=True)
                        dirty = False

                    if not has_input:
                        time.sleep(config.poll_interval)
                        continue
                    for key in poll_keys(fd, config.poll_interval):
                        logger.debug("key %r", key)
                        controller.handle_key(key)
                        dirty = True
                        if not controller.running:
                            break
            except KeyboardInterrupt:
                controller.quit()
    return 0


def _fetch_once(coordinator: FetchCoordinator, config: DashboardConfig) -> tuple[CalendarMatrix, tuple[RepositoryEntry, ...]]:
    return unwrap(coordinator.fetch(config.username))


def print_snapshot(coordinator: FetchCoordinator, config: DashboardConfig, console: Console) -> int:
    matrix, repositories = _fetch_once(coordinator, config)
    rendered = calendar_grid.render(matrix, config.show_weekday_labels)
    console.print(render_calendar(rendered, config.username, calendar_grid.total_contributions(matrix)))
    console.print(
        Panel(
            build_table(repositories),
            title=f"[bold]Repositories ({len(repositories)})[/bold]",
            border_style="blue",
        )
    )
    return 0


def _json_output(config: DashboardConfig, matrix: CalendarMatrix, repositories: tuple[RepositoryEntry, ...]) -> str:
    payload = {
        "username": config.username,
        "collected_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "total_contributions": calendar_grid.total_contributions(matrix),
        "calendar": [[record.to_dict() for record in row] for row in matrix],
        "repositories": [entry.to_dict() for entry in repositories],
    }
    return json.dumps(payload, indent=2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gh-dashboard",
        description="GitHub contribution calendar and repository browser",
    )
    parser.add_argument("username", nargs="?", help="GitHub login to show")
    parser.add_argument("--config", help="Optional JSON config file (default: $GHDASH_CONFIG)")
    parser.add_argument("--snapshot", action="store_true", help="Print calendar and repositories once and exit")
    parser.add_argument("--json", action="store_true", help="Emit JSON payload")
    parser.add_argument("--no-weekday-labels", action="store_true", help="Hide Mon/Wed/Fri labels")
    parser.add_argument("--limit", type=int, help=f"Repository cap (1-{MAX_REPOSITORIES})")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log more (-vv for debug)")
    parser.add_argument("--log-file", help="Write logs to a file instead of stderr (use with the live view)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    err_console = Console(stderr=True)
    configure_logging(args.verbose, args.log_file, err_console)

    try:
        config = resolve_config(args.username, args.config)
        if args.limit is not None:
            config = replace(config, repository_limit=max(1, min(MAX_REPOSITORIES, args.limit)))
        if args.no_weekday_labels:
            config = replace(config, show_weekday_labels=False)

        coordinator = build_coordinator(config)
        try:
            if args.json:
                matrix, repositories = _fetch_once(coordinator, config)
                print(_json_output(config, matrix, repositories))
                return 0
            console = Console()
            if args.snapshot:
                return print_snapshot(coordinator, config, console)
            controller = DashboardController(coordinator, config.username, config.show_weekday_labels)
            return run_live(controller, config, console)
        finally:
            coordinator.close()
    except DashboardError as exc:
        logger.debug("fatal error", exc_info=True)
        err_console.print(f"[bold red]error:[/bold red] {escape(str(exc))}")
        return 1
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
