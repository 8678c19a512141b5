from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from ghdash.calendar_grid import bucket, render as render_grid  # noqa: E402
from ghdash.models import ActivityRecord, Focus, RepositoryEntry  # noqa: E402
from ghdash.panels.contributions import render as render_calendar  # noqa: E402
from ghdash.panels.footer import render as render_footer  # noqa: E402
from ghdash.panels.loading import render as render_loading  # noqa: E402
from ghdash.panels.readme import markdown_lines, render as render_readme  # noqa: E402
from ghdash.panels.repositories import repository_row, render as render_repositories  # noqa: E402
from ghdash.panes import DetailViewer  # noqa: E402

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _entry(name: str, days_old: int) -> RepositoryEntry:
    return RepositoryEntry(
        name=name,
        description=f"{name} description",
        url=f"https://github.com/octocat/{name}",
        primary_language="Rust",
        star_count=42,
        fork_count=2,
        readme_text="",
        last_updated=NOW - timedelta(days=days_old),
    )


def _plain(renderable, width: int = 100) -> str:
    console = Console(width=width, force_terminal=False, color_system=None)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class RepositoryPanelTests(unittest.TestCase):
    def test_columns_and_row(self):
        entries = [_entry("alpha", 400), _entry("beta", 3)]
        panel = render_repositories(entries, range(0, 2), 1, True, NOW)
        headers = [column.header for column in panel.renderable.columns]
        self.assertEqual(headers, ["Name", "Description", "Language", "Updated", "Stars"])
        self.assertEqual(repository_row(entries[0], NOW), ("alpha", "alpha description", "Rust", "1y ago", "42"))
        self.assertEqual(panel.subtitle, "2/2")

    def test_only_visible_rows_are_rendered(self):
        entries = [_entry(f"repo-{i}", i) for i in range(20)]
        panel = render_repositories(entries, range(5, 8), 6, False, NOW)
        self.assertEqual(panel.renderable.row_count, 3)
        output = _plain(panel)
        self.assertIn("repo-5", output)
        self.assertNotIn("repo-9", output)

    def test_focus_changes_border(self):
        focused = render_repositories([_entry("a", 1)], range(1), 0, True, NOW)
        unfocused = render_repositories([_entry("a", 1)], range(1), 0, False, NOW)
        self.assertIs(focused.box, box.HEAVY)
        self.assertIsNot(unfocused.box, box.HEAVY)

    def test_empty_list(self):
        output = _plain(render_repositories([], range(0), 0, True, NOW))
        self.assertIn("No repositories", output)


class ReadmePanelTests(unittest.TestCase):
    def test_markdown_lines(self):
        lines = markdown_lines("# Title\n\nSome body text.", 40)
        joined = Text.from_ansi("\n".join(lines)).plain
        self.assertIn("Title", joined)
        self.assertIn("Some body text.", joined)

    def test_render_slices_from_offset(self):
        viewer = DetailViewer()
        viewer.set_content("\n\n".join(f"paragraph {i}" for i in range(30)))
        panel = render_readme(viewer, True, 40, 5)
        self.assertIsInstance(panel, Panel)
        self.assertEqual(viewer.height, 5)
        self.assertGreater(viewer.line_count, 5)
        self.assertIn("paragraph 0", panel.renderable.plain)

        viewer.handle_key("end")
        panel = render_readme(viewer, True, 40, 5)
        self.assertIn("paragraph 29", panel.renderable.plain)
        self.assertNotIn("paragraph 0\n", panel.renderable.plain)
        self.assertEqual(panel.subtitle, "100%")

    def test_empty_content(self):
        viewer = DetailViewer()
        panel = render_readme(viewer, False, 40, 5)
        self.assertEqual(panel.renderable.plain, "")


class MiscPanelTests(unittest.TestCase):
    def test_calendar_panel(self):
        matrix = bucket([ActivityRecord(2, 0, d) for d in range(7)] * 3)
        output = _plain(render_calendar(render_grid(matrix, True), "octocat", 42), width=120)
        self.assertIn("octocat: 42 contributions", output)
        self.assertIn("Mon", output)
        self.assertIn("■", output)

    def test_empty_calendar_panel(self):
        output = _plain(render_calendar("", "octocat", 0))
        self.assertIn("No contribution activity", output)

    def test_loading_panel(self):
        output = _plain(render_loading("octocat"))
        self.assertIn("Repositories loading", output)

    def test_footer(self):
        footer = render_footer(Focus.DETAIL, "https://github.com/octocat/a")
        self.assertIn("DETAIL", footer.plain)
        self.assertIn("back to list", footer.plain)
        self.assertIn("https://github.com/octocat/a", footer.plain)


if __name__ == "__main__":
    unittest.main()
