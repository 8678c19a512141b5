from __future__ import annotations

import os
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from ghdash.keys import decode_keys, poll_keys, terminal_input  # noqa: E402
from ghdash.panes import DetailViewer, ListNavigator  # noqa: E402


class DecodeTests(unittest.TestCase):
    def test_arrows_and_letters(self):
        self.assertEqual(decode_keys("\x1b[A\x1b[Bjq"), ["up", "down", "j", "q"])
        self.assertEqual(decode_keys("\x1bOC\x1bOD"), ["right", "left"])

    def test_paging_keys(self):
        self.assertEqual(decode_keys("\x1b[5~\x1b[6~\x1b[H\x1b[F"), ["pgup", "pgdown", "home", "end"])

    def test_lone_escape(self):
        self.assertEqual(decode_keys("\x1b"), ["esc"])
        self.assertEqual(decode_keys("\x1bq"), ["esc", "q"])

    def test_control_characters(self):
        self.assertEqual(decode_keys("\x03\r "), ["ctrl+c", "enter", "space"])

    def test_unknown_csi_passes_through_whole(self):
        self.assertEqual(decode_keys("\x1b[Zj"), ["\x1b[Z", "j"])


class PollTests(unittest.TestCase):
    def test_poll_reads_pipe(self):
        read_fd, write_fd = os.pipe()
        self.addCleanup(os.close, read_fd)
        self.addCleanup(os.close, write_fd)
        self.assertEqual(poll_keys(read_fd, 0), [])
        os.write(write_fd, b"\x1b[Bk")
        self.assertEqual(poll_keys(read_fd, 1), ["down", "k"])

    def test_terminal_input_without_tty(self):
        read_fd, write_fd = os.pipe()
        self.addCleanup(os.close, read_fd)
        self.addCleanup(os.close, write_fd)
        with terminal_input(read_fd) as has_input:
            self.assertFalse(has_input)
        with terminal_input(None) as has_input:
            self.assertFalse(has_input)


class ListNavigatorTests(unittest.TestCase):
    def test_moves_and_reports_change(self):
        nav = ListNavigator(5, page_size=2)
        self.assertTrue(nav.handle_key("down"))
        self.assertFalse(nav.handle_key("x"))
        self.assertTrue(nav.handle_key("pgdown"))
        self.assertEqual(nav.cursor, 3)
        self.assertTrue(nav.handle_key("G"))
        self.assertEqual(nav.cursor, 4)
        self.assertFalse(nav.handle_key("down"))

    def test_window_follows_cursor(self):
        nav = ListNavigator(10, page_size=3)
        nav.move_to(5)
        self.assertEqual(list(nav.visible_range()), [3, 4, 5])
        nav.move_to(1)
        self.assertEqual(list(nav.visible_range()), [1, 2, 3])
        nav.resize(20)
        self.assertEqual(list(nav.visible_range()), list(range(10)))

    def test_empty(self):
        nav = ListNavigator(0)
        self.assertFalse(nav.handle_key("down"))
        self.assertFalse(nav.handle_key("end"))
        self.assertEqual(list(nav.visible_range()), [])


class DetailViewerTests(unittest.TestCase):
    def test_scroll_is_bounded_by_content(self):
        viewer = DetailViewer()
        viewer.set_content("# text")
        viewer.set_geometry(line_count=25, height=10)
        self.assertTrue(viewer.handle_key("pgdown"))
        self.assertEqual(viewer.offset, 10)
        viewer.handle_key("pgdown")
        self.assertEqual(viewer.offset, 15)
        self.assertFalse(viewer.handle_key("j"))
        viewer.handle_key("g")
        self.assertEqual(viewer.offset, 0)

    def test_new_content_resets_offset(self):
        viewer = DetailViewer()
        viewer.set_geometry(line_count=30, height=5)
        viewer.handle_key("end")
        self.assertEqual(viewer.offset, 25)
        viewer.set_content("other")
        self.assertEqual(viewer.offset, 0)

    def test_short_content_does_not_scroll(self):
        viewer = DetailViewer()
        viewer.set_geometry(line_count=3, height=10)
        self.assertFalse(viewer.handle_key("down"))


if __name__ == "__main__":
    unittest.main()
