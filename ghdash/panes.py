"""Cursor and scroll state for the two interactive panes."""

from __future__ import annotations

UP_KEYS = frozenset({"up", "k"})
DOWN_KEYS = frozenset({"down", "j"})
PAGE_UP_KEYS = frozenset({"pgup", "b"})
PAGE_DOWN_KEYS = frozenset({"pgdown", "f", "space"})
HOME_KEYS = frozenset({"home", "g"})
END_KEYS = frozenset({"end", "G"})


def _step(key: str, page: int) -> int | None:
    if key in UP_KEYS:
        return -1
    if key in DOWN_KEYS:
        return 1
    if key in PAGE_UP_KEYS:
        return -page
    if key in PAGE_DOWN_KEYS:
        return page
    return None


class ListNavigator:
    """Selection cursor over a fixed number of rows."""

    def __init__(self, size: int, page_size: int = 10):
        self.size = max(0, size)
        self.page_size = max(1, page_size)
        self.cursor = 0
        self.top = 0

    def resize(self, page_size: int) -> None:
        self.page_size = max(1, page_size)
        self._follow_cursor()

    def move_to(self, index: int) -> None:
        if self.size == 0:
            self.cursor = 0
            return
        self.cursor = max(0, min(self.size - 1, index))
        self._follow_cursor()

    def handle_key(self, key: str) -> bool:
        """Apply a navigation key; return True when the cursor moved."""
        before = self.cursor
        if key in HOME_KEYS:
            self.move_to(0)
        elif key in END_KEYS:
            self.move_to(self.size - 1)
        else:
            step = _step(key, self.page_size)
            if step is not None:
                self.move_to(self.cursor + step)
        return self.cursor != before

    def _follow_cursor(self) -> None:
        if self.cursor < self.top:
            self.top = self.cursor
        elif self.cursor >= self.top + self.page_size:
            self.top = self.cursor - self.page_size + 1
        self.top = max(0, min(self.top, max(0, self.size - self.page_size)))

    def visible_range(self) -> range:
        return range(self.top, min(self.size, self.top + self.page_size))


class DetailViewer:
    """Scroll offset over rendered README lines."""

    def __init__(self, height: int = 10):
        self.content = ""
        self.offset = 0
        self.height = max(1, height)
        self.line_count = 0

    def set_content(self, content: str) -> None:
        self.content = content
        self.offset = 0

    def set_geometry(self, line_count: int, height: int) -> None:
        self.line_count = max(0, line_count)
        self.height = max(1, height)
        self.offset = min(self.offset, self.max_offset)

    @property
    def max_offset(self) -> int:
        return max(0, self.line_count - self.height)

    def handle_key(self, key: str) -> bool:
        """Apply a scroll key; return True when the offset changed."""
        before = self.offset
        if key in HOME_KEYS:
            self.offset = 0
        elif key in END_KEYS:
            self.offset = self.max_offset
        else:
            step = _step(key, self.height)
            if step is not None:
                self.offset = max(0, min(self.max_offset, self.offset + step))
        return self.offset != before
