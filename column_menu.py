import curses
from typing import Callable, Optional


class ColumnMenu:
    """Checkbox list of columns with a grab/move/drop reorder gesture.

    Space toggles the highlighted column. ``m`` grabs it, j/k carry it and a
    second ``m`` drops it, which reaches the controller as one
    ``reorder(source, destination)`` call. Esc while carrying puts it back.
    """

    def __init__(self, controller, set_status_cb: Callable[[str, int], None]):
        self.controller = controller
        self._set_status = set_status_cb
        self.visible = False
        self.win = None
        self.cursor = 0
        self.scroll = 0
        self.drag_source: Optional[int] = None

    def open(self, win):
        if not self.controller.config.column_toggle_enabled:
            self._set_status("Column toggling is disabled", 3)
            return
        if not self.controller.columns:
            self._set_status("No columns yet", 3)
            return
        self.win = win
        self.visible = True
        self.cursor = 0
        self.scroll = 0
        self.drag_source = None

    def close(self):
        self.visible = False
        self.win = None
        self.drag_source = None

    @property
    def dragging(self) -> bool:
        return self.drag_source is not None

    def handle_key(self, ch):
        if not self.visible or ch == -1:
            return

        n = len(self.controller.columns)
        if n == 0:
            self.close()
            return
        self.cursor = max(0, min(self.cursor, n - 1))

        if ch == 27:  # Esc
            if self.dragging:
                self.cursor = self.drag_source
                self.drag_source = None
                return
            self.close()
            return

        if ch in (ord("q"), ord("c")) and not self.dragging:
            self.close()
            return

        if ch in (ord("j"), curses.KEY_DOWN):
            self.cursor = min(n - 1, self.cursor + 1)
            return

        if ch in (ord("k"), curses.KEY_UP):
            self.cursor = max(0, self.cursor - 1)
            return

        if ch == ord("m"):
            if self.dragging:
                source, self.drag_source = self.drag_source, None
                if source != self.cursor:
                    self.controller.reorder(source, self.cursor)
            else:
                self.drag_source = self.cursor
            return

        if ch in (ord(" "), 10, 13) and not self.dragging:
            col = self.controller.columns[self.cursor]
            self.controller.toggle_visibility(col.key)

    def preview(self):
        """Column order as displayed, with a carried column at the cursor."""
        columns = list(self.controller.columns)
        if self.dragging and 0 <= self.drag_source < len(columns):
            item = columns.pop(self.drag_source)
            columns.insert(min(self.cursor, len(columns)), item)
        return columns

    def lines(self):
        out = []
        for idx, col in enumerate(self.preview()):
            mark = "x" if col.visible else " "
            handle = "≡"
            if self.dragging and idx == self.cursor:
                handle = "»"
            out.append(f"{handle} [{mark}] {col.label}")
        return out

    def draw(self):
        if not self.visible or not self.win:
            return

        win = self.win
        win.erase()
        h, w = win.getmaxyx()
        try:
            win.box()
            win.addnstr(0, 2, " Columns ", max(1, w - 4))
        except curses.error:
            pass

        max_visible = max(0, h - 2)
        if self.cursor < self.scroll:
            self.scroll = self.cursor
        elif max_visible and self.cursor >= self.scroll + max_visible:
            self.scroll = self.cursor - max_visible + 1

        lines = self.lines()
        for i, line in enumerate(lines[self.scroll : self.scroll + max_visible]):
            idx = self.scroll + i
            attr = curses.A_REVERSE if idx == self.cursor else curses.A_NORMAL
            try:
                win.addnstr(1 + i, 1, line.ljust(max(1, w - 2)), max(1, w - 2), attr)
            except curses.error:
                pass

        win.refresh()
