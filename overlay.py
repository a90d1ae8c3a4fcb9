import curses
from typing import List


class OverlayView:
    def __init__(self):
        self.visible = False
        self.lines: List[str] = []
        self.scroll = 0
        self.win = None

    def open(self, lines: List[str], win):
        if not isinstance(lines, list):
            lines = list(lines or [])
        self.lines = lines
        self.scroll = 0
        self.win = win
        self.visible = True

    def close(self):
        self.visible = False
        self.lines = []
        self.scroll = 0
        self.win = None

    def handle_key(self, ch):
        if not self.visible or self.win is None:
            return
        if ch == -1:
            return

        h, _ = self.win.getmaxyx()
        max_scroll = max(0, len(self.lines) - h)

        # close
        if ch in (27, ord("q"), 10, 13, curses.KEY_ENTER, ord("?")):
            self.close()
            return

        if ch in (ord("j"), curses.KEY_DOWN):
            self.scroll = min(max_scroll, self.scroll + 1)
        elif ch in (ord("k"), curses.KEY_UP):
            self.scroll = max(0, self.scroll - 1)
        elif ch == curses.KEY_HOME:
            self.scroll = 0
        elif ch == curses.KEY_END:
            self.scroll = max_scroll

    def draw(self):
        if not self.visible or not self.win:
            return

        win = self.win
        win.erase()
        h, w = win.getmaxyx()

        for idx, line in enumerate(self.lines[self.scroll : self.scroll + h]):
            try:
                win.addnstr(idx, 0, line.ljust(w - 1), w - 1)
            except curses.error:
                pass

        win.refresh()
