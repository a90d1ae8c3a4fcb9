import curses


class ScreenLayout:
    def __init__(self, stdscr, show_filters=True, show_pager=True):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()

        # layout: title (1), filters (optional 1), table (main), pager (optional 1), status (1)
        self.title_h = 1
        self.filter_h = 1 if show_filters else 0
        self.pager_h = 1 if show_pager else 0
        self.status_h = 1

        chrome = self.title_h + self.filter_h + self.pager_h + self.status_h
        self.table_h = max(1, self.H - chrome)

        y = 0
        self.title_win = curses.newwin(self.title_h, self.W, y, 0)
        self.title_win.leaveok(True)
        y += self.title_h

        self.filter_win = None
        if self.filter_h:
            self.filter_win = curses.newwin(self.filter_h, self.W, y, 0)
            self.filter_win.leaveok(True)
            y += self.filter_h

        self.table_y = y
        self.table_win = curses.newwin(self.table_h, self.W, y, 0)
        # grid pane must never own cursor
        self.table_win.leaveok(True)
        y += self.table_h

        self.pager_win = None
        if self.pager_h:
            self.pager_win = curses.newwin(self.pager_h, self.W, y, 0)
            self.pager_win.leaveok(True)
            y += self.pager_h

        self.status_win = curses.newwin(self.status_h, self.W, y, 0)

    def menu_window(self, rows):
        """Boxed window over the table region, sized for ``rows`` entries."""
        width = max(20, min(self.W, 40))
        height = max(3, min(rows + 2, self.table_h))
        x = max(0, self.W - width)
        win = curses.newwin(height, width, self.table_y, x)
        win.leaveok(True)
        return win

    def overlay_window(self):
        win = curses.newwin(max(3, self.H), self.W, 0, 0)
        win.leaveok(True)
        return win
