import curses
import time

from column_menu import ColumnMenu
from filter_prompt import FilterPrompt
from grid_pane import GridPane, records_frame
from overlay import OverlayView
from screen_layout import ScreenLayout
from shortcut_help_handler import ShortcutHelpHandler
from status_bar import page_strip_segments, render_status, title_banner
from view_transform import sort_indicator


class Orchestrator:
    def __init__(self, stdscr, controller):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.raw()
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        self.controller = controller
        config = controller.config
        self.layout = ScreenLayout(
            stdscr,
            show_filters=config.filter_enabled,
            show_pager=config.pagination_enabled,
        )
        self.grid = GridPane()

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0
        controller.on_status = self._set_status

        self.filter_prompt = FilterPrompt(controller, self._set_status)
        self.column_menu = ColumnMenu(controller, self._set_status)
        self.overlay = OverlayView()
        self.exit_requested = False

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _sync_grid(self):
        ctl = self.controller
        cols = ctl.visible_columns()
        headers = []
        for col in cols:
            mark = sort_indicator(ctl.state.sort, col.key) if ctl.config.sort_enabled else ""
            headers.append(f"{col.label}{mark}")
        df = records_frame(ctl.records, [c.key for c in cols])
        self.grid.set_view(df, headers, ctl.matching_rows())

    # ---------------- UI ----------------

    def redraw(self):
        if self.overlay.visible:
            self.overlay.draw()
            return

        try:
            curses.curs_set(1 if self.filter_prompt.active else 0)
        except curses.error:
            pass

        self._sync_grid()
        self._draw_title()
        self._draw_filters()
        self.grid.draw(self.layout.table_win, active=not self.column_menu.visible)
        self._draw_pager()
        self._draw_status()
        if self.column_menu.visible:
            self.column_menu.draw()

    def _draw_title(self):
        win = self.layout.title_win
        win.erase()
        _, w = win.getmaxyx()
        text = title_banner(self.controller.config.title)
        try:
            win.addnstr(0, max(0, (w - len(text)) // 2), text, w - 1, curses.A_BOLD)
        except curses.error:
            pass
        win.refresh()

    def _draw_filters(self):
        win = self.layout.filter_win
        if win is None:
            return
        win.erase()
        _, w = win.getmaxyx()
        filters = self.controller.state.filters
        text = f" title: [{filters.title_text}]  body: [{filters.body_text}]  (f to edit)"
        try:
            win.addnstr(0, 0, text, w - 1, curses.A_DIM)
        except curses.error:
            pass
        win.refresh()

    def _draw_pager(self):
        win = self.layout.pager_win
        if win is None:
            return
        win.erase()
        _, w = win.getmaxyx()
        ctl = self.controller
        segments = page_strip_segments(
            ctl.state.current_page,
            ctl.page_numbers(),
            ctl.can_go_prev(),
            ctl.can_go_next(),
            ctl.state.loading,
        )
        width = sum(len(label) + 3 for label, _, _ in segments)
        x = max(0, (w - width) // 2)
        for label, enabled, selected in segments:
            text = f"[{label}]" if selected else f" {label} "
            attr = curses.A_BOLD if selected else curses.A_NORMAL
            if not enabled:
                attr = curses.A_DIM
            if x + len(text) >= w:
                break
            try:
                win.addnstr(0, x, text, len(text), attr)
            except curses.error:
                pass
            x += len(text) + 1
        win.refresh()

    def _draw_status(self):
        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        if self.filter_prompt.active:
            self.filter_prompt.draw(sw)
            return
        state = self.controller.state
        context = {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "loading": state.loading,
            "title": self.controller.config.title,
            "current_page": state.current_page,
            "total_pages": state.total_pages,
            "total_count": state.total_count,
            "rows": len(state.records),
            "sort_column": state.sort.column if self.controller.config.sort_enabled else None,
            "sort_direction": state.sort.direction,
            "error": state.error,
        }
        try:
            sw.addnstr(0, 0, render_status(context, w), max(1, w - 1))
        except curses.error:
            pass
        sw.refresh()

    # ---------------- keys ----------------

    def _handle_table_key(self, ch):
        ctl = self.controller
        if ch in (ord("q"), 3):
            self.exit_requested = True
        elif ch in (ord("h"), curses.KEY_LEFT):
            self.grid.move_left()
        elif ch in (ord("l"), curses.KEY_RIGHT):
            self.grid.move_right()
        elif ch in (ord("j"), curses.KEY_DOWN):
            self.grid.move_down()
        elif ch in (ord("k"), curses.KEY_UP):
            self.grid.move_up()
        elif ch in (ord("s"), 10, 13):
            key = self.grid.current_column
            if key is not None and not ctl.sort(key):
                self._set_status("Sorting is disabled", 3)
        elif ch in (ord("n"), curses.KEY_NPAGE):
            ctl.next_page()
        elif ch in (ord("p"), curses.KEY_PPAGE):
            ctl.prev_page()
        elif ch == ord("g"):
            ctl.first_page()
        elif ch == ord("G"):
            ctl.last_page()
        elif ord("1") <= ch <= ord("9"):
            number = ch - ord("0")
            if number in ctl.page_numbers():
                ctl.go_to_page(number)
        elif ch == ord("r"):
            ctl.reload()
        elif ch == ord("f"):
            self.filter_prompt.start_filter()
        elif ch == ord(":"):
            self.filter_prompt.start_goto()
        elif ch == ord("/"):
            self.filter_prompt.start_search()
        elif ch == ord("c"):
            if ctl.config.column_toggle_enabled and ctl.columns:
                win = self.layout.menu_window(len(ctl.columns))
                self.column_menu.open(win)
            else:
                self.column_menu.open(None)
        elif ch == ord("?"):
            self.overlay.open(ShortcutHelpHandler.get_lines(), self.layout.overlay_window())

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.controller.mount()
        self.redraw()

        while not self.exit_requested:
            ch = self.stdscr.getch()
            changed = self.controller.poll()

            if ch == 3:
                break

            if ch == -1:
                if changed or self.controller.state.loading:
                    self.redraw()
                continue

            if self.overlay.visible:
                self.overlay.handle_key(ch)
            elif self.filter_prompt.active:
                self.filter_prompt.handle_key(ch)
            elif self.column_menu.visible:
                self.column_menu.handle_key(ch)
            else:
                self._handle_table_key(ch)

            self.redraw()
