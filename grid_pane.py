import curses
import json

import pandas as pd


def records_frame(records, keys):
    """Project records onto ``keys``; absent fields become None."""
    keys = list(keys)
    if not keys:
        return pd.DataFrame(index=range(len(records)))
    rows = [[rec.get(k) for k in keys] for rec in records]
    # object dtype keeps ints as ints when some records lack the field
    return pd.DataFrame(rows, columns=keys, dtype=object)


def cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    if isinstance(value, str):
        return value.replace("\n", " ")
    return str(value)


class GridPane:
    MAX_COL_WIDTH = 40

    def __init__(self, df=None):
        self.df = df if df is not None else pd.DataFrame()
        self.headers: list[str] = []
        self.curr_row = 0
        self.curr_col = 0
        self.row_offset = 0
        self.col_offset = 0
        self.marked_rows: set[int] = set()
        self.rendered_col_widths = {}

    def set_view(self, df, headers, marked_rows=None):
        self.df = df
        self.headers = list(headers)
        self.marked_rows = set(marked_rows or ())
        self.curr_row = max(0, min(self.curr_row, len(df) - 1))
        self.curr_col = max(0, min(self.curr_col, len(df.columns) - 1))

    def header_text(self, col_idx) -> str:
        if 0 <= col_idx < len(self.headers):
            return self.headers[col_idx]
        if 0 <= col_idx < len(self.df.columns):
            return str(self.df.columns[col_idx])
        return ""

    def get_col_width(self, col_idx):
        if col_idx < 0 or col_idx >= len(self.df.columns):
            return self.MAX_COL_WIDTH
        max_len = len(self.header_text(col_idx))
        for v in self.df.iloc[:, col_idx]:
            max_len = max(max_len, len(cell_text(v)))
        return min(self.MAX_COL_WIDTH, max_len + 2)

    @property
    def current_column(self):
        if 0 <= self.curr_col < len(self.df.columns):
            return self.df.columns[self.curr_col]
        return None

    # ---------- navigation ----------
    def move_left(self):
        self.curr_col = max(0, self.curr_col - 1)

    def move_right(self):
        self.curr_col = max(0, min(len(self.df.columns) - 1, self.curr_col + 1))

    def move_down(self):
        self.curr_row = max(0, min(len(self.df) - 1, self.curr_row + 1))

    def move_up(self):
        self.curr_row = max(0, self.curr_row - 1)

    def _visible_col_range(self, widths, avail_w):
        if self.curr_col < self.col_offset:
            self.col_offset = self.curr_col

        def _fit(offset):
            count = 0
            used = 0
            for cw in widths[offset:]:
                if used + cw + 1 > avail_w:
                    break
                used += cw + 1
                count += 1
            return max(1, count)

        max_cols = _fit(self.col_offset)
        while self.curr_col >= self.col_offset + max_cols and self.col_offset < self.curr_col:
            self.col_offset += 1
            max_cols = _fit(self.col_offset)
        self.col_offset = max(0, self.col_offset)
        return range(self.col_offset, min(len(widths), self.col_offset + max_cols))

    # ---------- rendering ----------
    def draw(self, win, active=True):
        win.erase()
        h, w = win.getmaxyx()

        n_rows = len(self.df)
        n_cols = len(self.df.columns)
        if n_cols == 0:
            try:
                win.addnstr(0, 0, " No records", max(1, w - 1))
            except curses.error:
                pass
            win.refresh()
            return

        widths = [self.get_col_width(c) for c in range(n_cols)]
        row_w = max(3, len(str(max(n_rows, 1))) + 1)
        avail_w = max(1, w - (row_w + 1))
        visible_cols = tuple(self._visible_col_range(widths, avail_w))

        # header
        x = row_w + 1
        self.rendered_col_widths = {}
        for c in visible_cols:
            eff_cw = min(widths[c], max(1, w - x - 1))
            self.rendered_col_widths[c] = eff_cw
            name = self.header_text(c)[:eff_cw].rjust(eff_cw)
            attr = curses.A_BOLD
            if active and c == self.curr_col:
                attr |= curses.A_UNDERLINE
            try:
                win.addnstr(0, x, name, eff_cw, attr)
            except curses.error:
                pass
            x += eff_cw + 1

        body_h = max(0, h - 1)
        if self.curr_row < self.row_offset:
            self.row_offset = self.curr_row
        elif body_h and self.curr_row >= self.row_offset + body_h:
            self.row_offset = self.curr_row - body_h + 1
        self.row_offset = max(0, self.row_offset)

        for i, r in enumerate(range(self.row_offset, min(n_rows, self.row_offset + body_h))):
            y = 1 + i
            try:
                win.addnstr(y, 0, str(r + 1).rjust(row_w), row_w)
            except curses.error:
                pass
            x = row_w + 1
            for c in visible_cols:
                eff_cw = self.rendered_col_widths[c]
                text = cell_text(self.df.iat[r, c])[:eff_cw].rjust(eff_cw)
                attr = curses.A_NORMAL
                if r in self.marked_rows:
                    attr |= curses.A_STANDOUT
                if active and r == self.curr_row and c == self.curr_col:
                    attr |= curses.A_REVERSE
                try:
                    win.addnstr(y, x, text, eff_cw, attr)
                except curses.error:
                    pass
                x += eff_cw + 1

        win.refresh()
