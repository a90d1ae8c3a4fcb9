import curses
from typing import Callable, Optional


class FilterPrompt:
    """Line editor for the filter inputs, the search box and go-to-page.

    Text is written through to the controller on every keystroke; the
    filter itself only runs when Enter is pressed on the body input.
    """

    def __init__(self, controller, set_status_cb: Callable[[str, int], None]):
        self.controller = controller
        self._set_status = set_status_cb

        self.active = False
        self.step: Optional[str] = None  # title | body | search | page
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    # ---------- public API ----------
    def start_filter(self):
        if not self.controller.config.filter_enabled:
            self._set_status("Filtering is disabled", 3)
            return
        self._start("title", self.controller.state.filters.title_text)

    def start_search(self):
        if not self.controller.config.search_enabled:
            self._set_status("Search is disabled", 3)
            return
        self._start("search", self.controller.state.search_query)

    def start_goto(self):
        if not self.controller.config.pagination_enabled:
            self._set_status("Pagination is disabled", 3)
            return
        self._start("page", "")

    def handle_key(self, ch):
        if not self.active:
            return

        if ch in (10, 13):  # Enter
            self._handle_enter()
            return

        if ch == 9:  # Tab switches between the two filter inputs
            if self.step == "title":
                self._start("body", self.controller.state.filters.body_text)
            elif self.step == "body":
                self._start("title", self.controller.state.filters.title_text)
            return

        if ch == 27:  # Esc
            self._reset()
            return

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
                self._sync()
            return

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return

        if ch == curses.KEY_HOME:
            self.cursor = 0
            return

        if ch == curses.KEY_END:
            self.cursor = len(self.buffer)
            return

        if 32 <= ch <= 126:
            self.buffer = self.buffer[: self.cursor] + chr(ch) + self.buffer[self.cursor :]
            self.cursor += 1
            self._sync()
            return

    def draw(self, win):
        if not self.active:
            return

        prompt = self._prompt_text()
        h, w = win.getmaxyx()
        text_w = max(1, w - len(prompt) - 1)

        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        elif self.cursor > self.hscroll + text_w:
            self.hscroll = self.cursor - text_w

        start = self.hscroll
        end = start + text_w
        visible = self.buffer[start:end]

        try:
            win.addnstr(0, 0, prompt, len(prompt))
            win.addnstr(0, len(prompt), visible, text_w)
            win.move(0, len(prompt) + (self.cursor - self.hscroll))
        except curses.error:
            pass
        win.refresh()

    # ---------- internals ----------
    def _start(self, step: str, text: str):
        self.active = True
        self.step = step
        self.buffer = text or ""
        self.cursor = len(self.buffer)
        self.hscroll = 0

    def _sync(self):
        if self.step == "title":
            self.controller.set_title_filter(self.buffer)
        elif self.step == "body":
            self.controller.set_body_filter(self.buffer)
        elif self.step == "search":
            self.controller.set_search(self.buffer)

    def _handle_enter(self):
        if self.step == "title":
            self._start("body", self.controller.state.filters.body_text)
            return

        if self.step == "body":
            self._reset()
            if self.controller.apply_filter():
                self._set_status("Filter applied", 3)
            return

        if self.step == "search":
            query = self.buffer.strip()
            self._reset()
            if query:
                hits = len(self.controller.matching_rows())
                self._set_status(f"{hits} matching rows on this page", 3)
            else:
                self._set_status("Search cleared", 3)
            return

        if self.step == "page":
            text = self.buffer.strip()
            self._reset()
            if not text.isdigit():
                self._set_status("Page number required", 3)
                return
            pager = self.controller.state.paginator()
            target = pager.clamp(int(text))
            if target == self.controller.state.current_page:
                self._set_status(f"Already on page {target}", 2)
                return
            self.controller.go_to_page(target)

    def _reset(self):
        self.active = False
        self.step = None
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    def _prompt_text(self) -> str:
        if self.step == "title":
            return "Filter by title: "
        if self.step == "body":
            return "Filter by body: "
        if self.step == "search":
            return "/"
        if self.step == "page":
            return "Go to page: "
        return ""
