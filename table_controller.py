import logging
import queue
import threading
from typing import Callable, List, Optional

import table_state as ts
from column_model import Column, visible_columns
from config_paths import TableConfig
from page_fetcher import FetchError
from view_transform import row_matches

logger = logging.getLogger(__name__)


def _thread_spawn(fn):
    t = threading.Thread(target=fn, daemon=True)
    t.start()
    return t


class TableController:
    """Binds capability flags and user actions to table state transitions.

    Fetches run through ``spawn`` (a daemon thread by default) and post
    their outcome to a queue; ``poll`` applies queued outcomes on the
    caller's thread so state is only ever changed from the event loop.
    """

    def __init__(
        self,
        config: TableConfig,
        fetcher,
        spawn: Optional[Callable] = None,
        on_status: Optional[Callable[[str, float], None]] = None,
    ):
        self.config = config
        self.fetcher = fetcher
        self._spawn = spawn or _thread_spawn
        self.on_status = on_status
        self._outcomes: queue.Queue = queue.Queue()
        self.state = ts.TableState(page_size=config.page_size)

    # ---------- lifecycle ----------
    def mount(self):
        self._start_fetch()

    def poll(self) -> bool:
        """Apply finished fetches. Returns True when state changed."""
        changed = False
        while True:
            try:
                kind, generation, payload = self._outcomes.get_nowait()
            except queue.Empty:
                break
            before = self.state
            if kind == "ok":
                self.state = ts.fetch_success(
                    self.state, generation, payload.records, payload.total_count
                )
            else:
                self.state = ts.fetch_failure(self.state, generation, payload)
                if self.state is not before:
                    self._status(f"Fetch failed: {payload}", 4)
            if self.state is before:
                logger.debug("Discarded result of superseded fetch %s", generation)
            changed = changed or self.state is not before
        return changed

    def reload(self) -> bool:
        if self.state.loading:
            return False
        self._start_fetch()
        return True

    def _start_fetch(self):
        self.state = ts.fetch_start(self.state)
        generation = self.state.generation
        page = self.state.current_page
        page_size = self.state.page_size
        logger.debug("Fetch %s: page %s size %s", generation, page, page_size)

        def _work():
            try:
                result = self.fetcher.fetch(page, page_size)
            except FetchError as exc:
                logger.error("Fetching page %s failed: %s", page, exc)
                self._outcomes.put(("error", generation, str(exc)))
                return
            except Exception as exc:
                logger.exception("Unexpected error fetching page %s", page)
                self._outcomes.put(("error", generation, str(exc)))
                return
            self._outcomes.put(("ok", generation, result))

        self._spawn(_work)

    def _status(self, msg: str, seconds: float = 3):
        if self.on_status is not None:
            self.on_status(msg, seconds)

    # ---------- pagination ----------
    def go_to_page(self, page: int) -> bool:
        if not self.config.pagination_enabled or self.state.loading:
            return False
        before = self.state.current_page
        self.state = ts.paginate(self.state, page)
        if self.state.current_page == before:
            return False
        self._start_fetch()
        return True

    def next_page(self) -> bool:
        if not self.can_go_next():
            return False
        pager = self.state.paginator()
        return self.go_to_page(pager.next_page())

    def prev_page(self) -> bool:
        if not self.can_go_prev():
            return False
        pager = self.state.paginator()
        return self.go_to_page(pager.prev_page())

    def first_page(self) -> bool:
        return self.go_to_page(self.state.paginator().first_page())

    def last_page(self) -> bool:
        return self.go_to_page(self.state.paginator().last_page())

    def can_go_prev(self) -> bool:
        return self.state.paginator().can_go_prev(self.state.loading)

    def can_go_next(self) -> bool:
        return self.state.paginator().can_go_next(self.state.loading)

    def page_numbers(self) -> List[int]:
        return self.state.paginator().window()

    # ---------- view actions ----------
    def sort(self, key: str) -> bool:
        if not self.config.sort_enabled:
            return False
        self.state = ts.sort_by(self.state, key)
        return True

    def toggle_visibility(self, key: str) -> bool:
        if not self.config.column_toggle_enabled:
            return False
        self.state = ts.toggle_column(self.state, key)
        return True

    def set_visibility(self, key: str, visible: bool) -> bool:
        if not self.config.column_toggle_enabled:
            return False
        self.state = ts.set_column_visibility(self.state, key, visible)
        return True

    def reorder(self, from_index: int, to_index: int) -> bool:
        if not self.config.column_toggle_enabled:
            return False
        self.state = ts.reorder_columns(self.state, from_index, to_index)
        return True

    def set_title_filter(self, text: str):
        self.state = ts.set_title_filter(self.state, text)

    def set_body_filter(self, text: str):
        self.state = ts.set_body_filter(self.state, text)

    def apply_filter(self) -> bool:
        if not self.config.filter_enabled:
            return False
        # TODO: send title/body filter text as query parameters once the
        # endpoint contract for server-side filtering is settled.
        self.state = ts.apply_filter(self.state)
        self._start_fetch()
        return True

    def set_search(self, query: str) -> bool:
        if not self.config.search_enabled:
            return False
        self.state = ts.set_search(self.state, query)
        return True

    # ---------- render inputs ----------
    @property
    def columns(self) -> List[Column]:
        return list(self.state.columns)

    @property
    def records(self) -> list:
        return list(self.state.records)

    def visible_columns(self) -> List[Column]:
        return visible_columns(self.state.columns)

    def rows(self) -> List[list]:
        keys = [col.key for col in self.visible_columns()]
        return [[rec.get(k) for k in keys] for rec in self.state.records]

    def matching_rows(self) -> set:
        query = self.state.search_query
        if not query.strip():
            return set()
        return {i for i, rec in enumerate(self.state.records) if row_matches(rec, query)}
