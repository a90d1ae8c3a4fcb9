"""Table state and the transitions that act on it.

Every transition takes a ``TableState`` and returns a new one; nothing here
touches the network or the screen, so each user action can be replayed in
tests without a terminal.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from column_model import (
    Column,
    derive_columns,
    reorder,
    set_visibility,
    toggle_visibility,
)
from pagination import Paginator, compute_total_pages
from view_transform import FilterState, SortState, next_sort_state, sort_records


@dataclass(frozen=True)
class TableState:
    page_size: int
    records: Tuple[Dict[str, Any], ...] = ()
    columns: Tuple[Column, ...] = ()
    sort: SortState = field(default_factory=SortState)
    filters: FilterState = field(default_factory=FilterState)
    current_page: int = 1
    total_pages: int = 0
    total_count: int = 0
    loading: bool = False
    generation: int = 0
    error: Optional[str] = None
    search_query: str = ""

    def paginator(self) -> Paginator:
        return Paginator(self.page_size, self.current_page, self.total_pages)


def sort_by(state: TableState, column: str) -> TableState:
    sort = next_sort_state(state.sort, column)
    records = sort_records(state.records, column, sort.direction)
    return replace(state, sort=sort, records=tuple(records))


def toggle_column(state: TableState, key: str) -> TableState:
    return replace(state, columns=tuple(toggle_visibility(state.columns, key)))


def set_column_visibility(state: TableState, key: str, visible: bool) -> TableState:
    return replace(state, columns=tuple(set_visibility(state.columns, key, visible)))


def reorder_columns(state: TableState, from_index: int, to_index: int) -> TableState:
    return replace(state, columns=tuple(reorder(state.columns, from_index, to_index)))


def paginate(state: TableState, page: int) -> TableState:
    return replace(state, current_page=state.paginator().clamp(page))


def fetch_start(state: TableState) -> TableState:
    return replace(state, loading=True, error=None, generation=state.generation + 1)


def fetch_success(
    state: TableState, generation: int, records: List[Dict[str, Any]], total_count: int
) -> TableState:
    if generation != state.generation:
        return state
    columns = state.columns
    if records:
        columns = tuple(derive_columns(records[0]))
    return replace(
        state,
        records=tuple(records),
        columns=columns,
        total_count=total_count,
        total_pages=compute_total_pages(total_count, state.page_size),
        loading=False,
        error=None,
    )


def fetch_failure(state: TableState, generation: int, message: str) -> TableState:
    if generation != state.generation:
        return state
    return replace(state, loading=False, error=message)


def set_title_filter(state: TableState, text: str) -> TableState:
    return replace(state, filters=replace(state.filters, title_text=text))


def set_body_filter(state: TableState, text: str) -> TableState:
    return replace(state, filters=replace(state.filters, body_text=text))


def apply_filter(state: TableState) -> TableState:
    return replace(state, current_page=1)


def set_search(state: TableState, query: str) -> TableState:
    return replace(state, search_query=query)
