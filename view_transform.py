import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class SortState:
    column: Optional[str] = None
    direction: str = ASC


@dataclass(frozen=True)
class FilterState:
    title_text: str = ""
    body_text: str = ""


def sort_key(value: Any) -> tuple:
    """Total-order key: missing/null first, then numbers, strings, nested."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return (0, 0)
    if isinstance(value, (bool, int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    return (3, json.dumps(value, sort_keys=True, default=str))


def sort_records(
    records: Sequence[Dict[str, Any]], column: str, direction: str = ASC
) -> List[Dict[str, Any]]:
    # sorted() stays stable with reverse=True, so ties keep their order
    return sorted(
        records,
        key=lambda rec: sort_key(rec.get(column)),
        reverse=(direction == DESC),
    )


def next_sort_state(sort: SortState, column: str) -> SortState:
    if sort.column == column:
        return SortState(column, DESC if sort.direction == ASC else ASC)
    return SortState(column, ASC)


def sort_indicator(sort: SortState, column: str) -> str:
    if sort.column != column:
        return ""
    return "▲" if sort.direction == ASC else "▼"


def row_matches(record: Dict[str, Any], query: str) -> bool:
    """Case-insensitive substring match over every value of a record."""
    needle = query.strip().lower()
    if not needle:
        return False
    for value in record.values():
        if value is None:
            continue
        if needle in str(value).lower():
            return True
    return False
