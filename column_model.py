from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Sequence


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    visible: bool = True


def derive_columns(sample_record: Mapping[str, Any]) -> List[Column]:
    """Build the column list from one record's fields, in field order."""
    return [Column(key=str(key), label=str(key).upper()) for key in sample_record]


def set_visibility(columns: Sequence[Column], key: str, visible: bool) -> List[Column]:
    return [replace(col, visible=visible) if col.key == key else col for col in columns]


def toggle_visibility(columns: Sequence[Column], key: str) -> List[Column]:
    return [replace(col, visible=not col.visible) if col.key == key else col for col in columns]


def move_element(sequence: Sequence, from_index: int, to_index: int) -> list:
    items = list(sequence)
    n = len(items)
    if not (0 <= from_index < n and 0 <= to_index < n):
        return items
    if from_index == to_index:
        return items
    item = items.pop(from_index)
    items.insert(to_index, item)
    return items


def reorder(columns: Sequence[Column], from_index: int, to_index: int) -> List[Column]:
    return move_element(columns, from_index, to_index)


def visible_columns(columns: Sequence[Column]) -> List[Column]:
    return [col for col in columns if col.visible]


def column_keys(columns: Sequence[Column]) -> List[str]:
    return [col.key for col in columns]
