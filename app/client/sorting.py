"""Sort state and the comparator used by the users list view."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import cmp_to_key
from typing import Any, Literal

SortDirection = Literal["asc", "desc"]

SORT_DIRECTIONS: tuple[SortDirection, ...] = ("asc", "desc")

# Fields compared as dates even when they arrive as ISO text.
DATE_FIELDS = frozenset({"created_at"})


@dataclass(frozen=True)
class SortOption:
    field: str
    display_name: str


@dataclass(frozen=True)
class SortState:
    field: str
    direction: SortDirection


def field_value(record: Any, field: str) -> Any:
    """Read a field from a JSON dict or an object; missing means None."""
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    # Naive values are taken as UTC so they compare with aware ones.
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def compare_values(a: Any, b: Any, direction: SortDirection, is_date: bool = False) -> int:
    """
    Three-way compare for one sort field.

    None sorts last ascending and first descending. Strings compare
    case-insensitively, then by raw text. Values that cannot be ordered
    against each other are treated as equal.
    """
    if is_date:
        a, b = _as_datetime(a), _as_datetime(b)
    if a is None and b is None:
        return 0
    if a is None:
        return 1 if direction == "asc" else -1
    if b is None:
        return -1 if direction == "asc" else 1

    if isinstance(a, str) and isinstance(b, str):
        a, b = (a.casefold(), a), (b.casefold(), b)
    try:
        result = (a > b) - (a < b)
    except TypeError:
        result = 0
    return result if direction == "asc" else -result


def apply_sorting(records: Sequence[Any], field: str, direction: SortDirection) -> list[Any]:
    """Return a new list sorted on field; ties keep their input order."""
    is_date = field in DATE_FIELDS

    def compare(x: Any, y: Any) -> int:
        return compare_values(field_value(x, field), field_value(y, field), direction, is_date)

    return sorted(records, key=cmp_to_key(compare))
