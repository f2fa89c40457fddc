"""Application listing – comparator selection per sort key."""
from __future__ import annotations

import dataclasses
import functools
import math
from typing import Any, Callable, Iterable

from fitview.application.listing.criteria import SortKey, field_value
from fitview.kernel.time import parse_timestamp
from fitview.observability.logging import get_logger

logger = get_logger(__name__)

Comparator = Callable[[Any, Any], int]


@dataclasses.dataclass(frozen=True)
class SortFields:
    """Which record fields each sort key reads."""

    count: str = "bookings"
    rating: str = "rating"
    created: str = "created_at"
    name: str = "name"


def _number(record: Any, field: str) -> float:
    value = field_value(record, field)
    if isinstance(value, bool) or value is None:
        return -math.inf
    try:
        number = float(value)
    except (TypeError, ValueError):
        return -math.inf
    return -math.inf if math.isnan(number) else number


def _timestamp(record: Any, field: str) -> float:
    parsed = parse_timestamp(field_value(record, field))
    return -math.inf if parsed is None else parsed.timestamp()


def _text(record: Any, field: str) -> str:
    value = field_value(record, field)
    return "" if value is None else str(value)


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _descending(extract: Callable[[Any, str], float], field: str) -> Comparator:
    def compare(a: Any, b: Any) -> int:
        return _cmp(extract(b, field), extract(a, field))
    return compare


def _ascending_text(field: str) -> Comparator:
    def compare(a: Any, b: Any) -> int:
        left, right = _text(a, field), _text(b, field)
        return _cmp(left.casefold(), right.casefold()) or _cmp(left, right)
    return compare


def _identity(a: Any, b: Any) -> int:  # noqa: ARG001
    return 0


def comparator_for(sort_key: SortKey | str, fields: SortFields = SortFields()) -> Comparator:
    """Return the two-argument ordering function for *sort_key*.

    Missing or unparseable values rank lowest: last for the descending keys,
    first for ``name``. An unknown key yields a comparator that keeps the
    input order.
    """
    key = SortKey.parse(sort_key)
    if key is SortKey.POPULAR:
        return _descending(_number, fields.count)
    if key is SortKey.RATING:
        return _descending(_number, fields.rating)
    if key is SortKey.NEWEST:
        return _descending(_timestamp, fields.created)
    if key is SortKey.NAME:
        return _ascending_text(fields.name)
    logger.warning("unknown_sort_key", sort_key=str(sort_key))
    return _identity


def sort_records(records: Iterable[Any], sort_key: SortKey | str, fields: SortFields = SortFields()) -> list[Any]:
    """Return a new list ordered by *sort_key*; ties keep their input order."""
    return sorted(records, key=functools.cmp_to_key(comparator_for(sort_key, fields)))


__all__ = ["Comparator", "SortFields", "comparator_for", "sort_records"]
