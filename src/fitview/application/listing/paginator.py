"""Application listing – PageSlice, paginate, page_window."""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Callable, Final, Generic, Sequence, TypeVar, Union

T = TypeVar("T")

ELLIPSIS: Final[str] = "..."

PageMarker = Union[int, str]


@dataclasses.dataclass(frozen=True)
class PageSlice(Generic[T]):
    """One page of an ordered list with computed navigation properties."""

    items: list[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0 or self.total <= 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def first_index(self) -> int:
        """1-based position of the first item shown, 0 when the page is empty."""
        return (self.page - 1) * self.size + 1 if self.items else 0

    @property
    def last_index(self) -> int:
        """1-based position of the last item shown, 0 when the page is empty."""
        return self.first_index + len(self.items) - 1 if self.items else 0

    def map(self, fn: Callable[[T], Any]) -> "PageSlice[Any]":
        """Return a new :class:`PageSlice` with each item transformed by *fn*."""
        return PageSlice(
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            size=self.size,
        )


def total_pages(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return math.ceil(count / page_size) if count > 0 else 0


def paginate(ordered: Sequence[T], page_size: int, page_number: int) -> PageSlice[T]:
    """Slice page *page_number* (1-based) out of *ordered*.

    A page past the end, or below 1, is an empty slice rather than an error.
    ``page_size`` must be positive.
    """
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    if page_number < 1:
        items: list[T] = []
    else:
        start = (page_number - 1) * page_size
        items = list(ordered[start:start + page_size])
    return PageSlice(items=items, total=len(ordered), page=page_number, size=page_size)


def page_window(current: int, total: int, delta: int = 2, compact_limit: int = 7) -> list[PageMarker]:
    """Page numbers to render in a pagination bar.

    Up to *compact_limit* pages are all listed. Beyond that the first and
    last pages are always shown, plus every page within *delta* of
    *current*; each skipped run collapses into one :data:`ELLIPSIS`.

    >>> page_window(6, 12)
    [1, '...', 4, 5, 6, 7, 8, '...', 12]
    """
    if total <= 0:
        return []
    if total <= compact_limit:
        return list(range(1, total + 1))

    current = min(max(current, 1), total)
    left = max(2, current - delta)
    right = min(total - 1, current + delta)

    window: list[PageMarker] = [1]
    if left > 2:
        window.append(ELLIPSIS)
    window.extend(range(left, right + 1))
    if right < total - 1:
        window.append(ELLIPSIS)
    window.append(total)
    return window


__all__ = ["ELLIPSIS", "PageMarker", "PageSlice", "page_window", "paginate", "total_pages"]
