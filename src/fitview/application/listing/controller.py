"""Application listing – ListViewController.

Holds the ephemeral state of one list view (records, criteria, sort key,
current page) and derives the rendered page from it::

    view = ListViewController(CLASSES, records=classes)
    view.set_query("yoga")
    view.set_constraint("difficulty", "Beginner")
    view.page().items        # first page of matching classes
    view.window()            # [1, 2] ...
"""
from __future__ import annotations

from typing import Any, Iterable

from fitview.application.listing.criteria import FilterCriteria, SortKey
from fitview.application.listing.paginator import PageMarker, PageSlice, page_window, paginate, total_pages
from fitview.application.listing.profiles import ListProfile
from fitview.application.listing.view import compute_view
from fitview.observability.logging import get_logger

logger = get_logger(__name__)


class ListViewController:
    """Filter/sort/paginate state container for one list view.

    Every criteria or sort change, and every new record collection, puts
    the view back on page 1. Page navigation is clamped to the pages that
    exist. The filtered and sorted list is cached until records, criteria
    or sort key change.
    """

    def __init__(
        self,
        profile: ListProfile,
        records: Iterable[Any] = (),
        *,
        sort_key: SortKey | str | None = None,
    ) -> None:
        self._profile = profile
        self._records: tuple[Any, ...] = tuple(records)
        self._records_version = 0
        self._criteria = FilterCriteria()
        self._sort_key: SortKey | str = sort_key if sort_key is not None else profile.default_sort
        self._page = 1
        self._cache_key: tuple[Any, ...] | None = None
        self._cached: list[Any] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def profile(self) -> ListProfile:
        return self._profile

    @property
    def records(self) -> tuple[Any, ...]:
        return self._records

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def sort_key(self) -> SortKey | str:
        return self._sort_key

    @property
    def sort_name(self) -> str:
        return getattr(self._sort_key, "value", self._sort_key)

    @property
    def current_page(self) -> int:
        return self._page

    # ------------------------------------------------------------------
    # Mutations (all reset to page 1)
    # ------------------------------------------------------------------

    def set_records(self, records: Iterable[Any]) -> None:
        self._records = tuple(records)
        self._records_version += 1
        self._page = 1

    def set_query(self, query: str | None) -> None:
        self._update_criteria(self._criteria.with_query(query))

    def set_constraint(self, field: str, value: str | None) -> None:
        self._update_criteria(self._criteria.with_constraint(field, value))

    def clear_constraint(self, field: str) -> None:
        self._update_criteria(self._criteria.without_constraint(field))

    def clear_filters(self) -> None:
        self._update_criteria(FilterCriteria())

    def set_sort(self, sort_key: SortKey | str) -> None:
        self._sort_key = sort_key
        self._page = 1

    def _update_criteria(self, criteria: FilterCriteria) -> None:
        self._criteria = criteria
        self._page = 1

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def total_pages(self) -> int:
        return total_pages(len(self.view()), self._profile.page_size)

    def go_to(self, page: int) -> int:
        """Move to *page*, clamped to ``[1, total_pages]``; returns the new page."""
        self._page = min(max(page, 1), max(self.total_pages, 1))
        return self._page

    def next_page(self) -> int:
        return self.go_to(self._page + 1)

    def previous_page(self) -> int:
        return self.go_to(self._page - 1)

    # ------------------------------------------------------------------
    # Derived output
    # ------------------------------------------------------------------

    def view(self) -> list[Any]:
        """The full filtered and sorted list (cached)."""
        key = (self._records_version, self._criteria, self.sort_name)
        if key != self._cache_key:
            self._cached = compute_view(self._records, self._criteria, self._sort_key, self._profile)
            self._cache_key = key
            logger.debug(
                "list_view_recomputed",
                view=self._profile.name,
                records=len(self._records),
                matched=len(self._cached),
                sort_key=self.sort_name,
            )
        return self._cached

    @property
    def result_count(self) -> int:
        return len(self.view())

    def page(self) -> PageSlice[Any]:
        return paginate(self.view(), self._profile.page_size, self._page)

    def window(self, delta: int = 2) -> list[PageMarker]:
        return page_window(self._page, self.total_pages, delta)

    def active_filters(self) -> list[tuple[str, str]]:
        """Set criteria as ``(field, label)`` pairs for filter chips."""
        return [(field, self._profile.label(field, value)) for field, value in self._criteria.active()]


__all__ = ["ListViewController"]
