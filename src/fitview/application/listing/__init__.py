"""Application listing – filter, sort and paginate record collections."""
from fitview.application.listing.criteria import FilterCriteria, SortKey, field_value
from fitview.application.listing.predicates import FieldEquals, TextQuery, build_specification, matches
from fitview.application.listing.comparators import Comparator, SortFields, comparator_for, sort_records
from fitview.application.listing.profiles import (
    CLASS_CATEGORIES,
    CLASSES,
    DIFFICULTIES,
    POSTS,
    SUBSCRIBERS,
    TRAINERS,
    ListProfile,
)
from fitview.application.listing.view import compute_view
from fitview.application.listing.paginator import ELLIPSIS, PageMarker, PageSlice, page_window, paginate, total_pages
from fitview.application.listing.controller import ListViewController

__all__ = [
    "CLASSES",
    "CLASS_CATEGORIES",
    "DIFFICULTIES",
    "ELLIPSIS",
    "POSTS",
    "SUBSCRIBERS",
    "TRAINERS",
    "Comparator",
    "FieldEquals",
    "FilterCriteria",
    "ListProfile",
    "ListViewController",
    "PageMarker",
    "PageSlice",
    "SortFields",
    "SortKey",
    "TextQuery",
    "build_specification",
    "comparator_for",
    "compute_view",
    "field_value",
    "matches",
    "page_window",
    "paginate",
    "sort_records",
    "total_pages",
]
