"""Application – list views, dashboards and user actions."""

from fitview.application.cache import QueryCache, QueryResult
from fitview.application.listing import FilterCriteria, ListViewController, SortKey, compute_view, paginate

__all__ = [
    "FilterCriteria",
    "ListViewController",
    "QueryCache",
    "QueryResult",
    "SortKey",
    "compute_view",
    "paginate",
]
