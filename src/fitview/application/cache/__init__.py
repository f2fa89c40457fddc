"""Application cache – stale-time cache for fetched collections."""
from fitview.application.cache.query_cache import QueryCache, QueryKey, QueryResult

__all__ = ["QueryCache", "QueryKey", "QueryResult"]
