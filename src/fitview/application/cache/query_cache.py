"""Application cache – QueryCache for fetched record collections.

Collections are keyed by tuples such as ``("trainers", "accepted")``.
An entry is served from memory until it is older than the stale time;
mutations drop the affected keys with :meth:`QueryCache.invalidate`, which
matches on key prefixes so ``invalidate(("trainers",))`` clears every
trainer list at once.
"""
from __future__ import annotations

import asyncio
import dataclasses
from datetime import datetime
from typing import Any, Awaitable, Callable, Generic, Hashable, TypeVar

from fitview.kernel.errors import BaseError
from fitview.kernel.time import Clock, SystemClock
from fitview.observability.logging import get_logger

T = TypeVar("T")

QueryKey = tuple[Hashable, ...]

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Outcome of a cached fetch, shaped for a view's loading/error branches."""

    data: T | None = None
    error: BaseError | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def unwrap_or(self, default: T) -> T:
        return default if self.data is None else self.data


@dataclasses.dataclass
class _Entry:
    value: Any
    fetched_at: datetime


class QueryCache:
    """Stale-time cache with per-key load de-duplication."""

    def __init__(self, stale_seconds: float = 300.0, clock: Clock | None = None) -> None:
        self._stale_seconds = stale_seconds
        self._clock = clock or SystemClock()
        self._entries: dict[QueryKey, _Entry] = {}
        self._locks: dict[QueryKey, asyncio.Lock] = {}
        self._generations: dict[QueryKey, int] = {}

    @classmethod
    def from_settings(cls, settings: Any, clock: Clock | None = None) -> "QueryCache":
        return cls(stale_seconds=settings.stale_seconds, clock=clock)

    def _fresh(self, key: QueryKey) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        age = (self._clock.now() - entry.fetched_at).total_seconds()
        return entry if age < self._stale_seconds else None

    def peek(self, key: QueryKey) -> Any:
        """Cached value for *key* regardless of staleness, or ``None``."""
        entry = self._entries.get(key)
        return None if entry is None else entry.value

    async def get_or_load(self, key: QueryKey, loader: Callable[[], Awaitable[T]]) -> T:
        entry = self._fresh(key)
        if entry is not None:
            return entry.value  # type: ignore[no-any-return]

        # Only one coroutine loads per key
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        async with self._locks[key]:
            entry = self._fresh(key)
            if entry is not None:
                return entry.value  # type: ignore[no-any-return]
            while True:
                generation = self._generations.get(key, 0)
                value = await loader()
                # Invalidated mid-load; load again
                if self._generations.get(key, 0) == generation:
                    break
                logger.debug("query_reloading", key=key)
            self._entries[key] = _Entry(value=value, fetched_at=self._clock.now())
            logger.debug("query_loaded", key=key)
            return value

    async def query(self, key: QueryKey, loader: Callable[[], Awaitable[T]]) -> QueryResult[T]:
        """Like :meth:`get_or_load` but reports fetch failures in the result."""
        try:
            return QueryResult(data=await self.get_or_load(key, loader))
        except BaseError as exc:
            logger.warning("query_failed", key=key, error=exc.to_dict())
            return QueryResult(error=exc)

    def invalidate(self, *prefixes: QueryKey) -> int:
        """Drop every key starting with one of *prefixes*; returns the count."""
        def hit(key: QueryKey) -> bool:
            return any(key[:len(p)] == p for p in prefixes)

        for key in [k for k in self._locks if hit(k)]:
            self._generations[key] = self._generations.get(key, 0) + 1
        doomed = [k for k in self._entries if hit(k)]
        for key in doomed:
            del self._entries[key]
        if doomed:
            logger.debug("query_invalidated", keys=doomed)
        return len(doomed)

    def clear(self) -> None:
        for key in self._locks:
            self._generations[key] = self._generations.get(key, 0) + 1
        self._entries.clear()


__all__ = ["QueryCache", "QueryKey", "QueryResult"]
