"""Application queries – cached collection fetches feeding the list views.

Views call these on mount. Results come back as :class:`QueryResult` so a
backend failure shows up as ``is_error`` instead of an exception, and
mutations invalidate the keys they make stale.
"""
from __future__ import annotations

from typing import Any

from fitview.adapters.http.gateway import BookingLedger, FitnessApi, PostPage
from fitview.application.cache import QueryCache, QueryResult
from fitview.application.listing import CLASSES, POSTS, SUBSCRIBERS, TRAINERS, ListProfile, ListViewController
from fitview.config.settings import FitviewSettings
from fitview.kernel.records import Booking, FitnessClass, ForumPost, Subscriber, Trainer, TrainerStatus

_PAGE_SIZE_SETTINGS = {
    CLASSES.name: "classes_page_size",
    POSTS.name: "posts_page_size",
    TRAINERS.name: "trainers_page_size",
    SUBSCRIBERS.name: "subscribers_page_size",
}


def configured_profile(profile: ListProfile, settings: FitviewSettings) -> ListProfile:
    """*profile* with the page size taken from *settings*, when it has one."""
    attr = _PAGE_SIZE_SETTINGS.get(profile.name)
    return profile if attr is None else profile.with_page_size(getattr(settings, attr))


def mount_view(profile: ListProfile, result: QueryResult[Any], **kwargs: Any) -> ListViewController:
    """A controller over the fetched records; empty when the fetch failed."""
    return ListViewController(profile, result.unwrap_or([]), **kwargs)


class CatalogQueries:
    def __init__(self, api: FitnessApi, cache: QueryCache) -> None:
        self._api = api
        self._cache = cache

    async def classes(self) -> QueryResult[list[FitnessClass]]:
        return await self._cache.query(("classes",), self._api.list_classes)

    async def trainers(self, status: TrainerStatus | None = None) -> QueryResult[list[Trainer]]:
        return await self._cache.query(("trainers", status), lambda: self._api.list_trainers(status=status))

    async def trainer_applications(self, email: str) -> QueryResult[list[Trainer]]:
        return await self._cache.query(("trainers", "email", email), lambda: self._api.list_trainers(email=email))

    async def trainer(self, trainer_id: str) -> QueryResult[Trainer]:
        return await self._cache.query(("trainers", "id", trainer_id), lambda: self._api.get_trainer(trainer_id))

    async def posts(self, page: int = 1, limit: int = 6) -> QueryResult[PostPage]:
        return await self._cache.query(("communityPosts", page, limit), lambda: self._api.list_posts(page, limit))

    async def post(self, post_id: str) -> QueryResult[ForumPost]:
        return await self._cache.query(("communityPosts", "id", post_id), lambda: self._api.get_post(post_id))

    async def subscribers(self) -> QueryResult[list[Subscriber]]:
        return await self._cache.query(("newsletter",), self._api.list_subscribers)

    async def bookings(self) -> QueryResult[BookingLedger]:
        return await self._cache.query(("bookings",), self._api.list_bookings)

    async def member_bookings(self, email: str) -> QueryResult[list[Booking]]:
        return await self._cache.query(("bookings", "user", email), lambda: self._api.list_member_bookings(email))

    async def subscribe(self, name: str, email: str) -> None:
        await self._api.subscribe(name, email)
        self._cache.invalidate(("newsletter",))

    async def delete_subscriber(self, subscriber_id: str) -> None:
        await self._api.delete_subscriber(subscriber_id)
        self._cache.invalidate(("newsletter",))

    def refresh_posts(self) -> None:
        """Drop cached post pages and post details."""
        self._cache.invalidate(("communityPosts",))


__all__ = ["CatalogQueries", "configured_profile", "mount_view"]
