"""Application listing – per-view configuration.

A :class:`ListProfile` captures what differs between the classes page,
the community board, the trainer tables and the subscriber table: page
size, searched fields, which fields the sort keys read, and the labels
shown for stored category ids.
"""
from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Mapping

from fitview.application.listing.comparators import SortFields
from fitview.application.listing.criteria import SortKey

CLASS_CATEGORIES: Mapping[str, str] = MappingProxyType({
    "HIIT": "HIIT",
    "Yoga": "Yoga & Mindfulness",
    "Strength": "Strength Training",
    "Cardio": "Cardio",
    "Pilates": "Pilates",
    "Dance": "Dance Fitness",
    "Boxing": "Boxing",
    "CrossFit": "CrossFit",
    "Meditation": "Meditation",
    "Nutrition": "Nutrition Coaching",
})

DIFFICULTIES: tuple[str, ...] = ("Beginner", "Intermediate", "Advanced", "All Levels")


@dataclasses.dataclass(frozen=True)
class ListProfile:
    name: str
    page_size: int
    text_fields: tuple[str, ...]
    sort_fields: SortFields = SortFields()
    default_sort: SortKey = SortKey.NEWEST
    constraint_fields: tuple[str, ...] = ()
    display_names: Mapping[str, Mapping[str, str]] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")

    def with_page_size(self, page_size: int) -> "ListProfile":
        return dataclasses.replace(self, page_size=page_size)

    def label(self, field: str, value: str) -> str:
        """Display label for a constraint value (active filter chips)."""
        return self.display_names.get(field, {}).get(value, value)


CLASSES = ListProfile(
    name="classes",
    page_size=6,
    text_fields=("name", "description", "category"),
    sort_fields=SortFields(count="bookings", rating="rating", created="created_at", name="name"),
    default_sort=SortKey.POPULAR,
    constraint_fields=("category", "difficulty"),
    display_names=MappingProxyType({"category": CLASS_CATEGORIES}),
)

POSTS = ListProfile(
    name="posts",
    page_size=6,
    text_fields=("title", "content", "category"),
    sort_fields=SortFields(count="likes", rating="score", created="created_at", name="title"),
    default_sort=SortKey.NEWEST,
    constraint_fields=("category", "author_role"),
)

TRAINERS = ListProfile(
    name="trainers",
    page_size=8,
    text_fields=("name", "specialization", "email"),
    sort_fields=SortFields(count="booked_slots", rating="rating", created="created_at", name="name"),
    default_sort=SortKey.NAME,
    constraint_fields=("status", "specialization"),
)

SUBSCRIBERS = ListProfile(
    name="subscribers",
    page_size=10,
    text_fields=("name", "email"),
    sort_fields=SortFields(created="created_at", name="name"),
    default_sort=SortKey.NEWEST,
    constraint_fields=("status", "user_role"),
)


__all__ = [
    "CLASSES",
    "CLASS_CATEGORIES",
    "DIFFICULTIES",
    "POSTS",
    "SUBSCRIBERS",
    "TRAINERS",
    "ListProfile",
]
