"""Shared fixtures: small record collections shaped like backend data."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from fitview.kernel.records import FitnessClass, ForumPost, Subscriber, Trainer, Vote


def make_class(
    idx: int,
    name: str | None = None,
    *,
    category: str = "HIIT",
    difficulty: str = "Beginner",
    bookings: int = 0,
    rating: float | None = None,
    created_at: datetime | None = None,
    description: str = "",
) -> FitnessClass:
    return FitnessClass(
        id=f"c{idx}",
        name=name or f"Class {idx}",
        category=category,
        description=description,
        difficulty=difficulty,
        bookings=bookings,
        rating=rating,
        created_at=created_at,
    )


@pytest.fixture
def classes() -> list[FitnessClass]:
    return [
        make_class(1, "Power Yoga", category="Yoga", bookings=12, rating=4.8,
                   created_at=datetime(2024, 3, 1, tzinfo=UTC), description="Strong flow"),
        make_class(2, "HIIT Blast", category="HIIT", difficulty="Advanced", bookings=30, rating=4.5,
                   created_at=datetime(2024, 5, 1, tzinfo=UTC), description="Morning sweat"),
        make_class(3, "Yoga Flow", category="Yoga", bookings=7, rating=4.9,
                   created_at=datetime(2024, 1, 15, tzinfo=UTC), description="Gentle stretch"),
        make_class(4, "Morning Run Club", category="Cardio", bookings=18, rating=4.1,
                   created_at=datetime(2024, 4, 2, tzinfo=UTC), description="Outdoor intervals"),
        make_class(5, "Evening Spin", category="Cardio", difficulty="Intermediate", bookings=22,
                   created_at=datetime(2024, 2, 20, tzinfo=UTC), description="Indoor cycling"),
    ]


@pytest.fixture
def posts() -> list[ForumPost]:
    return [
        ForumPost(id="p1", title="Best pre-workout meals", content="Oats and bananas", category="Nutrition",
                  votes=(Vote("a@x.io", "like"), Vote("b@x.io", "like")),
                  created_at=datetime(2024, 6, 1, tzinfo=UTC)),
        ForumPost(id="p2", title="Form check: deadlift", content="Keep the bar close", category="Strength",
                  votes=(Vote("a@x.io", "dislike"),), created_at=datetime(2024, 6, 3, tzinfo=UTC)),
        ForumPost(id="p3", title="Rest days matter", content="Recovery builds strength", category="Wellness",
                  created_at=datetime(2024, 5, 28, tzinfo=UTC)),
    ]


@pytest.fixture
def trainers() -> list[Trainer]:
    return [
        Trainer(id="t1", name="Maya Chen", email="maya@gym.io", specialization="Yoga", status="accepted", rating=4.9),
        Trainer(id="t2", name="Leo Park", email="leo@gym.io", specialization="Strength", status="pending"),
        Trainer(id="t3", name="Ana Ruiz", email="ana@gym.io", specialization="Boxing", status="rejected",
                admin_feedback="Missing certification"),
        Trainer(id="t4", name="Sam Ode", email="sam@gym.io", specialization="HIIT", status="accepted", rating=4.2),
    ]


@pytest.fixture
def subscribers() -> list[Subscriber]:
    return [
        Subscriber(id="s1", email="jo@mail.io", name="Jo", created_at=datetime(2024, 6, 3, tzinfo=UTC)),
        Subscriber(id="s2", email="kim@mail.io", name="Kim", created_at=datetime(2024, 5, 2, tzinfo=UTC),
                   is_unsubscribed=True, unsubscribed_at=datetime(2024, 6, 10, tzinfo=UTC), user_role="trainer"),
        Subscriber(id="s3", email="lee@mail.io", name="Lee", created_at=datetime(2024, 6, 20, tzinfo=UTC),
                   is_unsubscribed=True),
        Subscriber(id="s4", email="max@mail.io", name="Max", created_at=datetime(2023, 12, 1, tzinfo=UTC)),
    ]
