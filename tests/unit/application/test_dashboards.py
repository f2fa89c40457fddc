"""Unit tests for dashboard figures, CSV export and trainer moderation."""

from __future__ import annotations

import asyncio
import csv
import dataclasses
import io
from datetime import UTC, datetime
from typing import Any

import pytest

from fitview.application.cache import QueryCache
from fitview.application.dashboards import (
    RosterStats,
    TrainerAdministration,
    application_counts,
    export_subscribers_csv,
    member_applications,
    slot_summary,
    subscriber_stats,
    summarize_bookings,
    trainer_roster_stats,
)
from fitview.application.dashboards.subscribers import CSV_HEADER
from fitview.application.saga import SagaCompensationFailedError, SagaFailedError
from fitview.kernel.errors import ExternalServiceError, ValidationError
from fitview.kernel.records import Booking, Slot, Subscriber, Trainer
from fitview.kernel.time import FrozenClock


class _FakeApi:
    """Records the moderation calls; ``fail`` names methods that raise."""

    def __init__(self, *fail: str) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self._fail = set(fail)

    def _maybe_fail(self, method: str, *args: Any) -> None:
        self.calls.append((method, *args))
        if (method, *args) in self._fail or method in self._fail:
            raise ExternalServiceError("fitness-api", status_code=500)

    async def update_trainer_status(self, trainer_id: str, status: str, feedback: str | None = None) -> None:
        self._maybe_fail("update_trainer_status", trainer_id, status, feedback)

    async def update_user_role(self, email: str, role: str) -> None:
        self._maybe_fail("update_user_role", email, role)

    async def delete_slot(self, slot_id: str) -> None:
        self._maybe_fail("delete_slot", slot_id)


def _seeded_cache() -> QueryCache:
    cache = QueryCache()

    async def seed() -> None:
        for key in (("trainers", None), ("trainers", "accepted"), ("userRole", "maya@gym.io"), ("classes",)):
            await cache.get_or_load(key, _value(key))

    asyncio.run(seed())
    return cache


def _value(key: tuple[Any, ...]) -> Any:
    async def load() -> Any:
        return key
    return load


# ---------------------------------------------------------------------------
# Finance
# ---------------------------------------------------------------------------


def _booking(idx: int, **kwargs: Any) -> Booking:
    return Booking(id=f"b{idx}", created_at=datetime(2024, 6, idx, tzinfo=UTC), **kwargs)


class TestSummarizeBookings:
    def test_sums_prices_without_backend_total(self) -> None:
        bookings = [
            _booking(1, user_email="a@x.io", package_name="Gold", price=100.0, payment_status="Completed"),
            _booking(2, user_email="a@x.io", package_name="Gold", price=100.0, payment_status="Completed"),
            _booking(3, user_email="b@x.io", package_name="Basic", price=25.0, payment_status="Pending"),
        ]
        summary = summarize_bookings(bookings)
        assert summary.total_revenue == 225.0
        assert summary.average_booking_price == 75.0
        assert summary.total_transactions == 3
        assert summary.paid_members == 1
        assert summary.package_counts == {"Gold": 2, "Basic": 1}
        assert summary.total_packages_booked == 3

    def test_backend_total_wins(self) -> None:
        summary = summarize_bookings([_booking(1, price=10.0), _booking(2, price=20.0)], total_revenue=100.0)
        assert summary.total_revenue == 100.0
        assert summary.average_booking_price == 50.0

    def test_average_is_rounded(self) -> None:
        summary = summarize_bookings([_booking(d, price=10.0) for d in (1, 2, 3)], total_revenue=10.0)
        assert summary.average_booking_price == 3.33

    def test_empty(self) -> None:
        summary = summarize_bookings([])
        assert summary.total_revenue == 0
        assert summary.average_booking_price == 0.0
        assert summary.recent_transactions == []

    def test_unknown_package_and_recent_order(self) -> None:
        bookings = [_booking(d, price=1.0) for d in range(1, 10)]
        summary = summarize_bookings(bookings, recent=3)
        assert summary.package_counts == {"Unknown Package": 9}
        assert [b.id for b in summary.recent_transactions] == ["b9", "b8", "b7"]


# ---------------------------------------------------------------------------
# Subscribers
# ---------------------------------------------------------------------------


class TestSubscriberStats:
    def test_counts_for_current_month(self, subscribers: list[Subscriber]) -> None:
        clock = FrozenClock(datetime(2024, 6, 25, tzinfo=UTC))
        stats = subscriber_stats(subscribers, clock)
        assert stats.total == 4
        assert stats.active == 2
        # s3 joined this month but has unsubscribed
        assert stats.new_this_month == 1
        # s3 has no unsubscribe date
        assert stats.unsubscribed_this_month == 1

    def test_empty(self) -> None:
        stats = subscriber_stats([], FrozenClock(datetime(2024, 6, 1, tzinfo=UTC)))
        assert (stats.total, stats.active, stats.new_this_month, stats.unsubscribed_this_month) == (0, 0, 0, 0)


class TestExportSubscribersCsv:
    def test_rows(self, subscribers: list[Subscriber]) -> None:
        data = export_subscribers_csv(subscribers[:3]).decode("utf-8")
        rows = list(csv.reader(io.StringIO(data)))
        assert tuple(rows[0]) == CSV_HEADER
        assert rows[1] == ["Jo", "jo@mail.io", "Active", "2024-06-03", "N/A", "Member"]
        assert rows[2] == ["Kim", "kim@mail.io", "Unsubscribed", "2024-05-02", "2024-06-10", "trainer"]
        assert rows[3][4] == "N/A"

    def test_quotes_commas(self) -> None:
        sub = Subscriber(id="s", email="a@x.io", name="Doe, Jane")
        data = export_subscribers_csv([sub]).decode("utf-8")
        assert '"Doe, Jane"' in data
        assert data.splitlines()[1].endswith(",,N/A,Member")

    def test_bom(self) -> None:
        assert export_subscribers_csv([], bom=True).startswith(b"\xef\xbb\xbf")
        assert export_subscribers_csv([]) == b"Name,Email,Status,Subscribed Date,Unsubscribed Date,Role\n"


# ---------------------------------------------------------------------------
# Trainers
# ---------------------------------------------------------------------------


class TestTrainerFigures:
    def test_application_counts(self, trainers: list[Trainer]) -> None:
        assert application_counts(trainers) == {"pending": 1, "accepted": 2, "rejected": 1}
        assert application_counts([]) == {"pending": 0, "accepted": 0, "rejected": 0}

    def test_member_applications_hide_accepted(self, trainers: list[Trainer]) -> None:
        log = member_applications(trainers)
        assert [a.id for a in log.applications] == ["t2", "t3"]
        assert (log.pending, log.rejected) == (1, 1)

    def test_slot_summary(self) -> None:
        trainer = Trainer(
            id="t",
            name="n",
            email="e",
            slots=(
                Slot(id="1", booked_members=("a", "b")),
                Slot(id="2", booked_members=("c",)),
                Slot(id="3"),
            ),
        )
        summary = slot_summary(trainer)
        assert (summary.booked, summary.available, summary.total_earnings) == (2, 1, 150)
        assert slot_summary(trainer, rate=10).total_earnings == 30

    def test_roster_stats(self, trainers: list[Trainer]) -> None:
        roster = [
            dataclasses.replace(trainers[0], sessions=12, certifications=("RYT-200",)),
            dataclasses.replace(trainers[3], sessions=5),
            Trainer(id="t5", name="Kai", email="kai@gym.io", status="accepted", certifications=("NASM", "CPR")),
        ]
        assert trainer_roster_stats(roster) == RosterStats(
            total_trainers=3, total_sessions=17, average_rating=3.0, certified_trainers=2
        )

    def test_roster_stats_rounds_average(self) -> None:
        roster = [Trainer(id=str(i), name="n", email="e", rating=r) for i, r in enumerate((4.0, 4.0, 5.0))]
        assert trainer_roster_stats(roster).average_rating == 4.3

    def test_roster_stats_empty(self) -> None:
        assert trainer_roster_stats([]) == RosterStats(0, 0, 0.0, 0)


class TestTrainerAdministration:
    def test_approve_invalidates_trainer_lists(self) -> None:
        api, cache = _FakeApi(), _seeded_cache()
        asyncio.run(TrainerAdministration(api, cache).approve("t2"))  # type: ignore[arg-type]
        assert api.calls == [("update_trainer_status", "t2", "accepted", None)]
        assert cache.peek(("trainers", None)) is None
        assert cache.peek(("trainers", "accepted")) is None
        assert cache.peek(("classes",)) == ("classes",)

    def test_delete_slot_invalidates_trainer_lists(self) -> None:
        api, cache = _FakeApi(), _seeded_cache()
        asyncio.run(TrainerAdministration(api, cache).delete_slot("s1"))  # type: ignore[arg-type]
        assert api.calls == [("delete_slot", "s1")]
        assert cache.peek(("trainers", "accepted")) is None
        assert cache.peek(("userRole", "maya@gym.io")) == ("userRole", "maya@gym.io")

    def test_reject_requires_feedback(self) -> None:
        api = _FakeApi()
        with pytest.raises(ValidationError):
            asyncio.run(TrainerAdministration(api, QueryCache()).reject("t2", "   "))  # type: ignore[arg-type]
        assert api.calls == []

    def test_reject_sends_stripped_feedback(self) -> None:
        api = _FakeApi()
        asyncio.run(TrainerAdministration(api, QueryCache()).reject("t2", " No certificate "))  # type: ignore[arg-type]
        assert api.calls == [("update_trainer_status", "t2", "rejected", "No certificate")]

    def test_demote_rejects_then_resets_role(self, trainers: list[Trainer]) -> None:
        api, cache = _FakeApi(), _seeded_cache()
        asyncio.run(TrainerAdministration(api, cache).demote(trainers[0]))  # type: ignore[arg-type]
        assert api.calls == [
            ("update_trainer_status", "t1", "rejected", "Demoted by Admin"),
            ("update_user_role", "maya@gym.io", "member"),
        ]
        assert cache.peek(("userRole", "maya@gym.io")) is None

    def test_demote_reaccepts_when_role_update_fails(self, trainers: list[Trainer]) -> None:
        api, cache = _FakeApi("update_user_role"), _seeded_cache()
        with pytest.raises(SagaFailedError):
            asyncio.run(TrainerAdministration(api, cache).demote(trainers[0]))  # type: ignore[arg-type]
        assert api.calls[-1] == ("update_trainer_status", "t1", "accepted", None)
        assert cache.peek(("trainers", None)) is None

    def test_demote_reports_failed_compensation(self, trainers: list[Trainer]) -> None:
        api = _FakeApi("update_user_role", ("update_trainer_status", "t1", "accepted", None))
        with pytest.raises(SagaCompensationFailedError):
            asyncio.run(TrainerAdministration(api, QueryCache()).demote(trainers[0]))  # type: ignore[arg-type]
