"""Dashboards – trainer applications, roster figures, slots and admin moderation."""
from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Any, Sequence

from fitview.adapters.http.gateway import FitnessApi
from fitview.application.cache import QueryCache
from fitview.application.saga import SagaOrchestrator, SagaStep
from fitview.kernel.errors import ValidationError
from fitview.kernel.records import Trainer, TrainerStatus
from fitview.observability.logging import get_logger

logger = get_logger(__name__)

DEMOTION_FEEDBACK = "Demoted by Admin"
SLOT_RATE = 50

TRAINER_QUERIES = ("trainers",)


def application_counts(trainers: Sequence[Trainer]) -> dict[TrainerStatus, int]:
    counts = Counter(t.status for t in trainers)
    return {status: counts.get(status, 0) for status in ("pending", "accepted", "rejected")}


@dataclasses.dataclass(frozen=True)
class ApplicationLog:
    """A member's open and rejected trainer applications."""

    applications: list[Trainer]

    @property
    def pending(self) -> int:
        return sum(1 for a in self.applications if a.status == "pending")

    @property
    def rejected(self) -> int:
        return sum(1 for a in self.applications if a.status == "rejected")


def member_applications(applications: Sequence[Trainer]) -> ApplicationLog:
    return ApplicationLog([a for a in applications if a.status in ("pending", "rejected")])


@dataclasses.dataclass(frozen=True)
class SlotSummary:
    booked: int
    available: int
    total_earnings: int


def slot_summary(trainer: Trainer, rate: int = SLOT_RATE) -> SlotSummary:
    """Booked vs free slots; earnings are *rate* per booked member."""
    booked = [s for s in trainer.slots if s.is_booked]
    return SlotSummary(
        booked=len(booked),
        available=len(trainer.slots) - len(booked),
        total_earnings=sum(len(s.booked_members) * rate for s in booked),
    )


@dataclasses.dataclass(frozen=True)
class RosterStats:
    total_trainers: int
    total_sessions: int
    average_rating: float
    certified_trainers: int


def trainer_roster_stats(trainers: Sequence[Trainer]) -> RosterStats:
    """Headline figures for the trainer roster; a missing rating counts as 0."""
    total = len(trainers)
    average = round(sum(t.rating or 0.0 for t in trainers) / total, 1) if total else 0.0
    return RosterStats(
        total_trainers=total,
        total_sessions=sum(t.sessions for t in trainers),
        average_rating=average,
        certified_trainers=sum(1 for t in trainers if t.certifications),
    )


class _RejectTrainerStep(SagaStep):
    name = "reject_trainer"

    def __init__(self, api: FitnessApi) -> None:
        self._api = api

    async def action(self, ctx: dict[str, Any]) -> None:
        await self._api.update_trainer_status(ctx["trainer_id"], "rejected", DEMOTION_FEEDBACK)

    async def compensate(self, ctx: dict[str, Any]) -> None:
        await self._api.update_trainer_status(ctx["trainer_id"], "accepted")


class _ResetRoleStep(SagaStep):
    name = "reset_user_role"

    def __init__(self, api: FitnessApi) -> None:
        self._api = api

    async def action(self, ctx: dict[str, Any]) -> None:
        await self._api.update_user_role(ctx["email"], "member")

    async def compensate(self, ctx: dict[str, Any]) -> None:
        await self._api.update_user_role(ctx["email"], "trainer")


class TrainerAdministration:
    """Admin moderation of trainer applications.

    Every successful change drops the cached trainer and role lookups so
    the dashboards refetch.
    """

    def __init__(self, api: FitnessApi, cache: QueryCache) -> None:
        self._api = api
        self._cache = cache

    async def approve(self, trainer_id: str) -> None:
        await self._api.update_trainer_status(trainer_id, "accepted")
        self._cache.invalidate(TRAINER_QUERIES)
        logger.info("trainer_approved", trainer_id=trainer_id)

    async def reject(self, trainer_id: str, feedback: str) -> None:
        if not feedback.strip():
            raise ValidationError(
                "Rejection feedback is required",
                errors=[{"field": "feedback", "error": "required"}],
            )
        await self._api.update_trainer_status(trainer_id, "rejected", feedback.strip())
        self._cache.invalidate(TRAINER_QUERIES)
        logger.info("trainer_rejected", trainer_id=trainer_id)

    async def demote(self, trainer: Trainer) -> None:
        """Reject the trainer, then return their account to the member role.

        If the role update fails the trainer is re-accepted, so the two
        records never disagree. Raises :class:`SagaFailedError` (or
        :class:`SagaCompensationFailedError`) on failure.
        """
        orchestrator = SagaOrchestrator([_RejectTrainerStep(self._api), _ResetRoleStep(self._api)])
        try:
            await orchestrator.run(
                f"demote-{trainer.id}",
                initial={"trainer_id": trainer.id, "email": trainer.email},
            )
        finally:
            self._cache.invalidate(TRAINER_QUERIES, ("userRole", trainer.email))
        logger.info("trainer_demoted", trainer_id=trainer.id)

    async def delete_slot(self, slot_id: str) -> None:
        await self._api.delete_slot(slot_id)
        self._cache.invalidate(TRAINER_QUERIES)
        logger.info("trainer_slot_deleted", slot_id=slot_id)


__all__ = [
    "ApplicationLog",
    "DEMOTION_FEEDBACK",
    "RosterStats",
    "SlotSummary",
    "TrainerAdministration",
    "application_counts",
    "member_applications",
    "slot_summary",
    "trainer_roster_stats",
]
