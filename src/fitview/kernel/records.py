"""Kernel records – tagged record types for every list domain.

The backend returns loosely shaped JSON documents (``_id`` or ``id``,
camelCase keys, optional fields that may be absent). :func:`parse_record`
maps them onto frozen dataclasses whose required fields are explicit; a
payload without one raises :class:`~fitview.kernel.errors.ValidationError`.

Each record class carries a ``kind`` discriminator.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any, Callable, ClassVar, Iterable, Literal, Mapping, Union

from fitview.kernel.errors import ValidationError
from fitview.kernel.time import parse_timestamp

RecordKind = Literal["class", "post", "trainer", "subscriber", "booking"]
VoteType = Literal["like", "dislike"]
TrainerStatus = Literal["pending", "accepted", "rejected"]


@dataclasses.dataclass(frozen=True, slots=True)
class FitnessClass:
    kind: ClassVar[RecordKind] = "class"

    id: str
    name: str
    category: str = ""
    description: str = ""
    difficulty: str = ""
    bookings: int = 0
    rating: float | None = None
    created_at: datetime | None = None
    trainer_ids: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True, slots=True)
class Vote:
    email: str
    type: VoteType


@dataclasses.dataclass(frozen=True, slots=True)
class Comment:
    text: str
    id: str = ""
    author: str = ""
    author_email: str = ""
    author_role: str = ""
    created_at: datetime | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class ForumPost:
    kind: ClassVar[RecordKind] = "post"

    id: str
    title: str
    content: str = ""
    category: str = ""
    author: str = ""
    author_email: str = ""
    author_role: str = ""
    created_at: datetime | None = None
    votes: tuple[Vote, ...] = ()
    comments: int = 0
    thread: tuple[Comment, ...] = ()
    like_count: int | None = None
    dislike_count: int | None = None

    @property
    def likes(self) -> int:
        if self.like_count is not None:
            return self.like_count
        return sum(1 for v in self.votes if v.type == "like")

    @property
    def dislikes(self) -> int:
        if self.dislike_count is not None:
            return self.dislike_count
        return sum(1 for v in self.votes if v.type == "dislike")

    @property
    def score(self) -> int:
        return self.likes - self.dislikes


@dataclasses.dataclass(frozen=True, slots=True)
class Slot:
    id: str
    name: str = ""
    time: str = ""
    days: tuple[str, ...] = ()
    class_type: str = ""
    booked_members: tuple[str, ...] = ()

    @property
    def is_booked(self) -> bool:
        return bool(self.booked_members)


@dataclasses.dataclass(frozen=True, slots=True)
class Trainer:
    kind: ClassVar[RecordKind] = "trainer"

    id: str
    name: str
    email: str
    specialization: str = ""
    status: TrainerStatus = "pending"
    experience: int = 0
    rating: float | None = None
    certifications: tuple[str, ...] = ()
    slots: tuple[Slot, ...] = ()
    sessions: int = 0
    admin_feedback: str = ""
    created_at: datetime | None = None

    @property
    def booked_slots(self) -> int:
        return sum(1 for s in self.slots if s.is_booked)


@dataclasses.dataclass(frozen=True, slots=True)
class Subscriber:
    kind: ClassVar[RecordKind] = "subscriber"

    id: str
    email: str
    name: str = ""
    created_at: datetime | None = None
    is_unsubscribed: bool = False
    unsubscribed_at: datetime | None = None
    user_role: str = ""

    @property
    def status(self) -> str:
        return "unsubscribed" if self.is_unsubscribed else "active"


@dataclasses.dataclass(frozen=True, slots=True)
class Booking:
    kind: ClassVar[RecordKind] = "booking"

    id: str
    user_email: str = ""
    user_name: str = ""
    user_role: str = ""
    trainer_name: str = ""
    package_name: str = ""
    price: float = 0.0
    payment_status: str = ""
    created_at: datetime | None = None


Record = Union[FitnessClass, ForumPost, Trainer, Subscriber, Booking]


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------


def _identifier(payload: Mapping[str, Any], kind: str) -> str:
    raw = payload.get("_id") or payload.get("id")
    if raw in (None, ""):
        raise ValidationError(
            f"{kind} payload has no identifier",
            errors=[{"field": "_id", "error": "required"}],
        )
    return str(raw)


def _required(payload: Mapping[str, Any], key: str, kind: str) -> str:
    value = payload.get(key)
    if value in (None, ""):
        raise ValidationError(
            f"{kind} payload is missing '{key}'",
            errors=[{"field": key, "error": "required"}],
        )
    return str(value)


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    return "" if value is None else str(value)


def _int(payload: Mapping[str, Any], key: str, default: int = 0) -> int:
    try:
        return int(payload.get(key, default))
    except (TypeError, ValueError):
        return default


def _optional_int(payload: Mapping[str, Any], key: str) -> int | None:
    if payload.get(key) is None:
        return None
    return _int(payload, key)


def _optional_float(payload: Mapping[str, Any], key: str) -> float | None:
    try:
        value = payload.get(key)
        return None if value is None else float(value)
    except (TypeError, ValueError):
        return None


def _strings(values: Any) -> tuple[str, ...]:
    if not isinstance(values, (list, tuple)):
        return ()
    return tuple(str(v) for v in values if v is not None)


def _parse_class(payload: Mapping[str, Any]) -> FitnessClass:
    trainers = payload.get("trainers") or []
    trainer_ids = tuple(
        str(t.get("id") or t.get("_id")) if isinstance(t, Mapping) else str(t)
        for t in trainers
        if t
    )
    return FitnessClass(
        id=_identifier(payload, "class"),
        name=_required(payload, "name", "class"),
        category=_text(payload, "category"),
        description=_text(payload, "description"),
        difficulty=_text(payload, "difficulty"),
        bookings=_int(payload, "bookings"),
        rating=_optional_float(payload, "rating"),
        created_at=parse_timestamp(payload.get("createdAt")),
        trainer_ids=trainer_ids,
    )


def _parse_vote(raw: Any) -> Vote | None:
    if not isinstance(raw, Mapping):
        return None
    vote_type = raw.get("type")
    if vote_type not in ("like", "dislike") or not raw.get("email"):
        return None
    return Vote(email=str(raw["email"]), type=vote_type)


def parse_comment(payload: Mapping[str, Any]) -> Comment:
    """Build a :class:`Comment`; the body may arrive as ``text``, ``content`` or ``commentText``."""
    body = payload.get("text") or payload.get("content") or payload.get("commentText")
    return Comment(
        text="" if body is None else str(body),
        id=str(payload.get("_id") or payload.get("id") or ""),
        author=_text(payload, "author"),
        author_email=_text(payload, "authorEmail"),
        author_role=_text(payload, "authorRole"),
        created_at=parse_timestamp(payload.get("createdAt")),
    )


def _parse_post(payload: Mapping[str, Any]) -> ForumPost:
    votes = tuple(v for v in map(_parse_vote, payload.get("votes") or []) if v is not None)
    comments = payload.get("comments")
    thread: tuple[Comment, ...] = ()
    if isinstance(comments, list):
        thread = tuple(parse_comment(c) for c in comments if isinstance(c, Mapping))
    return ForumPost(
        id=_identifier(payload, "post"),
        title=_required(payload, "title", "post"),
        content=_text(payload, "content"),
        category=_text(payload, "category"),
        author=_text(payload, "author"),
        author_email=_text(payload, "authorEmail"),
        author_role=_text(payload, "authorRole"),
        created_at=parse_timestamp(payload.get("createdAt")),
        votes=votes,
        comments=len(comments) if isinstance(comments, list) else _int(payload, "comments"),
        like_count=_optional_int(payload, "likes"),
        dislike_count=_optional_int(payload, "dislikes"),
        thread=thread,
    )


def _parse_slot(raw: Mapping[str, Any]) -> Slot:
    members = raw.get("bookedMembers") or []
    return Slot(
        id=str(raw.get("id") or raw.get("_id") or ""),
        name=_text(raw, "slotName"),
        time=_text(raw, "slotTime"),
        days=_strings(raw.get("days")),
        class_type=_text(raw, "classType"),
        booked_members=tuple(
            str(m.get("email") or m.get("name") or "") if isinstance(m, Mapping) else str(m)
            for m in members
        ),
    )


def _parse_trainer(payload: Mapping[str, Any]) -> Trainer:
    status = payload.get("status") or "pending"
    if status not in ("pending", "accepted", "rejected"):
        raise ValidationError(
            f"trainer payload has unknown status {status!r}",
            errors=[{"field": "status", "error": "invalid"}],
        )
    slots = tuple(_parse_slot(s) for s in payload.get("slots") or [] if isinstance(s, Mapping))
    return Trainer(
        id=_identifier(payload, "trainer"),
        name=_required(payload, "name", "trainer"),
        email=_required(payload, "email", "trainer"),
        specialization=_text(payload, "specialization"),
        status=status,
        experience=_int(payload, "experience"),
        sessions=_int(payload, "sessions"),
        rating=_optional_float(payload, "rating"),
        certifications=_strings(payload.get("certifications")),
        slots=slots,
        admin_feedback=_text(payload, "adminFeedback"),
        created_at=parse_timestamp(payload.get("createdAt")),
    )


def _parse_subscriber(payload: Mapping[str, Any]) -> Subscriber:
    return Subscriber(
        id=_identifier(payload, "subscriber"),
        email=_required(payload, "email", "subscriber"),
        name=_text(payload, "name"),
        created_at=parse_timestamp(payload.get("createdAt")),
        is_unsubscribed=bool(payload.get("isUnsubscribed", False)),
        unsubscribed_at=parse_timestamp(payload.get("unsubscribedAt")),
        user_role=_text(payload, "userRole"),
    )


def _parse_booking(payload: Mapping[str, Any]) -> Booking:
    return Booking(
        id=_identifier(payload, "booking"),
        user_email=_text(payload, "userEmail"),
        user_name=_text(payload, "userName"),
        user_role=_text(payload, "userRole"),
        trainer_name=_text(payload, "trainerName"),
        package_name=_text(payload, "packageName"),
        price=_optional_float(payload, "price") or 0.0,
        payment_status=_text(payload, "paymentStatus"),
        created_at=parse_timestamp(payload.get("createdAt")),
    )


_PARSERS: dict[str, Callable[[Mapping[str, Any]], Record]] = {
    "class": _parse_class,
    "post": _parse_post,
    "trainer": _parse_trainer,
    "subscriber": _parse_subscriber,
    "booking": _parse_booking,
}


def parse_record(kind: RecordKind, payload: Mapping[str, Any]) -> Record:
    """Build the record of *kind* from a backend JSON document."""
    try:
        parser = _PARSERS[kind]
    except KeyError:
        raise ValueError(f"Unknown record kind: {kind!r}") from None
    if not isinstance(payload, Mapping):
        raise ValidationError(f"{kind} payload must be an object, got {type(payload).__name__}")
    return parser(payload)


def parse_records(kind: RecordKind, payloads: Iterable[Mapping[str, Any]]) -> list[Record]:
    return [parse_record(kind, p) for p in payloads]


__all__ = [
    "Booking",
    "Comment",
    "FitnessClass",
    "ForumPost",
    "Record",
    "RecordKind",
    "Slot",
    "Subscriber",
    "Trainer",
    "TrainerStatus",
    "Vote",
    "VoteType",
    "parse_comment",
    "parse_record",
    "parse_records",
]
