"""HTTP adapter – FitnessApi, the typed gateway to the platform backend."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, TypeVar

from fitview.adapters.http.client import ApiClient
from fitview.kernel.errors import ExternalServiceError
from fitview.kernel.records import (
    Booking,
    Comment,
    FitnessClass,
    ForumPost,
    Subscriber,
    Trainer,
    TrainerStatus,
    VoteType,
    parse_comment,
    parse_record,
    parse_records,
)

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class PostPage:
    """One server-side page of community posts."""

    posts: list[ForumPost]
    total_pages: int


@dataclasses.dataclass(frozen=True)
class BookingLedger:
    bookings: list[Booking]
    total_revenue: float | None


def _expect_list(payload: Any, url: str) -> list[Any]:
    if not isinstance(payload, list):
        raise ExternalServiceError(service=url, message=f"Expected a JSON array from {url}")
    return payload


def _expect_object(payload: Any, url: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ExternalServiceError(service=url, message=f"Expected a JSON object from {url}")
    return payload


def _number(convert: Callable[[Any], T], value: Any, url: str, field: str) -> T:
    try:
        return convert(value)
    except (TypeError, ValueError) as exc:
        raise ExternalServiceError(
            service=url, message=f"Non-numeric {field!r} from {url}"
        ).with_detail(url=url, field=field) from exc


class FitnessApi:
    """Endpoint-per-method access to the backend; returns parsed records."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    # -- classes --------------------------------------------------------

    async def list_classes(self) -> list[FitnessClass]:
        data = await self._client.get_json("/classes")
        return parse_records("class", _expect_list(data, "/classes"))  # type: ignore[return-value]

    # -- trainers -------------------------------------------------------

    async def list_trainers(
        self,
        status: TrainerStatus | None = None,
        email: str | None = None,
    ) -> list[Trainer]:
        params = {k: v for k, v in (("status", status), ("email", email)) if v}
        data = await self._client.get_json("/trainers", params=params)
        return parse_records("trainer", _expect_list(data, "/trainers"))  # type: ignore[return-value]

    async def get_trainer(self, trainer_id: str) -> Trainer:
        url = f"/trainers/{trainer_id}"
        data = await self._client.get_json(url)
        return parse_record("trainer", _expect_object(data, url))  # type: ignore[return-value]

    async def update_trainer_status(
        self,
        trainer_id: str,
        status: TrainerStatus,
        feedback: str | None = None,
    ) -> None:
        body: dict[str, Any] = {"status": status}
        if feedback is not None:
            body["feedback"] = feedback
        await self._client.patch(f"/trainers/{trainer_id}/status", json=body)

    async def delete_slot(self, slot_id: str) -> None:
        await self._client.delete(f"/trainers/slots/{slot_id}")

    # -- users ----------------------------------------------------------

    async def get_user_role(self, email: str) -> str | None:
        url = f"/users/role/{email}"
        data = _expect_object(await self._client.get_json(url), url)
        role = data.get("role")
        return str(role) if role else None

    async def update_user_role(self, email: str, role: str) -> None:
        await self._client.patch("/users", json={"email": email, "role": role})

    # -- community ------------------------------------------------------

    async def list_posts(self, page: int = 1, limit: int = 6) -> PostPage:
        url = "/community/pagination"
        data = _expect_object(
            await self._client.get_json(url, params={"page": page, "limit": limit}), url
        )
        posts = parse_records("post", data.get("posts") or [])
        total_pages = _number(int, data.get("totalPages") or 1, url, "totalPages")
        return PostPage(posts=posts, total_pages=total_pages)  # type: ignore[arg-type]

    async def get_post(self, post_id: str) -> ForumPost:
        url = f"/community/{post_id}"
        data = await self._client.get_json(url)
        return parse_record("post", _expect_object(data, url))  # type: ignore[return-value]

    async def vote(self, post_id: str, vote_type: VoteType | None) -> None:
        await self._client.post("/community/vote", json={"postId": post_id, "voteType": vote_type})

    async def add_comment(self, post_id: str, text: str) -> Comment | None:
        """Post a comment; returns the stored comment when the backend echoes it."""
        url = f"/community/{post_id}/comments"
        data = await self._client.post_json(url, json={"commentText": text})
        if not isinstance(data, dict) or not isinstance(data.get("comment"), dict):
            return None
        return parse_comment(data["comment"])

    # -- bookings -------------------------------------------------------

    async def list_bookings(self) -> BookingLedger:
        data = await self._client.get_json("/bookings")
        if isinstance(data, list):
            return BookingLedger(bookings=parse_records("booking", data), total_revenue=None)  # type: ignore[arg-type]
        data = _expect_object(data, "/bookings")
        revenue = data.get("totalRevenue")
        return BookingLedger(
            bookings=parse_records("booking", data.get("bookings") or []),  # type: ignore[arg-type]
            total_revenue=None if revenue is None else _number(float, revenue, "/bookings", "totalRevenue"),
        )

    async def list_member_bookings(self, email: str) -> list[Booking]:
        url = f"/bookings/user/{email}"
        data = await self._client.get_json(url)
        return parse_records("booking", _expect_list(data, url))  # type: ignore[return-value]

    # -- newsletter -----------------------------------------------------

    async def list_subscribers(self) -> list[Subscriber]:
        data = await self._client.get_json("/newsletter")
        return parse_records("subscriber", _expect_list(data, "/newsletter"))  # type: ignore[return-value]

    async def subscribe(self, name: str, email: str) -> None:
        await self._client.post("/newsletter", json={"name": name, "email": email})

    async def delete_subscriber(self, subscriber_id: str) -> None:
        await self._client.delete(f"/newsletter/{subscriber_id}")


__all__ = ["BookingLedger", "FitnessApi", "PostPage"]
