"""Application access – role resolution and dashboard guards."""
from __future__ import annotations

from enum import Enum

from fitview.adapters.http.gateway import FitnessApi
from fitview.application.cache import QueryCache
from fitview.kernel.errors import ForbiddenError


class Role(str, Enum):
    USER = "user"
    MEMBER = "member"
    TRAINER = "trainer"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Unknown or missing roles fall back to :attr:`USER`."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.USER


def require_role(role: Role | str | None, *allowed: Role) -> Role:
    """Return the parsed role, or raise :class:`ForbiddenError` when not allowed."""
    resolved = role if isinstance(role, Role) else Role.parse(role)
    if resolved not in allowed:
        raise ForbiddenError(
            f"Role '{resolved.value}' may not access this area",
            role=resolved.value,
            detail={"allowed": [r.value for r in allowed]},
        )
    return resolved


class RoleResolver:
    """Looks up a signed-in user's role, cached per email."""

    def __init__(self, api: FitnessApi, cache: QueryCache) -> None:
        self._api = api
        self._cache = cache

    async def resolve(self, email: str | None) -> Role:
        if not email:
            return Role.USER
        raw = await self._cache.get_or_load(("userRole", email), lambda: self._api.get_user_role(email))
        return Role.parse(raw)

    def forget(self, email: str) -> None:
        self._cache.invalidate(("userRole", email))


__all__ = ["Role", "RoleResolver", "require_role"]
