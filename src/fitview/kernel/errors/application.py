"""Application-layer errors – session and permission concerns."""

from __future__ import annotations

from typing import Any

from fitview.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnauthorizedError(ApplicationError):
    """Missing or expired credentials; the user must sign in again."""

    default_code = "unauthorized"


class ForbiddenError(ApplicationError):
    """Signed-in user lacks the role required for a dashboard area."""

    default_code = "forbidden"

    def __init__(
        self,
        message: str = "Access denied",
        *,
        role: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.role = role


__all__ = ["ApplicationError", "ForbiddenError", "UnauthorizedError"]
