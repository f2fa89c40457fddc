"""Infrastructure errors – backend and transport failures."""

from __future__ import annotations

from typing import Any

from fitview.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class TimeoutError(InfrastructureError):  # noqa: A001
    """A backend request exceeded its deadline."""

    default_code = "timeout"


class ExternalServiceError(InfrastructureError):
    """The backend returned an unexpected response or was unreachable."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' error", **kwargs)
        self.service = service
        self.status_code = status_code


__all__ = ["ExternalServiceError", "InfrastructureError", "TimeoutError"]
