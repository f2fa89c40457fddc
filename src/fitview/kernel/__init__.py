"""Kernel – framework-agnostic building blocks: errors, records, rules, time."""

from fitview.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    ExternalServiceError,
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
    TimeoutError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "ExternalServiceError",
    "ForbiddenError",
    "InfrastructureError",
    "NotFoundError",
    "TimeoutError",
    "UnauthorizedError",
    "ValidationError",
]
