"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   └── NotFoundError
    ├── ApplicationError     (application.py)
    │   ├── UnauthorizedError
    │   └── ForbiddenError
    └── InfrastructureError  (infrastructure.py)
        ├── TimeoutError
        └── ExternalServiceError
"""

from fitview.kernel.errors.application import (
    ApplicationError,
    ForbiddenError,
    UnauthorizedError,
)
from fitview.kernel.errors.base import BaseError
from fitview.kernel.errors.domain import DomainError, NotFoundError, ValidationError
from fitview.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
    TimeoutError,
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
