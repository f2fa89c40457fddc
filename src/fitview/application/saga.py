"""Application saga – ordered steps with compensation.

Used where one user action needs several backend writes that the backend
does not apply atomically. Steps run in order; when one fails, the steps
that already completed are compensated in reverse order.
"""

from __future__ import annotations

import abc
from typing import Any

from fitview.kernel.errors import ApplicationError
from fitview.observability.logging import get_logger

logger = get_logger(__name__)


class SagaStep(abc.ABC):
    """A single unit of work within a saga."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Human-readable name used in logs and errors."""

    @abc.abstractmethod
    async def action(self, ctx: dict[str, Any]) -> None:
        """Execute the forward step. Raise to signal failure."""

    @abc.abstractmethod
    async def compensate(self, ctx: dict[str, Any]) -> None:
        """Undo the effects of :meth:`action`."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class SagaError(ApplicationError):
    """Base class for saga execution errors."""

    default_code = "saga_error"

    def __init__(self, saga_id: str, failed_step: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message or f"Saga '{saga_id}' failed at step '{failed_step}'",
            detail={"saga_id": saga_id, "failed_step": failed_step},
            **kwargs,
        )
        self.saga_id = saga_id
        self.failed_step = failed_step


class SagaFailedError(SagaError):
    """A step failed and every completed step was compensated."""

    default_code = "saga_failed"


class SagaCompensationFailedError(SagaError):
    """A step failed and at least one compensation failed as well."""

    default_code = "saga_compensation_failed"

    def __init__(
        self,
        saga_id: str,
        failed_step: str,
        action_error: Exception,
        compensation_error: Exception,
    ) -> None:
        super().__init__(saga_id, failed_step, cause=action_error)
        self.action_error = action_error
        self.compensation_error = compensation_error


class SagaOrchestrator:
    """Executes a list of :class:`SagaStep` objects in sequence."""

    def __init__(self, steps: list[SagaStep]) -> None:
        if not steps:
            raise ValueError("SagaOrchestrator requires at least one step")
        self._steps = steps

    async def run(self, saga_id: str, initial: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run all steps and return the final context.

        Raises :class:`SagaFailedError` when a step fails and all
        compensations succeed, :class:`SagaCompensationFailedError` when a
        compensation fails too.
        """
        ctx: dict[str, Any] = dict(initial or {})
        completed: list[SagaStep] = []

        for step in self._steps:
            try:
                await step.action(ctx)
            except Exception as action_exc:
                logger.warning("saga_step_failed", saga_id=saga_id, step=step.name, error=repr(action_exc))
                compensation_exc = await self._compensate(saga_id, ctx, completed)
                if compensation_exc is not None:
                    raise SagaCompensationFailedError(
                        saga_id=saga_id,
                        failed_step=step.name,
                        action_error=action_exc,
                        compensation_error=compensation_exc,
                    ) from action_exc
                raise SagaFailedError(saga_id, step.name, cause=action_exc) from action_exc
            completed.append(step)

        return ctx

    async def _compensate(
        self,
        saga_id: str,
        ctx: dict[str, Any],
        completed: list[SagaStep],
    ) -> Exception | None:
        """Run compensations in reverse; return the first exception or None."""
        first_error: Exception | None = None
        for step in reversed(completed):
            try:
                await step.compensate(ctx)
            except Exception as exc:  # noqa: BLE001
                logger.error("saga_compensation_failed", saga_id=saga_id, step=step.name, error=repr(exc))
                if first_error is None:
                    first_error = exc
        return first_error


__all__ = [
    "SagaCompensationFailedError",
    "SagaError",
    "SagaFailedError",
    "SagaOrchestrator",
    "SagaStep",
]
