"""Kernel specification – composable boolean rules over records."""

from __future__ import annotations

import abc
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Specification(abc.ABC, Generic[T]):
    """Abstract base for specifications; provides operator overloads.

    Subclass and implement ``is_satisfied_by``.

    Example::

        class Accepted(Specification[Trainer]):
            def is_satisfied_by(self, candidate: Trainer) -> bool:
                return candidate.status == "accepted"

        spec = Accepted() & FieldEquals("specialization", "Yoga")
    """

    @abc.abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool: ...

    def __call__(self, candidate: T) -> bool:
        return self.is_satisfied_by(candidate)

    def __and__(self, other: "Specification[T]") -> "AndSpecification[T]":
        return AndSpecification(self, other)

    def __or__(self, other: "Specification[T]") -> "OrSpecification[T]":
        return OrSpecification(self, other)

    def __invert__(self) -> "NotSpecification[T]":
        return NotSpecification(self)


class AndSpecification(Specification[T]):
    """Conjunction of two specifications."""

    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self._left = left
        self._right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self._left.is_satisfied_by(candidate) and self._right.is_satisfied_by(candidate)


class OrSpecification(Specification[T]):
    """Disjunction of two specifications."""

    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self._left = left
        self._right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self._left.is_satisfied_by(candidate) or self._right.is_satisfied_by(candidate)


class NotSpecification(Specification[T]):
    """Negation of a specification."""

    def __init__(self, spec: Specification[T]) -> None:
        self._spec = spec

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self._spec.is_satisfied_by(candidate)


class AlwaysSatisfied(Specification[T]):
    """Neutral element of ``&``: accepts every candidate."""

    def is_satisfied_by(self, candidate: T) -> bool:  # noqa: ARG002
        return True

    def __and__(self, other: Specification[T]) -> Specification[T]:  # type: ignore[override]
        return other


class LambdaSpecification(Specification[T]):
    """Wraps a plain callable as a ``Specification``.

    Example::

        active_only = LambdaSpecification(lambda s: not s.is_unsubscribed, name="active_only")
    """

    def __init__(
        self,
        predicate: Callable[[T], bool],
        *,
        name: str = "",
    ) -> None:
        self._predicate = predicate
        self.name: str = name or getattr(predicate, "__name__", "<lambda>")

    def is_satisfied_by(self, candidate: T) -> bool:
        return self._predicate(candidate)

    def __repr__(self) -> str:  # pragma: no cover
        return f"LambdaSpecification({self.name!r})"


def all_of(specs: "list[Specification[T]]") -> Specification[T]:
    """Fold *specs* with ``&``; an empty list accepts everything."""
    combined: Specification[T] = AlwaysSatisfied()
    for spec in specs:
        combined = combined & spec
    return combined


def any_of(specs: "list[Specification[T]]") -> Specification[T]:
    """Fold *specs* with ``|``; an empty list rejects everything."""
    if not specs:
        return ~AlwaysSatisfied()
    combined = specs[0]
    for spec in specs[1:]:
        combined = combined | spec
    return combined


__all__ = [
    "AlwaysSatisfied",
    "AndSpecification",
    "LambdaSpecification",
    "NotSpecification",
    "OrSpecification",
    "Specification",
    "all_of",
    "any_of",
]
