"""Application listing – predicate evaluation over records.

Criteria become a conjunction of specifications: one :class:`TextQuery`
when a query is set and one :class:`FieldEquals` per categorical
constraint. Because ``&`` is commutative over these pure predicates the
result set does not depend on the order criteria were applied in.
"""
from __future__ import annotations

from functools import partial
from typing import Any, Mapping, Sequence

from fitview.application.listing.criteria import FilterCriteria, field_value
from fitview.kernel.specification import LambdaSpecification, Specification, all_of, any_of

DisplayNames = Mapping[str, Mapping[str, str]]


class TextQuery(Specification[Any]):
    """Case-insensitive substring match against any of *text_fields*.

    *display_names* maps a field to a value→label table; the label is
    searched instead of the raw value (a class stored under category
    ``"Yoga"`` is found by ``"mindfulness"``). Unmapped values are searched
    as they are. Each field becomes its own specification and the
    fields are joined with ``|``.
    """

    def __init__(
        self,
        query: str,
        text_fields: Sequence[str],
        display_names: DisplayNames | None = None,
    ) -> None:
        self._needle = query.casefold()
        self._fields = tuple(text_fields)
        self._display_names = display_names or {}
        self._match = any_of(
            [LambdaSpecification(partial(self._contains, f), name=f"{f}_contains") for f in self._fields]
        )

    def _haystack(self, record: Any, field: str) -> str:
        value = field_value(record, field)
        if value is None:
            return ""
        text = str(value)
        labels = self._display_names.get(field)
        if labels is not None:
            text = labels.get(text, text)
        return text.casefold()

    def _contains(self, field: str, record: Any) -> bool:
        return self._needle in self._haystack(record, field)

    def is_satisfied_by(self, candidate: Any) -> bool:
        return self._match.is_satisfied_by(candidate)


class FieldEquals(Specification[Any]):
    """Exact equality on one field; a missing field never matches."""

    def __init__(self, field: str, expected: str) -> None:
        self.field = field
        self.expected = expected

    def is_satisfied_by(self, candidate: Any) -> bool:
        value = field_value(candidate, self.field)
        if value is None:
            return False
        return value == self.expected or str(value) == self.expected


def build_specification(
    criteria: FilterCriteria,
    text_fields: Sequence[str],
    display_names: DisplayNames | None = None,
) -> Specification[Any]:
    specs: list[Specification[Any]] = []
    if criteria.query:
        specs.append(TextQuery(criteria.query, text_fields, display_names))
    specs.extend(FieldEquals(f, v) for f, v in criteria.constraints)
    return all_of(specs)


def matches(
    record: Any,
    criteria: FilterCriteria,
    text_fields: Sequence[str] = ("name",),
    display_names: DisplayNames | None = None,
) -> bool:
    """True when *record* passes the query (if any) and every set constraint."""
    return build_specification(criteria, text_fields, display_names).is_satisfied_by(record)


__all__ = ["FieldEquals", "TextQuery", "build_specification", "matches"]
