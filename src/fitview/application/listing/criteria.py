"""Application listing – FilterCriteria and SortKey."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Mapping


class SortKey(str, Enum):
    POPULAR = "popular"
    RATING = "rating"
    NEWEST = "newest"
    NAME = "name"

    @classmethod
    def parse(cls, value: "SortKey | str") -> "SortKey | None":
        """Return the matching member, or ``None`` for an unknown key."""
        try:
            return cls(value)
        except ValueError:
            return None


def field_value(record: Any, name: str) -> Any:
    """Read *name* from a record object or a plain mapping; ``None`` when absent."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


@dataclasses.dataclass(frozen=True)
class FilterCriteria:
    """Free-text query plus categorical equality constraints.

    Instances are immutable and hashable so a view can be memoized on them.
    Constraints are kept sorted by field name, which makes two criteria
    built in a different order compare equal.
    """

    query: str = ""
    constraints: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "query", (self.query or "").strip())
        cleaned = {f: v for f, v in self.constraints if v not in (None, "")}
        object.__setattr__(self, "constraints", tuple(sorted(cleaned.items())))

    @classmethod
    def of(cls, query: str | None = "", **constraints: str) -> "FilterCriteria":
        return cls(query=query, constraints=tuple(constraints.items()))

    def with_query(self, query: str | None) -> "FilterCriteria":
        return dataclasses.replace(self, query=query)

    def with_constraint(self, field: str, value: str | None) -> "FilterCriteria":
        """Set *field* to *value*; an empty value removes the constraint."""
        merged = dict(self.constraints)
        if value in (None, ""):
            merged.pop(field, None)
        else:
            merged[field] = value
        return FilterCriteria(query=self.query, constraints=tuple(merged.items()))

    def without_constraint(self, field: str) -> "FilterCriteria":
        return self.with_constraint(field, None)

    def constraint(self, field: str) -> str | None:
        return dict(self.constraints).get(field)

    @property
    def is_empty(self) -> bool:
        return not self.query and not self.constraints

    def active(self) -> list[tuple[str, str]]:
        """Set criteria as ``(name, value)`` pairs, query first."""
        pairs: list[tuple[str, str]] = []
        if self.query:
            pairs.append(("query", self.query))
        pairs.extend(self.constraints)
        return pairs


__all__ = ["FilterCriteria", "SortKey", "field_value"]
