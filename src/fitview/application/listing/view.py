"""Application listing – the pure filter-then-sort view reducer."""
from __future__ import annotations

import functools
from typing import Any, Iterable

from fitview.application.listing.comparators import comparator_for
from fitview.application.listing.criteria import FilterCriteria, SortKey
from fitview.application.listing.predicates import build_specification
from fitview.application.listing.profiles import CLASSES, ListProfile


def compute_view(
    records: Iterable[Any],
    criteria: FilterCriteria,
    sort_key: SortKey | str,
    profile: ListProfile = CLASSES,
) -> list[Any]:
    """Filter *records* by *criteria*, then order them by *sort_key*.

    The source collection is never modified; the result is a new list
    holding the same record objects. Equal inputs give equal outputs.
    """
    spec = build_specification(criteria, profile.text_fields, profile.display_names)
    view = [record for record in records if spec.is_satisfied_by(record)]
    view.sort(key=functools.cmp_to_key(comparator_for(sort_key, profile.sort_fields)))
    return view


__all__ = ["compute_view"]
