"""Kernel time – Clock protocol + implementations."""
from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: abstract clock so month-based statistics stay testable."""

    def now(self) -> datetime: ...
    def today(self) -> date: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def today(self) -> date:
        return datetime.now(UTC).date()


class FrozenClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def today(self) -> date:
        return self._fixed.date()

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)


def parse_timestamp(value: object) -> datetime | None:
    """Parse a backend timestamp into an aware ``datetime``.

    Accepts ``datetime`` objects and ISO-8601 strings (a trailing ``Z`` is
    read as UTC). Naive values are assumed to be UTC. Anything else,
    including unparseable strings, yields ``None``.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def in_same_month(moment: datetime | None, reference: datetime) -> bool:
    """True when *moment* falls in the calendar month of *reference*."""
    if moment is None:
        return False
    return moment.year == reference.year and moment.month == reference.month


__all__ = ["Clock", "FrozenClock", "SystemClock", "in_same_month", "parse_timestamp"]
