"""Dashboards – newsletter subscriber statistics and CSV export."""
from __future__ import annotations

import csv
import dataclasses
import io
from datetime import datetime
from typing import Iterable, Sequence

from fitview.kernel.records import Subscriber
from fitview.kernel.time import Clock, SystemClock, in_same_month

CSV_HEADER = ("Name", "Email", "Status", "Subscribed Date", "Unsubscribed Date", "Role")


@dataclasses.dataclass(frozen=True)
class SubscriberStats:
    total: int
    active: int
    new_this_month: int
    unsubscribed_this_month: int


def subscriber_stats(subscribers: Sequence[Subscriber], clock: Clock | None = None) -> SubscriberStats:
    """Counts over the whole collection, independent of any list filter."""
    now = (clock or SystemClock()).now()
    active = [s for s in subscribers if not s.is_unsubscribed]
    return SubscriberStats(
        total=len(subscribers),
        active=len(active),
        new_this_month=sum(1 for s in active if in_same_month(s.created_at, now)),
        unsubscribed_this_month=sum(
            1 for s in subscribers if s.is_unsubscribed and in_same_month(s.unsubscribed_at, now)
        ),
    )


def _day(moment: datetime | None, default: str = "") -> str:
    return moment.strftime("%Y-%m-%d") if moment is not None else default


def export_subscribers_csv(subscribers: Iterable[Subscriber], *, bom: bool = False) -> bytes:
    """Render subscribers (typically the filtered list) as UTF-8 CSV."""
    buf = io.StringIO()
    if bom:
        buf.write("\ufeff")
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for sub in subscribers:
        writer.writerow([
            sub.name,
            sub.email,
            "Unsubscribed" if sub.is_unsubscribed else "Active",
            _day(sub.created_at),
            _day(sub.unsubscribed_at, "N/A"),
            sub.user_role or "Member",
        ])
    return buf.getvalue().encode("utf-8")


__all__ = ["CSV_HEADER", "SubscriberStats", "export_subscribers_csv", "subscriber_stats"]
