"""Dashboards – financial overview of platform bookings."""
from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Sequence

from fitview.application.listing import SortFields, SortKey, sort_records
from fitview.kernel.records import Booking

UNKNOWN_PACKAGE = "Unknown Package"
PAYMENT_COMPLETED = "Completed"


@dataclasses.dataclass(frozen=True)
class FinancialSummary:
    total_revenue: float
    average_booking_price: float
    total_transactions: int
    paid_members: int
    package_counts: dict[str, int]
    recent_transactions: list[Booking]

    @property
    def total_packages_booked(self) -> int:
        return sum(self.package_counts.values())


def summarize_bookings(
    bookings: Sequence[Booking],
    total_revenue: float | None = None,
    recent: int = 6,
) -> FinancialSummary:
    """Aggregate the admin balance figures.

    *total_revenue* is the backend's own figure when it reports one;
    otherwise the booking prices are summed.
    """
    revenue = sum(b.price for b in bookings) if total_revenue is None else total_revenue
    average = round(revenue / len(bookings), 2) if bookings else 0.0
    paid_members = len({b.user_email for b in bookings if b.payment_status == PAYMENT_COMPLETED and b.user_email})
    packages = Counter(b.package_name or UNKNOWN_PACKAGE for b in bookings)
    newest_first = sort_records(bookings, SortKey.NEWEST, SortFields(created="created_at"))
    return FinancialSummary(
        total_revenue=revenue,
        average_booking_price=average,
        total_transactions=len(bookings),
        paid_members=paid_members,
        package_counts=dict(packages),
        recent_transactions=newest_first[:recent],
    )


__all__ = ["FinancialSummary", "PAYMENT_COMPLETED", "UNKNOWN_PACKAGE", "summarize_bookings"]
