"""Dashboards – admin, trainer and member summary figures."""
from fitview.application.dashboards.finance import FinancialSummary, summarize_bookings
from fitview.application.dashboards.subscribers import SubscriberStats, export_subscribers_csv, subscriber_stats
from fitview.application.dashboards.trainers import (
    ApplicationLog,
    RosterStats,
    SlotSummary,
    TrainerAdministration,
    application_counts,
    member_applications,
    slot_summary,
    trainer_roster_stats,
)

__all__ = [
    "ApplicationLog",
    "FinancialSummary",
    "RosterStats",
    "SlotSummary",
    "SubscriberStats",
    "TrainerAdministration",
    "application_counts",
    "export_subscribers_csv",
    "member_applications",
    "slot_summary",
    "subscriber_stats",
    "summarize_bookings",
    "trainer_roster_stats",
]
