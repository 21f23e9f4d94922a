"""Aggregate application use cases."""

from .notifications import notify_new_damage_report, notify_status_update
from .reminders import ReminderScanSummary, check_and_send_reminders

__all__ = [
    "ReminderScanSummary",
    "check_and_send_reminders",
    "notify_new_damage_report",
    "notify_status_update",
]
