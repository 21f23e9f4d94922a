"""Deadline reminder policy and scan."""

from .check_and_send import ReminderScanSummary, check_and_send_reminders
from .policy import (
    DeadlineProximity,
    DueReminder,
    candidate_window,
    classify_deadline,
    evaluate_report,
    reminders_due,
)

__all__ = [
    "ReminderScanSummary",
    "check_and_send_reminders",
    "DeadlineProximity",
    "DueReminder",
    "candidate_window",
    "classify_deadline",
    "evaluate_report",
    "reminders_due",
]
