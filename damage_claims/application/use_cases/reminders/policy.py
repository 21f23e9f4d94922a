"""Decide which deadline reminders are due for a damage report.

Two independent tracks are evaluated for every report:

* the Airbnb submission track, while the claim has not been submitted, and
* the proof track, while the report status is ``PROOF_REQUIRED``.

A deadline is due "today" when it falls on the current calendar day and due
"tomorrow" when it falls on the next one. Calendar days are measured in the
application timezone. Anything else, including overdue deadlines, is not due.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from damage_claims.domain.entities import DamageReport, NotificationType, ReportStatus
from damage_claims.utils import ensure_app_timezone, start_of_app_day

_ONE_DAY = timedelta(days=1)


class DeadlineProximity(str, Enum):
    TODAY = "TODAY"
    TOMORROW = "TOMORROW"


@dataclass(frozen=True)
class DueReminder:
    """A reminder that should be sent for one deadline track of a report."""

    notification_type: NotificationType
    is_today: bool
    deadline: datetime


def candidate_window(now: datetime) -> tuple[datetime, datetime]:
    """Return the ``[start, end)`` range a deadline must fall in to be due."""

    today = start_of_app_day(now)
    return today, today + 2 * _ONE_DAY


def classify_deadline(now: datetime, deadline: datetime) -> DeadlineProximity | None:
    today = start_of_app_day(now)
    tomorrow = today + _ONE_DAY
    localized = ensure_app_timezone(deadline)

    if today <= localized < tomorrow:
        return DeadlineProximity.TODAY
    if tomorrow <= localized < tomorrow + _ONE_DAY:
        return DeadlineProximity.TOMORROW
    return None


def evaluate_report(
    now: datetime,
    *,
    airbnb_deadline: datetime | None,
    proof_deadline: datetime | None,
    submitted_to_airbnb: bool,
    status: ReportStatus,
) -> list[DueReminder]:
    """Return the reminders due at ``now``, at most one per track.

    Raises ``ValueError`` when an eligible track has no deadline.
    """

    tracks: list[tuple[NotificationType, datetime | None]] = []
    if not submitted_to_airbnb:
        tracks.append((NotificationType.DEADLINE_REMINDER, airbnb_deadline))
    if status == ReportStatus.PROOF_REQUIRED:
        tracks.append((NotificationType.PROOF_DEADLINE_REMINDER, proof_deadline))

    due: list[DueReminder] = []
    for notification_type, deadline in tracks:
        if deadline is None:
            msg = f"{notification_type.value} track requires a deadline"
            raise ValueError(msg)
        proximity = classify_deadline(now, deadline)
        if proximity is None:
            continue
        due.append(
            DueReminder(
                notification_type=notification_type,
                is_today=proximity is DeadlineProximity.TODAY,
                deadline=ensure_app_timezone(deadline),
            )
        )
    return due


def reminders_due(now: datetime, report: DamageReport) -> list[DueReminder]:
    """Evaluate both deadline tracks of ``report`` at ``now``."""

    return evaluate_report(
        now,
        airbnb_deadline=report.airbnb_deadline,
        proof_deadline=report.proof_deadline,
        submitted_to_airbnb=report.submitted_to_airbnb,
        status=report.status,
    )


__all__ = [
    "DeadlineProximity",
    "DueReminder",
    "candidate_window",
    "classify_deadline",
    "evaluate_report",
    "reminders_due",
]
