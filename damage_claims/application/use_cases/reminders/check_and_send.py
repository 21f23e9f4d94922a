"""Scan damage reports and send the deadline reminders that are due."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from damage_claims.domain.entities import CLAIM_RECIPIENT_ROLES
from damage_claims.infrastructure.notifications import NotificationDispatcher
from damage_claims.infrastructure.repositories import (
    DamageReportRepository,
    NotificationRepository,
    UserRepository,
)
from damage_claims.utils import ensure_app_timezone, now_in_app_timezone, start_of_app_day

from ..notifications.delivery import fan_out
from ..notifications.messages import render_deadline_reminder
from .policy import candidate_window, reminders_due

logger = logging.getLogger(__name__)


@dataclass
class ReminderScanSummary:
    """Counters describing one reminder scan."""

    reports_checked: int = 0
    reminders_sent: int = 0
    reminders_skipped: int = 0
    notifications_created: int = 0
    reports_failed: int = 0


def check_and_send_reminders(
    session: Session,
    *,
    dispatcher: NotificationDispatcher,
    now: datetime | None = None,
) -> ReminderScanSummary:
    """Run one end-to-end reminder pass.

    A reminder fires at most once per calendar day for each report and
    reminder type: existing notifications created since the start of the day
    suppress a repeat. Database errors abort the scan and propagate. A report
    that cannot be loaded, evaluated or rendered, such as one with an
    unknown status or a missing deadline, is logged and skipped.
    """

    current = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    window_start, window_end = candidate_window(current)
    day_start = start_of_app_day(current)

    reports = DamageReportRepository(session)
    report_ids = reports.list_ids_with_upcoming_deadlines(
        window_start=window_start, window_end=window_end
    )
    recipients = UserRepository(session).list_active_by_roles(CLAIM_RECIPIENT_ROLES)
    notifications = NotificationRepository(session)

    summary = ReminderScanSummary()
    for report_id in report_ids:
        summary.reports_checked += 1
        try:
            report = reports.get(report_id)
            if report is None:
                continue
            rendered = [
                (reminder, render_deadline_reminder(report, reminder))
                for reminder in reminders_due(current, report)
            ]
        except SQLAlchemyError:
            raise
        except Exception:
            summary.reports_failed += 1
            logger.exception("Skipping damage report %s with invalid data", report_id)
            continue

        for reminder, content in rendered:
            if notifications.exists_for_report_type_since(
                damage_report_id=report_id,
                notification_type=reminder.notification_type,
                since=day_start,
            ):
                summary.reminders_skipped += 1
                logger.debug(
                    "%s already sent today for damage report %s",
                    reminder.notification_type.value,
                    report_id,
                )
                continue

            created = fan_out(
                session,
                recipients=recipients,
                damage_report_id=report_id,
                notification_type=reminder.notification_type,
                content=content,
                dispatcher=dispatcher,
                created_at=current,
            )
            if created:
                summary.reminders_sent += 1
            summary.notifications_created += len(created)

    logger.info(
        "Checked %s damage reports for reminders: %s sent, %s already sent today, %s invalid",
        summary.reports_checked,
        summary.reminders_sent,
        summary.reminders_skipped,
        summary.reports_failed,
    )
    return summary


__all__ = ["ReminderScanSummary", "check_and_send_reminders"]
