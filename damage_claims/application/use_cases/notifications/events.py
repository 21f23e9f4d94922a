"""Notifications emitted when a damage report is created or changes status."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from damage_claims.domain.entities import (
    CLAIM_RECIPIENT_ROLES,
    NotificationType,
    ReportStatus,
)
from damage_claims.infrastructure.notifications import NotificationDispatcher
from damage_claims.infrastructure.repositories import (
    DamageReportRepository,
    UserRepository,
)

from .delivery import fan_out, persist_and_deliver
from .messages import render_new_damage_report, render_status_update

logger = logging.getLogger(__name__)


def notify_new_damage_report(
    session: Session, *, report_id: int, dispatcher: NotificationDispatcher
) -> None:
    """Notify every active claim team member and admin about a new report.

    Returns once the notification records are stored; email and SMS are
    delivered in the background. Failures are logged, not raised.
    """

    try:
        report = DamageReportRepository(session).get(report_id)
        if report is None:
            logger.warning("Damage report %s not found; skipping new report notification", report_id)
            return

        recipients = UserRepository(session).list_active_by_roles(CLAIM_RECIPIENT_ROLES)
        created = fan_out(
            session,
            recipients=recipients,
            damage_report_id=report.id,
            notification_type=NotificationType.NEW_DAMAGE_REPORT,
            content=render_new_damage_report(report),
            dispatcher=dispatcher,
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error notifying new damage report %s", report_id)
        return
    except Exception:
        logger.exception("Error notifying new damage report %s", report_id)
        return

    logger.info(
        "New damage report %s announced to %s recipient(s)", report_id, len(created)
    )


def notify_status_update(
    session: Session,
    *,
    report_id: int,
    new_status: ReportStatus | str,
    dispatcher: NotificationDispatcher,
) -> None:
    """Tell the original reporter that the report status changed.

    An unknown ``new_status`` or any storage failure is logged, not raised.
    """

    try:
        status = ReportStatus(new_status)
        report = DamageReportRepository(session).get(report_id)
        if report is None:
            logger.warning("Damage report %s not found; skipping status notification", report_id)
            return

        reporter = report.reported_by
        if reporter is None:
            logger.warning("Damage report %s has no reporter to notify", report_id)
            return

        persist_and_deliver(
            session,
            recipient=reporter,
            damage_report_id=report.id,
            notification_type=NotificationType.STATUS_UPDATE,
            content=render_status_update(report, status),
            dispatcher=dispatcher,
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error notifying status update for damage report %s", report_id)
        return
    except Exception:
        logger.exception("Error notifying status update for damage report %s", report_id)
        return

    logger.info("Reporter of damage report %s notified of status %s", report_id, status.value)


__all__ = ["notify_new_damage_report", "notify_status_update"]
