"""Manual trigger for the deadline reminder scan."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from damage_claims.application.use_cases.reminders import check_and_send_reminders
from damage_claims.infrastructure.database import get_db
from damage_claims.infrastructure.notifications import NotificationDispatcher
from damage_claims.interfaces.api.dependencies import get_notification_dispatcher
from damage_claims.interfaces.api.schemas import ReminderCheckRead
from damage_claims.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/test", tags=["reminders"])


@router.post("/reminders", response_model=ReminderCheckRead)
def trigger_reminder_check(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> ReminderCheckRead:
    """Run the deadline reminder scan immediately."""

    logger.info("Manual reminder check triggered")
    try:
        summary = check_and_send_reminders(db, dispatcher=dispatcher)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error in manual reminder check")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error checking reminders",
        ) from exc

    return ReminderCheckRead(
        message="Reminder check completed",
        timestamp=now_in_app_timezone(),
        reports_checked=summary.reports_checked,
        reminders_sent=summary.reminders_sent,
        reminders_skipped=summary.reminders_skipped,
        notifications_created=summary.notifications_created,
        reports_failed=summary.reports_failed,
    )


__all__ = ["router"]
