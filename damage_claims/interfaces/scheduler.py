"""Hourly trigger for the deadline reminder scan."""

from __future__ import annotations

import logging
from collections.abc import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from damage_claims.application.use_cases.reminders import (
    ReminderScanSummary,
    check_and_send_reminders,
)
from damage_claims.infrastructure.notifications import NotificationDispatcher
from damage_claims.utils import get_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

REMINDER_JOB_ID = "check_deadline_reminders"


def run_scheduled_reminder_check(
    session_factory: Callable[[], Session],
    dispatcher: NotificationDispatcher,
) -> ReminderScanSummary | None:
    """Job body: run one scan in its own session.

    Database failures are logged; the next tick retries naturally.
    """

    now = now_in_app_timezone()
    logger.info("Running scheduled deadline reminders at %s", f"{now:%Y-%m-%d %H:%M:%S}")

    session = session_factory()
    try:
        return check_and_send_reminders(session, dispatcher=dispatcher, now=now)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Scheduled reminder check aborted by a database error")
        return None
    finally:
        session.close()


class ReminderScheduler:
    """Own the APScheduler instance that fires the reminder scan every hour."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._session_factory = session_factory
        self._dispatcher = dispatcher
        self._scheduler: BackgroundScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        if self.running:
            logger.info("Reminder scheduler already running, skipping initialization")
            return

        scheduler = BackgroundScheduler(timezone=get_app_timezone())
        scheduler.add_job(
            run_scheduled_reminder_check,
            trigger="cron",
            minute=0,
            args=(self._session_factory, self._dispatcher),
            id=REMINDER_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("Reminder scheduler started: deadline reminders run at the top of every hour")

    def shutdown(self) -> None:
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Reminder scheduler stopped")


__all__ = ["REMINDER_JOB_ID", "ReminderScheduler", "run_scheduled_reminder_check"]
