"""Run one deadline reminder scan from the command line."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from damage_claims.application.use_cases.reminders import check_and_send_reminders
from damage_claims.config import get_settings
from damage_claims.infrastructure.database import SessionLocal, initialize_database
from damage_claims.infrastructure.notifications import build_notification_dispatcher


def _parse_instant(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid ISO datetime: {value!r}") from exc


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the reminder scan."""

    parser = argparse.ArgumentParser(
        description="Send the damage claim deadline reminders that are due.",
    )
    parser.add_argument(
        "--at",
        type=_parse_instant,
        default=None,
        help=(
            "Evaluate deadlines as if it were this instant (ISO 8601). Naive values "
            "are read in the application timezone. Defaults to the current time."
        ),
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every skipped reminder and delivery.",
    )
    return parser.parse_args()


def main() -> None:
    """Run the scan and wait for queued deliveries before exiting."""

    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    initialize_database()
    dispatcher = build_notification_dispatcher(get_settings())

    session = SessionLocal()
    try:
        summary = check_and_send_reminders(session, dispatcher=dispatcher, now=args.at)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Reminder check failed: {exc}") from exc
    else:
        print(
            "Reminder check completed:\n"
            f"  Reports checked: {summary.reports_checked}\n"
            f"  Reminders sent: {summary.reminders_sent}\n"
            f"  Already sent today: {summary.reminders_skipped}\n"
            f"  Notifications created: {summary.notifications_created}\n"
            f"  Invalid reports: {summary.reports_failed}"
        )
    finally:
        session.close()
        dispatcher.shutdown(wait=True)


if __name__ == "__main__":
    main()
