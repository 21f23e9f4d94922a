"""Tests for notifications raised when reports are created or change status."""

from __future__ import annotations

import threading
import time
from datetime import datetime

from sqlalchemy.exc import OperationalError

from damage_claims.application.use_cases import notify_new_damage_report, notify_status_update
from damage_claims.domain.entities import NotificationType, ReportStatus, UserRole
from damage_claims.infrastructure.models import NotificationModel
from damage_claims.infrastructure.notifications import NotificationDispatcher
from damage_claims.infrastructure.repositories import DamageReportRepository

from conftest import RecordingChannel


class BlockingChannel(RecordingChannel):
    """Channel whose sends hang until the test releases them."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.release = threading.Event()

    def send(self, target, content):
        self.release.wait(timeout=5)
        return super().send(target, content)


def test_new_report_notifies_claim_team_and_admins(
    session, dispatcher, user_factory, report_factory
):
    admin = user_factory(role=UserRole.ADMIN, phone="+15550001000")
    member = user_factory(role=UserRole.CLAIM_TEAM)
    user_factory(role=UserRole.CLAIM_TEAM, is_active=False)
    reporter = user_factory(role=UserRole.CLEANER, name="Casey Cleaner")
    report = report_factory(
        damage_date=datetime(2024, 3, 2),
        property_name="Harbor Loft",
        items=("Sofa", "Lamp"),
        reporter=reporter,
    )

    notify_new_damage_report(session, report_id=report.id, dispatcher=dispatcher)

    rows = session.query(NotificationModel).order_by(NotificationModel.id).all()
    assert [row.user_id for row in rows] == [admin.id, member.id]
    assert {row.type for row in rows} == {NotificationType.NEW_DAMAGE_REPORT}
    assert rows[0].message == (
        "New damage reported at Harbor Loft (Sofa) by Casey Cleaner. Deadline: 3/16/2024"
    )
    assert dispatcher.emails == [admin.email, member.email]
    assert dispatcher.sms == ["+15550001000"]
    assert 'href="http://localhost:3000/damages/' in dispatcher.deliveries[0][1].html


def test_status_update_notifies_only_the_reporter(
    session, dispatcher, user_factory, report_factory
):
    user_factory(role=UserRole.ADMIN)
    reporter = user_factory(role=UserRole.CLEANER, phone="+15550002000")
    report = report_factory(reporter=reporter, items=())

    notify_status_update(
        session, report_id=report.id, new_status="APPROVED", dispatcher=dispatcher
    )

    rows = session.query(NotificationModel).all()
    assert len(rows) == 1
    assert rows[0].user_id == reporter.id
    assert rows[0].type == NotificationType.STATUS_UPDATE
    assert rows[0].message == "Status updated for damage at Lakeview Cabin (Multiple items): APPROVED"
    assert dispatcher.emails == [reporter.email]
    assert dispatcher.sms == ["+15550002000"]


def test_missing_report_is_ignored(session, dispatcher, user_factory, caplog):
    user_factory(role=UserRole.ADMIN)

    with caplog.at_level("WARNING"):
        notify_new_damage_report(session, report_id=404, dispatcher=dispatcher)
        notify_status_update(
            session, report_id=404, new_status=ReportStatus.RESOLVED, dispatcher=dispatcher
        )

    assert session.query(NotificationModel).count() == 0
    assert dispatcher.deliveries == []
    assert "Damage report 404 not found" in caplog.text


def test_storage_failure_is_logged_not_raised(
    session, dispatcher, report_factory, monkeypatch, caplog
):
    report = report_factory()

    def broken_get(self, report_id):
        raise OperationalError("SELECT damage_report", {}, Exception("database is down"))

    monkeypatch.setattr(DamageReportRepository, "get", broken_get)

    with caplog.at_level("ERROR"):
        notify_status_update(
            session, report_id=report.id, new_status=ReportStatus.IN_REVIEW, dispatcher=dispatcher
        )

    assert dispatcher.deliveries == []
    assert f"Error notifying status update for damage report {report.id}" in caplog.text


def test_slow_delivery_does_not_block_the_caller(session, user_factory, report_factory):
    email_channel = BlockingChannel("email")
    sms_channel = RecordingChannel("sms")
    real_dispatcher = NotificationDispatcher(
        email_channel=email_channel, sms_channel=sms_channel, max_workers=2
    )
    member = user_factory(role=UserRole.CLAIM_TEAM)
    report = report_factory()

    try:
        started = time.monotonic()
        notify_new_damage_report(session, report_id=report.id, dispatcher=real_dispatcher)
        elapsed = time.monotonic() - started

        assert elapsed < 1
        assert session.query(NotificationModel).filter_by(user_id=member.id).count() == 1
        assert email_channel.sent == []
    finally:
        email_channel.release.set()
        real_dispatcher.shutdown(wait=True)

    assert [target for target, _ in email_channel.sent] == [member.email]


def test_new_report_is_recorded_after_delivery_pool_shutdown(
    session, user_factory, report_factory, caplog
):
    email_channel = RecordingChannel("email")
    stopped = NotificationDispatcher(
        email_channel=email_channel, sms_channel=RecordingChannel("sms")
    )
    stopped.shutdown(wait=True)
    member = user_factory(role=UserRole.CLAIM_TEAM)
    report = report_factory()

    with caplog.at_level("WARNING"):
        notify_new_damage_report(session, report_id=report.id, dispatcher=stopped)

    assert session.query(NotificationModel).filter_by(user_id=member.id).count() == 1
    assert email_channel.sent == []
    assert "Delivery pool is shut down" in caplog.text


def test_unexpected_delivery_error_is_logged_not_raised(
    session, user_factory, report_factory, caplog
):
    class BrokenDispatcher:
        def deliver(self, recipient, content):
            raise RuntimeError("cannot schedule after interpreter shutdown")

    user_factory(role=UserRole.ADMIN)
    reporter = user_factory(role=UserRole.CLEANER)
    report = report_factory(reporter=reporter)

    with caplog.at_level("ERROR"):
        notify_new_damage_report(session, report_id=report.id, dispatcher=BrokenDispatcher())
        notify_status_update(
            session, report_id=report.id, new_status="APPROVED", dispatcher=BrokenDispatcher()
        )

    assert f"Error notifying new damage report {report.id}" in caplog.text
    assert f"Error notifying status update for damage report {report.id}" in caplog.text


def test_unknown_status_is_logged_not_raised(
    session, dispatcher, user_factory, report_factory, caplog
):
    reporter = user_factory(role=UserRole.CLEANER)
    report = report_factory(reporter=reporter)

    with caplog.at_level("ERROR"):
        notify_status_update(
            session, report_id=report.id, new_status="NOT_A_STATUS", dispatcher=dispatcher
        )

    assert session.query(NotificationModel).count() == 0
    assert dispatcher.deliveries == []
    assert f"Error notifying status update for damage report {report.id}" in caplog.text
