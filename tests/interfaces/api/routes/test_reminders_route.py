from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from damage_claims.infrastructure.database import get_db
from damage_claims.infrastructure.models import NotificationModel
from damage_claims.interfaces.api.dependencies import get_notification_dispatcher
from damage_claims.interfaces.api.routes import reminders as reminders_routes
from damage_claims.main import create_app
from damage_claims.utils import now_in_app_naive_datetime


@pytest.fixture()
def app(session, dispatcher):
    application = create_app()

    def override_get_db():
        yield session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    return TestClient(app)


def test_manual_trigger_runs_reminder_scan(client, session, dispatcher, user_factory, report_factory):
    member = user_factory(phone="+15550004000")
    report = report_factory(damage_date=now_in_app_naive_datetime() - timedelta(days=14))

    response = client.post("/api/test/reminders")

    assert response.status_code == 200
    payload = response.json()
    assert payload["message"] == "Reminder check completed"
    assert payload["timestamp"]
    assert payload["reports_checked"] == 1
    assert payload["reminders_sent"] == 1
    assert payload["notifications_created"] == 1
    row = session.query(NotificationModel).filter_by(damage_report_id=report.id).one()
    assert row.user_id == member.id
    assert row.title == "Airbnb Deadline Today!"
    assert dispatcher.sms == ["+15550004000"]

    repeat = client.post("/api/test/reminders").json()
    assert repeat["reminders_sent"] == 0
    assert repeat["reminders_skipped"] == 1


def test_manual_trigger_reports_database_errors(client, dispatcher, monkeypatch):
    def failing_scan(session, *, dispatcher, now=None):
        raise OperationalError("SELECT damage_report", {}, Exception("database is down"))

    monkeypatch.setattr(reminders_routes, "check_and_send_reminders", failing_scan)

    response = client.post("/api/test/reminders")

    assert response.status_code == 500
    assert response.json() == {"detail": "Error checking reminders"}
    assert dispatcher.deliveries == []


def test_manual_trigger_requires_dispatcher(session):
    application = create_app()

    def override_get_db():
        yield session

    application.dependency_overrides[get_db] = override_get_db

    response = TestClient(application).post("/api/test/reminders")

    assert response.status_code == 503


def test_health_check(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "OK"
