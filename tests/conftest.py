"""Shared fixtures: an isolated in-memory database and recording delivery fakes."""

from __future__ import annotations

import os
import threading
from datetime import datetime

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["ENABLE_REMINDER_SCHEDULER"] = "false"
for _name in (
    "FRONTEND_URL",
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_PHONE_NUMBER",
):
    os.environ.pop(_name, None)

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from damage_claims.domain.entities import (  # noqa: E402
    NotificationContent,
    ReportStatus,
    User,
    UserRole,
    compute_claim_deadlines,
)
from damage_claims.infrastructure import models  # noqa: E402
from damage_claims.infrastructure.database import Base  # noqa: E402


_COMPUTED = object()


class RecordingChannel:
    """Delivery channel double that remembers every send."""

    def __init__(self, name: str, *, enabled: bool = True, result: bool = True) -> None:
        self.name = name
        self._enabled = enabled
        self._result = result
        self._lock = threading.Lock()
        self.sent: list[tuple[str, NotificationContent]] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    def send(self, target: str, content: NotificationContent) -> bool:
        with self._lock:
            self.sent.append((target, content))
        return self._result


class RecordingDispatcher:
    """Synchronous stand-in for :class:`NotificationDispatcher`."""

    def __init__(self) -> None:
        self.deliveries: list[tuple[User, NotificationContent]] = []

    def deliver(self, recipient: User, content: NotificationContent) -> list:
        self.deliveries.append((recipient, content))
        return []

    @property
    def emails(self) -> list[str]:
        return [recipient.email for recipient, _ in self.deliveries if recipient.email]

    @property
    def sms(self) -> list[str]:
        return [recipient.phone for recipient, _ in self.deliveries if recipient.phone]


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine) -> Session:
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture()
def user_factory(session: Session):
    counter = {"value": 0}

    def create(
        *,
        role: UserRole = UserRole.CLAIM_TEAM,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        is_active: bool = True,
    ) -> models.UserModel:
        counter["value"] += 1
        index = counter["value"]
        model = models.UserModel(
            name=name or f"User {index}",
            email=email or f"user{index}@example.com",
            phone=phone,
            role=role,
            is_active=is_active,
        )
        session.add(model)
        session.commit()
        session.refresh(model)
        return model

    return create


@pytest.fixture()
def report_factory(session: Session, user_factory):
    def create(
        *,
        damage_date: datetime = datetime(2024, 1, 1),
        property_name: str = "Lakeview Cabin",
        items: tuple[str, ...] = ("Coffee Table",),
        status: ReportStatus = ReportStatus.PENDING,
        submitted_to_airbnb: bool = False,
        reporter: models.UserModel | None = None,
        airbnb_deadline: datetime | None | object = _COMPUTED,
        proof_deadline: datetime | None | object = _COMPUTED,
    ) -> models.DamageReportModel:
        if reporter is None:
            reporter = user_factory(role=UserRole.CLEANER, name="Casey Cleaner")
        computed_airbnb, computed_proof = compute_claim_deadlines(damage_date)
        model = models.DamageReportModel(
            reported_by_id=reporter.id,
            property_name=property_name,
            property_address="12 Shore Road",
            damage_date=damage_date,
            checkout_date=damage_date,
            airbnb_deadline=computed_airbnb if airbnb_deadline is _COMPUTED else airbnb_deadline,
            proof_deadline=computed_proof if proof_deadline is _COMPUTED else proof_deadline,
            status=status,
            submitted_to_airbnb=submitted_to_airbnb,
            items=[
                models.DamageItemModel(item_name=name, damage_type="REPAIR") for name in items
            ],
        )
        session.add(model)
        session.commit()
        session.refresh(model)
        return model

    return create
