"""Persist notifications and hand them to the delivery channels."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from damage_claims.domain.entities import (
    Notification,
    NotificationContent,
    NotificationType,
    User,
)
from damage_claims.infrastructure.notifications import NotificationDispatcher
from damage_claims.infrastructure.repositories import NotificationRepository
from damage_claims.utils import now_in_app_timezone


def persist_and_deliver(
    session: Session,
    *,
    recipient: User,
    damage_report_id: int | None,
    notification_type: NotificationType,
    content: NotificationContent,
    dispatcher: NotificationDispatcher,
    created_at: datetime | None = None,
) -> Notification:
    """Store the in-app record for ``recipient`` then schedule email and SMS.

    Only the record is written synchronously; delivery runs in the background.
    """

    notification = Notification(
        id=None,
        user_id=recipient.id,
        damage_report_id=damage_report_id,
        type=notification_type,
        title=content.title,
        message=content.message,
        created_at=created_at or now_in_app_timezone(),
    )
    saved = NotificationRepository(session).create(notification)
    dispatcher.deliver(recipient, content)
    return saved


def fan_out(
    session: Session,
    *,
    recipients: Iterable[User],
    damage_report_id: int | None,
    notification_type: NotificationType,
    content: NotificationContent,
    dispatcher: NotificationDispatcher,
    created_at: datetime | None = None,
) -> list[Notification]:
    return [
        persist_and_deliver(
            session,
            recipient=recipient,
            damage_report_id=damage_report_id,
            notification_type=notification_type,
            content=content,
            dispatcher=dispatcher,
            created_at=created_at,
        )
        for recipient in recipients
    ]


__all__ = ["fan_out", "persist_and_deliver"]
