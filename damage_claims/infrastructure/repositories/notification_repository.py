"""Persistence helpers for notification entities."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from damage_claims.domain.entities import Notification, NotificationType
from damage_claims.infrastructure.models import NotificationModel
from damage_claims.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Append-only access to :class:`Notification` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def exists_for_report_type_since(
        self,
        *,
        damage_report_id: int,
        notification_type: NotificationType,
        since: datetime,
    ) -> bool:
        """Return ``True`` when a ``notification_type`` record for the report exists since ``since``."""

        query = (
            self.session.query(NotificationModel.id)
            .filter(NotificationModel.damage_report_id == damage_report_id)
            .filter(NotificationModel.type == notification_type)
            .filter(NotificationModel.created_at >= ensure_app_naive_datetime(since))
        )
        return query.first() is not None

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        model.user_id = notification.user_id
        model.damage_report_id = notification.damage_report_id
        model.type = notification.type
        model.title = notification.title
        model.message = notification.message
        model.is_read = notification.is_read
        model.scheduled_for = ensure_app_naive_datetime(notification.scheduled_for)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            damage_report_id=model.damage_report_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            is_read=model.is_read,
            created_at=ensure_app_timezone(model.created_at),
            scheduled_for=ensure_app_timezone(model.scheduled_for),
        )


__all__ = ["NotificationRepository"]
