"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text

from damage_claims.domain.entities import NotificationType
from damage_claims.infrastructure.database import Base
from damage_claims.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index(
            "ix_notification_report_type_created",
            "damage_report_id",
            "type",
            "created_at",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    damage_report_id = Column(
        Integer, ForeignKey("damage_report.id"), nullable=True, index=True
    )
    type = Column(Enum(NotificationType, native_enum=False, length=40), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    scheduled_for = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
