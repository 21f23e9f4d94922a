"""Repository implementations for infrastructure layer."""

from .damage_report_repository import DamageReportRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "DamageReportRepository",
    "NotificationRepository",
    "UserRepository",
]
