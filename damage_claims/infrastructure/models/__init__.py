"""ORM models used by the application infrastructure."""

from .damage_report import DamageItemModel, DamageReportModel
from .notification import NotificationModel
from .user import UserModel

__all__ = [
    "DamageItemModel",
    "DamageReportModel",
    "NotificationModel",
    "UserModel",
]
