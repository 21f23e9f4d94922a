"""Domain entities exposed by the application."""

from .damage_report import (
    AIRBNB_DEADLINE_DAYS,
    PROOF_DEADLINE_DAYS,
    DamageItem,
    DamageReport,
    ReportStatus,
    compute_claim_deadlines,
)
from .notification import Notification, NotificationContent, NotificationType
from .user import CLAIM_RECIPIENT_ROLES, User, UserRole

__all__ = [
    "AIRBNB_DEADLINE_DAYS",
    "PROOF_DEADLINE_DAYS",
    "CLAIM_RECIPIENT_ROLES",
    "DamageItem",
    "DamageReport",
    "Notification",
    "NotificationContent",
    "NotificationType",
    "ReportStatus",
    "User",
    "UserRole",
    "compute_claim_deadlines",
]
