"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Kinds of events a notification can describe."""

    NEW_DAMAGE_REPORT = "NEW_DAMAGE_REPORT"
    STATUS_UPDATE = "STATUS_UPDATE"
    DEADLINE_REMINDER = "DEADLINE_REMINDER"
    PROOF_DEADLINE_REMINDER = "PROOF_DEADLINE_REMINDER"


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    damage_report_id: int | None
    type: NotificationType
    title: str
    message: str
    is_read: bool = False
    created_at: datetime | None = None
    scheduled_for: datetime | None = None


@dataclass(frozen=True)
class NotificationContent:
    """Rendered text of a notification for every delivery channel."""

    title: str
    message: str
    html: str


__all__ = ["Notification", "NotificationContent", "NotificationType"]
