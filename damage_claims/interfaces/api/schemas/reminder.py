"""Pydantic models describing reminder trigger responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ReminderCheckRead(BaseModel):
    """Outcome of a manually triggered reminder scan."""

    message: str
    timestamp: datetime
    reports_checked: int = Field(..., ge=0, description="Reports inspected by the scan")
    reminders_sent: int = Field(..., ge=0, description="Reminders fanned out to recipients")
    reminders_skipped: int = Field(
        ..., ge=0, description="Reminders suppressed because they were already sent today"
    )
    notifications_created: int = Field(..., ge=0)
    reports_failed: int = Field(..., ge=0, description="Reports skipped due to invalid data")


class HealthRead(BaseModel):
    status: str
    timestamp: datetime


__all__ = ["HealthRead", "ReminderCheckRead"]
