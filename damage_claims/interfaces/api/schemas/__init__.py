"""Pydantic schemas exposed by the HTTP interface."""

from .reminder import HealthRead, ReminderCheckRead

__all__ = ["HealthRead", "ReminderCheckRead"]
