"""Public helpers for emitting damage report notifications."""

from .delivery import fan_out, persist_and_deliver
from .events import notify_new_damage_report, notify_status_update
from .messages import (
    render_deadline_reminder,
    render_new_damage_report,
    render_status_update,
)

__all__ = [
    "fan_out",
    "persist_and_deliver",
    "notify_new_damage_report",
    "notify_status_update",
    "render_deadline_reminder",
    "render_new_damage_report",
    "render_status_update",
]
