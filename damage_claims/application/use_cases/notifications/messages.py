"""Render notification titles, in-app messages and email bodies."""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import TYPE_CHECKING

from damage_claims.config import get_settings
from damage_claims.domain.entities import (
    DamageReport,
    NotificationContent,
    NotificationType,
    ReportStatus,
)
from damage_claims.utils import ensure_app_timezone

if TYPE_CHECKING:
    from ..reminders.policy import DueReminder

_URGENT_COLOR = "red"
_WARNING_COLOR = "orange"


def _format_date(value: datetime | None) -> str:
    localized = ensure_app_timezone(value)
    if localized is None:
        return "N/A"
    return f"{localized.month}/{localized.day}/{localized.year}"


def _report_link(report_id: int | None) -> str:
    base_url = get_settings().frontend_url.rstrip("/")
    return f'<p><a href="{escape(base_url)}/damages/{report_id}">View Damage Report</a></p>'


def _field(label: str, value: object) -> str:
    return f"<p><strong>{label}:</strong> {escape(str(value))}</p>"


def render_deadline_reminder(
    report: DamageReport, reminder: DueReminder
) -> NotificationContent:
    """Render a reminder; on-the-day wording is escalated."""

    when = "TODAY" if reminder.is_today else "TOMORROW"
    if reminder.notification_type is NotificationType.DEADLINE_REMINDER:
        title = "Airbnb Deadline Today!" if reminder.is_today else "Airbnb Deadline Tomorrow"
        subject = "damage claim"
    else:
        title = "Proof Deadline Today!" if reminder.is_today else "Proof Deadline Tomorrow"
        subject = "additional proof"

    message = (
        f"{when} is the deadline to submit {subject} for "
        f"{report.property_name} ({report.first_item_name}) to Airbnb"
    )
    color = _URGENT_COLOR if reminder.is_today else _WARNING_COLOR
    html = "".join(
        (
            f'<h2 style="color: {color};">{escape(title)}</h2>',
            _field("Property", report.property_name),
            _field("Item Damaged", report.first_item_name),
            _field("Deadline", _format_date(reminder.deadline)),
            _field("Status", report.status.value),
            _report_link(report.id),
        )
    )
    return NotificationContent(title=title, message=message, html=html)


def render_new_damage_report(report: DamageReport) -> NotificationContent:
    reporter_name = report.reported_by.name if report.reported_by else "Unknown"
    title = "New Damage Report"
    message = (
        f"New damage reported at {report.property_name} ({report.first_item_name}) "
        f"by {reporter_name}. Deadline: {_format_date(report.airbnb_deadline)}"
    )

    parts = [
        f"<h2>{title}</h2>",
        _field("Property", report.property_name),
    ]
    if report.property_address:
        parts.append(_field("Address", report.property_address))
    parts.append(_field("Item Damaged", report.first_item_name))
    if report.items and report.items[0].damage_type:
        parts.append(_field("Damage Type", report.items[0].damage_type))
    parts.extend(
        (
            _field("Reported By", reporter_name),
            _field("Damage Date", _format_date(report.damage_date)),
            _field("Airbnb Deadline", _format_date(report.airbnb_deadline)),
        )
    )
    if report.description:
        parts.append(_field("Description", report.description))
    parts.append(_report_link(report.id))
    return NotificationContent(title=title, message=message, html="".join(parts))


def render_status_update(
    report: DamageReport, new_status: ReportStatus
) -> NotificationContent:
    title = "Damage Report Status Update"
    message = (
        f"Status updated for damage at {report.property_name} "
        f"({report.first_item_name}): {new_status.value}"
    )
    html = "".join(
        (
            f"<h2>{title}</h2>",
            _field("Property", report.property_name),
            _field("Item Damaged", report.first_item_name),
            _field("New Status", new_status.value),
            _report_link(report.id),
        )
    )
    return NotificationContent(title=title, message=message, html=html)


__all__ = [
    "render_deadline_reminder",
    "render_new_damage_report",
    "render_status_update",
]
