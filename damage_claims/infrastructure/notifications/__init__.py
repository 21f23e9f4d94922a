"""Delivery helpers for the infrastructure layer."""

from .channels import DeliveryChannel
from .dispatcher import NotificationDispatcher, build_notification_dispatcher

__all__ = [
    "DeliveryChannel",
    "NotificationDispatcher",
    "build_notification_dispatcher",
]
