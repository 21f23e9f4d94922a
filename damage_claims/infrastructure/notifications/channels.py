"""Common interface shared by every delivery channel."""

from __future__ import annotations

from typing import Protocol

from damage_claims.domain.entities import NotificationContent


class DeliveryChannel(Protocol):
    """A transport able to deliver rendered notification content.

    Implementations are no-ops when ``enabled`` is ``False`` and report
    failures through their return value instead of raising.
    """

    name: str

    @property
    def enabled(self) -> bool:
        ...

    def send(self, target: str, content: NotificationContent) -> bool:
        ...


__all__ = ["DeliveryChannel"]
