"""Fire-and-forget delivery of notifications over email and SMS."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from damage_claims.config import Settings
from damage_claims.domain.entities import NotificationContent, User
from damage_claims.infrastructure.email import SendGridEmailChannel
from damage_claims.infrastructure.sms import TwilioSmsChannel

from .channels import DeliveryChannel

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Hand deliveries to a thread pool and return immediately.

    Callers never wait on, nor observe failures of, the delivery itself:
    every job catches and logs its own errors.
    """

    def __init__(
        self,
        *,
        email_channel: DeliveryChannel,
        sms_channel: DeliveryChannel,
        max_workers: int = 4,
    ) -> None:
        self.email_channel = email_channel
        self.sms_channel = sms_channel
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="notification-delivery"
        )

    def deliver(self, recipient: User, content: NotificationContent) -> list[Future]:
        """Schedule email and, when a phone number is known, SMS for ``recipient``."""

        futures: list[Future] = []
        if recipient.email:
            future = self.submit(self.email_channel, recipient.email, content)
            if future is not None:
                futures.append(future)
        if recipient.phone:
            future = self.submit(self.sms_channel, recipient.phone, content)
            if future is not None:
                futures.append(future)
        return futures

    def submit(
        self, channel: DeliveryChannel, target: str, content: NotificationContent
    ) -> Future | None:
        """Queue a single delivery; disabled channels are skipped.

        Returns ``None`` when nothing was queued, including after
        :meth:`shutdown`.
        """

        if not channel.enabled:
            logger.debug("%s channel disabled; skipping delivery to %s", channel.name, target)
            return None
        try:
            return self._executor.submit(self._run, channel, target, content)
        except RuntimeError:
            logger.warning(
                "Delivery pool is shut down; dropping %s delivery to %s", channel.name, target
            )
            return None

    def shutdown(self, *, wait: bool = False) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=not wait)

    @staticmethod
    def _run(channel: DeliveryChannel, target: str, content: NotificationContent) -> bool:
        try:
            return channel.send(target, content)
        except Exception:
            logger.exception("%s delivery to %s failed", channel.name, target)
            return False


def build_notification_dispatcher(settings: Settings) -> NotificationDispatcher:
    """Create a dispatcher wired to the channels described by ``settings``."""

    email_channel = SendGridEmailChannel.from_settings(settings)
    sms_channel = TwilioSmsChannel.from_settings(settings)
    if not email_channel.enabled:
        logger.info("Email notifications disabled: SendGrid is not configured")
    if not sms_channel.enabled:
        logger.info("SMS notifications disabled: Twilio is not configured")
    return NotificationDispatcher(
        email_channel=email_channel,
        sms_channel=sms_channel,
        max_workers=settings.notification_workers,
    )


__all__ = ["NotificationDispatcher", "build_notification_dispatcher"]
