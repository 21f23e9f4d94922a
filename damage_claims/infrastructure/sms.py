"""SMS delivery channel backed by Twilio."""

from __future__ import annotations

import logging

from twilio.base.exceptions import TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from damage_claims.config import Settings
from damage_claims.domain.entities import NotificationContent

logger = logging.getLogger(__name__)

_ACCOUNT_SID_PREFIX = "AC"


class TwilioSmsChannel:
    """Send the plain-text message of a notification by SMS."""

    name = "sms"

    def __init__(
        self,
        *,
        account_sid: str | None,
        auth_token: str | None,
        from_number: str | None,
        timeout: float = 30.0,
    ) -> None:
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._from_number = from_number
        self._timeout = timeout
        self._client: Client | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "TwilioSmsChannel":
        return cls(
            account_sid=settings.twilio_account_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_phone_number,
            timeout=settings.sms_send_timeout_seconds,
        )

    @property
    def enabled(self) -> bool:
        return bool(
            self._account_sid
            and self._account_sid.startswith(_ACCOUNT_SID_PREFIX)
            and self._auth_token
            and self._from_number
        )

    def send(self, target: str, content: NotificationContent) -> bool:
        """Text ``content.message`` to ``target``."""

        if not self.enabled:
            logger.info("Twilio configuration incomplete; skipping SMS delivery")
            return False

        try:
            self._get_client().messages.create(
                body=content.message,
                from_=self._from_number,
                to=target,
            )
        except TwilioRestException as exc:
            logger.error(
                "Twilio rejected SMS to %s with status %s: %s",
                target,
                exc.status,
                exc.msg,
            )
            return False
        except Exception as exc:  # transport failures depend on environment
            logger.exception("Error sending SMS to %s via Twilio: %s", target, exc)
            return False

        logger.info("SMS sent to %s", target)
        return True

    def _get_client(self) -> Client:
        if self._client is None:
            self._client = Client(
                self._account_sid,
                self._auth_token,
                http_client=TwilioHttpClient(timeout=self._timeout),
            )
        return self._client


__all__ = ["TwilioSmsChannel"]
