"""Email delivery channel backed by the SendGrid REST API."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from damage_claims.config import Settings
from damage_claims.domain.entities import NotificationContent

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                f"{item['message']} (field: {item['field']})"
                if item.get("field")
                else str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_sendgrid_exception(exc: Exception, recipient: str) -> None:
    """Log a SendGrid API error with helpful troubleshooting details."""

    status_code = getattr(exc, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(exc, "body", None))

    if status_code and details:
        logger.error(
            "SendGrid rejected email to %s with status %s: %s",
            recipient,
            status_code,
            details,
        )
    elif status_code:
        logger.error("SendGrid rejected email to %s with status %s", recipient, status_code)
    else:
        logger.exception("Error sending email to %s via SendGrid: %s", recipient, exc)


class SendGridEmailChannel:
    """Send rendered notifications as HTML emails.

    The channel is a no-op when SendGrid credentials are missing. Every
    request is bounded by ``timeout`` seconds; failures are logged and
    reported as ``False``, never raised.
    """

    name = "email"

    def __init__(
        self,
        *,
        api_key: str | None,
        sender: str | None,
        timeout: float = 10.0,
    ) -> None:
        self._api_key = api_key
        self._sender = sender
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SendGridEmailChannel":
        return cls(
            api_key=settings.sendgrid_api_key,
            sender=settings.sendgrid_sender,
            timeout=settings.email_send_timeout_seconds,
        )

    @property
    def enabled(self) -> bool:
        return bool(self._api_key and self._sender)

    def send(self, target: str, content: NotificationContent) -> bool:
        """Email ``content`` to ``target`` using the title as the subject."""

        return self.send_email(content.title, content.html, target)

    def send_email(self, subject: str, html_content: str, recipient: str) -> bool:
        if not self.enabled:
            logger.info("SendGrid configuration incomplete; skipping email delivery")
            return False

        message = Mail(
            from_email=self._sender,
            to_emails=recipient,
            subject=subject,
            html_content=html_content,
        )

        try:
            client = SendGridAPIClient(self._api_key)
            client.client.timeout = self._timeout
            response = client.send(message)
        except Exception as exc:  # network failures and API errors depend on environment
            _log_sendgrid_exception(exc, recipient)
            return False

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            details = _extract_sendgrid_error_details(getattr(response, "body", None))
            logger.error(
                "SendGrid responded with status %s for %s%s",
                status_code,
                recipient,
                f": {details}" if details else "",
            )
            return False

        logger.info("Email sent to %s: %s", recipient, subject)
        return True


__all__ = ["SendGridEmailChannel"]
