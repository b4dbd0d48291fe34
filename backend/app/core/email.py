from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import requests

from app.core.config import settings

logger = logging.getLogger(__name__)


class EmailSender(ABC):
    @abstractmethod
    def send_email(self, receiver: str, subject: str, html_message: str) -> bool:
        """Deliver a message. Returns True when the transport accepted it."""


class LoggingEmailSender(EmailSender):
    """Development sender: writes the message to the log instead of sending it."""

    def send_email(self, receiver: str, subject: str, html_message: str) -> bool:
        logger.info("Email to %s: %s", receiver, subject)
        return True


class SendGridEmailSender(EmailSender):
    def __init__(
        self,
        api_key: str,
        *,
        sender_address: str,
        sender_name: str,
        api_url: str,
        timeout: int = 10,
    ) -> None:
        self.api_key = api_key
        self.sender_address = sender_address
        self.sender_name = sender_name
        self.api_url = api_url
        self.timeout = timeout

    def send_email(self, receiver: str, subject: str, html_message: str) -> bool:
        payload = {
            "personalizations": [{"to": [{"email": receiver}]}],
            "from": {"email": self.sender_address, "name": self.sender_name},
            "subject": subject,
            "content": [{"type": "text/html", "value": html_message}],
        }
        try:
            response = requests.post(
                self.api_url,
                json=payload,
                timeout=self.timeout,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except requests.RequestException:
            logger.exception("Email to %s could not be sent", receiver)
            return False

        if response.status_code >= 400:
            logger.warning("SendGrid rejected email to %s: %s %s", receiver, response.status_code, response.text)
            return False
        return True


def build_email_sender() -> EmailSender:
    if settings.sendgrid_api_key:
        return SendGridEmailSender(
            settings.sendgrid_api_key,
            sender_address=settings.email_sender_address,
            sender_name=settings.email_sender_name,
            api_url=settings.sendgrid_api_url,
            timeout=settings.email_timeout_seconds,
        )
    return LoggingEmailSender()
