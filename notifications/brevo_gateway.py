"""Brevo (Sendinblue) transactional email gateway."""

from __future__ import annotations

import logging

import requests

from .abstract_gateway import AbstractEmailGateway, SendResult

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.brevo.com/v3/smtp/email"


class BrevoEmailGateway(AbstractEmailGateway):
    """Send emails through the Brevo HTTP API."""

    def __init__(
        self,
        api_key: str,
        sender_email: str | None,
        sender_name: str = "Our Saladish",
        api_url: str = DEFAULT_API_URL,
        timeout: float = 10,
        session: requests.Session | None = None,
    ):
        """
        Initialize with Brevo credentials.

        Args:
            api_key: Brevo API key sent in the ``api-key`` header
            sender_email: Verified sender address; when missing every send is skipped
            sender_name: Display name of the sender
            api_url: Transactional email endpoint
            timeout: Request timeout in seconds

        Raises:
            ValueError: If api_key is empty
        """
        if not api_key:
            raise ValueError("api_key is required")

        self.api_key = api_key
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.api_url = api_url
        self.timeout = timeout
        self._session = session or requests.Session()

    def send(self, to: str, subject: str, html: str) -> SendResult:
        if not self.sender_email:
            logger.error("Email sending skipped: SENDER_EMAIL is not set")
            return SendResult(delivered=False, skipped=True, error="SENDER_EMAIL is not set")

        payload = {
            "sender": {"email": self.sender_email, "name": self.sender_name},
            "to": [{"email": to}],
            "subject": subject,
            "htmlContent": html,
        }
        headers = {
            "accept": "application/json",
            "content-type": "application/json",
            "api-key": self.api_key,
        }

        try:
            response = self._session.post(
                self.api_url, json=payload, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Brevo connection failed: {e}")
            return SendResult(delivered=False, error=f"Connection failed: {e}")

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = {}
            code = body.get("code", "unknown_error")
            message = body.get("message") or response.text or "Email send failed"
            logger.error(f"Brevo rejected email to {to}: {code} {message}")
            return SendResult(delivered=False, error=f"{code}: {message}")

        try:
            message_id = response.json().get("messageId")
        except ValueError:
            message_id = None
        logger.info(f"Email sent to {to}: {subject}")
        return SendResult(delivered=True, message_id=message_id)
