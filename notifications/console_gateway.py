"""Development email gateway that only logs."""

from __future__ import annotations

import logging

from .abstract_gateway import AbstractEmailGateway, SendResult

logger = logging.getLogger(__name__)


class ConsoleEmailGateway(AbstractEmailGateway):
    """Log outgoing emails instead of sending them.

    Used when no Brevo API key is configured.
    """

    def send(self, to: str, subject: str, html: str) -> SendResult:
        logger.info("Email delivery disabled; would send %r to %s", subject, to)
        logger.debug("Email body for %s:\n%s", to, html)
        return SendResult(delivered=False, skipped=True, error="Email transport not configured")
