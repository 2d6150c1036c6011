"""Delivery policy around an email gateway."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from services.exceptions import NotificationFailure

from .abstract_gateway import AbstractEmailGateway, SendResult

logger = logging.getLogger(__name__)


class Notifier:
    """Send transactional emails without coupling callers to delivery.

    When ``required`` is set, delivery happens inline and any outcome other
    than delivered raises ``NotificationFailure``. Otherwise sending is fire
    and forget: failures are logged and never reach the caller.
    """

    def __init__(
        self,
        gateway: AbstractEmailGateway,
        *,
        required: bool = False,
        background: bool = True,
        max_workers: int = 2,
    ):
        self.gateway = gateway
        self.required = required
        self._executor = (
            ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="email")
            if background and not required
            else None
        )

    def notify(self, to: str, subject: str, html: str) -> Future | SendResult | None:
        if self.required:
            result = self.gateway.send(to, subject, html)
            if not result.delivered:
                logger.error("Required email to %s not delivered: %s", to, result.error)
                raise NotificationFailure()
            return result

        if self._executor is not None:
            return self._executor.submit(self._deliver_quietly, to, subject, html)
        return self._deliver_quietly(to, subject, html)

    def _deliver_quietly(self, to: str, subject: str, html: str) -> SendResult | None:
        try:
            result = self.gateway.send(to, subject, html)
        except Exception:
            logger.exception("Email gateway raised while sending to %s", to)
            return None
        if not result.delivered and not result.skipped:
            logger.warning("Email to %s not delivered: %s", to, result.error)
        return result

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
