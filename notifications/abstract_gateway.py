"""Email gateway abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SendResult:
    """Outcome of a single delivery attempt."""

    delivered: bool
    skipped: bool = False
    error: str | None = None
    message_id: str | None = None


class AbstractEmailGateway(ABC):
    """Interface for email transports."""

    @abstractmethod
    def send(self, to: str, subject: str, html: str) -> SendResult:
        """Attempt delivery and report the outcome.

        Implementations report transport failures in the result instead of
        raising.
        """
