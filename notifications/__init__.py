"""Transactional email delivery."""

from .abstract_gateway import AbstractEmailGateway, SendResult
from .brevo_gateway import BrevoEmailGateway
from .console_gateway import ConsoleEmailGateway
from .notifier import Notifier

__all__ = [
    "AbstractEmailGateway",
    "SendResult",
    "BrevoEmailGateway",
    "ConsoleEmailGateway",
    "Notifier",
]
