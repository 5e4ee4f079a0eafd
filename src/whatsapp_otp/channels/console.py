"""Console channel — logs messages instead of sending them (development only)."""

from __future__ import annotations

import logging

from whatsapp_otp.channels.base import DeliveryChannel
from whatsapp_otp.utils import mask_phone

logger = logging.getLogger(__name__)


class ConsoleChannel(DeliveryChannel):
    """Writes every outgoing message to the log.

    ``sent`` keeps ``(destination, text)`` pairs so the simulator and tests
    can read back what would have been delivered.
    """

    def __init__(self, ready: bool = True) -> None:
        self.ready = ready
        self.sent: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "console"

    def is_channel_ready(self) -> bool:
        return self.ready

    async def deliver(self, destination: str, text: str) -> None:
        self.sent.append((destination, text))
        logger.info("📤 Message for %s logged, not sent (console channel)", mask_phone(destination))
        logger.debug("Message body for %s:\n%s", destination, text)
