"""WhatsApp Cloud API channel — sends OTP messages through the Graph API."""

from __future__ import annotations

import logging

import httpx

from whatsapp_otp.channels.base import DeliveryChannel
from whatsapp_otp.errors import DeliveryError
from whatsapp_otp.utils import digits_only, mask_phone

logger = logging.getLogger(__name__)


class WhatsAppCloudChannel(DeliveryChannel):
    """Async HTTP sender for the WhatsApp Business Cloud API.

    The channel is considered ready once both an API token and a sender
    phone-number id are configured. *transport* lets tests plug in an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_token: str,
        phone_number_id: str,
        base_url: str = "https://graph.facebook.com/v21.0",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_token = api_token
        self._phone_number_id = phone_number_id
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "whatsapp-cloud"

    def is_channel_ready(self) -> bool:
        return bool(self._api_token and self._phone_number_id)

    async def deliver(self, destination: str, text: str) -> None:
        """Send a text message to *destination* via the Cloud API."""
        url = f"{self._base_url}/{self._phone_number_id}/messages"
        headers = {
            "Authorization": f"Bearer {self._api_token}",
            "Content-Type": "application/json",
        }
        payload = {
            "messaging_product": "whatsapp",
            "to": digits_only(destination),
            "type": "text",
            "text": {"body": text},
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Message request to %s failed: %s", mask_phone(destination), exc)
            raise DeliveryError(f"request error: {exc}") from exc

        if resp.status_code != 200:
            logger.error(
                "Failed to send message to %s: %s %s",
                mask_phone(destination),
                resp.status_code,
                resp.text,
            )
            raise DeliveryError(f"WhatsApp API returned {resp.status_code}")

        logger.info("Message sent to %s", mask_phone(destination))
