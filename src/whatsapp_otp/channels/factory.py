"""Delivery channel factory — returns the sender selected by configuration."""

from __future__ import annotations

import logging

from whatsapp_otp.channels.base import DeliveryChannel
from whatsapp_otp.channels.console import ConsoleChannel
from whatsapp_otp.channels.whatsapp_cloud import WhatsAppCloudChannel
from whatsapp_otp.config import Settings

logger = logging.getLogger(__name__)


def build_channel(settings: Settings) -> DeliveryChannel:
    """Build a fresh channel for *settings*."""
    if settings.delivery_channel == "cloud":
        if not settings.whatsapp_api_token:
            logger.warning("WHATSAPP_API_TOKEN not set — cloud channel will report not ready")
        return WhatsAppCloudChannel(
            api_token=settings.whatsapp_api_token,
            phone_number_id=settings.whatsapp_phone_number_id,
            base_url=settings.whatsapp_api_base_url,
        )
    return ConsoleChannel()
