"""Verification service — issues OTPs over a delivery channel and validates them."""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from urllib.parse import quote

from whatsapp_otp.channels.base import DeliveryChannel
from whatsapp_otp.config import Settings
from whatsapp_otp.errors import (
    ChannelNotReady,
    DeliveryError,
    DeliveryFailed,
    InvalidCode,
    NotFoundOrExpired,
    TooManyAttempts,
)
from whatsapp_otp.services.code_generator import generate_code
from whatsapp_otp.services.expiry_sweeper import SWEEP_INTERVAL_SECONDS, ExpirySweeper
from whatsapp_otp.services.message_formatter import format_message
from whatsapp_otp.services.otp_store import OTPStore
from whatsapp_otp.utils import digits_only, mask_phone

logger = logging.getLogger(__name__)


@dataclass
class IssueResult:
    """Value object returned after a code was delivered and stored."""

    code: str
    expires_in_seconds: int


class VerificationService:
    """Owns the OTP store and its sweeper for one application instance.

    Flow
    ----
    1. ``issue`` generates a code, renders the message and asks the channel
       to deliver it. Only a delivered code is stored.
    2. ``verify`` checks the submitted code against the live record,
       counting every attempt. A match consumes the record.
    3. The sweeper evicts codes that were never verified.

    Errors are raised as :class:`~whatsapp_otp.errors.OTPError` subclasses.
    """

    def __init__(
        self,
        channel: DeliveryChannel,
        store: OTPStore | None = None,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self.channel = channel
        self.store = store or OTPStore()
        self.sweeper = ExpirySweeper(self.store, interval=sweep_interval)

    @classmethod
    def from_settings(cls, settings: Settings, channel: DeliveryChannel) -> VerificationService:
        store = OTPStore(
            ttl_seconds=settings.otp_ttl_seconds,
            max_attempts=settings.otp_max_attempts,
        )
        return cls(channel, store=store, sweep_interval=settings.otp_sweep_interval_seconds)

    # ── Lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        await self.sweeper.start()

    async def shutdown(self) -> None:
        await self.sweeper.stop()

    # ── Issuance ─────────────────────────────────────────

    async def issue(self, identifier: str, template: str | None = None) -> IssueResult:
        """Generate, deliver and store a fresh OTP for *identifier*.

        Any previous code for the same identifier stops working once the new
        one is stored.

        Raises
        ------
        ChannelNotReady
            The channel cannot send yet; nothing was stored.
        DeliveryFailed
            The channel errored while sending; nothing was stored.
        """
        code = generate_code()
        text = format_message(code, template, ttl_seconds=self.store.ttl_seconds)

        if not self.channel.is_channel_ready():
            logger.warning("Channel %s not ready, cannot issue OTP", self.channel.name)
            raise ChannelNotReady()

        # The store lock is not held while the channel is sending
        try:
            await self.channel.deliver(identifier, text)
        except DeliveryError as exc:
            logger.error("OTP delivery to %s failed: %s", mask_phone(identifier), exc)
            raise DeliveryFailed(exc, fallback_url=self._manual_send_url(identifier, text)) from exc

        self.store.put(identifier, code)
        logger.info("OTP issued for %s via %s", mask_phone(identifier), self.channel.name)
        logger.debug("OTP for %s: %s", identifier, code)
        return IssueResult(code=code, expires_in_seconds=self.store.ttl_seconds)

    # ── Verification ─────────────────────────────────────

    def verify(self, identifier: str, code: str) -> None:
        """Validate *code* for *identifier*; return on success, raise otherwise.

        Every call against a live record consumes one attempt, whether or not
        the code matches. The call that pushes the counter past the budget is
        rejected with :class:`TooManyAttempts` and the record is destroyed.
        """
        if self.store.get(identifier) is None:
            logger.info("No live OTP for %s", mask_phone(identifier))
            raise NotFoundOrExpired()

        record = self.store.record_attempt(identifier)
        if record is None:
            # Expired or consumed between the lookup and the attempt
            raise NotFoundOrExpired()
        if record.exhausted:
            logger.info("Too many attempts for %s", mask_phone(identifier))
            raise TooManyAttempts()

        if hmac.compare_digest(record.code.encode(), code.encode()):
            # Only the caller that actually removes this record wins
            if not self.store.consume(identifier, record):
                raise NotFoundOrExpired()
            logger.info("✅ OTP verified for %s", mask_phone(identifier))
            return

        logger.info(
            "Invalid OTP for %s (%d attempt(s) remaining)",
            mask_phone(identifier),
            record.attempts_remaining,
        )
        raise InvalidCode(attempts_remaining=record.attempts_remaining)

    @property
    def active_count(self) -> int:
        return self.store.active_count

    @staticmethod
    def _manual_send_url(identifier: str, text: str) -> str:
        """Click-to-chat link an operator can use to deliver the code by hand."""
        return f"https://wa.me/{digits_only(identifier)}?text={quote(text)}"
