"""Error taxonomy for OTP issuance, delivery and verification."""

from __future__ import annotations


class DeliveryError(Exception):
    """Raised by a delivery channel when a message could not be sent."""


class OTPError(Exception):
    """Base class for every error surfaced by the verification service.

    ``kind`` is the stable, machine-readable name reported to API callers;
    ``status_code`` is the HTTP status the request layer maps it to.
    """

    kind: str = "OTPError"
    status_code: int = 500
    default_message: str = "OTP operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ChannelNotReady(OTPError):
    kind = "ChannelNotReady"
    status_code = 503
    default_message = "WhatsApp channel is not ready. Please try again in a moment."


class DeliveryFailed(OTPError):
    """Delivery was attempted and errored; no record was stored."""

    kind = "DeliveryFailed"
    status_code = 502
    default_message = "Sending the verification code failed"

    def __init__(self, cause: Exception, fallback_url: str | None = None) -> None:
        self.cause = cause
        self.fallback_url = fallback_url
        super().__init__(f"{self.default_message}: {cause}")


class NotFoundOrExpired(OTPError):
    kind = "NotFoundOrExpired"
    status_code = 404
    default_message = "OTP not found or expired"


class InvalidCode(OTPError):
    kind = "InvalidCode"
    status_code = 400
    default_message = "Invalid OTP"

    def __init__(self, attempts_remaining: int) -> None:
        self.attempts_remaining = attempts_remaining
        super().__init__()


class TooManyAttempts(OTPError):
    kind = "TooManyAttempts"
    status_code = 429
    default_message = "Too many verification attempts. Request a new code."
