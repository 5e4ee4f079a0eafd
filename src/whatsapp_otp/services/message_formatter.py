"""Message formatter — renders the WhatsApp text that carries an OTP."""

from __future__ import annotations

PLACEHOLDER = "{otp}"

DEFAULT_TEMPLATE = (
    "Your verification code is: *{otp}*\n\n"
    "Valid for {validity}. Do not share this code with anyone.\n\n"
    "_This is an automated message._"
)


def describe_validity(ttl_seconds: int) -> str:
    """Human wording for a TTL: ``300`` → ``5 minutes``, ``90`` → ``90 seconds``."""
    if ttl_seconds >= 60 and ttl_seconds % 60 == 0:
        minutes = ttl_seconds // 60
        return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
    return f"{ttl_seconds} second" if ttl_seconds == 1 else f"{ttl_seconds} seconds"


def format_message(code: str, template: str | None = None, ttl_seconds: int = 300) -> str:
    """Render the delivery text for *code*.

    Every ``{otp}`` in a custom *template* is replaced by the code; any other
    text, braces included, is left as-is. A template without the placeholder
    is returned unchanged. Without a template the default message is used.
    """
    if template:
        return template.replace(PLACEHOLDER, code)
    return DEFAULT_TEMPLATE.replace("{validity}", describe_validity(ttl_seconds)).replace(
        PLACEHOLDER, code
    )
