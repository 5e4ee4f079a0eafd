"""Small helpers for handling destination phone numbers."""

import re

_NON_DIGITS = re.compile(r"\D")


def digits_only(phone: str) -> str:
    """Strip everything but digits: ``+254 700-000000`` → ``254700000000``."""
    return _NON_DIGITS.sub("", phone)


def mask_phone(phone: str) -> str:
    """Mask a destination for logs: ``254700000000`` → ``2547*****000``."""
    if len(phone) <= 7:
        return phone[:1] + "***"
    return phone[:4] + "*" * (len(phone) - 7) + phone[-3:]
