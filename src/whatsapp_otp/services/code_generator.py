"""Numeric one-time passcode generation."""

import secrets

CODE_LENGTH = 6
_LOWEST = 10 ** (CODE_LENGTH - 1)
_SPAN = 10**CODE_LENGTH - _LOWEST


def generate_code() -> str:
    """Return a cryptographically random 6-digit code in ``[100000, 999999]``."""
    return str(_LOWEST + secrets.randbelow(_SPAN))
