"""In-memory OTP store with expiry and attempt tracking."""

from __future__ import annotations

import itertools
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

from whatsapp_otp.utils import mask_phone

logger = logging.getLogger(__name__)

# OTP validity period in seconds
OTP_TTL_SECONDS = 300  # 5 minutes

# Verification attempts allowed per issued code
OTP_MAX_ATTEMPTS = 5


@dataclass
class OTPRecord:
    """The live OTP for one destination identifier."""

    identifier: str
    code: str
    issued_at: float
    expires_at: float
    attempts: int = 0
    max_attempts: int = OTP_MAX_ATTEMPTS
    # Distinguishes successive issuances for the same identifier
    serial: int = 0

    @property
    def exhausted(self) -> bool:
        """``True`` once the attempt budget has been exceeded."""
        return self.attempts > self.max_attempts

    @property
    def attempts_remaining(self) -> int:
        return max(self.max_attempts - self.attempts, 0)

    def is_expired(self, now: float) -> bool:
        # now == expires_at is still valid
        return now > self.expires_at


class OTPStore:
    """Thread-safe in-memory OTP store.

    Each entry maps ``identifier → OTPRecord``. At most one record exists per
    identifier; issuing again overwrites it. Expired entries are lazily
    purged on access and periodically by :class:`ExpirySweeper`.

    All operations take a single coarse lock over the map, so concurrent
    verifications of one identifier never lose an attempt increment.
    """

    def __init__(
        self,
        ttl_seconds: int = OTP_TTL_SECONDS,
        max_attempts: int = OTP_MAX_ATTEMPTS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl = ttl_seconds
        self._max_attempts = max_attempts
        self._clock = clock
        self._lock = threading.Lock()
        self._store: dict[str, OTPRecord] = {}
        self._serials = itertools.count(1)

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def put(self, identifier: str, code: str) -> OTPRecord:
        """Store *code* for *identifier*, replacing any previous record."""
        issued_at = self._clock()
        record = OTPRecord(
            identifier=identifier,
            code=code,
            issued_at=issued_at,
            expires_at=issued_at + self._ttl,
            max_attempts=self._max_attempts,
        )
        with self._lock:
            record.serial = next(self._serials)
            replaced = identifier in self._store
            self._store[identifier] = record
        if replaced:
            logger.debug("Previous OTP for %s superseded", mask_phone(identifier))
        return record

    def get(self, identifier: str) -> OTPRecord | None:
        """Return the live record for *identifier*, or ``None``.

        An expired record is removed as a side effect of the read.
        """
        with self._lock:
            return self._live(identifier)

    def record_attempt(self, identifier: str) -> OTPRecord | None:
        """Count one verification attempt against the live record.

        Returns a snapshot of the post-increment record, so later attempts
        do not change what the caller sees. When the increment exceeds the
        attempt budget the record is deleted in the same step and the
        snapshot reports ``exhausted``.
        """
        with self._lock:
            record = self._live(identifier)
            if record is None:
                return None
            record.attempts += 1
            if record.exhausted:
                del self._store[identifier]
                logger.info("Attempt budget exhausted for %s", mask_phone(identifier))
            return replace(record)

    def remove(self, identifier: str) -> OTPRecord | None:
        """Delete the record for *identifier* if present and return it."""
        with self._lock:
            return self._store.pop(identifier, None)

    def consume(self, identifier: str, record: OTPRecord) -> bool:
        """Delete the stored record only if it is the issuance *record* was taken from."""
        with self._lock:
            current = self._store.get(identifier)
            if current is None or current.serial != record.serial:
                return False
            del self._store[identifier]
            return True

    def sweep_expired(self, now: float | None = None) -> int:
        """Delete every record that expired before *now*; return the count."""
        if now is None:
            now = self._clock()
        with self._lock:
            stale = [key for key, rec in self._store.items() if rec.expires_at < now]
            for key in stale:
                del self._store[key]
        return len(stale)

    @property
    def active_count(self) -> int:
        """Number of records currently held (useful for monitoring)."""
        with self._lock:
            return len(self._store)

    # ── Private helpers ──────────────────────────────────

    def _live(self, identifier: str) -> OTPRecord | None:
        """Lookup with lazy expiry; caller must hold the lock."""
        record = self._store.get(identifier)
        if record is None:
            return None
        if record.is_expired(self._clock()):
            # Expired, drop it
            del self._store[identifier]
            logger.info("OTP expired for %s", mask_phone(identifier))
            return None
        return record
