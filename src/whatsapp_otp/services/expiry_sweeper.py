"""Background task that evicts expired OTPs on a fixed cadence."""

from __future__ import annotations

import asyncio
import logging

from whatsapp_otp.services.otp_store import OTPStore

logger = logging.getLogger(__name__)

SWEEP_INTERVAL_SECONDS = 60.0


class ExpirySweeper:
    """Periodically prunes expired records from an :class:`OTPStore`.

    Abandoned OTPs that are never verified would otherwise stay in memory
    forever. Tests can call :meth:`sweep_once` directly instead of waiting
    on the timer.
    """

    def __init__(self, store: OTPStore, interval: float = SWEEP_INTERVAL_SECONDS) -> None:
        self._store = store
        self.interval = interval
        self.running = False
        self.task: asyncio.Task | None = None

    def sweep_once(self) -> int:
        """Run a single sweep and return the number of records evicted."""
        removed = self._store.sweep_expired()
        if removed:
            logger.info("Swept %d expired OTP(s)", removed)
        return removed

    async def start(self) -> None:
        """Start the sweeper loop on the running event loop."""
        if self.running:
            logger.warning("Expiry sweeper is already running")
            return

        self.running = True
        self.task = asyncio.create_task(self._run())
        logger.info("Expiry sweeper started (interval: %ss)", self.interval)

    async def stop(self) -> None:
        """Cancel the sweeper loop and wait for it to finish."""
        if not self.running:
            return

        self.running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
            self.task = None
        logger.info("Expiry sweeper stopped")

    async def _run(self) -> None:
        while self.running:
            await asyncio.sleep(self.interval)
            try:
                self.sweep_once()
            except Exception:
                logger.exception("Error while sweeping expired OTPs")
