"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from whatsapp_otp.api.router import API_VERSION
from whatsapp_otp.api.router import router as otp_router
from whatsapp_otp.channels.base import DeliveryChannel
from whatsapp_otp.channels.factory import build_channel
from whatsapp_otp.config import Settings, settings
from whatsapp_otp.services.verification_service import VerificationService

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Settings | None = None,
    channel: DeliveryChannel | None = None,
) -> FastAPI:
    """Build an application with its own verification service.

    Passing *channel* overrides the one selected by ``delivery_channel``.
    """
    app_settings = app_settings or settings
    service = VerificationService.from_settings(
        app_settings, channel or build_channel(app_settings)
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup / shutdown lifecycle hook."""
        logger.info("Starting %s …", app_settings.app_name)
        await service.start()
        if not service.channel.is_channel_ready():
            logger.warning("Delivery channel %s is not ready yet", service.channel.name)
        if app_settings.expose_otp_code:
            logger.warning("EXPOSE_OTP_CODE is enabled — codes are returned to callers")
        yield
        logger.info("Shutting down %s …", app_settings.app_name)
        await service.shutdown()

    app = FastAPI(
        title=app_settings.app_name,
        description="One-time passcode issuance and verification over WhatsApp",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.verification_service = service
    app.state.started_at = time.monotonic()

    app.include_router(otp_router)

    @app.get("/health")
    async def health_check():
        """Simple liveness probe."""
        return {"status": "healthy", "app": app_settings.app_name}

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn (``whatsapp-otp`` console script)."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="debug" if settings.debug else "info")
