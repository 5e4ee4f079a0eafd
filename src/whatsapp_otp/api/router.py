"""OTP API router — issue and verify one-time passcodes over HTTP.

Endpoints
---------
POST /send-otp     → generate, deliver and store a code
POST /verify-otp   → validate a submitted code
GET  /status       → channel readiness and live OTP count
"""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from whatsapp_otp.api.schemas import (
    ErrorResponse,
    OTPSendRequest,
    OTPSendResponse,
    OTPVerifyRequest,
    OTPVerifyResponse,
    StatusResponse,
)
from whatsapp_otp.config import Settings
from whatsapp_otp.errors import DeliveryFailed, InvalidCode, OTPError
from whatsapp_otp.services.verification_service import VerificationService

router = APIRouter(tags=["otp"])

API_VERSION = "0.1.0"


# ── Dependencies ─────────────────────────────────────────

def get_service(request: Request) -> VerificationService:
    """The service instance owned by the running application."""
    return request.app.state.verification_service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def error_response(exc: OTPError) -> JSONResponse:
    """Map a service error onto its HTTP status and JSON body."""
    body = ErrorResponse(error=exc.kind, message=exc.message)
    if isinstance(exc, InvalidCode):
        body.attempts_remaining = exc.attempts_remaining
    if isinstance(exc, DeliveryFailed):
        body.fallback = exc.fallback_url
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


# ── Endpoints ────────────────────────────────────────────

@router.post(
    "/send-otp",
    response_model=OTPSendResponse,
    response_model_exclude_none=True,
    responses={502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def send_otp(
    body: OTPSendRequest,
    service: VerificationService = Depends(get_service),
    settings: Settings = Depends(get_settings),
):
    """Send a fresh OTP to ``phone`` over WhatsApp."""
    try:
        result = await service.issue(body.phone, body.custom_message)
    except OTPError as exc:
        return error_response(exc)

    return OTPSendResponse(
        message="OTP sent via WhatsApp",
        expires_in_seconds=result.expires_in_seconds,
        otp=result.code if settings.expose_otp_code else None,
    )


@router.post(
    "/verify-otp",
    response_model=OTPVerifyResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
)
async def verify_otp(
    body: OTPVerifyRequest,
    service: VerificationService = Depends(get_service),
):
    """Validate an OTP for the given phone number."""
    try:
        service.verify(body.phone, body.otp)
    except OTPError as exc:
        return error_response(exc)
    return OTPVerifyResponse(message="OTP verified successfully")


@router.get("/status", response_model=StatusResponse)
async def status(request: Request, service: VerificationService = Depends(get_service)):
    """Report channel readiness and how many codes are outstanding."""
    ready = service.channel.is_channel_ready()
    return StatusResponse(
        status="running" if ready else "channel_not_ready",
        channel=service.channel.name,
        channel_ready=ready,
        active_otps=service.active_count,
        uptime_seconds=int(time.monotonic() - request.app.state.started_at),
        version=API_VERSION,
    )
