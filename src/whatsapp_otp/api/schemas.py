"""Request / response models for the OTP HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OTPSendRequest(BaseModel):
    phone: str = Field(..., min_length=1, description="Destination WhatsApp number")
    custom_message: str | None = Field(
        None, description="Optional template; every {otp} is replaced by the code"
    )


class OTPSendResponse(BaseModel):
    success: bool = True
    message: str
    expires_in_seconds: int
    otp: str | None = None


class OTPVerifyRequest(BaseModel):
    phone: str = Field(..., min_length=1)
    otp: str = Field(..., min_length=1)


class OTPVerifyResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str
    attempts_remaining: int | None = None
    fallback: str | None = None


class StatusResponse(BaseModel):
    status: str
    channel: str
    channel_ready: bool
    active_otps: int
    uptime_seconds: int
    version: str
