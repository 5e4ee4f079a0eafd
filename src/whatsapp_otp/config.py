"""WhatsApp OTP service — configuration loaded from environment."""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables."""

    # ── OTP lifecycle ─────────────────────────────────────
    otp_ttl_seconds: int = 300
    otp_max_attempts: int = 5
    otp_sweep_interval_seconds: float = 60.0

    # Returning the raw code to the issuing caller is a debug convenience only
    expose_otp_code: bool = False

    # ── Delivery channel ──────────────────────────────────
    delivery_channel: Literal["console", "cloud"] = "console"

    # ── WhatsApp Business API ─────────────────────────────
    whatsapp_api_token: str = ""
    whatsapp_phone_number_id: str = ""
    whatsapp_api_base_url: str = "https://graph.facebook.com/v21.0"

    # ── App ───────────────────────────────────────────────
    app_name: str = "WhatsApp OTP"
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton settings instance
settings = Settings()
