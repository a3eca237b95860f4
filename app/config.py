# app/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
Mail credentials must come from the environment — never commit them.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 3001

    # ── Storage ───────────────────────────────────────────────────────────
    BOOKINGS_FILE: str = "bookings.json"

    # ── Booking defaults ──────────────────────────────────────────────────
    DEFAULT_LOCATION: str = "Main Office (Batkhela, Malakand, KPK)"
    NO_EMAIL_PLACEHOLDER: str = "No email provided"

    # ── Mail transport ────────────────────────────────────────────────────
    SMTP_HOST: Optional[str] = None      # e.g. smtp.gmail.com
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None  # App password, set in .env
    SMTP_USE_SSL: bool = False           # False → STARTTLS
    SMTP_TIMEOUT_SECONDS: int = 30
    MAIL_FROM: Optional[str] = None
    STAFF_EMAIL: Optional[str] = None    # New-booking notices go here

    # ── Business details (confirmation email) ─────────────────────────────
    BUSINESS_NAME: str = "AK Rent A Car"
    BUSINESS_ADDRESS: str = "Batkhela, Malakand, KPK"
    BUSINESS_PHONES: str = "0333-3323394 | 0300-5181628"

    @property
    def MAIL_SENDER(self) -> Optional[str]:
        return self.MAIL_FROM or self.SMTP_USER

    @property
    def MAIL_CONFIGURED(self) -> bool:
        return bool(self.SMTP_HOST and self.MAIL_SENDER)

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
