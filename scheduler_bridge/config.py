# scheduler_bridge/config.py

from __future__ import annotations

import logging
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Single project config. Reads environment variables.
    Pydantic v2 + pydantic-settings.
    """
    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # --- Core ---
    ENVIRONMENT: str = Field("dev", description="Application environment (dev, test, prod)")
    LOG_LEVEL: str = Field("INFO", description="Root logging level")

    # --- Session cookie ---
    SESSION_SECRET_KEY: str = Field(..., description="Secret key for signing session tokens")
    SESSION_ALGORITHM: str = Field("HS256", description="Algorithm for session token signing")
    SESSION_COOKIE_NAME: str = Field("session", description="Name of the session cookie")
    SESSION_MAX_AGE_SECONDS: int = Field(60 * 60 * 24 * 7, description="Session lifetime in seconds")  # 7 days
    SESSION_COOKIE_SECURE: Optional[bool] = Field(None, description="Send cookie over HTTPS only (defaults to prod)")

    # --- Google identity provider ---
    GOOGLE_CLIENT_ID: Optional[str] = Field(None, description="OAuth client ID")
    GOOGLE_CLIENT_SECRET: Optional[str] = Field(None, description="OAuth client secret")
    GOOGLE_REDIRECT_URI: Optional[str] = Field(None, description="OAuth callback URL registered with Google")

    # --- Reasoning backend ---
    REASONING_BACKEND_URL: str = Field("http://localhost:8000", description="Base URL of the reasoning backend")
    UPSTREAM_TIMEOUT_SECONDS: float = Field(600.0, description="Hard wall-clock budget for /chat calls")
    UPCOMING_TIMEOUT_SECONDS: float = Field(30.0, description="Budget for /events/upcoming calls")
    DEFAULT_TIMEZONE: str = Field("Asia/Kolkata", description="Timezone used when the client sends none")

    # --- Calendar ---
    CALENDAR_PROVIDER: str = Field("google", description="Calendar provider ('google', 'noop')")
    CALENDAR_WINDOW_DAYS: int = Field(7, description="Days ahead listed by the calendar view")
    CALENDAR_MAX_RESULTS: int = Field(50, description="Max events fetched for the calendar view")

    @model_validator(mode="after")
    def set_cookie_defaults(self) -> "Settings":
        if self.SESSION_COOKIE_SECURE is None:
            log.debug("Setting SESSION_COOKIE_SECURE default from ENVIRONMENT")
            self.SESSION_COOKIE_SECURE = self.ENVIRONMENT == "prod"
        self.REASONING_BACKEND_URL = self.REASONING_BACKEND_URL.rstrip("/")
        return self


try:
    settings = Settings()
    log.info("Settings loaded successfully for ENVIRONMENT=%s", settings.ENVIRONMENT)
    log.debug(
        "Loaded settings: backend=%s, calendar provider=%s, timeout=%ss",
        settings.REASONING_BACKEND_URL,
        settings.CALENDAR_PROVIDER,
        settings.UPSTREAM_TIMEOUT_SECONDS,
    )
except Exception as e:
    log.exception("Failed to instantiate Settings.")
    raise e
