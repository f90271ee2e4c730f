# portal/core/config.py
from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # === App Info ===
    APP_NAME: str = "Terminal Portal"
    API_V1_PREFIX: str = ""
    ENV: str = os.getenv("ENV", "dev")
    DEBUG: bool = True
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # === CORS ===
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v: Any) -> List[str]:
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                import json
                return [x.strip() for x in json.loads(s)]
            return [x.strip() for x in s.split(",") if x.strip()]
        return v

    # === Upstream REST API ===
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:5000/api")
    # the refresh call itself has no contractual timeout; this only guards against hung sockets
    API_TIMEOUT_SECONDS: float = float(os.getenv("API_TIMEOUT_SECONDS", "30"))

    @field_validator("API_BASE_URL")
    @classmethod
    def _strip_base_url(cls, v: str) -> str:
        return v.rstrip("/")

    # === Sessions ===
    SESSION_COOKIE_NAME: str = "portal_session"
    SESSION_COOKIE_SECURE: bool = os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"
    SESSION_IDLE_MINUTES: int = int(os.getenv("SESSION_IDLE_MINUTES", str(60 * 8)))
    SESSION_CLEANUP_MINUTES: int = int(os.getenv("SESSION_CLEANUP_MINUTES", "30"))
    # None keeps credentials in memory; a directory persists one JSON file per session
    CREDENTIALS_DIR: Optional[str] = os.getenv("CREDENTIALS_DIR")

    # === Observability (Sentry / Monitoring) ===
    SENTRY_DSN: Optional[str] = os.getenv("SENTRY_DSN")
    SENTRY_ENV: str = os.getenv("SENTRY_ENV", "dev")
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Test runs never touch the disk for credentials."""
    s = Settings()
    if s.ENV == "test":
        s.CREDENTIALS_DIR = None
        s.DEBUG = True
    return s


settings = get_settings()
