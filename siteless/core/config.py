"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_GROQ_API_URL = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_GROQ_MODEL = "llama3-70b-8192"


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    google_maps_api_key: str
    groq_api_key: Optional[str] = None
    groq_model: str = DEFAULT_GROQ_MODEL
    groq_api_url: str = DEFAULT_GROQ_API_URL
    pitch_language: str = "French"
    request_timeout: float = 10.0
    pitch_request_timeout: float = 30.0
    detail_fetch_workers: int = 8
    port: int = 8080
    log_level: str = "INFO"

    @property
    def pitch_generation_enabled(self) -> bool:
        return bool(self.groq_api_key)


def require_google_api_key(settings: Settings) -> str:
    """Return the Maps key or fail before any upstream work begins."""
    if not settings.google_maps_api_key:
        raise ConfigError("Set the GOOGLE_MAPS_API_KEY environment variable before using this service.")
    return settings.google_maps_api_key


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_maps_api_key = os.getenv("GOOGLE_MAPS_API_KEY", "").strip()
    groq_api_key = os.getenv("GROQ_API_KEY", "").strip() or None
    groq_model = os.getenv("GROQ_MODEL") or DEFAULT_GROQ_MODEL
    groq_api_url = os.getenv("GROQ_API_URL") or DEFAULT_GROQ_API_URL
    pitch_language = os.getenv("PITCH_LANGUAGE") or "French"
    request_timeout = float(os.getenv("REQUEST_TIMEOUT", "10"))
    pitch_request_timeout = float(os.getenv("PITCH_REQUEST_TIMEOUT", "30"))
    detail_fetch_workers = max(1, int(os.getenv("DETAIL_FETCH_WORKERS", "8")))
    port = int(os.getenv("PORT", "8080"))
    log_level = (os.getenv("LOG_LEVEL") or "INFO").upper()

    if not google_maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not configured; searches will be rejected.")
    if not groq_api_key:
        logger.warning("GROQ_API_KEY is not configured; pitch generation is disabled.")

    return Settings(
        google_maps_api_key=google_maps_api_key,
        groq_api_key=groq_api_key,
        groq_model=groq_model,
        groq_api_url=groq_api_url,
        pitch_language=pitch_language,
        request_timeout=request_timeout,
        pitch_request_timeout=pitch_request_timeout,
        detail_fetch_workers=detail_fetch_workers,
        port=port,
        log_level=log_level,
    )
