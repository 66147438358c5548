"""
Application configuration using Pydantic Settings.
Loads from environment variables / .env file.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "Fare Estimator API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Remote fare service (metadata GET + prediction POST share one address)
    FARE_API_URL: Optional[str] = None
    FARE_API_TIMEOUT_SECONDS: float = 10.0

    # City typeahead
    SUGGESTION_LIMIT: int = 8

    # Requests here are tiny JSON bodies
    MAX_REQUEST_BODY_BYTES: int = 16_384

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
