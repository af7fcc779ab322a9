"""Configuration management for the HTTP API."""

import os
from dataclasses import dataclass
from typing import List
from functools import lru_cache


@dataclass
class APIConfig:
    """API configuration settings."""

    # Core API settings
    host: str = os.getenv("API_HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", os.getenv("API_PORT", "3000")))
    debug: bool = os.getenv("API_DEBUG", "false").lower() == "true"

    # CORS settings
    cors_origins: List[str] = None

    # Application metadata
    title: str = os.getenv("API_TITLE", "YouTube Subtitles API")
    description: str = "Fetch YouTube captions as SRT and translate them with Gemini"
    version: str = os.getenv("APP_VERSION", "0.1.0")

    # Environment
    environment: str = os.getenv("ENVIRONMENT", "development")

    # Logging
    log_level: str = os.getenv("API_LOG_LEVEL", "INFO")

    def __post_init__(self):
        """Post-initialization processing."""
        if self.cors_origins is None:
            origins_str = os.getenv("API_CORS_ORIGINS", "")
            self.cors_origins = [origin.strip() for origin in origins_str.split(",") if origin.strip()]

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.port < 1 or self.port > 65535:
            errors.append("PORT must be between 1 and 65535")

        return errors


@lru_cache()
def get_api_config() -> APIConfig:
    """Get validated API configuration."""
    config = APIConfig()

    errors = config.validate()
    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return config
