"""
Application configuration using pydantic-settings.
"""
import logging
from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_METADATA_SERVICE_URL = "http://localhost:5555/api/metadata"
DEFAULT_BATCH_SIZE = 5
MAX_BATCH_SIZE = 1000


class Settings(BaseSettings):
    """Application settings."""

    # Metadata service
    metadata_service_url: str = DEFAULT_METADATA_SERVICE_URL
    metadata_service_token: Optional[str] = None
    http_timeout_seconds: float = 30.0

    # Bulk submission
    batch_size: int = DEFAULT_BATCH_SIZE
    return_responses: bool = False

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_file_enabled: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator('metadata_service_url')
    @classmethod
    def validate_metadata_service_url(cls, v: str) -> str:
        """Validate the metadata service base URL."""
        url = (v or "").strip()
        if not url:
            logger.info(
                "METADATA_SERVICE_URL not provided; defaulting to %s", DEFAULT_METADATA_SERVICE_URL
            )
            return DEFAULT_METADATA_SERVICE_URL

        if not url.startswith(("http://", "https://")):
            raise ValueError(
                "METADATA_SERVICE_URL must be an HTTP URL (http:// or https://)"
            )

        return url.rstrip("/")

    @field_validator('metadata_service_token')
    @classmethod
    def validate_metadata_service_token(cls, v: Optional[str]) -> Optional[str]:
        if not v or not v.strip():
            return None
        return v.strip()

    @field_validator('http_timeout_seconds')
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("HTTP_TIMEOUT_SECONDS must be greater than zero")
        return v

    @field_validator('batch_size')
    @classmethod
    def validate_batch_size(cls, v: int) -> int:
        """Bulk requests are bounded on the service side."""
        if v < 1 or v > MAX_BATCH_SIZE:
            raise ValueError(
                f"BATCH_SIZE must be between 1 and {MAX_BATCH_SIZE}, got {v}"
            )
        return v

    @model_validator(mode='after')
    def validate_bulk_settings(self) -> 'Settings':
        """Warn about bulk settings that change failure reporting."""
        if self.batch_size > 100:
            logger.warning(
                f"BATCH_SIZE is {self.batch_size}. "
                "Large batches make a single transport failure mark many labels as failed."
            )
        return self


# Create settings instance
settings = Settings()
