"""Client configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

SDK_VERSION = "1.0.0"
DEFAULT_BASE_URL = "https://api.tuteliq.ai"


class ClientSettings(BaseSettings):
    """Client settings loaded from ``TUTELIQ_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TUTELIQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API
    api_key: SecretStr | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=30.0, gt=0)

    # Retries
    max_retries: int = Field(default=3, ge=1)  # Total attempts per call
    retry_delay_seconds: float = Field(default=1.0, gt=0)  # Doubles per attempt

    # Observability
    log_level: str = "INFO"
    log_json: bool = False
    tracing_enabled: bool = False
    service_name: str = "tuteliq-client"


@lru_cache
def get_settings() -> ClientSettings:
    """Get cached settings instance."""
    return ClientSettings()
