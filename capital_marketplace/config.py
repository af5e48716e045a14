# capital_marketplace/config.py
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    # Database
    database_url: str = "sqlite:///./capital_marketplace.db"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # API
    api_title: str = "Capital Marketplace API"
    api_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # File upload
    upload_dir: str = "./uploads"
    max_file_size: int = 10 * 1024 * 1024  # 10MB

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_max: int = 100
    rate_limit_window_seconds: int = 60

    # Notifications
    notification_retention_days: int = 30

    # Mock integrations
    persona_api_key: Optional[str] = None
    persona_environment: str = "sandbox"
    plaid_client_id: Optional[str] = None
    plaid_secret: Optional[str] = None
    plaid_environment: str = "sandbox"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
